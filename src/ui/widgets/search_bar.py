"""
Search bar widget for filtering list tabs.
"""

import customtkinter as ctk
from typing import Callable


class SearchBar(ctk.CTkFrame):
    """
    Search entry with a Search and a Clear button.

    The callback receives the stripped search text ("" when cleared).
    """

    def __init__(
        self,
        parent,
        search_callback: Callable[[str], None],
        placeholder: str = "Search...",
    ):
        super().__init__(parent, fg_color="transparent")

        self.search_callback = search_callback

        self.grid_columnconfigure(0, weight=1)

        self.search_entry = ctk.CTkEntry(self, placeholder_text=placeholder, height=35)
        self.search_entry.grid(row=0, column=0, sticky="ew")
        self.search_entry.bind("<Return>", lambda e: self._on_search())

        ctk.CTkButton(self, text="Search", width=100, command=self._on_search).grid(
            row=0, column=1, padx=(10, 0)
        )
        ctk.CTkButton(self, text="Clear", width=80, command=self.clear).grid(
            row=0, column=2, padx=(10, 0)
        )

    def _on_search(self):
        self.search_callback(self.get_search_term())

    def clear(self):
        """Clear the entry and run an empty search."""
        self.search_entry.delete(0, "end")
        self.search_callback("")

    def get_search_term(self) -> str:
        return self.search_entry.get().strip()
