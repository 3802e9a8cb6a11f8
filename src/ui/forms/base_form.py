"""
Base class for modal form dialogs.

Handles window setup, centering on the parent, Save/Cancel buttons and the
get_result() wait loop. Subclasses build their fields in _create_form_fields()
and return cleaned data (or None) from _validate_form().
"""

import customtkinter as ctk
from typing import Any, Dict, Optional

from src.services.exceptions import ValidationError
from src.ui.widgets.dialogs import show_validation_errors
from src.utils.constants import PADDING_LARGE, PADDING_MEDIUM


class FormDialog(ctk.CTkToplevel):
    """Modal dialog returning a dict of cleaned form data, or None if cancelled."""

    def __init__(self, parent, title: str, geometry: str = "480x260"):
        super().__init__(parent)

        self.result: Optional[Dict[str, Any]] = None

        self.title(title)
        self.geometry(geometry)
        self.resizable(False, False)
        self.transient(parent)

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        main_frame = ctk.CTkFrame(self, fg_color="transparent")
        main_frame.grid(row=0, column=0, sticky="nsew", padx=PADDING_LARGE, pady=PADDING_LARGE)
        main_frame.grid_columnconfigure(1, weight=1)

        self._create_form_fields(main_frame)
        self._create_buttons()
        self._populate_form()

        # Center dialog on parent and make visible
        self.update_idletasks()
        x = max(0, parent.winfo_rootx() + (parent.winfo_width() - self.winfo_width()) // 2)
        y = max(0, parent.winfo_rooty() + (parent.winfo_height() - self.winfo_height()) // 2)
        self.geometry(f"+{x}+{y}")
        self.wait_visibility()
        self.grab_set()
        self.focus_force()

    def _create_form_fields(self, parent):
        raise NotImplementedError

    def _populate_form(self):
        """Fill fields when editing. Default: nothing to fill."""

    def _validate_form(self) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def _add_entry(self, parent, row: int, label: str, placeholder: str = "") -> ctk.CTkEntry:
        ctk.CTkLabel(parent, text=label, anchor="w").grid(
            row=row, column=0, sticky="w", padx=PADDING_MEDIUM, pady=5
        )
        entry = ctk.CTkEntry(parent, width=280, placeholder_text=placeholder)
        entry.grid(row=row, column=1, sticky="ew", padx=PADDING_MEDIUM, pady=5)
        return entry

    def _create_buttons(self):
        button_frame = ctk.CTkFrame(self, fg_color="transparent")
        button_frame.grid(row=1, column=0, sticky="ew", padx=PADDING_LARGE, pady=(0, PADDING_LARGE))
        button_frame.grid_columnconfigure((0, 1), weight=1)

        ctk.CTkButton(button_frame, text="Save", command=self._save, width=150).grid(
            row=0, column=0, padx=PADDING_MEDIUM
        )
        ctk.CTkButton(
            button_frame,
            text="Cancel",
            command=self._cancel,
            width=150,
            fg_color="gray",
            hover_color="darkgray",
        ).grid(row=0, column=1, padx=PADDING_MEDIUM)

        self.bind("<Return>", lambda e: self._save())
        self.bind("<Escape>", lambda e: self._cancel())

    def _save(self):
        try:
            data = self._validate_form()
        except ValidationError as e:
            show_validation_errors(e.errors, parent=self)
            return
        if data:
            self.result = data
            self.destroy()

    def _cancel(self):
        self.result = None
        self.destroy()

    def get_result(self) -> Optional[Dict[str, Any]]:
        """
        Wait for dialog to close and return result.

        Returns:
            Dictionary of form data if saved, None if cancelled
        """
        self.wait_window()
        return self.result
