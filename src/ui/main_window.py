"""
Main application window for Recipe ARR.

Provides the main window with tabbed navigation and menu bar.
"""

import json
import tkinter as tk
import customtkinter as ctk
from tkinter import filedialog, messagebox

from src.utils.constants import APP_NAME, APP_VERSION, WINDOW_HEIGHT, WINDOW_WIDTH
from src.ui.ingredients_tab import IngredientsTab
from src.ui.recipes_tab import RecipesTab
from src.ui.arr_calculator_tab import ARRCalculatorTab
from src.ui.utils.error_handler import handle_error
from src.utils.load_sample_data import SAMPLE_DATA_FILE, load_sample_data_from_json

TAB_INGREDIENTS = "Ingredients"
TAB_RECIPES = "Recipes"
TAB_CALCULATOR = "ARR Calculator"


class MainWindow(ctk.CTk):
    """
    Main application window.

    Contains tabbed interface for different features and a menu bar.
    """

    def __init__(self):
        """Initialize the main window."""
        super().__init__()

        self.title(f"{APP_NAME} - v{APP_VERSION}")
        self.geometry(f"{WINDOW_WIDTH}x{WINDOW_HEIGHT}")
        self.minsize(900, 560)

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=0)  # Menu bar
        self.grid_rowconfigure(1, weight=1)  # Tab view
        self.grid_rowconfigure(2, weight=0)  # Status bar

        self._create_menu_bar()
        self._create_tabs()
        self._create_status_bar()

        self.update_status("Ready")

    def _create_menu_bar(self):
        """Create the native tkinter menu bar."""
        self.menu_bar = tk.Menu(self)
        self.config(menu=self.menu_bar)

        file_menu = tk.Menu(self.menu_bar, tearoff=0)
        file_menu.add_command(label="Load Sample Data", command=self._load_sample_data)
        file_menu.add_command(label="Load Data File...", command=self._load_data_file)
        file_menu.add_separator()
        file_menu.add_command(label="Exit", command=self._on_exit)
        self.menu_bar.add_cascade(label="File", menu=file_menu)

        help_menu = tk.Menu(self.menu_bar, tearoff=0)
        help_menu.add_command(label="About", command=self._show_about)
        self.menu_bar.add_cascade(label="Help", menu=help_menu)

    def _create_tabs(self):
        """Create the tabbed interface."""
        self.tabview = ctk.CTkTabview(self, corner_radius=10)
        self.tabview.grid(row=1, column=0, padx=10, pady=(0, 10), sticky="nsew")

        self.tabview.add(TAB_INGREDIENTS)
        self.tabview.add(TAB_RECIPES)
        self.tabview.add(TAB_CALCULATOR)

        # Ingredient edits change recipe costs; recipe edits change calculator choices
        self.ingredients_tab = IngredientsTab(
            self.tabview.tab(TAB_INGREDIENTS), on_change=self._on_ingredients_changed
        )
        self.recipes_tab = RecipesTab(
            self.tabview.tab(TAB_RECIPES), on_change=self._on_recipes_changed
        )
        self.calculator_tab = ARRCalculatorTab(self.tabview.tab(TAB_CALCULATOR))

        for name in (TAB_INGREDIENTS, TAB_RECIPES, TAB_CALCULATOR):
            frame = self.tabview.tab(name)
            frame.grid_columnconfigure(0, weight=1)
            frame.grid_rowconfigure(0, weight=1)

        self.tabview.set(TAB_CALCULATOR)

    def _create_status_bar(self):
        """Create the status bar at the bottom."""
        status_frame = ctk.CTkFrame(self, height=30, corner_radius=0)
        status_frame.grid(row=2, column=0, sticky="ew")
        status_frame.grid_columnconfigure(0, weight=1)

        self.status_label = ctk.CTkLabel(status_frame, text="Ready", anchor="w")
        self.status_label.grid(row=0, column=0, padx=10, pady=5, sticky="w")

    def update_status(self, message: str):
        """
        Update the status bar message.

        Args:
            message: Status message to display
        """
        self.status_label.configure(text=message)

    def _on_ingredients_changed(self):
        self.recipes_tab.refresh()
        self.calculator_tab.refresh()

    def _on_recipes_changed(self):
        self.calculator_tab.refresh()

    def _refresh_all_tabs(self):
        """Refresh all tabs after loading data."""
        self.ingredients_tab.refresh()
        self.recipes_tab.refresh()
        self.calculator_tab.refresh()

    def _load_sample_data(self):
        self._load_from(SAMPLE_DATA_FILE)

    def _load_data_file(self):
        path = filedialog.askopenfilename(
            parent=self,
            title="Load Data File",
            filetypes=[("JSON files", "*.json"), ("All files", "*.*")],
        )
        if path:
            self._load_from(path)

    def _load_from(self, path):
        try:
            counts = load_sample_data_from_json(path)
        except (OSError, json.JSONDecodeError) as e:
            messagebox.showerror("Load Failed", f"Could not read {path}:\n{e}", parent=self)
            self.update_status("Load failed.")
            return
        except Exception as e:
            handle_error(e, parent=self, operation="Load data")
            self.update_status("Load failed.")
            return

        self._refresh_all_tabs()
        self.update_status(
            f"Loaded {counts['ingredients']} ingredient(s) and {counts['recipes']} recipe(s); "
            f"skipped {counts['skipped_ingredients'] + counts['skipped_recipes']} existing."
        )

    def _on_exit(self):
        """Handle application exit."""
        result = messagebox.askyesno(
            "Exit",
            "Are you sure you want to exit the application?",
            parent=self,
        )
        if result:
            self.destroy()

    def _show_about(self):
        """Show the About dialog."""
        messagebox.showinfo(
            "About",
            f"{APP_NAME}\nVersion {APP_VERSION}\n\n"
            f"Rescale a recipe from one ingredient's new amount\n"
            f"and compare the original and adjusted cost.",
            parent=self,
        )

    def switch_to_tab(self, tab_name: str):
        """
        Switch to a specific tab.

        Args:
            tab_name: Name of the tab to switch to
        """
        self.tabview.set(tab_name)
