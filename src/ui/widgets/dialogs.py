"""
Message dialogs for the Recipe ARR UI.

Thin wrappers over tkinter.messagebox so tabs and forms share titles and
wording for confirmations and notices.
"""

from tkinter import messagebox
from typing import Iterable


def show_confirmation(title: str, message: str, parent=None) -> bool:
    """Ask a yes/no question. Returns True if the user confirmed."""
    return messagebox.askyesno(title, message, parent=parent)


def confirm_delete(entity: str, name: str, parent=None) -> bool:
    """
    Ask before deleting a record.

    Args:
        entity: Kind of record, e.g. "ingredient"
        name: Display name of the record
        parent: Parent window (optional)
    """
    return show_confirmation(
        f"Delete {entity.title()}",
        f"Delete {entity} '{name}'?\n\nThis cannot be undone.",
        parent=parent,
    )


def show_validation_errors(errors: Iterable[str], parent=None):
    """Show a list of form problems, one per line."""
    messagebox.showerror("Validation Error", "\n".join(str(e) for e in errors), parent=parent)


def show_warning(title: str, message: str, parent=None):
    messagebox.showwarning(title, message, parent=parent)
