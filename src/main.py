"""
Main entry point for the Recipe ARR application.

This module initializes the application, sets up the database,
and launches the main window.
"""

import logging
import sys
import traceback

import customtkinter as ctk

from src.services.database import close_connections, initialize_app_database
from src.ui.main_window import MainWindow
from src.utils.config import configure_logging, get_config

logger = logging.getLogger(__name__)


def initialize_application():
    """
    Initialize the application.

    Sets up logging and the database.

    Returns:
        True if initialization successful, False otherwise
    """
    try:
        configure_logging()

        print("Initializing database...")
        initialize_app_database()
        print("Database initialized successfully")

        return True

    except Exception as e:
        print(f"ERROR: Failed to initialize application: {e}")
        traceback.print_exc()
        return False


def main():
    """
    Main application entry point.

    Initializes the application and launches the main window.
    """
    # Set CustomTkinter appearance
    ctk.set_appearance_mode("system")  # Modes: system, light, dark
    ctk.set_default_color_theme("blue")  # Themes: blue, dark-blue, green

    config = get_config()
    print(f"Starting {config.app_name} v{config.app_version}")
    print(f"Environment: {config.environment}")
    print(f"Database: {config.database_url}")

    if not initialize_application():
        print("Application initialization failed. Exiting.")
        sys.exit(1)

    try:
        app = MainWindow()
        app.mainloop()

    except Exception as e:
        logger.exception("Application crashed")
        print(f"ERROR: Application crashed: {e}")
        sys.exit(1)

    finally:
        close_connections()

    print("Application closed successfully")
    sys.exit(0)


if __name__ == "__main__":
    main()
