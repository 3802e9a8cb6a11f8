"""Utilities package for the Recipe ARR application."""
