"""Headless file dialog model: filters, directory scanning, sorting, selection and bookmarks."""

__version__ = "0.5.6"
__all__ = ["pathutils", "filters", "entries", "bookmarks", "dialog"]