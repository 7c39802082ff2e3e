"""Client-side task board sync engine backed by a spreadsheet web app."""

__version__ = "0.1.0"
