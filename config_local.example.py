# config_local.example.py

"""
Example local overrides.

Usage:
  1) Copy this file to `config_local.py`
  2) Adjust values for your machine
  3) Never commit `config_local.py` (it is gitignored)

Prefer `.env`. Only ENDPOINT_URL, MULTI_BOARD and STATUSES are read from here.
"""

# Example: point at a test copy of the sheet
# ENDPOINT_URL = "https://script.google.com/macros/s/<deployment-id>/exec"

# Example: single sheet, no project selector
# MULTI_BOARD = False

# Example: custom columns
# STATUSES = ["Backlog", "Doing", "Done"]
