# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Use:
- .env (local, gitignored)
- config_local.py (local safe overrides, gitignored)

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKBOARD_APP_NAME": "App display name (default: taskboard).",
    "TASKBOARD_LOG_LEVEL": "Console logging level (default: INFO).",
    "TASKBOARD_DATA_DIR": "Local data directory, holds taskboard.log (default: .local/taskboard).",
    # Remote store
    "TASKBOARD_ENDPOINT_URL": "Spreadsheet web-app URL (required).",
    "TASKBOARD_REQUEST_TIMEOUT_SECONDS": "Per-request timeout (default: 20).",
    "TASKBOARD_MULTI_BOARD": "One sheet per board/project (true/false, default: true).",
    # Board
    "TASKBOARD_STATUSES": "Comma separated column labels, in order (default: A Fazer,Pronto,Bloqueado).",
    "TASKBOARD_DEBOUNCE_SECONDS": "Quiet window before a save is sent (default: 1.5).",
    # Sheet column headers (must match the sheet exactly)
    "TASKBOARD_FIELD_ID": "Id column header (default: id).",
    "TASKBOARD_FIELD_TITLE": "Title column header (default: Tarefa).",
    "TASKBOARD_FIELD_DESCRIPTION": "Description column header (default: Descrição).",
    "TASKBOARD_FIELD_STATUS": "Status column header (default: Status).",
    # Connectors
    "TASKBOARD_CONSOLE_ENABLED": "Run the console REPL (true/false, default: true).",
}
