# src/taskboard_sync/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing required at import time; the endpoint URL is checked when the app starts.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .tasks.task_models import DEFAULT_STATUSES

ENV_PREFIX = "TASKBOARD"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except Exception:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_csv(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    # Comma only: status labels may contain spaces ("A Fazer").
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return tuple(default)
    parts = tuple(p.strip() for p in raw.split(",") if p.strip())
    return parts or tuple(default)


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path

    # ---- Remote store ----
    endpoint_url: str
    request_timeout_seconds: float
    multi_board: bool

    # ---- Board ----
    statuses: tuple[str, ...]
    debounce_seconds: float

    # ---- Column headers in the remote sheet ----
    field_id: str
    field_title: str
    field_description: str
    field_status: str

    # ---- Connectors ----
    console_enabled: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskboard").strip() or "taskboard"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskboard"))

        endpoint_url = _env(_k("ENDPOINT_URL"), "").strip()
        request_timeout_seconds = max(1.0, _env_float(_k("REQUEST_TIMEOUT_SECONDS"), 20.0))
        multi_board = _env_bool(_k("MULTI_BOARD"), True)

        statuses = _env_csv(_k("STATUSES"), DEFAULT_STATUSES)
        debounce_seconds = max(0.0, _env_float(_k("DEBOUNCE_SECONDS"), 1.5))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            endpoint_url=endpoint_url,
            request_timeout_seconds=request_timeout_seconds,
            multi_board=multi_board,
            statuses=statuses,
            debounce_seconds=debounce_seconds,
            field_id=_env(_k("FIELD_ID"), "id").strip() or "id",
            field_title=_env(_k("FIELD_TITLE"), "Tarefa").strip() or "Tarefa",
            field_description=_env(_k("FIELD_DESCRIPTION"), "Descrição").strip() or "Descrição",
            field_status=_env(_k("FIELD_STATUS"), "Status").strip() or "Status",
            console_enabled=_env_bool(_k("CONSOLE_ENABLED"), True),
        )


SETTINGS = Settings.from_env()

# ---- Optional local overrides (never committed) ----
# Prefer .env; use config_local.py only for safe overrides.
try:
    import config_local as _config_local  # type: ignore

    # Keep it explicit: only these names are honoured.
    if hasattr(_config_local, "ENDPOINT_URL"):
        object.__setattr__(SETTINGS, "endpoint_url", str(_config_local.ENDPOINT_URL).strip())  # type: ignore[misc]
    if hasattr(_config_local, "MULTI_BOARD"):
        object.__setattr__(SETTINGS, "multi_board", bool(_config_local.MULTI_BOARD))  # type: ignore[misc]
    if hasattr(_config_local, "STATUSES"):
        object.__setattr__(SETTINGS, "statuses", tuple(_config_local.STATUSES))  # type: ignore[misc]
except Exception:
    pass


def get_settings() -> Settings:
    return SETTINGS
