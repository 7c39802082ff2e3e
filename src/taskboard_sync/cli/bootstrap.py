# src/taskboard_sync/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the HTTP gateway and the board session into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.session import BoardSession
from ..core.state import AppState
from ..sync.gateway import SheetsGateway
from ..tasks.task_models import BoardConfig
from ..tasks.wire import WireSchema

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def build_wire_schema(settings) -> WireSchema:
    return WireSchema(
        id_key=settings.field_id,
        title_key=settings.field_title,
        description_key=settings.field_description,
        status_key=settings.field_status,
    )


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if not settings.endpoint_url:
        raise RuntimeError("Endpoint URL is not set. Set TASKBOARD_ENDPOINT_URL in your .env.")

    _ensure_local_dirs(settings)

    config = BoardConfig(statuses=tuple(settings.statuses))
    gateway = SheetsGateway(
        settings.endpoint_url,
        schema=build_wire_schema(settings),
        config=config,
        timeout_seconds=settings.request_timeout_seconds,
    )
    session = BoardSession(
        gateway,
        config=config,
        multi_board=settings.multi_board,
        debounce_seconds=settings.debounce_seconds,
    )
    logger.info(
        "Board session ready multi_board=%s statuses=%s debounce=%.2fs",
        settings.multi_board,
        ", ".join(config.statuses),
        settings.debounce_seconds,
    )
    return AppState(settings=settings, gateway=gateway, session=session)
