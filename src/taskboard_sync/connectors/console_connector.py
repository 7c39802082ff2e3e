# src/taskboard_sync/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..cli.commands import render_board
from ..core.session import BoardState
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


class _ErrorBanner:
    """Print each new session error once (background save failures arrive asynchronously)."""

    def __init__(self) -> None:
        self._last = ""

    def __call__(self, state: BoardState) -> None:
        if state.error and state.error != self._last:
            _print_ts(f"[ERRO] {state.error} (use /clear para fechar)")
        self._last = state.error


async def run_console_loop(state: AppState) -> None:
    """
    Read slash commands from stdin until /exit or EOF.

    input() runs in a worker thread so debounce timers and in-flight writes keep
    running on the event loop while the prompt waits.
    """
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Use /help for commands. Use /exit to quit.\n")

    unsubscribe = state.session.subscribe(_ErrorBanner())
    print(render_board(state), flush=True)

    try:
        while True:
            try:
                user_input = (await asyncio.to_thread(input, "> ")).strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                print()
                break

            if not user_input:
                continue

            if user_input.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            if not user_input.startswith("/"):
                _print_ts("Commands start with '/'. Use /help.")
                continue

            try:
                reply = await command_registry.handle(state, user_input, emit=_print_ts)
            except Exception:
                logger.exception("Command handler crashed.")
                reply = "Internal error while handling a command."

            if reply:
                _print_ts(reply)
    finally:
        unsubscribe()
        logger.info("Console connector finished.")
