# src/taskboard_sync/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, loads the first board, then runs the
console REPL. On exit the last pending write is flushed before the HTTP client
is closed.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _run(settings) -> None:
    state = create_initial_state(settings=settings)
    try:
        await state.session.start()

        if settings.console_enabled:
            await run_console_loop(state)
        else:
            # Headless: nothing issues mutations, so one load is all there is to do.
            logger.info("Console disabled. Loaded %d tasks; exiting.", len(state.session.tasks))
    finally:
        try:
            await state.aclose()
        except Exception:
            logger.exception("Shutdown failed.")


def main() -> None:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    try:
        asyncio.run(_run(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down...")
    except RuntimeError as e:
        # Configuration problems (e.g. missing endpoint URL) surface here.
        logger.error("%s", e)
        raise SystemExit(1) from e

    logger.info("Bye.")


if __name__ == "__main__":
    main()
