# src/taskboard_sync/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..sync.gateway import SheetsGateway
from .session import BoardSession


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    gateway: SheetsGateway
    session: BoardSession

    async def aclose(self) -> None:
        """Flush the last pending write, then release the HTTP client."""
        try:
            await self.session.close()
        finally:
            await self.gateway.aclose()
