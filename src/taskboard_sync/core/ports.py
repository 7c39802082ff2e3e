# src/taskboard_sync/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The session and sync controllers depend on Protocols instead of concrete
implementations, so the HTTP gateway and the event-loop timer can be swapped
for fakes in tests.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Awaitable, Protocol

if TYPE_CHECKING:
    from ..sync.gateway import GatewayResult
    from ..tasks.task_models import TaskCollection


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class TimerScheduler(Protocol):
    """
    Something that can run a callback later.

    asyncio event loops satisfy this (loop.call_later returns a TimerHandle).
    """

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> Cancellable: ...


class TaskGateway(Protocol):
    """Remote store port: fetch everything / overwrite everything."""

    def fetch_all(self, board: str | None = None) -> Awaitable[GatewayResult[TaskCollection]]: ...

    def replace_all(
            self,
            board: str | None,
            tasks: TaskCollection,
    ) -> Awaitable[GatewayResult[None]]: ...

    def fetch_board_names(self) -> Awaitable[GatewayResult[list[str]]]: ...

    def create_board(self, name: str) -> Awaitable[GatewayResult[None]]: ...
