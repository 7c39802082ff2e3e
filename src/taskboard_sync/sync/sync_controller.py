# src/taskboard_sync/sync/sync_controller.py

"""
Debounced sync controller.

Coalesces bursts of snapshots into one write after a quiet window:
- at most one write in flight,
- at most one write pending (armed timer or queued behind the in-flight one),
- only the latest snapshot is ever sent; intermediate ones are dropped.

States:
    IDLE ---submit---> PENDING_WRITE ---timer---> WRITING ---done---> IDLE
    PENDING_WRITE ---submit---> PENDING_WRITE (timer re-armed)
    WRITING ---submit---> WRITING_WITH_PENDING_RETRY ---done---> PENDING_WRITE

A failed write is reported through on_result and not retried.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum

from ..core.ports import Cancellable, TimerScheduler
from ..tasks.task_models import TaskCollection
from .gateway import GatewayError, GatewayResult

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 1.5


class SyncState(str, Enum):
    IDLE = "idle"
    PENDING_WRITE = "pending_write"
    WRITING = "writing"
    WRITING_WITH_PENDING_RETRY = "writing_with_pending_retry"


SnapshotWriter = Callable[[str | None, TaskCollection], Awaitable[GatewayResult[None]]]
ResultCallback = Callable[[str | None, GatewayResult[None]], None]
StateCallback = Callable[[SyncState], None]


@dataclass(slots=True, frozen=True)
class PendingWrite:
    board: str | None
    snapshot: TaskCollection


class SyncController:
    def __init__(
            self,
            writer: SnapshotWriter,
            *,
            delay_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
            scheduler: TimerScheduler | None = None,
            on_result: ResultCallback | None = None,
            on_state_change: StateCallback | None = None,
    ) -> None:
        self._writer = writer
        self._delay = max(0.0, float(delay_seconds))
        self._scheduler = scheduler
        self._on_result = on_result
        self._on_state_change = on_state_change

        self._state = SyncState.IDLE
        self._timer: Cancellable | None = None
        self._pending: PendingWrite | None = None
        self._inflight: asyncio.Task[None] | None = None
        self._idle = asyncio.Event()
        self._idle.set()

    # ---- introspection ----

    @property
    def state(self) -> SyncState:
        return self._state

    @property
    def saving(self) -> bool:
        return self._state is not SyncState.IDLE

    @property
    def pending(self) -> PendingWrite | None:
        return self._pending

    # ---- transitions ----

    def _set_state(self, new_state: SyncState) -> None:
        if new_state is self._state:
            return
        logger.debug("sync state %s -> %s", self._state.value, new_state.value)
        self._state = new_state
        if new_state is SyncState.IDLE:
            self._idle.set()
        else:
            self._idle.clear()
        if self._on_state_change is not None:
            try:
                self._on_state_change(new_state)
            except Exception:
                logger.exception("on_state_change callback failed")

    def _arm(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        scheduler = self._scheduler or asyncio.get_running_loop()
        self._timer = scheduler.call_later(self._delay, self._fire)

    def submit(self, board: str | None, snapshot: TaskCollection) -> None:
        """Queue `snapshot` as the next thing to persist for `board`."""
        self._pending = PendingWrite(board=board, snapshot=snapshot)

        if self._state in (SyncState.IDLE, SyncState.PENDING_WRITE):
            self._arm()
            self._set_state(SyncState.PENDING_WRITE)
        else:
            self._set_state(SyncState.WRITING_WITH_PENDING_RETRY)

    def cancel_pending(self) -> None:
        """
        Drop the armed/queued write. An in-flight write is left to complete.
        """
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        dropped = self._pending
        self._pending = None

        if self._state is SyncState.PENDING_WRITE:
            self._set_state(SyncState.IDLE)
        elif self._state is SyncState.WRITING_WITH_PENDING_RETRY:
            self._set_state(SyncState.WRITING)

        if dropped is not None:
            logger.info("Dropped pending write board=%s (%d tasks)", dropped.board, len(dropped.snapshot))

    def _fire(self) -> None:
        self._timer = None
        if self._state is not SyncState.PENDING_WRITE or self._pending is None:
            return

        write = self._pending
        self._pending = None
        self._set_state(SyncState.WRITING)
        self._inflight = asyncio.get_running_loop().create_task(self._run_write(write))

    async def _run_write(self, write: PendingWrite) -> None:
        logger.debug("writing board=%s tasks=%d", write.board, len(write.snapshot))
        try:
            result = await self._writer(write.board, write.snapshot)
        except Exception as e:
            logger.exception("Snapshot writer raised board=%s", write.board)
            result = GatewayResult.failure(GatewayError(str(e) or e.__class__.__name__, kind="transport"))

        self._inflight = None
        if self._state is SyncState.WRITING_WITH_PENDING_RETRY and self._pending is not None:
            self._arm()
            self._set_state(SyncState.PENDING_WRITE)
        else:
            self._set_state(SyncState.IDLE)

        if self._on_result is not None:
            try:
                self._on_result(write.board, result)
            except Exception:
                logger.exception("on_result callback failed")

    # ---- draining ----

    async def wait_idle(self) -> None:
        await self._idle.wait()

    async def flush(self) -> None:
        """
        Send whatever is pending now instead of after the quiet window, and wait
        until nothing is pending or in flight.
        """
        while self._state is not SyncState.IDLE:
            if self._state is SyncState.PENDING_WRITE:
                if self._timer is not None:
                    self._timer.cancel()
                    self._timer = None
                self._fire()
            inflight = self._inflight
            if inflight is not None:
                await asyncio.shield(inflight)
            else:
                await asyncio.sleep(0)
