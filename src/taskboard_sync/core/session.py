# src/taskboard_sync/core/session.py

"""
Board session controller.

Owns the current task collection and the status flags the UI renders
(loading / saving / error / board list). Every mutating intent:
1) computes a new collection with the pure task store,
2) applies it immediately (optimistic),
3) hands it to the SyncController for a debounced full overwrite.

Write results only touch saving/error; they never replace the local tasks.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from ..sync.gateway import GatewayResult
from ..sync.sync_controller import DEFAULT_DEBOUNCE_SECONDS, SyncController, SyncState
from ..tasks import task_store
from ..tasks.task_models import BoardConfig, NotFoundError, Task, TaskCollection, TaskDraft, ValidationError
from .ports import TaskGateway, TimerScheduler

logger = logging.getLogger(__name__)

ConfirmDelete = Callable[[Task], bool]

LOAD_BOARDS_FAILED = "Falha ao carregar projetos: "
LOAD_TASKS_FAILED = "Falha ao carregar tarefas: "
SAVE_FAILED = "Falha ao salvar: "
CREATE_BOARD_REMOTE_FAILED = "Erro do servidor: "
CREATE_BOARD_TRANSPORT_FAILED = "Erro de comunicação ao criar projeto."
BOARD_NAME_REQUIRED = "O nome do projeto não pode estar em branco."
LOAD_IN_PROGRESS = "Aguarde o carregamento do projeto."


@dataclass(slots=True)
class BoardState:
    tasks: TaskCollection = ()
    loading: bool = False
    saving: bool = False
    error: str = ""
    boards: list[str] = field(default_factory=list)
    current_board: str | None = None


Listener = Callable[[BoardState], None]


@dataclass(slots=True, frozen=True)
class DragEvent:
    """
    Drag completion as reported by the rendering layer.

    to_status is None when the card was dropped outside any column.
    """

    task_id: str
    from_status: str
    to_status: str | None
    from_index: int
    to_index: int


class BoardSession:
    def __init__(
            self,
            gateway: TaskGateway,
            *,
            config: BoardConfig | None = None,
            multi_board: bool = True,
            debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
            scheduler: TimerScheduler | None = None,
    ) -> None:
        self._gateway = gateway
        self.config = config or BoardConfig()
        self.multi_board = multi_board
        self.state = BoardState()
        self._listeners: list[Listener] = []
        self._load_generation = 0

        self.sync = SyncController(
            gateway.replace_all,
            delay_seconds=debounce_seconds,
            scheduler=scheduler,
            on_result=self._on_write_result,
            on_state_change=self._on_sync_state,
        )

    # ---- read side ----

    @property
    def tasks(self) -> TaskCollection:
        return self.state.tasks

    @property
    def loading(self) -> bool:
        return self.state.loading

    @property
    def saving(self) -> bool:
        return self.state.saving

    @property
    def error(self) -> str:
        return self.state.error

    @property
    def boards(self) -> list[str]:
        return list(self.state.boards)

    @property
    def current_board(self) -> str | None:
        return self.state.current_board

    def tasks_by_status(self) -> dict[str, list[Task]]:
        return task_store.group_by_status(self.state.tasks, self.config)

    def get_task(self, task_id: str) -> Task | None:
        return task_store.find_task(self.state.tasks, task_id)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self.state)
            except Exception:
                logger.exception("Session listener failed")

    def clear_error(self) -> None:
        if self.state.error:
            self.state.error = ""
            self._notify()

    def _ensure_loaded(self) -> None:
        # tasks are empty until the load lands
        if self.state.loading:
            raise ValidationError(LOAD_IN_PROGRESS)

    def _set_error(self, message: str) -> None:
        self.state.error = message
        self._notify()

    # ---- sync callbacks ----

    def _on_sync_state(self, sync_state: SyncState) -> None:
        saving = sync_state is not SyncState.IDLE
        if saving != self.state.saving:
            self.state.saving = saving
            self._notify()

    def _on_write_result(self, board: str | None, result: GatewayResult[None]) -> None:
        if result.error is None:
            return
        logger.warning("Save failed board=%s: %s", board, result.error.message)
        self._set_error(SAVE_FAILED + result.error.message)

    # ---- loading ----

    async def start(self) -> None:
        """Initial load: board list (multi-board) then the first board's tasks."""
        if not self.multi_board:
            await self.load_board(None)
            return

        self.state.loading = True
        self._notify()

        res = await self._gateway.fetch_board_names()
        if res.error is not None:
            self.state.loading = False
            self._set_error(LOAD_BOARDS_FAILED + res.error.message)
            return

        self.state.boards = list(res.value or [])
        if not self.state.boards:
            logger.info("No boards found")
            self.state.loading = False
            self._notify()
            return

        await self.load_board(self.state.boards[0])

    async def load_board(self, board: str | None) -> None:
        """
        Switch to `board` and fetch its tasks.

        Armed/queued writes for the previous board are dropped; a write already in
        flight completes against the previous board.
        """
        self.sync.cancel_pending()
        self._load_generation += 1
        generation = self._load_generation

        self.state.current_board = board
        self.state.tasks = ()
        self.state.loading = True
        self._notify()

        res = await self._gateway.fetch_all(board)

        if generation != self._load_generation:
            logger.debug("Discarding stale load board=%s", board)
            return

        self.state.loading = False
        if res.error is not None:
            self.state.tasks = ()
            self._set_error(LOAD_TASKS_FAILED + res.error.message)
            return

        self.state.tasks = res.value or ()
        logger.info("Loaded board=%s tasks=%d", board, len(self.state.tasks))
        self._notify()

    async def reload(self) -> None:
        await self.load_board(self.state.current_board)

    async def select_board(self, name: str) -> None:
        if name == self.state.current_board:
            return
        if name not in self.state.boards:
            raise ValidationError(f'O projeto "{name}" não existe.')
        await self.load_board(name)

    async def create_board(self, name: str) -> bool:
        """
        Create a board remotely, then switch to it.

        Validation happens before any network call. Remote failures set the error
        message and return False.
        """
        if not self.multi_board:
            raise ValidationError("Multiple boards are disabled.")

        clean = (name or "").strip()
        if not clean:
            raise ValidationError(BOARD_NAME_REQUIRED)
        if any(b.lower() == clean.lower() for b in self.state.boards):
            raise ValidationError(f'O projeto "{clean}" já existe.')

        res = await self._gateway.create_board(clean)
        if res.error is not None:
            if res.error.kind == "transport":
                self._set_error(CREATE_BOARD_TRANSPORT_FAILED)
            else:
                self._set_error(CREATE_BOARD_REMOTE_FAILED + res.error.message)
            return False

        self.state.boards = [*self.state.boards, clean]
        await self.load_board(clean)
        return True

    # ---- mutation intents ----

    def _apply(self, new_tasks: TaskCollection) -> None:
        if new_tasks is self.state.tasks:
            return
        self.state.tasks = new_tasks
        self._notify()
        self.sync.submit(self.state.current_board, new_tasks)

    def create_task(self, draft: TaskDraft) -> Task:
        self._ensure_loaded()
        new_tasks, task = task_store.create(self.state.tasks, draft, self.config)
        logger.info("Created task %s status=%s", task.id, task.status)
        self._apply(new_tasks)
        return task

    def edit_task(self, task_id: str, draft: TaskDraft) -> Task:
        self._ensure_loaded()
        new_tasks, task = task_store.update(self.state.tasks, task_id, draft, self.config)
        logger.info("Edited task %s", task_id)
        self._apply(new_tasks)
        return task

    def delete_task(self, task_id: str, confirm: ConfirmDelete) -> bool:
        """Remove a task if `confirm(task)` agrees. Returns True when something was removed."""
        self._ensure_loaded()
        task = self.get_task(task_id)
        if task is None:
            return False
        if not confirm(task):
            return False
        self._apply(task_store.remove(self.state.tasks, task_id))
        logger.info("Deleted task %s", task_id)
        return True

    def move_task(self, task_id: str, new_status: str) -> Task:
        self._ensure_loaded()
        task = self.get_task(task_id)
        if task is None:
            raise NotFoundError(task_id)
        new_tasks = task_store.move_to_status(self.state.tasks, task_id, new_status, self.config)
        self._apply(new_tasks)
        return task_store.find_task(new_tasks, task_id) or task

    def handle_drop(self, event: DragEvent) -> bool:
        """
        Apply a drag result. Only cross-column drops change anything; order inside a
        column is not persisted. Returns True if the collection changed.
        """
        if self.state.loading or event.to_status is None:
            return False
        if event.to_status == event.from_status:
            return False

        before = self.state.tasks
        try:
            self.move_task(event.task_id, event.to_status)
        except NotFoundError:
            logger.warning("Drop for unknown task %s ignored", event.task_id)
            return False
        return self.state.tasks is not before

    async def close(self) -> None:
        """Persist anything still pending and wait for it."""
        await self.sync.flush()
