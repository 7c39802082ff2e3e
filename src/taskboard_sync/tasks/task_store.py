# src/taskboard_sync/tasks/task_store.py

from __future__ import annotations

"""
Task Store.

Pure operations over an immutable task collection (a tuple of Task).
Each call returns a new tuple and never touches the input; records other than
the target keep their values and relative order.
"""

import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import replace

from .task_models import BoardConfig, NotFoundError, Task, TaskCollection, TaskDraft, ValidationError

logger = logging.getLogger(__name__)

TITLE_REQUIRED_MESSAGE = "O nome da tarefa é obrigatório."


def _clean_title(title: str | None) -> str:
    text = (title or "").strip()
    if not text:
        raise ValidationError(TITLE_REQUIRED_MESSAGE)
    return text


def _check_status(status: str, config: BoardConfig) -> str:
    if status not in config:
        raise ValidationError(
            f"Unknown status {status!r}; expected one of: {', '.join(config.statuses)}"
        )
    return status


def make_task_id(existing_ids: Iterable[str], now_ms: int | None = None) -> str:
    """
    Timestamp-derived id ("task-<ms>").

    If the id is already taken (two tasks created within the same millisecond),
    bump the number until it is free.
    """
    taken = set(existing_ids)
    n = int(time.time() * 1000) if now_ms is None else int(now_ms)
    while f"task-{n}" in taken:
        n += 1
    return f"task-{n}"


def find_task(tasks: TaskCollection, task_id: str) -> Task | None:
    for t in tasks:
        if t.id == task_id:
            return t
    return None


def create(
    tasks: TaskCollection,
    draft: TaskDraft,
    config: BoardConfig,
    *,
    id_factory: Callable[[Iterable[str]], str] = make_task_id,
) -> tuple[TaskCollection, Task]:
    """Append a new task built from `draft`. Returns (new collection, created task)."""
    title = _clean_title(draft.title)
    status = _check_status(draft.status or config.first_status, config)

    task = Task(
        id=id_factory(t.id for t in tasks),
        title=title,
        description=draft.description or "",
        status=status,
    )
    return (*tasks, task), task


def update(
    tasks: TaskCollection,
    task_id: str,
    draft: TaskDraft,
    config: BoardConfig,
) -> tuple[TaskCollection, Task]:
    """
    Replace the editable fields of `task_id` with the draft's.

    Missing description becomes "", missing status keeps the current one.
    Raises NotFoundError if the id is absent.
    """
    current = find_task(tasks, task_id)
    if current is None:
        raise NotFoundError(task_id)

    title = _clean_title(draft.title)
    status = _check_status(draft.status or current.status, config)

    updated = replace(current, title=title, description=draft.description or "", status=status)
    return tuple(updated if t.id == task_id else t for t in tasks), updated


def remove(tasks: TaskCollection, task_id: str) -> TaskCollection:
    """Drop `task_id`. Absent id -> the same collection is returned."""
    if find_task(tasks, task_id) is None:
        return tasks
    return tuple(t for t in tasks if t.id != task_id)


def move_to_status(
    tasks: TaskCollection,
    task_id: str,
    new_status: str,
    config: BoardConfig,
) -> TaskCollection:
    """
    Set the status of `task_id`; no other field changes.

    Absent id or unchanged status -> the same collection is returned.
    """
    _check_status(new_status, config)

    current = find_task(tasks, task_id)
    if current is None:
        logger.debug("move_to_status: task %s not in collection", task_id)
        return tasks
    if current.status == new_status:
        return tasks

    moved = replace(current, status=new_status)
    return tuple(moved if t.id == task_id else t for t in tasks)


def group_by_status(tasks: TaskCollection, config: BoardConfig) -> dict[str, list[Task]]:
    """Column view: status -> tasks in collection order (configured status order)."""
    columns: dict[str, list[Task]] = {s: [] for s in config.statuses}
    for t in tasks:
        if t.status in columns:
            columns[t.status].append(t)
    return columns
