# src/taskboard_sync/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

DEFAULT_STATUSES: tuple[str, ...] = ("A Fazer", "Pronto", "Bloqueado")


class ValidationError(ValueError):
    """Rejected input (empty title, bad status, empty/duplicate board name)."""


class NotFoundError(LookupError):
    """An intent targeted a task id that is not in the collection."""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


@dataclass(frozen=True, slots=True)
class BoardConfig:
    """
    Ordered set of status labels (one board column per label).

    The first label is the default status of new tasks.
    """

    statuses: tuple[str, ...] = DEFAULT_STATUSES

    def __post_init__(self) -> None:
        cleaned = tuple(s for s in self.statuses if s and s.strip())
        if not cleaned:
            raise ValueError("BoardConfig needs at least one status")
        if len(set(cleaned)) != len(cleaned):
            raise ValueError("BoardConfig statuses must be unique")
        object.__setattr__(self, "statuses", cleaned)

    @property
    def first_status(self) -> str:
        return self.statuses[0]

    def __contains__(self, status: object) -> bool:
        return status in self.statuses


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    title: str
    description: str
    status: str

    # Remote columns this client does not edit; carried along so a full overwrite keeps them.
    extra: dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True, slots=True)
class TaskDraft:
    """What the task form produces on submit."""

    title: str
    description: str | None = None
    status: str | None = None


TaskCollection = tuple[Task, ...]
