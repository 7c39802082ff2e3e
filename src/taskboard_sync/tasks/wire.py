# src/taskboard_sync/tasks/wire.py

from __future__ import annotations

"""
Row <-> Task translation.

The remote store is a spreadsheet addressed by column header, so the JSON keys
must match the headers byte for byte. All knowledge of those keys lives here.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from .task_models import BoardConfig, Task, TaskCollection
from .task_store import make_task_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class WireSchema:
    id_key: str = "id"
    title_key: str = "Tarefa"
    description_key: str = "Descrição"
    status_key: str = "Status"

    @property
    def known_keys(self) -> tuple[str, str, str, str]:
        return (self.id_key, self.title_key, self.description_key, self.status_key)


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        # Sheets hands back numeric ids as floats.
        return str(int(value))
    return str(value)


def task_to_row(task: Task, schema: WireSchema) -> dict[str, Any]:
    row: dict[str, Any] = dict(task.extra)
    row[schema.id_key] = task.id
    row[schema.title_key] = task.title
    row[schema.description_key] = task.description
    row[schema.status_key] = task.status
    return row


def tasks_to_rows(tasks: Iterable[Task], schema: WireSchema) -> list[dict[str, Any]]:
    return [task_to_row(t, schema) for t in tasks]


def rows_to_tasks(rows: Iterable[Any], schema: WireSchema, config: BoardConfig) -> TaskCollection:
    """
    Decode remote rows, repairing what would break collection invariants.

    - non-object rows and rows with a blank title are skipped
    - missing or duplicate ids get a fresh id
    - blank/unknown status falls back to the board's first status
    """
    out: list[Task] = []
    seen: set[str] = set()

    for idx, row in enumerate(rows):
        if not isinstance(row, dict):
            logger.warning("Skipping non-object row #%d: %r", idx, row)
            continue

        title = _cell_text(row.get(schema.title_key)).strip()
        if not title:
            logger.debug("Skipping row #%d with blank title", idx)
            continue

        task_id = _cell_text(row.get(schema.id_key)).strip()
        if not task_id or task_id in seen:
            fresh = make_task_id(seen)
            logger.warning("Row #%d has %s id %r; assigned %s", idx, "duplicate" if task_id else "no", task_id, fresh)
            task_id = fresh

        status = _cell_text(row.get(schema.status_key)).strip()
        if status not in config:
            logger.warning(
                "Row #%d (%s) has unknown status %r; using %r", idx, task_id, status, config.first_status
            )
            status = config.first_status

        extra = {k: v for k, v in row.items() if k not in schema.known_keys}

        seen.add(task_id)
        out.append(
            Task(
                id=task_id,
                title=title,
                description=_cell_text(row.get(schema.description_key)),
                status=status,
                extra=extra,
            )
        )

    return tuple(out)
