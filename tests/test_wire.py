# tests/test_wire.py

from __future__ import annotations

from taskboard_sync.tasks.task_models import BoardConfig, Task
from taskboard_sync.tasks.wire import WireSchema, rows_to_tasks, task_to_row


def test_task_to_row_uses_sheet_headers_verbatim() -> None:
    task = Task(id="task-1", title="Draft spec", description="d", status="A Fazer")
    row = task_to_row(task, WireSchema())

    assert row == {"id": "task-1", "Tarefa": "Draft spec", "Descrição": "d", "Status": "A Fazer"}


def test_task_to_row_carries_extra_columns() -> None:
    task = Task(id="a", title="t", description="", status="Pronto", extra={"Responsável": "Ana"})
    row = task_to_row(task, WireSchema())
    assert row["Responsável"] == "Ana"
    assert row["Status"] == "Pronto"


def test_rows_to_tasks_repairs_rows(config: BoardConfig) -> None:
    rows = [
        {"id": "task-1", "Tarefa": "Ok", "Descrição": "x", "Status": "Pronto"},
        {"id": "", "Tarefa": "", "Descrição": "", "Status": ""},  # blank sheet row
        {"id": "task-1", "Tarefa": "Dup", "Descrição": "", "Status": "Pronto"},
        {"id": 17.0, "Tarefa": "Numeric id", "Status": "Arquivado", "Prazo": "amanhã"},
        "garbage",
    ]
    tasks = rows_to_tasks(rows, WireSchema(), config)

    assert [t.title for t in tasks] == ["Ok", "Dup", "Numeric id"]
    ids = [t.id for t in tasks]
    assert ids[0] == "task-1"
    assert ids[1] != "task-1" and ids[1].startswith("task-")
    assert ids[2] == "17"
    assert len(set(ids)) == 3

    numeric = tasks[2]
    assert numeric.status == "A Fazer"
    assert numeric.description == ""
    assert numeric.extra == {"Prazo": "amanhã"}


def test_custom_schema_keys(config: BoardConfig) -> None:
    schema = WireSchema(id_key="ID", title_key="Title", description_key="Notes", status_key="State")
    tasks = rows_to_tasks([{"ID": "a", "Title": "T", "Notes": "n", "State": "Bloqueado"}], schema, config)

    assert tasks == (Task(id="a", title="T", description="n", status="Bloqueado"),)
    assert task_to_row(tasks[0], schema) == {"ID": "a", "Title": "T", "Notes": "n", "State": "Bloqueado"}
