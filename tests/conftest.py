# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskboard_sync.core.session import BoardSession
from taskboard_sync.tasks.task_models import BoardConfig, Task

from .fakes import FakeGateway, ManualScheduler


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and the CLI.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's environment/.env.
    """
    return SimpleNamespace(
        app_name="taskboard-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        endpoint_url="https://script.example.test/exec",
        request_timeout_seconds=5.0,
        multi_board=True,
        statuses=("A Fazer", "Pronto", "Bloqueado"),
        debounce_seconds=1.5,
        field_id="id",
        field_title="Tarefa",
        field_description="Descrição",
        field_status="Status",
        console_enabled=False,
    )


@pytest.fixture()
def config() -> BoardConfig:
    return BoardConfig()


@pytest.fixture()
def sample_tasks() -> tuple[Task, ...]:
    return (
        Task(id="task-1", title="Draft spec", description="first pass", status="A Fazer"),
        Task(id="task-2", title="Review", description="", status="Pronto"),
        Task(id="task-3", title="Ship", description="after review", status="A Fazer"),
    )


@pytest.fixture()
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture()
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture()
def session(gateway: FakeGateway, scheduler: ManualScheduler, config: BoardConfig) -> BoardSession:
    """
    BoardSession wired with a fake gateway and a manual timer.

    The real SyncController is kept: its coalescing is part of what we test.
    """
    return BoardSession(gateway, config=config, multi_board=True, scheduler=scheduler)
