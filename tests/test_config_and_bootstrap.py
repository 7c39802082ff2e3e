# tests/test_config_and_bootstrap.py

from __future__ import annotations

import builtins
import logging
from pathlib import Path

import pytest

from taskboard_sync.cli.bootstrap import create_initial_state
from taskboard_sync.config import Settings
from taskboard_sync.connectors.console_connector import run_console_loop
from taskboard_sync.core.state import AppState
from taskboard_sync.logging_setup import _ConsoleNoiseFilter, setup_logging
from taskboard_sync.sync.gateway import SheetsGateway

from .fakes import FakeGateway


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKBOARD_ENDPOINT_URL", " https://script.example.test/exec ")
    monkeypatch.setenv("TASKBOARD_STATUSES", "To Do, In Progress ,Done,")
    monkeypatch.setenv("TASKBOARD_DEBOUNCE_SECONDS", "0.25")
    monkeypatch.setenv("TASKBOARD_MULTI_BOARD", "no")
    monkeypatch.setenv("TASKBOARD_DATA_DIR", str(tmp_path / "d"))
    monkeypatch.setenv("TASKBOARD_FIELD_TITLE", "Title")

    s = Settings.from_env()

    assert s.endpoint_url == "https://script.example.test/exec"
    assert s.statuses == ("To Do", "In Progress", "Done")
    assert s.debounce_seconds == 0.25
    assert s.multi_board is False
    assert s.data_dir == tmp_path / "d"
    assert s.field_title == "Title"
    assert s.field_description == "Descrição"


def test_settings_defaults_and_bad_numbers(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("TASKBOARD_STATUSES", "TASKBOARD_ENDPOINT_URL", "TASKBOARD_MULTI_BOARD"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("TASKBOARD_DEBOUNCE_SECONDS", "soon")
    monkeypatch.setenv("TASKBOARD_REQUEST_TIMEOUT_SECONDS", "0")

    s = Settings.from_env()

    assert s.statuses == ("A Fazer", "Pronto", "Bloqueado")
    assert s.debounce_seconds == 1.5
    assert s.request_timeout_seconds == 1.0
    assert s.multi_board is True
    assert s.endpoint_url == ""


@pytest.mark.asyncio
async def test_create_initial_state_wires_session(settings) -> None:
    settings.statuses = ("Todo", "Done")
    settings.multi_board = False

    state = create_initial_state(settings=settings)
    try:
        assert isinstance(state.gateway, SheetsGateway)
        assert state.session.config.statuses == ("Todo", "Done")
        assert state.session.multi_board is False
        assert settings.data_dir.is_dir()
    finally:
        await state.aclose()


def test_create_initial_state_requires_endpoint(settings) -> None:
    settings.endpoint_url = ""
    with pytest.raises(RuntimeError, match="TASKBOARD_ENDPOINT_URL"):
        create_initial_state(settings=settings)


@pytest.mark.asyncio
async def test_console_loop_runs_commands_until_eof(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], settings, session, gateway: FakeGateway
) -> None:
    gateway.board_names = ["Alpha"]
    await session.start()
    state = AppState(settings=settings, gateway=gateway, session=session)

    lines = iter(["/add Console task", "", "hello", "/show"])

    def fake_input(prompt: str = "") -> str:
        try:
            return next(lines)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr(builtins, "input", fake_input)

    await run_console_loop(state)

    out = capsys.readouterr().out
    assert "Created task-" in out
    assert "Commands start with '/'" in out
    assert "Console task" in out
    assert len(session.tasks) == 1


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_console_filter_keeps_own_logs_and_drops_library_noise() -> None:
    f = _ConsoleNoiseFilter()

    assert f.filter(_record("taskboard_sync.core.session", logging.INFO))
    assert not f.filter(_record("taskboard_sync.connectors.console_connector", logging.INFO))
    assert f.filter(_record("taskboard_sync.connectors.console_connector", logging.WARNING))
    assert not f.filter(_record("httpx", logging.WARNING))
    assert f.filter(_record("httpx", logging.ERROR))


def test_setup_logging_writes_log_file(tmp_path: Path) -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        log_file = setup_logging(log_dir=tmp_path / "logs")
        logging.getLogger("taskboard_sync.test").debug("hello file")
        for h in root.handlers:
            h.flush()

        assert log_file == tmp_path / "logs" / "taskboard.log"
        assert "hello file" in log_file.read_text(encoding="utf-8")
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
