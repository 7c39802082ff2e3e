# tests/test_commands.py

from __future__ import annotations

import pytest
import pytest_asyncio

from taskboard_sync.cli.commands import CommandRegistry, registry
from taskboard_sync.core.session import BoardSession
from taskboard_sync.core.state import AppState

from .fakes import FakeGateway, ManualScheduler


@pytest_asyncio.fixture()
async def app_state(settings, gateway: FakeGateway, session: BoardSession, sample_tasks) -> AppState:
    gateway.board_names = ["Alpha", "Beta"]
    gateway.tasks_by_board["Alpha"] = sample_tasks
    await session.start()
    return AppState(settings=settings, gateway=gateway, session=session)


@pytest.mark.asyncio
async def test_command_registry_routes_sync_and_async_handlers(app_state: AppState) -> None:
    reg = CommandRegistry()
    called = {"sync": 0, "async": 0}

    def h_sync(state, args, emit):
        called["sync"] += 1
        return "s:" + ",".join(args)

    async def h_async(state, args, emit):
        called["async"] += 1
        if emit is not None:
            emit("note")
        return "a"

    reg.register("a", h_sync, "a")
    reg.register("b", h_async, "b", aliases=["bee"])

    notes: list[str] = []
    assert await reg.handle(app_state, "/a x y") == "s:x,y"
    assert await reg.handle(app_state, "/BEE", emit=notes.append) == "a"
    assert called == {"sync": 1, "async": 1}
    assert notes == ["note"]


@pytest.mark.asyncio
async def test_command_registry_unknown_and_non_command(app_state: AppState) -> None:
    reg = CommandRegistry()
    assert await reg.handle(app_state, "hello") is None
    assert "Unknown command" in (await reg.handle(app_state, "/nope") or "")
    assert "Empty command" in (await reg.handle(app_state, "/") or "")


@pytest.mark.asyncio
async def test_add_edit_move_and_show(app_state: AppState, scheduler: ManualScheduler) -> None:
    reply = await registry.handle(app_state, "/add Write docs | for the API | Bloqueado")
    assert reply is not None and reply.startswith("Created task-")
    new_id = reply.split()[1]

    task = app_state.session.get_task(new_id)
    assert (task.title, task.description, task.status) == ("Write docs", "for the API", "Bloqueado")

    assert await registry.handle(app_state, f"/edit {new_id} Write better docs") == f"Updated {new_id}."
    task = app_state.session.get_task(new_id)
    assert task.description == ""
    assert task.status == "Bloqueado"

    assert await registry.handle(app_state, f"/move {new_id} A Fazer") == f"{new_id} -> A Fazer."

    board = await registry.handle(app_state, "/show")
    assert "Projeto: Alpha" in board
    assert "== A Fazer (3)" in board
    assert "Write better docs" in board
    assert len(scheduler.armed) == 1


@pytest.mark.asyncio
async def test_validation_errors_become_replies(app_state: AppState) -> None:
    assert await registry.handle(app_state, "/add   ") == "O nome da tarefa é obrigatório."
    assert await registry.handle(app_state, "/edit task-404 x") == "Task not found: task-404"
    reply = await registry.handle(app_state, "/newboard alpha")
    assert reply == 'O projeto "alpha" já existe.'


@pytest.mark.asyncio
async def test_rm_needs_confirmation(app_state: AppState) -> None:
    reply = await registry.handle(app_state, "/rm task-1")
    assert "Tem certeza" in reply
    assert app_state.session.get_task("task-1") is not None

    assert await registry.handle(app_state, "/rm task-1 --yes") == "Deleted task-1."
    assert app_state.session.get_task("task-1") is None


@pytest.mark.asyncio
async def test_drop_and_info(app_state: AppState) -> None:
    assert await registry.handle(app_state, "/drop task-1 A Fazer 1") == "Nothing to do (same column)."
    assert await registry.handle(app_state, "/drop task-1 Pronto 0") == "Moved."
    assert app_state.session.get_task("task-1").status == "Pronto"

    info = await registry.handle(app_state, "/info task-1")
    assert "first pass" in info


@pytest.mark.asyncio
async def test_board_switch_and_listing(app_state: AppState, gateway: FakeGateway) -> None:
    listing = await registry.handle(app_state, "/boards")
    assert "* Alpha" in listing

    reply = await registry.handle(app_state, "/board Beta")
    assert "Projeto: Beta" in reply
    assert gateway.fetch_calls == ["Alpha", "Beta"]
