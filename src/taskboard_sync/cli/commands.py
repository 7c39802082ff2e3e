# src/taskboard_sync/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable

from ..core.session import DragEvent
from ..core.state import AppState
from ..tasks.task_models import NotFoundError, TaskDraft, ValidationError

CommandEmitter = Callable[[str], None]
CommandHandler = Callable[[AppState, list[str], CommandEmitter | None], str | Awaitable[str]]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        ValidationError / NotFoundError from the session become the reply text.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            reply = handler(state, args, emit)
            if inspect.isawaitable(reply):
                reply = await reply
        except (ValidationError, NotFoundError) as e:
            return str(e)
        return reply

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _split_fields(args: list[str]) -> list[str]:
    """'title words | description | status' -> ['title words', 'description', 'status']."""
    return [p.strip() for p in " ".join(args).split("|")]


def _draft_from_args(args: list[str]) -> TaskDraft:
    fields = _split_fields(args)
    title = fields[0] if fields else ""
    description = fields[1] if len(fields) > 1 and fields[1] else None
    status = fields[2] if len(fields) > 2 and fields[2] else None
    return TaskDraft(title=title, description=description, status=status)


def render_board(state: AppState) -> str:
    session = state.session
    if session.loading:
        return "Carregando tarefas..."
    if session.multi_board and session.current_board is None:
        return "Nenhum projeto encontrado. Crie um com /newboard <nome>."

    header = f"Projeto: {session.current_board}" if session.current_board else "Quadro"
    lines = [header]
    for status, tasks in session.tasks_by_status().items():
        lines.append(f"== {status} ({len(tasks)})")
        if not tasks:
            lines.append("   (vazio)")
        for i, t in enumerate(tasks):
            marker = " *" if t.description else ""
            lines.append(f"   {i}. [{t.id}] {t.title}{marker}")
    if session.saving:
        lines.append("Salvando...")
    return "\n".join(lines)


def cmd_help(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    s = state.session
    return (
        "Status:\n"
        f"  Board: {s.current_board or '-'}\n"
        f"  Tasks: {len(s.tasks)}\n"
        f"  Loading: {'yes' if s.loading else 'no'}\n"
        f"  Saving: {'yes' if s.saving else 'no'} ({s.sync.state.value})\n"
        f"  Error: {s.error or '-'}"
    )


def cmd_show(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return render_board(state)


def cmd_info(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/info <id> -> the task description (hover text in a graphical board)."""
    if not args:
        return "Usage: /info <id>"
    task = state.session.get_task(args[0])
    if task is None:
        return f"Task not found: {args[0]}"
    body = task.description or "(sem descrição)"
    return f"{task.title} [{task.status}]\nDescrição:\n{body}"


def cmd_add(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/add <title> [| description [| status]]"""
    task = state.session.create_task(_draft_from_args(args))
    return f"Created {task.id} in {task.status}."


def cmd_edit(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/edit <id> <title> [| description [| status]]"""
    if len(args) < 2:
        return "Usage: /edit <id> <title> [| description [| status]]"
    task = state.session.edit_task(args[0], _draft_from_args(args[1:]))
    return f"Updated {task.id}."


def cmd_move(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/move <id> <status>  (status may contain spaces)"""
    if len(args) < 2:
        return "Usage: /move <id> <status>"
    task = state.session.move_task(args[0], " ".join(args[1:]))
    return f"{task.id} -> {task.status}."


def cmd_drop(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/drop <id> <status...> <index>: simulate a drag-and-drop result."""
    if len(args) < 3:
        return "Usage: /drop <id> <status> <index>"
    session = state.session
    task = session.get_task(args[0])
    if task is None:
        return f"Task not found: {args[0]}"
    try:
        to_index = int(args[-1])
    except ValueError:
        return "Index must be an integer."

    column = session.tasks_by_status().get(task.status, [])
    from_index = next((i for i, t in enumerate(column) if t.id == task.id), 0)
    event = DragEvent(
        task_id=task.id,
        from_status=task.status,
        to_status=" ".join(args[1:-1]),
        from_index=from_index,
        to_index=to_index,
    )
    if event.to_status not in session.config:
        return f"Unknown column: {event.to_status}"
    changed = session.handle_drop(event)
    return "Moved." if changed else "Nothing to do (same column)."


def cmd_rm(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/rm <id> --yes"""
    if not args:
        return "Usage: /rm <id> --yes"
    task_id = args[0]
    task = state.session.get_task(task_id)
    if task is None:
        return f"Task not found: {task_id}"

    confirmed = "--yes" in args[1:]
    removed = state.session.delete_task(task_id, confirm=lambda _t: confirmed)
    if not removed:
        return f'Tem certeza que deseja excluir a tarefa "{task.title}"? Use /rm {task_id} --yes'
    return f"Deleted {task_id}."


def cmd_boards(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    session = state.session
    if not session.multi_board:
        return "Single-board mode."
    if not session.boards:
        return "Nenhum projeto encontrado."
    lines = ["Projetos:"]
    for name in session.boards:
        mark = "*" if name == session.current_board else " "
        lines.append(f" {mark} {name}")
    return "\n".join(lines)


async def cmd_board(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/board <name>: switch board. A write not yet sent for the old board is dropped."""
    if not args:
        return "Usage: /board <name>"
    await state.session.select_board(" ".join(args))
    if state.session.error:
        return state.session.error
    return render_board(state)


async def cmd_newboard(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    name = " ".join(args)
    if emit:
        emit(f"Criando projeto {name.strip()!r}...")
    ok = await state.session.create_board(name)
    if not ok:
        return state.session.error
    return render_board(state)


async def cmd_reload(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    await state.session.reload()
    if state.session.error:
        return state.session.error
    return render_board(state)


def cmd_clear(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    state.session.clear_error()
    return "Error cleared."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show board/sync status.")
registry.register("show", cmd_show, help_text="Render the board grouped by status.", aliases=["ls"])
registry.register("info", cmd_info, help_text="Show a task's description: /info <id>.")
registry.register("add", cmd_add, help_text="New task: /add <title> [| description [| status]].")
registry.register("edit", cmd_edit, help_text="Edit task: /edit <id> <title> [| description [| status]].")
registry.register("move", cmd_move, help_text="Change status: /move <id> <status>.")
registry.register("drop", cmd_drop, help_text="Drag result: /drop <id> <status> <index>.")
registry.register("rm", cmd_rm, help_text="Delete task: /rm <id> --yes.", aliases=["del"])
registry.register("boards", cmd_boards, help_text="List boards.")
registry.register("board", cmd_board, help_text="Switch board: /board <name>.")
registry.register("newboard", cmd_newboard, help_text="Create board: /newboard <name>.")
registry.register("reload", cmd_reload, help_text="Reload tasks of the current board.")
registry.register("clear", cmd_clear, help_text="Dismiss the last error message.")
