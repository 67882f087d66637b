# src/shared_tasklist/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from ..core.state import AppState
from ..errors import TaskListError

CommandHandler = Callable[[AppState, list[str]], Awaitable[str]]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Slash-command registry used by the console connector (/help, /list, /claim, ...)."""

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

    async def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        Task list errors come back as "Error: <message>".
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
            return await handler(state, args)
        except TaskListError as e:
            logger.info("Command /%s failed: %s", name, e)
            return f"Error: {e}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def format_task(task: dict[str, Any]) -> str:
    owner = task.get("owner") or "-"
    line = f"#{task['id']} [{task['status']}] {task['subject']} (owner: {owner})"
    deps = task.get("blocked_by") or []
    if deps:
        line += f" blocked_by: {', '.join(deps)}"
    return line


async def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


async def cmd_status(state: AppState, args: list[str]) -> str:
    return (
        "Status:\n"
        f"  List: {state.list_id}\n"
        f"  Agent: {state.agent_name}\n"
        f"  Data dir: {state.settings.data_dir}"
    )


async def cmd_use(state: AppState, args: list[str]) -> str:
    if not args:
        return f"Current list: {state.list_id}. Usage: /use <list_id>"
    state.list_id = args[0]
    return f"Switched to list {state.list_id}."


async def cmd_list(state: AppState, args: list[str]) -> str:
    params: dict[str, Any] = {"action": "list", "list_id": state.list_id}
    if args:
        params["status"] = args[0].lower()
    result = await state.tool.execute(params)
    if not result["count"]:
        return f"No tasks in list {state.list_id}."
    lines = [f"Tasks in {state.list_id} ({result['count']}):"]
    lines.extend(format_task(t) for t in result["tasks"])
    return "\n".join(lines)


async def cmd_get(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /get <task_id>"
    task = await state.tool.execute({"action": "get", "list_id": state.list_id, "task_id": args[0]})
    text = format_task(task)
    if task["description"]:
        text += f"\n  {task['description']}"
    return text


async def cmd_create(state: AppState, args: list[str]) -> str:
    """
    /create Fix bug | It crashes on start
    Text before "|" is the subject, the rest is the description.
    """
    subject, _, description = " ".join(args).partition("|")
    subject = subject.strip()
    if not subject:
        return "Usage: /create <subject> [| description]"
    task = await state.tool.execute(
        {
            "action": "create",
            "list_id": state.list_id,
            "subject": subject,
            "description": description.strip(),
        }
    )
    return f"Created {format_task(task)}"


async def cmd_claim(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /claim <task_id> [owner]"
    owner = args[1] if len(args) > 1 else state.agent_name
    task = await state.tool.execute(
        {"action": "claim", "list_id": state.list_id, "task_id": args[0], "owner": owner}
    )
    return f"Claimed {format_task(task)}"


async def cmd_done(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /done <task_id>"
    task = await state.tool.execute(
        {"action": "update", "list_id": state.list_id, "task_id": args[0], "status": "completed"}
    )
    return f"Completed {format_task(task)}"


async def cmd_block(state: AppState, args: list[str]) -> str:
    """
    /block 3 1 2  -> task 3 waits for tasks 1 and 2
    /block 3      -> clear task 3 dependencies
    """
    if not args:
        return "Usage: /block <task_id> [dep_id ...]"
    task = await state.tool.execute(
        {
            "action": "update",
            "list_id": state.list_id,
            "task_id": args[0],
            "blocked_by": [d.strip(",") for d in args[1:] if d.strip(",")],
        }
    )
    return f"Updated {format_task(task)}"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show current list, agent and data dir.")
registry.register("use", cmd_use, help_text="Switch task list: /use <list_id>.")
registry.register("list", cmd_list, help_text="List tasks: /list [pending|in_progress|completed].", aliases=["ls"])
registry.register("get", cmd_get, help_text="Show one task: /get <task_id>.")
registry.register("create", cmd_create, help_text="Create a task: /create <subject> [| description].", aliases=["new"])
registry.register("claim", cmd_claim, help_text="Claim a pending task: /claim <task_id> [owner].")
registry.register("done", cmd_done, help_text="Mark a task completed: /done <task_id>.")
registry.register("block", cmd_block, help_text="Set dependencies: /block <task_id> [dep_id ...].")
