# src/taskline/cli/commands.py

from __future__ import annotations

from collections.abc import Callable

from ..core.state import AppState

CommandHandler = Callable[[AppState, list[str]], str]


class CommandRegistry:
    """Operator slash-command registry used by the console connector (/help, /status, ...)."""

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

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a slash command.
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

        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Leave the console.")
        lines.append("Anything else is sent as a protocol line: <user> <VERB> <argument>")
        return "\n".join(lines)


registry = CommandRegistry()


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    store = state.task_store
    with store.lock:
        users = store.list_users()
        total = store.count_tasks()
    return f"Status:\n  Users with tasks: {len(users)}\n  Tasks: {total}"


def cmd_users(state: AppState, args: list[str]) -> str:
    """
    /users        -> every user with at least one task
    /users <name> -> that user's tasks with their states
    """
    store = state.task_store
    if not args:
        users = store.list_users()
        if not users:
            return "No users yet."
        return "Users: " + ", ".join(users)

    owner = args[0]
    with store.lock:
        tasks = [store.get_task(owner, name) for name in store.list_tasks(owner)]
    if not tasks:
        return f"No tasks for user {owner}."
    lines = [f"Tasks of {owner}:"]
    for i, task in enumerate(tasks, start=1):
        if task is not None:
            lines.append(f"{i}. {task.name} ({task.state.name})")
    return "\n".join(lines)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show user and task counts.")
registry.register("users", cmd_users, help_text="List users, or one user's tasks: /users [name].")
