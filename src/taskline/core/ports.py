# src/taskline/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The interpreter depends on a Protocol instead of the concrete store.
This keeps the storage swappable and makes testing easier.
"""

import threading
from typing import Any, Protocol


class TaskRepo(Protocol):
    @property
    def lock(self) -> threading.RLock: ...

    # Mutations (checks: existence -> ownership -> state)
    def create_task(self, owner: str, name: str) -> Any: ...
    def close_task(self, requester: str, owner: str, name: str) -> Any: ...
    def reopen_task(self, requester: str, owner: str, name: str) -> Any: ...
    def delete_task(self, requester: str, owner: str, name: str) -> None: ...

    # Queries
    def list_tasks(self, owner: str) -> list[str]: ...
    def find_owners(self, name: str) -> list[str]: ...
    def list_users(self) -> list[str]: ...
    def count_tasks(self) -> int: ...


class CommandHandler(Protocol):
    """Anything that turns one protocol line into one response line."""

    def handle(self, line: str) -> str: ...
