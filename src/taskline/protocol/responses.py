# src/taskline/protocol/responses.py

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum


class Response(StrEnum):
    CREATED = "CREATED"
    CLOSED = "CLOSED"
    REOPENED = "REOPENED"
    DELETED = "DELETED"
    ERROR = "ERROR"
    ACCESS_DENIED = "ACCESS_DENIED"
    WRONG_FORMAT = "WRONG_FORMAT"


LIST_PREFIX = "TASKS"


def render_task_list(names: Iterable[str]) -> str:
    """TASKS [a, b, c]; an empty list renders as TASKS []."""
    return f"{LIST_PREFIX} [{', '.join(names)}]"
