# tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class TaskState(StrEnum):
    """
    Task lifecycle state.

    Transitions:
    - OPEN   -> CLOSED  (close)
    - CLOSED -> OPEN    (reopen)
    - CLOSED -> deleted (delete)
    """

    OPEN = "open"
    CLOSED = "closed"


@dataclass(slots=True)
class Task:
    name: str
    owner: str
    state: TaskState
    created_at: float
    updated_at: float
