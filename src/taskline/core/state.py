# src/taskline/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..protocol.interpreter import CommandInterpreter
from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    # Settings object (real Settings or a test SimpleNamespace).
    settings: object

    task_store: TaskStore
    interpreter: CommandInterpreter
