# src/taskline/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local log directory exists,
- wires a fresh TaskStore and its CommandInterpreter into AppState.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import get_settings
from ..core.state import AppState
from ..protocol.interpreter import CommandInterpreter
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    log_dir = getattr(settings, "log_dir", None)
    if log_dir:
        Path(log_dir).mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Every call builds a new, empty store; nothing is shared between states.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    task_store = TaskStore()
    return AppState(
        settings=settings,
        task_store=task_store,
        interpreter=CommandInterpreter(task_store),
    )
