# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskline.core.state import AppState
from taskline.protocol.interpreter import CommandInterpreter
from taskline.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the connectors.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any local .env.
    """
    return SimpleNamespace(
        app_name="taskline-test",
        log_level="DEBUG",
        log_dir=tmp_path / "logs",
        server_enabled=True,
        console_enabled=False,
        # Port 0: let the OS pick a free port per test.
        host="127.0.0.1",
        port=0,
        max_line_bytes=64,
        idle_timeout=0.0,
    )


@pytest.fixture()
def store() -> TaskStore:
    return TaskStore()


@pytest.fixture()
def interpreter(store: TaskStore) -> CommandInterpreter:
    return CommandInterpreter(store)


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore, interpreter: CommandInterpreter) -> AppState:
    """AppState wired with a fresh in-memory store per test."""
    return AppState(settings=settings, task_store=store, interpreter=interpreter)
