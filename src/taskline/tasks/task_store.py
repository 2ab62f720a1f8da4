# tasks/task_store.py

from __future__ import annotations

import logging
import threading
import time
from dataclasses import replace

from .exceptions import (
    InvalidTaskStateError,
    TaskAccessDeniedError,
    TaskAlreadyExistsError,
    TaskNotFoundError,
)
from .task_models import Task, TaskState

logger = logging.getLogger(__name__)


class TaskStore:
    """
    In-memory task store.

    Layout:
    - owner -> {task name -> Task}, both levels insertion-ordered
    - a user entry appears on first create and disappears with its last task

    Checks run in a fixed order: existence, ownership, state.
    Nothing is mutated until every check has passed.

    Thread-safety:
    - every public method holds one re-entrant lock for its whole duration
    - callers that need several calls to be atomic can hold `lock` themselves
    """

    def __init__(self) -> None:
        self._tasks: dict[str, dict[str, Task]] = {}
        self._lock = threading.RLock()
        logger.info("TaskStore ready (in-memory).")

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    # ---- low-level helpers ----

    def _require(self, owner: str, name: str) -> Task:
        task = self._tasks.get(owner, {}).get(name)
        if task is None:
            raise TaskNotFoundError(owner, name)
        return task

    def _require_owned(self, requester: str, owner: str, name: str) -> Task:
        task = self._require(owner, name)
        if requester != owner:
            raise TaskAccessDeniedError(requester, owner, name)
        return task

    # ---- public API ----

    def create_task(self, owner: str, name: str) -> Task:
        with self._lock:
            user_tasks = self._tasks.get(owner)
            if user_tasks is not None and name in user_tasks:
                raise TaskAlreadyExistsError(owner, name)

            now = time.time()
            task = Task(name=name, owner=owner, state=TaskState.OPEN, created_at=now, updated_at=now)
            self._tasks.setdefault(owner, {})[name] = task
            logger.debug("Task created owner=%s name=%s", owner, name)
            return replace(task)

    def list_tasks(self, owner: str) -> list[str]:
        """Task names of `owner` in creation order; unknown owner -> []."""
        with self._lock:
            return list(self._tasks.get(owner, {}))

    def close_task(self, requester: str, owner: str, name: str) -> Task:
        """
        OPEN -> CLOSED.

        Closing a task that is already CLOSED succeeds and leaves it CLOSED.
        """
        with self._lock:
            task = self._require_owned(requester, owner, name)
            if task.state is TaskState.CLOSED:
                logger.debug("Task already closed owner=%s name=%s", owner, name)
                return replace(task)
            task.state = TaskState.CLOSED
            task.updated_at = time.time()
            logger.debug("Task closed owner=%s name=%s", owner, name)
            return replace(task)

    def reopen_task(self, requester: str, owner: str, name: str) -> Task:
        with self._lock:
            task = self._require_owned(requester, owner, name)
            if task.state is not TaskState.CLOSED:
                raise InvalidTaskStateError(owner, name, task.state.name, "reopen")
            task.state = TaskState.OPEN
            task.updated_at = time.time()
            logger.debug("Task reopened owner=%s name=%s", owner, name)
            return replace(task)

    def delete_task(self, requester: str, owner: str, name: str) -> None:
        with self._lock:
            task = self._require_owned(requester, owner, name)
            if task.state is not TaskState.CLOSED:
                raise InvalidTaskStateError(owner, name, task.state.name, "delete")

            user_tasks = self._tasks[owner]
            del user_tasks[name]
            if not user_tasks:
                del self._tasks[owner]
            logger.debug("Task deleted owner=%s name=%s", owner, name)

    def get_task(self, owner: str, name: str) -> Task | None:
        """Snapshot of a task; mutating it does not touch the store."""
        with self._lock:
            task = self._tasks.get(owner, {}).get(name)
            return replace(task) if task is not None else None

    def find_owners(self, name: str) -> list[str]:
        """Users that currently own a task called `name`, in user creation order."""
        with self._lock:
            return [owner for owner, user_tasks in self._tasks.items() if name in user_tasks]

    def list_users(self) -> list[str]:
        with self._lock:
            return list(self._tasks)

    def count_tasks(self) -> int:
        with self._lock:
            return sum(len(user_tasks) for user_tasks in self._tasks.values())
