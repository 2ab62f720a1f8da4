# src/taskline/protocol/interpreter.py

"""
Command interpreter: one protocol line in, one response line out.

parse -> resolve owner -> task store -> render

Store failures never escape `handle`; they are mapped to ERROR / ACCESS_DENIED.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.ports import TaskRepo
from ..tasks.exceptions import InvalidTaskStateError, TaskAccessDeniedError, TaskStoreError
from .parser import Command, Verb, WrongFormatError, parse_command
from .responses import Response, render_task_list

VerbHandler = Callable[[TaskRepo, Command], str]

logger = logging.getLogger(__name__)


def _resolve_owner(store: TaskRepo, user: str, name: str) -> str:
    """
    Pick whose task a CLOSE/REOPEN/DELETE line refers to.

    The acting user's own task wins. Otherwise a same-named task of another user
    is targeted so the store can reject the caller as a non-owner.
    Must be called with the store lock held.
    """
    if name in store.list_tasks(user):
        return user
    owners = store.find_owners(name)
    return owners[0] if owners else user


def cmd_create(store: TaskRepo, command: Command) -> str:
    store.create_task(command.user, command.argument)
    return Response.CREATED


def cmd_close(store: TaskRepo, command: Command) -> str:
    owner = _resolve_owner(store, command.user, command.argument)
    store.close_task(command.user, owner, command.argument)
    return Response.CLOSED


def cmd_reopen(store: TaskRepo, command: Command) -> str:
    owner = _resolve_owner(store, command.user, command.argument)
    store.reopen_task(command.user, owner, command.argument)
    return Response.REOPENED


def cmd_delete(store: TaskRepo, command: Command) -> str:
    owner = _resolve_owner(store, command.user, command.argument)
    store.delete_task(command.user, owner, command.argument)
    return Response.DELETED


def cmd_list(store: TaskRepo, command: Command) -> str:
    # Any user may list anyone's tasks.
    return render_task_list(store.list_tasks(command.argument))


DEFAULT_HANDLERS: dict[Verb, VerbHandler] = {
    Verb.CREATE_TASK: cmd_create,
    Verb.CLOSE_TASK: cmd_close,
    Verb.REOPEN_TASK: cmd_reopen,
    Verb.DELETE_TASK: cmd_delete,
    Verb.LIST_TASK: cmd_list,
}


class CommandInterpreter:
    """Verb-keyed dispatch table bound to one task store."""

    def __init__(
        self,
        task_store: TaskRepo,
        handlers: dict[Verb, VerbHandler] | None = None,
    ) -> None:
        self._store = task_store
        self._handlers: dict[Verb, VerbHandler] = dict(DEFAULT_HANDLERS)
        if handlers:
            self._handlers.update(handlers)

        missing = [v.value for v in Verb if v not in self._handlers]
        if missing:
            raise ValueError(f"No handler registered for verbs: {', '.join(missing)}")

    @property
    def task_store(self) -> TaskRepo:
        return self._store

    def handle(self, line: str) -> str:
        try:
            command = parse_command(line)
        except WrongFormatError as e:
            logger.info("Rejected line %r (%s)", e.line, e.reason)
            return Response.WRONG_FORMAT.value

        handler = self._handlers[command.verb]
        try:
            # Owner resolution and the store call must see the same state.
            with self._store.lock:
                response = handler(self._store, command)
        except TaskAccessDeniedError as e:
            logger.info("%s denied: requester=%s owner=%s task=%s", command.verb, e.requester, e.owner, e.name)
            return Response.ACCESS_DENIED.value
        except InvalidTaskStateError as e:
            logger.info(
                "%s rejected: cannot %s task %s of %s in state %s",
                command.verb,
                e.action,
                e.name,
                e.owner,
                e.state,
            )
            return Response.ERROR.value
        except TaskStoreError as e:
            logger.info("%s failed: %s", command.verb, e)
            return Response.ERROR.value
        except Exception:
            logger.exception("Handler for %s crashed (line=%r).", command.verb, line)
            return Response.ERROR.value

        logger.debug("%s user=%s arg=%s -> %s", command.verb, command.user, command.argument, response)
        return str(response)
