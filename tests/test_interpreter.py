# tests/test_interpreter.py

from __future__ import annotations

import logging

import pytest

from taskline.protocol.interpreter import CommandInterpreter
from taskline.protocol.parser import Verb
from taskline.tasks.task_models import TaskState
from taskline.tasks.task_store import TaskStore


def create_task(interp: CommandInterpreter, user: str, task: str) -> str:
    return interp.handle(f"{user} CREATE_TASK {task}")


def close_task(interp: CommandInterpreter, user: str, task: str) -> str:
    return interp.handle(f"{user} CLOSE_TASK {task}")


def reopen_task(interp: CommandInterpreter, user: str, task: str) -> str:
    return interp.handle(f"{user} REOPEN_TASK {task}")


def delete_task(interp: CommandInterpreter, user: str, task: str) -> str:
    return interp.handle(f"{user} DELETE_TASK {task}")


def assert_list_task(
    interp: CommandInterpreter, user: str, expected: list[str], target: str | None = None
) -> None:
    response = interp.handle(f"{user} LIST_TASK {target or user}")
    assert response == f"TASKS [{', '.join(expected)}]"


@pytest.mark.parametrize(
    "line",
    [
        "wrong_command",
        "another_one",
        "AnOTher Wrong COmmAND",
        "LIST_TASK",
        "some_user CREATE_TASK",
        "DELETE_TASK",
    ],
)
def test_unknown_command_is_wrong_format(interpreter: CommandInterpreter, line: str) -> None:
    assert interpreter.handle(line) == "WRONG_FORMAT"


def test_wrong_format_does_not_touch_the_store(interpreter: CommandInterpreter, store: TaskStore) -> None:
    assert interpreter.handle("alice create_task t1") == "WRONG_FORMAT"
    assert store.count_tasks() == 0


@pytest.mark.parametrize(
    ("user", "tasks"),
    [
        ("USER1", ["MY_TASK1"]),
        ("USER2", ["another_task1", "MY_TASK1"]),
        ("user3", ["take_a_shower", "breakfast", "go_to_work"]),
    ],
)
def test_create_task_successfully(interpreter: CommandInterpreter, user: str, tasks: list[str]) -> None:
    for task in tasks:
        assert create_task(interpreter, user, task) == "CREATED"
    assert_list_task(interpreter, user, tasks)


@pytest.mark.parametrize(
    ("user", "task"),
    [("User1", "task1"), ("user2", "task2"), ("another_user", "another_task")],
)
def test_close_and_delete_task_successfully(interpreter: CommandInterpreter, user: str, task: str) -> None:
    assert create_task(interpreter, user, task) == "CREATED"
    assert_list_task(interpreter, user, [task])

    assert close_task(interpreter, user, task) == "CLOSED"
    assert_list_task(interpreter, user, [task])

    assert delete_task(interpreter, user, task) == "DELETED"
    assert_list_task(interpreter, user, [])

    assert create_task(interpreter, user, task) == "CREATED"
    assert_list_task(interpreter, user, [task])


def test_recreated_task_is_open(interpreter: CommandInterpreter, store: TaskStore) -> None:
    create_task(interpreter, "u", "t")
    close_task(interpreter, "u", "t")
    delete_task(interpreter, "u", "t")
    create_task(interpreter, "u", "t")

    assert store.get_task("u", "t").state is TaskState.OPEN


@pytest.mark.parametrize(("user", "task"), [("userA", "taskA"), ("userB", "taskB")])
def test_reopen_existing_task(interpreter: CommandInterpreter, user: str, task: str) -> None:
    assert create_task(interpreter, user, task) == "CREATED"
    assert close_task(interpreter, user, task) == "CLOSED"
    assert_list_task(interpreter, user, [task])

    assert reopen_task(interpreter, user, task) == "REOPENED"
    assert_list_task(interpreter, user, [task])

    assert close_task(interpreter, user, task) == "CLOSED"
    assert_list_task(interpreter, user, [task])


def test_return_only_users_tasks(interpreter: CommandInterpreter) -> None:
    for task in ("task1", "task2"):
        assert create_task(interpreter, "user1", task) == "CREATED"
    for task in ("task56", "another_one", "a_perfect_circle"):
        assert create_task(interpreter, "user2", task) == "CREATED"

    assert_list_task(interpreter, "user1", ["task1", "task2"])
    assert_list_task(interpreter, "user2", ["task56", "another_one", "a_perfect_circle"])


@pytest.mark.parametrize(("user", "task"), [("someUser", "anotherTask"), ("otherUser", "otherTask")])
def test_reopen_fails_if_not_closed(interpreter: CommandInterpreter, user: str, task: str) -> None:
    assert create_task(interpreter, user, task) == "CREATED"
    assert reopen_task(interpreter, user, task) == "ERROR"
    assert_list_task(interpreter, user, [task])


@pytest.mark.parametrize(("user", "task"), [("user1", "my_super_task"), ("user2", "my_another_super_task")])
def test_delete_fails_if_not_closed(interpreter: CommandInterpreter, user: str, task: str) -> None:
    assert create_task(interpreter, user, task) == "CREATED"
    assert delete_task(interpreter, user, task) == "ERROR"
    assert_list_task(interpreter, user, [task])


@pytest.mark.parametrize(("user", "task"), [("john", "answer_the_phone"), ("jenny", "complete_the_business_report")])
def test_create_fails_if_task_exists(interpreter: CommandInterpreter, user: str, task: str) -> None:
    assert create_task(interpreter, user, task) == "CREATED"
    assert create_task(interpreter, user, task) == "ERROR"
    assert_list_task(interpreter, user, [task])


def test_create_fails_if_closed_task_exists(interpreter: CommandInterpreter, store: TaskStore) -> None:
    create_task(interpreter, "u", "t")
    close_task(interpreter, "u", "t")

    assert create_task(interpreter, "u", "t") == "ERROR"
    assert store.get_task("u", "t").state is TaskState.CLOSED


def test_close_already_closed_task_is_idempotent(interpreter: CommandInterpreter) -> None:
    create_task(interpreter, "u", "t")
    assert close_task(interpreter, "u", "t") == "CLOSED"
    assert close_task(interpreter, "u", "t") == "CLOSED"
    assert_list_task(interpreter, "u", ["t"])


@pytest.mark.parametrize("op", [close_task, reopen_task, delete_task])
def test_missing_task_is_error(interpreter: CommandInterpreter, op) -> None:
    assert op(interpreter, "nobody", "ghost") == "ERROR"


@pytest.mark.parametrize(
    ("user", "task"),
    [("billy_talent", "rusted_from_the_rain"), ("kino", "mama_i_know_we_are_all_deadly_sick")],
)
def test_no_rights_to_close_task(
    interpreter: CommandInterpreter, store: TaskStore, user: str, task: str
) -> None:
    assert create_task(interpreter, user, task) == "CREATED"

    assert close_task(interpreter, user + "_IMPOSTER", task) == "ACCESS_DENIED"
    assert_list_task(interpreter, user, [task])
    assert store.get_task(user, task).state is TaskState.OPEN


@pytest.mark.parametrize(("user", "task"), [("queen", "one_vision"), ("jackals", "legacy")])
def test_no_rights_to_delete_task(
    interpreter: CommandInterpreter, store: TaskStore, user: str, task: str
) -> None:
    assert create_task(interpreter, user, task) == "CREATED"
    assert close_task(interpreter, user, task) == "CLOSED"

    assert delete_task(interpreter, user + "_IMPOSTER", task) == "ACCESS_DENIED"
    assert_list_task(interpreter, user, [task])
    assert store.get_task(user, task).state is TaskState.CLOSED


@pytest.mark.parametrize(("user", "task", "other"), [("xxx", "taskxxx", "yyy"), ("123", "task123", "321")])
def test_no_rights_to_reopen_task(
    interpreter: CommandInterpreter, store: TaskStore, user: str, task: str, other: str
) -> None:
    assert create_task(interpreter, user, task) == "CREATED"
    assert close_task(interpreter, user, task) == "CLOSED"

    assert reopen_task(interpreter, other, task) == "ACCESS_DENIED"
    assert_list_task(interpreter, user, [task])
    assert store.get_task(user, task).state is TaskState.CLOSED


def test_imposter_on_open_task_gets_access_denied_not_error(interpreter: CommandInterpreter) -> None:
    create_task(interpreter, "owner", "t")

    assert delete_task(interpreter, "imposter", "t") == "ACCESS_DENIED"
    assert reopen_task(interpreter, "imposter", "t") == "ACCESS_DENIED"


def test_own_task_wins_over_same_named_task_of_another_user(interpreter: CommandInterpreter) -> None:
    create_task(interpreter, "alice", "shared")
    create_task(interpreter, "bob", "shared")

    assert close_task(interpreter, "bob", "shared") == "CLOSED"
    assert delete_task(interpreter, "bob", "shared") == "DELETED"
    assert_list_task(interpreter, "alice", ["shared"])
    assert_list_task(interpreter, "bob", [])


@pytest.mark.parametrize(
    ("user", "task1", "task2", "task3", "other"),
    [
        ("u1", "task_u1", "task_u2", "task_u3", "other_u"),
        ("000", "t000", "t002", "t003", "007"),
        ("xyz", "abc", "def", "ghy", "xyzxyz"),
    ],
)
def test_list_other_users_tasks(
    interpreter: CommandInterpreter, user: str, task1: str, task2: str, task3: str, other: str
) -> None:
    assert create_task(interpreter, user, task1) == "CREATED"
    assert create_task(interpreter, user, task2) == "CREATED"
    assert create_task(interpreter, user, task3) == "CREATED"
    assert close_task(interpreter, user, task2) == "CLOSED"

    assert_list_task(interpreter, user, [task1, task2, task3])
    assert_list_task(interpreter, other, [task1, task2, task3], target=user)


def test_example_session(interpreter: CommandInterpreter) -> None:
    assert create_task(interpreter, "user1", "t1") == "CREATED"
    assert interpreter.handle("user1 LIST_TASK user1") == "TASKS [t1]"
    assert close_task(interpreter, "user1", "t1") == "CLOSED"
    assert delete_task(interpreter, "user1", "t1") == "DELETED"
    assert interpreter.handle("user1 LIST_TASK user1") == "TASKS []"


def test_handler_crash_is_reported_as_error(store: TaskStore) -> None:
    def boom(_store, _command):
        raise RuntimeError("boom")

    interp = CommandInterpreter(store, handlers={Verb.LIST_TASK: boom})
    assert interp.handle("u LIST_TASK u") == "ERROR"
    # The interpreter keeps serving after a crash.
    assert interp.handle("u CREATE_TASK t") == "CREATED"


def test_interpreters_do_not_share_state() -> None:
    first = CommandInterpreter(TaskStore())
    second = CommandInterpreter(TaskStore())

    assert create_task(first, "u", "t") == "CREATED"
    assert_list_task(second, "u", [])


def test_rejections_are_logged_with_their_details(interpreter: CommandInterpreter, caplog) -> None:
    caplog.set_level(logging.INFO, logger="taskline.protocol.interpreter")
    create_task(interpreter, "owner", "t")

    interpreter.handle("owner create_task t")
    assert delete_task(interpreter, "imposter", "t") == "ACCESS_DENIED"
    assert delete_task(interpreter, "owner", "t") == "ERROR"

    assert "'owner create_task t'" in caplog.text
    assert "requester=imposter owner=owner task=t" in caplog.text
    assert "cannot delete task t of owner in state OPEN" in caplog.text
