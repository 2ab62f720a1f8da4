# src/taskline/protocol/parser.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Verb(StrEnum):
    CREATE_TASK = "CREATE_TASK"
    CLOSE_TASK = "CLOSE_TASK"
    REOPEN_TASK = "REOPEN_TASK"
    DELETE_TASK = "DELETE_TASK"
    LIST_TASK = "LIST_TASK"


class WrongFormatError(ValueError):
    """Raised when a line does not match `<user> <VERB> <argument>`."""

    def __init__(self, line: str, reason: str):
        self.line = line
        self.reason = reason
        super().__init__(f"{reason}: {line!r}")


@dataclass(slots=True, frozen=True)
class Command:
    """
    One parsed request line.

    `argument` is a task name for the mutating verbs
    and the target username for LIST_TASK.
    """

    user: str
    verb: Verb
    argument: str


def parse_command(line: str) -> Command:
    """
    Parse "<user> <VERB> <argument>".

    Exactly three whitespace-separated tokens; the verb must match exactly (case-sensitive).
    """
    parts = line.split()
    if len(parts) != 3:
        raise WrongFormatError(line, f"expected 3 tokens, got {len(parts)}")

    user, raw_verb, argument = parts
    try:
        verb = Verb(raw_verb)
    except ValueError:
        raise WrongFormatError(line, f"unknown verb {raw_verb!r}") from None

    return Command(user=user, verb=verb, argument=argument)
