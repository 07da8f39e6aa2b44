"""Deterministic error model and exit code contract."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit codes surfaced to the calling shell.

    1 and 2 come from conflicting parameters; usage errors reported by the
    argument parser are remapped to ``INVALID_ARGS`` so they stay distinct
    from ``ACTION_NOT_REMOTE``.
    """

    SUCCESS = 0
    SESSION_CONFLICT = 1
    ACTION_NOT_REMOTE = 2
    CONFIG_ERROR = 3
    RUNTIME_ERROR = 4
    INVALID_ARGS = 64


@dataclass
class TerminixError(Exception):
    message: str
    code: ExitCode = ExitCode.RUNTIME_ERROR
    hint: str = ""

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message} Hint: {self.hint}"
        return self.message


def user_facing_error(message: str, *, hint: str = "") -> str:
    if hint:
        return f"Error: {message}. Next step: {hint}"
    return f"Error: {message}."
