"""Filesystem validation for directory and session file options."""

from __future__ import annotations

import logging as py_logging
import os
from collections.abc import Callable, Sequence

logger = py_logging.getLogger(__name__)

Notifier = Callable[[str], None]


def expand_tilde(path: str) -> str:
    return os.path.expanduser(path)


def validate_path(path: str, *, notify: Notifier = print) -> str:
    if not path:
        return path
    expanded = expand_tilde(path)
    if not os.path.isdir(expanded):
        message = f"Ignoring as '{expanded}' is not a directory"
        logger.warning(message)
        notify(message)
        return ""
    return expanded


def validate_session_files(paths: Sequence[str], *, notify: Notifier = print) -> list[str]:
    original = list(paths)
    kept: list[str] = []
    for entry in original:
        expanded = expand_tilde(entry)
        if os.path.isfile(expanded):
            kept.append(expanded)
            continue
        message = f"Ignoring parameter session as '{original}' does not exist"
        logger.warning("%s (missing=%s)", message, expanded)
        notify(message)
    return kept
