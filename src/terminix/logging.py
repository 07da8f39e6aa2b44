"""Application logging helpers."""

from __future__ import annotations

import logging as py_logging
import sys
from pathlib import Path
from typing import TextIO

LOGGER_NAME = "terminix"
VALID_LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARN", "ERROR")
LOG_LEVELS = {
    "DEBUG": py_logging.DEBUG,
    "INFO": py_logging.INFO,
    "WARN": py_logging.WARNING,
    "ERROR": py_logging.ERROR,
}
DEFAULT_LOG_PATH = Path("~/.config/terminix/logs/terminix.log")
_FALLBACK_LOG_PATH = Path(".terminix/logs/terminix.log")
_FORMAT = "%(asctime)s %(levelname)s %(name)s:%(lineno)d %(message)s"


def normalize_level(level: str) -> str:
    normalized = level.strip().upper()
    if normalized == "WARNING":
        normalized = "WARN"
    return normalized


def is_valid_level(level: str) -> bool:
    return normalize_level(level) in VALID_LOG_LEVELS


def resolve_level(level: str) -> int:
    return LOG_LEVELS.get(normalize_level(level), py_logging.INFO)


def default_log_path() -> Path:
    try:
        resolved = DEFAULT_LOG_PATH.expanduser()
    except RuntimeError:
        resolved = (Path.cwd() / _FALLBACK_LOG_PATH).resolve()
    else:
        if not resolved.is_absolute():
            resolved = resolved.resolve()
    return resolved


def _resolve_log_file(log_file: str | Path) -> Path:
    try:
        log_path = Path(log_file).expanduser()
    except RuntimeError:
        log_path = Path(log_file)
    if not log_path.is_absolute():
        log_path = log_path.resolve()
    return log_path


def configure_logging(
    level: str = "INFO",
    stream: TextIO | None = None,
    *,
    log_file: str | Path | None = None,
) -> py_logging.Logger:
    """Install the console handler and, when possible, a trace file handler.

    The file handler records DEBUG output so parameter traces land in the log
    file even when the console only shows warnings.
    """
    console_level = resolve_level(level)

    logger = py_logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    formatter = py_logging.Formatter(_FORMAT)

    handler = py_logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(console_level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(console_level)

    if log_file:
        log_path = _resolve_log_file(log_file)
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = py_logging.FileHandler(log_path, encoding="utf-8")
        except OSError:
            pass
        else:
            file_handler.setLevel(py_logging.DEBUG)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
            logger.setLevel(py_logging.DEBUG)

    logger.propagate = False
    return logger
