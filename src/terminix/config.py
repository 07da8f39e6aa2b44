"""XDG config loading."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Literal, cast

from pydantic import BaseModel, ConfigDict, field_validator

if sys.version_info >= (3, 11):
    import tomllib
else:  # pragma: no cover
    import tomli as tomllib

from terminix.errors import ExitCode, TerminixError
from terminix.logging import is_valid_level, normalize_level

LogLevel = Literal["DEBUG", "INFO", "WARN", "ERROR"]

DEFAULT_CONFIG_PATH = Path("~/.config/terminix/config.toml").expanduser()
DEFAULT_LOG_LEVEL: LogLevel = "INFO"
LOG_LEVEL_ENV = "TERMINIX_LOG_LEVEL"


class AppConfig(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    log_level: LogLevel = DEFAULT_LOG_LEVEL
    log_file: str = ""
    notify_warnings: bool = True

    @field_validator("log_level", mode="before")
    @classmethod
    def _validate_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            if not is_valid_level(value):
                raise ValueError(f"Invalid log level: {value}")
            return normalize_level(value)
        return value


def get_config_path(path: str | Path | None = None) -> Path:
    if path is None:
        return DEFAULT_CONFIG_PATH
    return Path(path).expanduser()


def _sanitize(raw: dict[str, object]) -> AppConfig:
    cfg = AppConfig()

    log_level = raw.get("log_level", cfg.log_level)
    if isinstance(log_level, str) and is_valid_level(log_level):
        cfg.log_level = cast(LogLevel, normalize_level(log_level))

    log_file = raw.get("log_file", cfg.log_file)
    if isinstance(log_file, str):
        cfg.log_file = log_file

    notify_warnings = raw.get("notify_warnings", cfg.notify_warnings)
    if isinstance(notify_warnings, bool):
        cfg.notify_warnings = notify_warnings

    return cfg


def _apply_env(cfg: AppConfig) -> AppConfig:
    env_level = os.getenv(LOG_LEVEL_ENV, "")
    if is_valid_level(env_level):
        cfg.log_level = cast(LogLevel, normalize_level(env_level))
    return cfg


def _config_error(resolved: Path, reason: str) -> TerminixError:
    return TerminixError(
        f"Cannot load config file {resolved}: {reason}",
        code=ExitCode.CONFIG_ERROR,
        hint="Fix the file or drop the --config option.",
    )


def load_config(path: str | Path | None = None, *, strict: bool = False) -> AppConfig:
    """Load the TOML config, falling back to defaults.

    With ``strict`` an explicitly requested file must exist and parse;
    otherwise ``TerminixError`` with ``CONFIG_ERROR`` is raised.
    """
    resolved = get_config_path(path)
    if not resolved.exists():
        if strict:
            raise _config_error(resolved, "file not found")
        return _apply_env(AppConfig())
    try:
        with resolved.open("rb") as handle:
            raw = tomllib.load(handle)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        if strict:
            raise _config_error(resolved, str(exc)) from exc
        return _apply_env(AppConfig())
    return _apply_env(_sanitize(raw))
