"""Validated command line parameters for a single invocation."""

from __future__ import annotations

import logging as py_logging
from dataclasses import asdict, dataclass, replace

from terminix.errors import ExitCode
from terminix.geometry import parse_geometry
from terminix.options import (
    CMD_ACTION,
    CMD_EXECUTE,
    CMD_FOCUS_WINDOW,
    CMD_FULL_SCREEN,
    CMD_GEOMETRY,
    CMD_MAXIMIZE,
    CMD_NEW_PROCESS,
    CMD_PROFILE,
    CMD_SESSION,
    CMD_TERMINAL_UUID,
    CMD_TITLE,
    CMD_WORKING_DIRECTORY,
    OptionSource,
    get_flag,
    get_string,
    get_string_list,
)
from terminix.paths import Notifier, validate_path, validate_session_files

logger = py_logging.getLogger(__name__)

SESSION_CONFLICT_MESSAGE = (
    "You cannot load a session and set a profile/working directory/execute command option, "
    "please choose one or the other"
)
ACTION_NOT_REMOTE_MESSAGE = "You can only use the action parameter within Terminix"


@dataclass(frozen=True)
class CommandParameters:
    working_dir: str = ""
    session_files: tuple[str, ...] = ()
    profile_name: str = ""
    title: str = ""
    execute: str = ""
    action: str = ""
    terminal_uuid: str = ""
    cwd: str = ""
    pwd: str = ""
    geometry: str = ""
    width: int = 0
    height: int = 0
    x: int = 0
    y: int = 0
    maximize: bool = False
    fullscreen: bool = False
    focus_window: bool = False
    new_process: bool = False
    command_line_path: str = ""
    exit_requested: bool = False
    exit_code: int = int(ExitCode.SUCCESS)

    def clear(self) -> CommandParameters:
        """Return the all-default parameters; instances are never reset in place."""
        return CommandParameters()

    def with_working_dir(self, value: str) -> CommandParameters:
        return replace(self, working_dir=value)

    def to_dict(self) -> dict[str, object]:
        payload = asdict(self)
        payload["session_files"] = list(self.session_files)
        return payload


def _check_session_conflict(
    session_files: list[str],
    *,
    profile_name: str,
    working_dir: str,
    execute: str,
) -> bool:
    return bool(session_files) and bool(profile_name or working_dir or execute)


def build_command_parameters(
    source: OptionSource,
    *,
    cwd: str,
    pwd: str = "",
    is_remote: bool = False,
    notify: Notifier = print,
) -> CommandParameters:
    """Build the parameters for one invocation.

    Soft failures (missing directories or session files, unparsable geometry)
    degrade the affected field and are reported through ``notify`` and the
    logger. Conflicting options set ``exit_requested`` with a specific exit
    code; callers must check it before using any other field.
    """
    exit_requested = False
    exit_code = ExitCode.SUCCESS

    working_dir = validate_path(get_string(source, CMD_WORKING_DIRECTORY), notify=notify)
    validated_pwd = validate_path(pwd, notify=notify) if pwd else ""
    validated_cwd = validate_path(cwd, notify=notify) if cwd else ""

    session_files = validate_session_files(get_string_list(source, CMD_SESSION), notify=notify)
    profile_name = get_string(source, CMD_PROFILE)
    title = get_string(source, CMD_TITLE)
    execute = get_string(source, CMD_EXECUTE)
    action = get_string(source, CMD_ACTION)

    if _check_session_conflict(
        session_files,
        profile_name=profile_name,
        working_dir=working_dir,
        execute=execute,
    ):
        logger.warning("Session conflicts with profile/working directory/execute options")
        notify(SESSION_CONFLICT_MESSAGE)
        exit_code = ExitCode.SESSION_CONFLICT
        exit_requested = True

    terminal_uuid = get_string(source, CMD_TERMINAL_UUID)
    if action and not is_remote:
        logger.warning("Action %r rejected for a non-remote invocation", action)
        notify(ACTION_NOT_REMOTE_MESSAGE)
        exit_code = ExitCode.ACTION_NOT_REMOTE
        exit_requested = True
        action = ""

    geometry = get_string(source, CMD_GEOMETRY)
    parsed = parse_geometry(geometry) if geometry else None

    params = CommandParameters(
        working_dir=working_dir,
        session_files=tuple(session_files),
        profile_name=profile_name,
        title=title,
        execute=execute,
        action=action,
        terminal_uuid=terminal_uuid,
        cwd=validated_cwd,
        pwd=validated_pwd,
        geometry=geometry,
        width=parsed.width if parsed else 0,
        height=parsed.height if parsed else 0,
        x=parsed.x if parsed else 0,
        y=parsed.y if parsed else 0,
        maximize=get_flag(source, CMD_MAXIMIZE),
        fullscreen=get_flag(source, CMD_FULL_SCREEN),
        focus_window=get_flag(source, CMD_FOCUS_WINDOW),
        new_process=get_flag(source, CMD_NEW_PROCESS),
        command_line_path=cwd,
        exit_requested=exit_requested,
        exit_code=int(exit_code),
    )
    _trace(params)
    return params


def _trace(params: CommandParameters) -> None:
    if not logger.isEnabledFor(py_logging.DEBUG):
        return
    logger.debug("Command line parameters:")
    logger.debug("\tworking-directory=%s", params.working_dir)
    logger.debug("\tsession=%s", list(params.session_files))
    logger.debug("\tprofile=%s", params.profile_name)
    logger.debug("\ttitle=%s", params.title)
    logger.debug("\taction=%s", params.action)
    logger.debug("\texecute=%s", params.execute)
    logger.debug("\tcwd=%s", params.cwd)
    logger.debug("\tpwd=%s", params.pwd)
    logger.debug(
        "\tgeometry=%dx%d %d,%d",
        params.width,
        params.height,
        params.x,
        params.y,
    )
