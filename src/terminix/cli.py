"""Public CLI contract and entrypoint."""

from __future__ import annotations

import argparse
import json
import logging as py_logging
import os
import sys
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path

from .config import load_config
from .errors import ExitCode, TerminixError, user_facing_error
from .logging import (
    VALID_LOG_LEVELS,
    configure_logging,
    default_log_path,
    is_valid_level,
    normalize_level,
    resolve_level,
)
from .options import (
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
    NamespaceOptionSource,
    namespace_attribute,
)
from .params import CommandParameters, build_command_parameters

Dispatcher = Callable[[CommandParameters], "int | None"]


def _log_level_type(value: str) -> str:
    if not is_valid_level(value):
        accepted = ", ".join(VALID_LOG_LEVELS)
        raise argparse.ArgumentTypeError(f"--log-level must be one of: {accepted}")
    return normalize_level(value)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="terminix")
    parser.add_argument(
        "-w",
        f"--{CMD_WORKING_DIRECTORY}",
        dest=namespace_attribute(CMD_WORKING_DIRECTORY),
        default=None,
        help="Set the working directory of the terminal",
    )
    parser.add_argument(
        "-s",
        f"--{CMD_SESSION}",
        dest=namespace_attribute(CMD_SESSION),
        action="append",
        default=None,
        help="Open the specified session (repeatable)",
    )
    parser.add_argument(
        "-p",
        f"--{CMD_PROFILE}",
        dest=namespace_attribute(CMD_PROFILE),
        default=None,
        help="Set the starting profile",
    )
    parser.add_argument(
        "-e",
        f"--{CMD_EXECUTE}",
        dest=namespace_attribute(CMD_EXECUTE),
        default=None,
        help="Execute the parameter as a command",
    )
    parser.add_argument(
        "-a",
        f"--{CMD_ACTION}",
        dest=namespace_attribute(CMD_ACTION),
        default=None,
        help="Send an action to the current Terminix instance",
    )
    parser.add_argument(
        f"--{CMD_TERMINAL_UUID}",
        dest=namespace_attribute(CMD_TERMINAL_UUID),
        default=None,
        help="Terminal identifier targeted by the action",
    )
    parser.add_argument(
        f"--{CMD_MAXIMIZE}",
        dest=namespace_attribute(CMD_MAXIMIZE),
        action="store_true",
        help="Maximize the terminal window",
    )
    parser.add_argument(
        f"--{CMD_FULL_SCREEN}",
        dest=namespace_attribute(CMD_FULL_SCREEN),
        action="store_true",
        help="Full-screen the terminal window",
    )
    parser.add_argument(
        f"--{CMD_FOCUS_WINDOW}",
        dest=namespace_attribute(CMD_FOCUS_WINDOW),
        action="store_true",
        help="Focus the existing window",
    )
    parser.add_argument(
        f"--{CMD_GEOMETRY}",
        dest=namespace_attribute(CMD_GEOMETRY),
        default=None,
        metavar="GEOMETRY",
        help="Set the window size; for example: 80x24, or 80x24+200+200 (COLSxROWS+X+Y)",
    )
    parser.add_argument(
        f"--{CMD_NEW_PROCESS}",
        dest=namespace_attribute(CMD_NEW_PROCESS),
        action="store_true",
        help="Start additional instance as new process (Not Recommended)",
    )
    parser.add_argument(
        "-t",
        f"--{CMD_TITLE}",
        dest=namespace_attribute(CMD_TITLE),
        default=None,
        help="Set the title of the new terminal",
    )
    parser.add_argument("--log-level", type=_log_level_type, default=None)
    parser.add_argument("--log-file", type=Path, default=None)
    parser.add_argument("--config", type=Path, default=None)
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    return parser.parse_args(argv)


def print_parameters(params: CommandParameters, warnings: Sequence[str] = ()) -> int:
    payload = params.to_dict()
    payload["warnings"] = list(warnings)
    print(json.dumps(payload, indent=2, sort_keys=True))
    return int(ExitCode.SUCCESS)


def _discard(message: str) -> None:
    del message


def main(
    argv: Sequence[str] | None = None,
    *,
    cwd: str | None = None,
    environ: Mapping[str, str] | None = None,
    is_remote: bool = False,
    dispatcher: Dispatcher | None = None,
) -> int:
    """Validate one invocation and hand the parameters to ``dispatcher``.

    Without a dispatcher the parameters are printed as JSON on stdout and
    user-facing warnings travel inside it under ``warnings``.
    """
    log_path = default_log_path()
    logger = configure_logging(log_file=log_path)
    parser = build_parser()
    try:
        namespace = parser.parse_args(argv)
    except SystemExit as exc:
        if exc.code in (None, 0):
            return int(ExitCode.SUCCESS)
        logger.warning("Argument parsing failed with exit code %s", exc.code)
        return int(ExitCode.INVALID_ARGS)

    level = namespace.log_level or "INFO"
    env = environ if environ is not None else os.environ
    collected: list[str] = []
    try:
        config = load_config(namespace.config, strict=namespace.config is not None)
        level = namespace.log_level or config.log_level
        if namespace.log_file is not None:
            log_path = namespace.log_file.expanduser()
        elif config.log_file:
            log_path = Path(config.log_file).expanduser()
        logger = configure_logging(level=level, log_file=log_path)

        if not config.notify_warnings:
            notify = _discard
        elif dispatcher is None:
            notify = collected.append
        else:
            notify = print

        params = build_command_parameters(
            NamespaceOptionSource(namespace),
            cwd=cwd if cwd is not None else os.getcwd(),
            pwd=env.get("PWD", ""),
            is_remote=is_remote,
            notify=notify,
        )
        if params.exit_requested:
            for message in collected:
                print(message)
            logger.info("Invocation rejected with exit code %s", params.exit_code)
            return params.exit_code

        logger.debug("Dispatching parameters remote=%s", is_remote)
        if dispatcher is None:
            return print_parameters(params, collected)
        result = dispatcher(params)
        if isinstance(result, int):
            return result
        return int(ExitCode.SUCCESS)
    except TerminixError as exc:
        logger.error(
            "Handled TerminixError (code=%s): %s",
            int(exc.code),
            exc.message,
            exc_info=resolve_level(level) <= py_logging.DEBUG,
        )
        print(user_facing_error(exc.message, hint=exc.hint), file=sys.stderr)
        return int(exc.code)
    except Exception:
        logger.exception("Unhandled exception in CLI entrypoint")
        try:
            hint = f"Inspect logs: {log_path}"
            print(user_facing_error("Unexpected runtime failure", hint=hint), file=sys.stderr)
        except Exception:
            pass
        return int(ExitCode.RUNTIME_ERROR)


def run(argv: Sequence[str] | None = None) -> int:
    return main(argv)
