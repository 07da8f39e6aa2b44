from __future__ import annotations

import io
import json
from contextlib import redirect_stderr
from pathlib import Path

import pytest

from terminix import cli
from terminix.errors import ExitCode, TerminixError
from terminix.params import CommandParameters


@pytest.fixture
def log_args(tmp_path: Path) -> list[str]:
    return ["--log-file", str(tmp_path / "logs" / "terminix.log")]


def _main(argv: list[str], tmp_path: Path, **kwargs: object) -> int:
    return cli.main(argv, cwd=str(tmp_path), environ={"PWD": str(tmp_path)}, **kwargs)


def test_cli_help_includes_public_flags() -> None:
    help_text = cli.build_parser().format_help()
    for flag in (
        "--working-directory",
        "--session",
        "--profile",
        "--execute",
        "--action",
        "--terminalUUID",
        "--maximize",
        "--full-screen",
        "--focus-window",
        "--geometry",
        "--new-process",
        "--title",
    ):
        assert flag in help_text


def test_session_flag_is_repeatable() -> None:
    namespace = cli.parse_args(["-s", "a.json", "--session", "b.json"])

    assert namespace.session == ["a.json", "b.json"]


def test_valid_invocation_reaches_dispatcher(tmp_path: Path, log_args: list[str]) -> None:
    received: list[CommandParameters] = []

    def fake_dispatch(params: CommandParameters) -> None:
        received.append(params)

    code = _main(
        ["--geometry", "120x40+5+6", "--title", "logs", "--maximize", *log_args],
        tmp_path,
        dispatcher=fake_dispatch,
    )

    assert code == 0
    assert len(received) == 1
    assert (received[0].width, received[0].height, received[0].x, received[0].y) == (120, 40, 5, 6)
    assert received[0].title == "logs"
    assert received[0].maximize is True
    assert received[0].pwd == str(tmp_path)


def test_dispatcher_exit_code_is_returned(tmp_path: Path, log_args: list[str]) -> None:
    code = _main(log_args, tmp_path, dispatcher=lambda params: 9)

    assert code == 9


def test_default_dispatcher_prints_json(tmp_path: Path, log_args: list[str], capsys) -> None:
    code = _main(["--profile", "dark", *log_args], tmp_path)

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["profile_name"] == "dark"
    assert payload["command_line_path"] == str(tmp_path)


def test_action_without_remote_returns_exit_code_2(tmp_path: Path, log_args: list[str], capsys) -> None:
    called = {"dispatch": False}

    def fake_dispatch(params: CommandParameters) -> int:
        called["dispatch"] = True
        return 0

    code = _main(["--action", "focus", *log_args], tmp_path, dispatcher=fake_dispatch)

    assert code == int(ExitCode.ACTION_NOT_REMOTE)
    assert called["dispatch"] is False
    assert "action parameter" in capsys.readouterr().out


def test_action_with_remote_is_dispatched(tmp_path: Path, log_args: list[str]) -> None:
    received: list[CommandParameters] = []

    code = _main(
        ["-a", "focus", "--terminalUUID", "u-1", *log_args],
        tmp_path,
        is_remote=True,
        dispatcher=received.append,
    )

    assert code == 0
    assert received[0].action == "focus"
    assert received[0].terminal_uuid == "u-1"


def test_session_conflict_returns_exit_code_1(tmp_path: Path, log_args: list[str]) -> None:
    session = tmp_path / "layout.json"
    session.write_text("{}", encoding="utf-8")

    code = _main(["--session", str(session), "--execute", "top", *log_args], tmp_path)

    assert code == int(ExitCode.SESSION_CONFLICT)


def test_invalid_log_level_returns_usage_error(tmp_path: Path) -> None:
    code = _main(["--log-level", "LOUD"], tmp_path)

    assert code == int(ExitCode.INVALID_ARGS)
    assert code != int(ExitCode.ACTION_NOT_REMOTE)


def test_unknown_flag_is_rejected(tmp_path: Path) -> None:
    code = _main(["--ui-mode", "wizard"], tmp_path)

    assert code == int(ExitCode.INVALID_ARGS)


def test_notify_warnings_disabled_by_config(tmp_path: Path, log_args: list[str], capsys) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text("notify_warnings = false\n", encoding="utf-8")

    code = _main(
        ["--config", str(config_path), "--working-directory", str(tmp_path / "gone"), *log_args],
        tmp_path,
        dispatcher=lambda params: None,
    )

    assert code == 0
    assert "is not a directory" not in capsys.readouterr().out


def test_handled_error_is_reported_to_stderr(tmp_path: Path, log_args: list[str]) -> None:
    def failing_dispatch(params: CommandParameters) -> int:
        raise TerminixError(
            "No running instance",
            code=ExitCode.RUNTIME_ERROR,
            hint="Start Terminix first.",
        )

    stream = io.StringIO()
    with redirect_stderr(stream):
        code = _main(log_args, tmp_path, dispatcher=failing_dispatch)

    assert code == int(ExitCode.RUNTIME_ERROR)
    assert "Start Terminix first." in stream.getvalue()


def test_unexpected_error_maps_to_runtime_error(tmp_path: Path, log_args: list[str]) -> None:
    def broken_dispatch(params: CommandParameters) -> int:
        raise RuntimeError("boom")

    stream = io.StringIO()
    with redirect_stderr(stream):
        code = _main(log_args, tmp_path, dispatcher=broken_dispatch)

    assert code == int(ExitCode.RUNTIME_ERROR)
    assert "Unexpected runtime failure" in stream.getvalue()


def test_help_exits_successfully(tmp_path: Path, capsys) -> None:
    code = _main(["--help"], tmp_path)

    assert code == 0
    assert "--geometry" in capsys.readouterr().out


def test_default_output_stays_json_when_warnings_are_raised(
    tmp_path: Path, log_args: list[str], capsys
) -> None:
    missing = tmp_path / "gone"

    code = cli.main(
        ["-w", str(missing), *log_args],
        cwd=str(tmp_path),
        environ={"PWD": str(tmp_path / "stale")},
    )

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["working_dir"] == ""
    assert payload["pwd"] == ""
    assert f"Ignoring as '{missing}' is not a directory" in payload["warnings"]
    assert len(payload["warnings"]) == 2


def test_default_output_has_empty_warnings_for_clean_run(
    tmp_path: Path, log_args: list[str], capsys
) -> None:
    code = _main(log_args, tmp_path)

    assert code == 0
    assert json.loads(capsys.readouterr().out)["warnings"] == []


def test_rejected_default_run_prints_collected_messages(
    tmp_path: Path, log_args: list[str], capsys
) -> None:
    code = _main(["-w", str(tmp_path / "gone"), "--action", "focus", *log_args], tmp_path)

    out = capsys.readouterr().out
    assert code == int(ExitCode.ACTION_NOT_REMOTE)
    assert "is not a directory" in out
    assert "action parameter" in out


def test_unreadable_explicit_config_returns_config_error(tmp_path: Path, log_args: list[str]) -> None:
    config_path = tmp_path / "broken.toml"
    config_path.write_text("log_level = [", encoding="utf-8")
    called = {"dispatch": False}

    def fake_dispatch(params: CommandParameters) -> int:
        called["dispatch"] = True
        return 0

    stream = io.StringIO()
    with redirect_stderr(stream):
        code = _main(["--config", str(config_path), *log_args], tmp_path, dispatcher=fake_dispatch)

    assert code == int(ExitCode.CONFIG_ERROR)
    assert called["dispatch"] is False
    assert "Next step" in stream.getvalue()


def test_missing_default_config_is_not_an_error(tmp_path: Path, log_args: list[str]) -> None:
    code = _main(log_args, tmp_path, dispatcher=lambda params: None)

    assert code == 0
