import re
from unittest.mock import patch

from typer.testing import CliRunner

import dflow.cli as cli

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")


def _strip_ansi(output: str) -> str:
    return ANSI_ESCAPE_RE.sub("", output)


def test_global_log_level_flag_sets_runtime_level() -> None:
    runner = CliRunner()
    with (
        patch("dflow.commands.start.start_branch", lambda _args: None),
        patch("dflow.cli.dflow_log.set_level") as mock_set_level,
    ):
        result = runner.invoke(cli.app, ["--log-level", "debug", "start", "feat", "x"])

    assert result.exit_code == 0
    mock_set_level.assert_called_once_with("debug")


def test_global_log_level_rejects_unknown_values() -> None:
    runner = CliRunner()
    result = runner.invoke(
        cli.app, ["--log-level", "loud", "start", "feat", "x"], color=False
    )
    clean_output = _strip_ansi(result.output)

    assert result.exit_code != 0
    assert "--log-level" in clean_output
    assert "expected one of" in clean_output.lower()


def test_no_color_flag_disables_colorized_output() -> None:
    runner = CliRunner()
    with (
        patch("dflow.commands.start.start_branch", lambda _args: None),
        patch("dflow.cli.dflow_log.set_no_color") as mock_set_no_color,
    ):
        result = runner.invoke(cli.app, ["--no-color", "start", "feat", "x"])

    assert result.exit_code == 0
    mock_set_no_color.assert_called_once_with(True)


def test_banner_shows_version_unless_suppressed() -> None:
    runner = CliRunner()
    startup = cli.StartupInfo(version="9.9.9", banner="BANNER dflow 9.9.9")
    with patch("dflow.commands.start.start_branch", lambda _args: None):
        shown = runner.invoke(cli.app, ["start", "feat", "x"], obj=startup)
        hidden = runner.invoke(
            cli.app, ["--no-banner", "start", "feat", "x"], obj=startup
        )

    assert shown.exit_code == 0
    assert "BANNER dflow 9.9.9" in shown.output
    assert hidden.exit_code == 0
    assert "BANNER" not in hidden.output


def test_banner_is_hidden_above_info_level() -> None:
    runner = CliRunner()
    startup = cli.StartupInfo(version="9.9.9", banner="BANNER dflow 9.9.9")
    with patch("dflow.commands.start.start_branch", lambda _args: None):
        result = runner.invoke(
            cli.app, ["--log-level", "warning", "start", "feat", "x"], obj=startup
        )

    assert result.exit_code == 0
    assert "BANNER" not in result.output


def test_version_flag_prints_startup_version() -> None:
    runner = CliRunner()
    startup = cli.StartupInfo(version="1.2.3", banner="")

    result = runner.invoke(cli.app, ["--version"], obj=startup)

    assert result.exit_code == 0
    assert result.output.strip() == "dflow 1.2.3"


def test_dflow_errors_exit_non_zero_with_message_and_hint() -> None:
    from dflow.errors import NotInitializedError

    def boom(_args: object) -> None:
        raise NotInitializedError(
            "dflow is not initialized", recovery_hint="run 'dflow init' to create it"
        )

    runner = CliRunner()
    with patch("dflow.commands.start.start_branch", boom):
        result = runner.invoke(cli.app, ["--no-banner", "start", "feat", "x"])

    assert result.exit_code == 1
    assert "dflow is not initialized" in result.output
    assert "hint: run 'dflow init' to create it" in result.output


def test_interrupt_handler_reports_cancellation(capsys) -> None:
    try:
        cli._handle_interrupt(2, None)
    except SystemExit as exc:
        assert exc.code == 1
    else:
        raise AssertionError("expected SystemExit")

    assert "Execution cancelled by user." in capsys.readouterr().err
