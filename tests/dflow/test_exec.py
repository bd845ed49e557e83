"""Tests for typed command execution helpers."""

from __future__ import annotations

import subprocess
import sys

import pytest

from dflow import exec as exec_util


def test_subprocess_command_runner_success(monkeypatch: pytest.MonkeyPatch) -> None:
    """Runner decodes output as UTF-8 and forwards the timeout."""
    calls: dict[str, object] = {}

    def fake_run(argv: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        calls["argv"] = argv
        calls["kwargs"] = kwargs
        return subprocess.CompletedProcess(argv, 0, stdout="true\n", stderr="")

    monkeypatch.setattr(subprocess, "run", fake_run)

    request = exec_util.CommandRequest(
        argv=("git", "rev-parse", "--is-inside-work-tree"),
        timeout_seconds=5.0,
    )
    result = exec_util.SubprocessCommandRunner().run(request)

    assert result == exec_util.CommandResult(
        argv=("git", "rev-parse", "--is-inside-work-tree"),
        returncode=0,
        stdout="true\n",
        stderr="",
    )
    assert result.ok
    assert calls["argv"] == ["git", "rev-parse", "--is-inside-work-tree"]
    run_kwargs = calls["kwargs"]
    assert isinstance(run_kwargs, dict)
    assert run_kwargs["capture_output"] is True
    assert run_kwargs["encoding"] == "utf-8"
    assert run_kwargs["errors"] == "replace"
    assert "text" not in run_kwargs
    assert run_kwargs["check"] is False
    assert run_kwargs["timeout"] == 5.0


def test_subprocess_command_runner_returns_none_when_missing_executable(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def fake_run(argv: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        del argv, kwargs
        raise FileNotFoundError

    monkeypatch.setattr(subprocess, "run", fake_run)

    result = exec_util.SubprocessCommandRunner().run(
        exec_util.CommandRequest(argv=("missing-git",))
    )

    assert result is None


def test_subprocess_command_runner_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    """Timeouts become failed results instead of exceptions."""

    def fake_run(argv: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        del kwargs
        raise subprocess.TimeoutExpired(
            cmd=argv, timeout=0.05, output=b"partial \xff", stderr=None
        )

    monkeypatch.setattr(subprocess, "run", fake_run)

    result = exec_util.SubprocessCommandRunner().run(
        exec_util.CommandRequest(argv=("git", "pull"), timeout_seconds=0.05)
    )

    assert result is not None
    assert result.timed_out is True
    assert result.ok is False
    assert result.returncode == exec_util.TIMEOUT_RETURNCODE
    assert result.stdout == "partial \ufffd"
    assert result.stderr == ""


def test_subprocess_command_runner_replaces_undecodable_output() -> None:
    """Output that is not valid UTF-8 (for example a Latin-1 branch name) still decodes."""
    result = exec_util.SubprocessCommandRunner().run(
        exec_util.CommandRequest(
            argv=(
                sys.executable,
                "-c",
                "import sys; sys.stdout.buffer.write(b'caf\\xe9\\n')",
            )
        )
    )

    assert result is not None
    assert result.ok
    assert result.stdout == "caf\ufffd\n"


def test_run_with_runner_uses_injected_runner() -> None:
    class FakeRunner:
        def run(
            self, request: exec_util.CommandRequest
        ) -> exec_util.CommandResult | None:
            assert request.argv == ("git", "status")
            return exec_util.CommandResult(
                argv=request.argv, returncode=0, stdout="clean", stderr=""
            )

    result = exec_util.run_with_runner(
        exec_util.CommandRequest(argv=("git", "status")), runner=FakeRunner()
    )

    assert result is not None
    assert result.stdout == "clean"


def test_failure_detail_prefers_stderr_then_stdout() -> None:
    def result(stdout: str, stderr: str) -> exec_util.CommandResult:
        return exec_util.CommandResult(
            argv=("git", "push"), returncode=1, stdout=stdout, stderr=stderr
        )

    assert exec_util.command_failure_detail(result("out", " fatal: no\n")) == "fatal: no"
    assert exec_util.command_failure_detail(result("rejected\n", "")) == "rejected"
    assert exec_util.command_failure_detail(result("", "")) == "command failed: git push"
    assert exec_util.missing_command_detail(("git", "x")) == "missing required command: git"
