"""Subprocess helpers for the external commands dflow drives (``git``)."""

import subprocess
from dataclasses import dataclass
from typing import Protocol

TIMEOUT_RETURNCODE = 124


@dataclass(frozen=True)
class CommandRequest:
    """A command line to run with captured output decoded as UTF-8."""

    argv: tuple[str, ...]
    timeout_seconds: float | None = None


@dataclass(frozen=True)
class CommandResult:
    """Exit status and captured output of a finished command."""

    argv: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        return self.returncode == 0 and not self.timed_out


class CommandRunner(Protocol):
    """Runtime command-execution interface."""

    def run(self, request: CommandRequest) -> CommandResult | None: ...


def _as_text(value: object) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value if isinstance(value, str) else ""


class SubprocessCommandRunner:
    """``CommandRunner`` backed by ``subprocess.run``."""

    def run(self, request: CommandRequest) -> CommandResult | None:
        try:
            completed = subprocess.run(
                list(request.argv),
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                check=False,
                timeout=request.timeout_seconds,
            )
        except FileNotFoundError:
            return None
        except subprocess.TimeoutExpired as exc:
            return CommandResult(
                argv=request.argv,
                returncode=TIMEOUT_RETURNCODE,
                stdout=_as_text(exc.stdout),
                stderr=_as_text(exc.stderr),
                timed_out=True,
            )
        return CommandResult(
            argv=request.argv,
            returncode=completed.returncode,
            stdout=_as_text(completed.stdout),
            stderr=_as_text(completed.stderr),
        )


_DEFAULT_COMMAND_RUNNER: CommandRunner = SubprocessCommandRunner()


def run_with_runner(
    request: CommandRequest, *, runner: CommandRunner | None = None
) -> CommandResult | None:
    """Execute ``request`` with ``runner`` (the subprocess runner by default).

    Returns ``None`` when the executable is missing.
    """
    active_runner = runner or _DEFAULT_COMMAND_RUNNER
    return active_runner.run(request)


def missing_command_detail(argv: tuple[str, ...]) -> str:
    """Describe a command whose executable could not be found."""
    if not argv:
        return "missing required command"
    return f"missing required command: {argv[0]}"


def command_failure_detail(result: CommandResult) -> str:
    """Return the diagnostic output of a failed command, or a fallback line."""
    output = (result.stderr or result.stdout or "").strip()
    if output:
        return output
    if result.timed_out:
        return f"command timed out: {' '.join(result.argv)}"
    return f"command failed: {' '.join(result.argv)}"
