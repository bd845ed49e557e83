"""Git gateway used by dflow commands.

Every operation shells out to ``git -C <repo_dir> ...`` and reports failure
through a typed result rather than raising, so callers decide how to abort.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from . import exec as exec_util
from .errors import ProcessError

AUTHOR_KEY = "dflow.author"
EMAIL_KEY = "dflow.email"
CONFIG_SECTION = "dflow"
REMOTE_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class GitSuccess:
    """Successful git invocation.

    Args:
        argv: Command that ran.
        stdout: Captured standard output.
    """

    argv: tuple[str, ...]
    stdout: str = ""

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class GitFailure:
    """Failed git invocation.

    Args:
        argv: Command that ran.
        returncode: Exit status (``None`` when git could not be executed).
        detail: Captured diagnostic output, verbatim.
    """

    argv: tuple[str, ...]
    returncode: int | None
    detail: str

    @property
    def ok(self) -> bool:
        return False

    def to_error(self, message: str) -> ProcessError:
        """Wrap this failure in a ``ProcessError`` with a leading summary."""
        return ProcessError(message, detail=self.detail, returncode=self.returncode)


GitResult = GitSuccess | GitFailure


def raise_for_failure(result: GitResult, message: str) -> GitSuccess:
    """Return ``result`` when it succeeded, otherwise raise ``ProcessError``."""
    if isinstance(result, GitFailure):
        raise result.to_error(message)
    return result


class GitGateway(Protocol):
    """Version-control operations dflow relies on."""

    def is_repository(self) -> bool: ...

    def branch_exists_locally(self, name: str) -> bool: ...

    def create_local_branch(self, name: str) -> GitResult: ...

    def checkout(self, name: str) -> GitResult: ...

    def checkout_new(self, name: str) -> GitResult: ...

    def pull_current(self) -> GitResult: ...

    def push_with_upstream(self, name: str) -> GitResult: ...

    def remote_branch_exists(self, name: str) -> bool: ...

    def probe_remote_branch(self, name: str) -> bool | None: ...

    def delete_local(self, name: str) -> GitResult: ...

    def delete_remote(self, name: str) -> GitResult: ...

    def list_local_branch_names(self) -> list[str]: ...

    def config_get(self, key: str) -> str | None: ...

    def config_set(self, key: str, value: str) -> GitResult: ...

    def config_list(self, section: str) -> list[tuple[str, str]]: ...


class SubprocessGitGateway:
    """``GitGateway`` backed by the ``git`` executable."""

    def __init__(
        self,
        repo_dir: Path,
        *,
        runner: exec_util.CommandRunner | None = None,
        git_path: str = "git",
    ) -> None:
        self.repo_dir = repo_dir
        self._runner = runner
        self._git_path = git_path.strip() or "git"

    def _argv(self, args: list[str]) -> tuple[str, ...]:
        return (self._git_path, "-C", str(self.repo_dir), *args)

    def _run(
        self, args: list[str], *, timeout_seconds: float | None = None
    ) -> GitResult:
        argv = self._argv(args)
        result = exec_util.run_with_runner(
            exec_util.CommandRequest(argv=argv, timeout_seconds=timeout_seconds),
            runner=self._runner,
        )
        if result is None:
            return GitFailure(
                argv=argv,
                returncode=None,
                detail=exec_util.missing_command_detail(argv),
            )
        if not result.ok:
            return GitFailure(
                argv=argv,
                returncode=result.returncode,
                detail=exec_util.command_failure_detail(result),
            )
        return GitSuccess(argv=argv, stdout=result.stdout)

    def is_repository(self) -> bool:
        """Return whether ``repo_dir`` is inside a git work tree."""
        result = self._run(["rev-parse", "--is-inside-work-tree"])
        return isinstance(result, GitSuccess) and result.stdout.strip() == "true"

    def branch_exists_locally(self, name: str) -> bool:
        result = self._run(["rev-parse", "--verify", "--quiet", f"refs/heads/{name}"])
        return result.ok

    def create_local_branch(self, name: str) -> GitResult:
        """Create ``name`` at HEAD without switching to it."""
        return self._run(["branch", name])

    def checkout(self, name: str) -> GitResult:
        return self._run(["checkout", name])

    def checkout_new(self, name: str) -> GitResult:
        """Create ``name`` from the current position and switch to it."""
        return self._run(["checkout", "-b", name])

    def pull_current(self) -> GitResult:
        return self._run(["pull"])

    def push_with_upstream(self, name: str) -> GitResult:
        return self._run(["push", "-u", "origin", name])

    def remote_branch_exists(self, name: str) -> bool:
        """Check whether ``origin`` has ``name``; ``False`` when unreachable."""
        return self.probe_remote_branch(name) is True

    def probe_remote_branch(self, name: str) -> bool | None:
        """Look ``name`` up on ``origin``.

        Returns ``None`` when ``ls-remote`` itself fails (offline, no
        ``origin``, timeout), so callers can tell "absent" from "unknown".
        """
        ref = f"refs/heads/{name}"
        result = self._run(
            ["ls-remote", "--heads", "origin", ref],
            timeout_seconds=REMOTE_TIMEOUT_SECONDS,
        )
        if isinstance(result, GitFailure):
            return None
        for line in result.stdout.splitlines():
            parts = line.split()
            if len(parts) >= 2 and parts[1] == ref:
                return True
        return False

    def delete_local(self, name: str) -> GitResult:
        return self._run(["branch", "-D", name])

    def delete_remote(self, name: str) -> GitResult:
        return self._run(["push", "origin", "--delete", name])

    def list_local_branch_names(self) -> list[str]:
        """Return local branch names; empty when git fails."""
        result = self._run(["branch", "--format=%(refname:short)"])
        if isinstance(result, GitFailure):
            return []
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def config_get(self, key: str) -> str | None:
        result = self._run(["config", "--get", key])
        if isinstance(result, GitFailure):
            return None
        return result.stdout.strip() or None

    def config_set(self, key: str, value: str) -> GitResult:
        return self._run(["config", key, value])

    def config_list(self, section: str) -> list[tuple[str, str]]:
        """Return ``(key, value)`` pairs under ``section.``; empty when unset."""
        pattern = "^" + section.replace(".", "\\.") + "\\."
        result = self._run(["config", "--get-regexp", pattern])
        if isinstance(result, GitFailure):
            return []
        entries: list[tuple[str, str]] = []
        for line in result.stdout.splitlines():
            if not line.strip():
                continue
            key, _, value = line.partition(" ")
            entries.append((key, value))
        return entries
