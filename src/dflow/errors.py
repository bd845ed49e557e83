"""Failure contracts for dflow.

Core helpers and services raise DflowError subclasses on expected failures
(missing config, bad names, failing git commands). Programmer bugs raise
normal exceptions. The CLI catches DflowError and reports ``message`` and
``recovery_hint`` instead of a traceback.
"""

from __future__ import annotations

from typing import Literal

DflowFailureCode = Literal[
    "not_initialized",
    "config_parse_failed",
    "config_incomplete",
    "config_write_failed",
    "unknown_type",
    "invalid_name",
    "branch_not_found",
    "process_failed",
    "not_a_repository",
    "cancelled",
]


class DflowError(Exception):
    """Expected dflow failure.

    Use ``raise DflowError(...) from exc`` to chain a causing exception; it is
    available as ``__cause__``.
    """

    def __init__(
        self,
        code: DflowFailureCode,
        message: str,
        *,
        recovery_hint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.recovery_hint = recovery_hint


class NotInitializedError(DflowError):
    """The ``.dflow.yaml`` file does not exist."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("not_initialized", message, recovery_hint=recovery_hint)


class ConfigParseError(DflowError):
    """The configuration document could not be decoded into the schema."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("config_parse_failed", message, recovery_hint=recovery_hint)


class IncompleteConfigError(DflowError):
    """A prefix or base branch needed for resolution is empty."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("config_incomplete", message, recovery_hint=recovery_hint)


class ConfigWriteError(DflowError):
    """Writing the configuration document failed."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("config_write_failed", message, recovery_hint=recovery_hint)


class UnknownTypeError(DflowError):
    """Unrecognized branch-type keyword."""

    def __init__(
        self,
        keyword: str,
        accepted: tuple[str, ...],
        *,
        recovery_hint: str | None = None,
    ) -> None:
        self.keyword = keyword
        self.accepted = accepted
        message = f"unknown branch type {keyword!r}; use one of: {', '.join(accepted)}"
        super().__init__("unknown_type", message, recovery_hint=recovery_hint)


class InvalidNameError(DflowError):
    """A branch name failed validation."""

    def __init__(
        self, name: str, reason: str, *, recovery_hint: str | None = None
    ) -> None:
        self.name = name
        self.reason = reason
        super().__init__(
            "invalid_name",
            f"invalid branch name {name!r}: {reason}",
            recovery_hint=recovery_hint,
        )


class BranchNotFoundError(DflowError):
    """The branch is not local and origin does not have it (or could not be checked)."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("branch_not_found", message, recovery_hint=recovery_hint)


class ProcessError(DflowError):
    """A git command returned a non-zero status.

    ``detail`` holds the captured diagnostic output verbatim.
    """

    def __init__(
        self,
        message: str,
        *,
        detail: str = "",
        returncode: int | None = None,
        recovery_hint: str | None = None,
    ) -> None:
        self.detail = detail
        self.returncode = returncode
        full_message = f"{message}\n{detail}" if detail else message
        super().__init__("process_failed", full_message, recovery_hint=recovery_hint)


class NotARepositoryError(DflowError):
    """The command was run outside a git work tree."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("not_a_repository", message, recovery_hint=recovery_hint)


class PromptCancelledError(DflowError):
    """The user cancelled an interactive prompt."""

    def __init__(self, message: str = "cancelled by user") -> None:
        super().__init__("cancelled", message)
