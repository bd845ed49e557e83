"""Branch name validation following git's ref-name rules.

The checks mirror ``git check-ref-format`` closely enough to reject names
that git would refuse, before any git command runs.

Example:
    >>> validate_branch_name("feature/login-form")
    BranchNameCheck(valid=True, reason='')
    >>> validate_branch_name("feature..login").reason
    "branch name cannot contain '..'"
"""

from __future__ import annotations

from typing import NamedTuple

from .errors import InvalidNameError

FORBIDDEN_SUBSTRINGS = ("..", "~", "^", ":", "?", "*", "[", "\\", "@{")
FORBIDDEN_SUFFIXES = ("/", ".", ".lock")


class BranchNameCheck(NamedTuple):
    """Outcome of a branch name validation."""

    valid: bool
    reason: str


_VALID = BranchNameCheck(True, "")


def _invalid(reason: str) -> BranchNameCheck:
    return BranchNameCheck(False, reason)


def validate_branch_name(name: str) -> BranchNameCheck:
    """Validate a candidate branch name.

    Rules are applied in order and the first failure wins.

    Args:
        name: Candidate branch name.

    Returns:
        ``BranchNameCheck`` with ``valid`` and a human-readable ``reason``
        (empty when valid).

    Example:
        >>> validate_branch_name("")
        BranchNameCheck(valid=False, reason='branch name is empty')
        >>> validate_branch_name("-x").valid
        False
    """
    if name == "":
        return _invalid("branch name is empty")
    if name.startswith("-"):
        return _invalid("branch name cannot start with '-'")
    if name.startswith("/"):
        return _invalid("branch name cannot start with '/'")
    for suffix in FORBIDDEN_SUFFIXES:
        if name.endswith(suffix):
            return _invalid(f"branch name cannot end with '{suffix}'")
    for pattern in FORBIDDEN_SUBSTRINGS:
        if pattern in name:
            return _invalid(f"branch name cannot contain '{pattern}'")
    for part in name.split("/"):
        if part in {".", ".."}:
            return _invalid("branch name cannot contain path elements '.' or '..'")
        if part == "":
            return _invalid("branch name cannot contain empty path segments ('//')")
    if any(ord(char) < 32 or ord(char) == 127 for char in name):
        return _invalid("branch name contains control characters")
    return _VALID


def ensure_valid_branch_name(name: str) -> str:
    """Return ``name`` unchanged or raise ``InvalidNameError`` with the reason."""
    valid, reason = validate_branch_name(name)
    if not valid:
        raise InvalidNameError(
            name,
            reason,
            recovery_hint="see 'git check-ref-format --help' for the naming rules",
        )
    return name
