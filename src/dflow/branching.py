"""Branch-type resolution and branch naming for dflow flows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from .config import resolve_merge_mode
from .errors import IncompleteConfigError, UnknownTypeError
from .models import MergeMode, WorkflowConfig
from .validation import ensure_valid_branch_name

BranchType = Literal["feature", "release", "hotfix", "bugfix"]

BRANCH_TYPE_ALIASES: dict[str, BranchType] = {
    "feat": "feature",
    "feature": "feature",
    "release": "release",
    "hot": "hotfix",
    "hotfix": "hotfix",
    "fix": "hotfix",
    "bug": "bugfix",
    "bugfix": "bugfix",
}
ACCEPTED_KEYWORDS = tuple(BRANCH_TYPE_ALIASES)

# branch type -> (prefix field in ``branches``, base field in ``flow``)
_FLOW_FIELDS: dict[BranchType, tuple[str, str]] = {
    "feature": ("features", "feature_base"),
    "release": ("releases", "release_base"),
    "hotfix": ("hotfixes", "hotfix_base"),
    "bugfix": ("bugfixes", "bugfix_base"),
}


@dataclass(frozen=True)
class FlowRule:
    """Prefix and base branch for a branch type."""

    branch_type: BranchType
    prefix: str
    base: str


@dataclass(frozen=True)
class ResolvedBranchPlan:
    """Everything needed to start a branch; never persisted.

    ``merge_target`` and ``merge_mode`` describe where the branch is expected
    to land once finished. No command merges yet; they are informational.
    """

    branch_type: BranchType
    prefix: str
    base: str
    composed_name: str
    merge_target: str
    merge_mode: MergeMode


def canonical_branch_type(keyword: str) -> BranchType:
    """Map a keyword or alias to its branch type.

    Matching is exact and case-sensitive; ``FEAT`` is an unknown keyword.

    Example:
        >>> canonical_branch_type("fix")
        'hotfix'
    """
    branch_type = BRANCH_TYPE_ALIASES.get(keyword)
    if branch_type is None:
        raise UnknownTypeError(
            keyword,
            ACCEPTED_KEYWORDS,
            recovery_hint="example: dflow start feat login-form",
        )
    return branch_type


def resolve_flow(config: WorkflowConfig, keyword: str) -> FlowRule:
    """Resolve the prefix and base branch for a branch-type keyword.

    Args:
        config: Loaded workflow configuration.
        keyword: Branch type keyword or alias (``feat``, ``hotfix``, ...).

    Returns:
        ``FlowRule`` with the configured prefix and base. Either may be empty
        when the configuration is incomplete; ``plan_branch`` rejects that.

    Raises:
        UnknownTypeError: ``keyword`` is not a recognized branch type.
    """
    branch_type = canonical_branch_type(keyword)
    prefix_field, base_field = _FLOW_FIELDS[branch_type]
    return FlowRule(
        branch_type=branch_type,
        prefix=getattr(config.branches, prefix_field),
        base=getattr(config.flow, base_field),
    )


def normalize_branch_name(value: str) -> str:
    """Collapse whitespace runs into single hyphens.

    Example:
        >>> normalize_branch_name("  fix  login bug ")
        'fix-login-bug'
    """
    return "-".join(value.split())


def merge_target(config: WorkflowConfig, branch_type: BranchType) -> str:
    """Return the configured merge target for a branch type, or ``""``."""
    if branch_type == "feature":
        return config.flow.feature_merge
    return ""


def plan_branch(config: WorkflowConfig, keyword: str, name: str) -> ResolvedBranchPlan:
    """Compose and validate the branch to create for ``keyword`` and ``name``.

    Raises:
        UnknownTypeError: ``keyword`` is not a recognized branch type.
        IncompleteConfigError: The prefix or base for the type is empty.
        InvalidNameError: The composed name fails validation.
    """
    rule = resolve_flow(config, keyword)
    prefix_field, base_field = _FLOW_FIELDS[rule.branch_type]
    if not rule.prefix:
        raise IncompleteConfigError(
            f"branches.{prefix_field} is not set in .dflow.yaml",
            recovery_hint="run 'dflow init' or edit .dflow.yaml",
        )
    if not rule.base:
        raise IncompleteConfigError(
            f"flow.{base_field} is not set in .dflow.yaml",
            recovery_hint="run 'dflow init' or edit .dflow.yaml",
        )
    composed = ensure_valid_branch_name(f"{rule.prefix}{normalize_branch_name(name)}")
    target = merge_target(config, rule.branch_type)
    return ResolvedBranchPlan(
        branch_type=rule.branch_type,
        prefix=rule.prefix,
        base=rule.base,
        composed_name=composed,
        merge_target=target,
        merge_mode=resolve_merge_mode(config, target or rule.base),
    )
