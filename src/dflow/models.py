"""Pydantic models for the ``.dflow.yaml`` workflow configuration."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

MERGE_MODE_VALUES = ("auto", "manual")
MergeMode = Literal["auto", "manual"]


def _none_as_empty(value: object) -> object:
    if value is None:
        return ""
    return value


class BranchesSection(BaseModel):
    """Branch names and prefixes.

    Attributes:
        main: Production branch name.
        develop: Integration branch name.
        uat: User-acceptance branch name.
        features: Prefix for feature branches.
        releases: Prefix for release branches.
        hotfixes: Prefix for hotfix branches.
        bugfixes: Prefix for bugfix branches.

    Example:
        >>> BranchesSection(main="main", features="feature/").features
        'feature/'
    """

    model_config = ConfigDict(extra="allow")

    main: str = ""
    develop: str = ""
    uat: str = ""
    features: str = ""
    releases: str = ""
    hotfixes: str = ""
    bugfixes: str = ""

    @field_validator(
        "main",
        "develop",
        "uat",
        "features",
        "releases",
        "hotfixes",
        "bugfixes",
        mode="before",
    )
    @classmethod
    def normalize_names(cls, value: object) -> object:
        return _none_as_empty(value)


class FlowSection(BaseModel):
    """Base (and merge target) branches per branch type.

    Example:
        >>> FlowSection(feature_base="uat", feature_merge="develop").feature_merge
        'develop'
    """

    model_config = ConfigDict(extra="allow")

    feature_base: str = ""
    feature_merge: str = ""
    release_base: str = ""
    hotfix_base: str = ""
    bugfix_base: str = ""

    @field_validator(
        "feature_base",
        "feature_merge",
        "release_base",
        "hotfix_base",
        "bugfix_base",
        mode="before",
    )
    @classmethod
    def normalize_names(cls, value: object) -> object:
        return _none_as_empty(value)


class WorkflowSection(BaseModel):
    """Merge policy.

    Attributes:
        default_merge_mode: ``auto`` merges from the CLI, ``manual`` expects
            pull requests.
        branch_rules: Per-branch overrides of the default merge mode.

    Example:
        >>> WorkflowSection(default_merge_mode="AUTO").default_merge_mode
        'auto'
    """

    model_config = ConfigDict(extra="allow")

    default_merge_mode: MergeMode = "manual"
    branch_rules: dict[str, MergeMode] = Field(default_factory=dict)

    @field_validator("default_merge_mode", mode="before")
    @classmethod
    def normalize_mode(cls, value: object) -> object:
        if value is None or value == "":
            return "manual"
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("branch_rules", mode="before")
    @classmethod
    def normalize_rules(cls, value: object) -> object:
        if value is None:
            return {}
        if not isinstance(value, dict):
            return value
        return {
            str(branch): mode.strip().lower() if isinstance(mode, str) else mode
            for branch, mode in value.items()
        }


class WorkflowConfig(BaseModel):
    """The whole ``.dflow.yaml`` document."""

    model_config = ConfigDict(extra="allow")

    branches: BranchesSection = Field(default_factory=BranchesSection)
    flow: FlowSection = Field(default_factory=FlowSection)
    workflow: WorkflowSection = Field(default_factory=WorkflowSection)

    @field_validator("branches", "flow", "workflow", mode="before")
    @classmethod
    def normalize_sections(cls, value: object) -> object:
        if value is None:
            return {}
        return value
