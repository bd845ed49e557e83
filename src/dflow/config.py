"""Configuration helpers for dflow projects.

This module reads and writes the project-local ``.dflow.yaml`` file,
validates it with Pydantic models and answers merge-mode questions.

Example:
    >>> from dflow.config import resolve_merge_mode
    >>> cfg = build_workflow_config("main", "develop", "uat", "manual", ["develop"])
    >>> resolve_merge_mode(cfg, "develop"), resolve_merge_mode(cfg, "main")
    ('auto', 'manual')
"""

import os
import tempfile
from pathlib import Path
from typing import Iterable

import yaml
from pydantic import ValidationError

from . import paths
from .errors import ConfigParseError, ConfigWriteError, NotInitializedError
from .models import (
    BranchesSection,
    FlowSection,
    MergeMode,
    WorkflowConfig,
    WorkflowSection,
)

CONFIG_HEADER = """\
#
#               ██████╗ ███████╗██╗      ██████╗ ██╗    ██╗
#               ██╔══██╗██╔════╝██║     ██╔═══██╗██║    ██║
#               ██║  ██║█████╗  ██║     ██║   ██║██║ █╗ ██║
#               ██║  ██║██╔══╝  ██║     ██║   ██║██║███╗██║
#               ██████╔╝██║     ███████╗╚██████╔╝╚███╔███╔╝
#               ╚═════╝ ╚═╝     ╚══════╝ ╚═════╝  ╚══╝╚══╝
#
#            dflow config file - autogenerated by 'dflow init'
#
"""

DEFAULT_FEATURE_PREFIX = "feature/"
DEFAULT_RELEASE_PREFIX = "release/"
DEFAULT_HOTFIX_PREFIX = "hotfix/"
DEFAULT_BUGFIX_PREFIX = "bugfix/"

_INIT_HINT = "run 'dflow init' to create it"


def config_exists(directory: Path | str | None = None) -> bool:
    """Return True when ``.dflow.yaml`` exists for the project directory."""
    return paths.config_path(directory).is_file()


def parse_config(payload: object, source: Path | str | None = None) -> WorkflowConfig:
    """Validate a decoded config payload.

    Args:
        payload: Decoded YAML document. ``None`` (an empty document) yields a
            config whose fields are all empty.
        source: Optional path or label for error messages.

    Returns:
        Parsed ``WorkflowConfig``.

    Example:
        >>> parse_config({"branches": {"features": "feat/"}}).branches.features
        'feat/'
    """
    location = f" at {source}" if source else ""
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ConfigParseError(
            f"invalid dflow config{location}: expected a mapping at the top level",
            recovery_hint="run 'dflow init' to regenerate it",
        )
    try:
        return WorkflowConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigParseError(f"invalid dflow config{location}:\n{exc}") from exc


def load_config(directory: Path | str | None = None) -> WorkflowConfig:
    """Load and validate ``.dflow.yaml``.

    Args:
        directory: Project directory; see ``paths.project_dir``.

    Returns:
        Parsed ``WorkflowConfig``.

    Raises:
        NotInitializedError: The file does not exist.
        ConfigParseError: The file cannot be read or decoded into the schema.
    """
    path = paths.config_path(directory)
    if not path.is_file():
        raise NotInitializedError(
            f"dflow is not initialized in this repository ({path} not found)",
            recovery_hint=_INIT_HINT,
        )
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigParseError(f"failed to read {path}: {exc}") from exc
    try:
        payload = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigParseError(f"error parsing {path}:\n{exc}") from exc
    return parse_config(payload, path)


def render_config(config: WorkflowConfig) -> str:
    """Return the exact file content ``save_config`` writes."""
    body = yaml.safe_dump(
        config.model_dump(),
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )
    return f"{CONFIG_HEADER}\n{body}"


def save_config(config: WorkflowConfig, directory: Path | str | None = None) -> Path:
    """Write the whole config to ``.dflow.yaml``, replacing any existing file.

    The document is written to a temporary file in the same directory and
    renamed over the target.

    Args:
        config: Configuration to persist.
        directory: Project directory; see ``paths.project_dir``.

    Returns:
        Path of the written file.

    Raises:
        ConfigWriteError: The file cannot be written.
    """
    path = paths.config_path(directory)
    content = render_config(config)
    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f"{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as fh:
            temp_path = Path(fh.name)
            fh.write(content)
        os.chmod(temp_path, 0o644)
        os.replace(temp_path, path)
    except OSError as exc:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
        raise ConfigWriteError(
            f"error writing {path}: {exc}",
            recovery_hint="check the directory exists and is writable",
        ) from exc
    return path


def resolve_merge_mode(config: WorkflowConfig, branch: str) -> MergeMode:
    """Return the merge mode for ``branch``.

    Per-branch rules win; otherwise ``workflow.default_merge_mode`` applies.
    """
    rules = config.workflow.branch_rules
    if branch in rules:
        return rules[branch]
    return config.workflow.default_merge_mode


def inverse_merge_mode(mode: MergeMode) -> MergeMode:
    """Return the other merge mode.

    Example:
        >>> inverse_merge_mode("auto")
        'manual'
    """
    return "manual" if mode == "auto" else "auto"


def build_workflow_config(
    main: str,
    develop: str,
    uat: str,
    default_mode: MergeMode,
    exceptions: Iterable[str] = (),
) -> WorkflowConfig:
    """Build the configuration written by ``dflow init``.

    Features start from UAT and merge to develop, releases and bugfixes start
    from UAT, hotfixes start from main. Each exception branch gets the
    inverse of ``default_mode``.
    """
    inverse = inverse_merge_mode(default_mode)
    return WorkflowConfig(
        branches=BranchesSection(
            main=main,
            develop=develop,
            uat=uat,
            features=DEFAULT_FEATURE_PREFIX,
            releases=DEFAULT_RELEASE_PREFIX,
            hotfixes=DEFAULT_HOTFIX_PREFIX,
            bugfixes=DEFAULT_BUGFIX_PREFIX,
        ),
        flow=FlowSection(
            feature_base=uat,
            feature_merge=develop,
            release_base=uat,
            hotfix_base=main,
            bugfix_base=uat,
        ),
        workflow=WorkflowSection(
            default_merge_mode=default_mode,
            branch_rules={branch: inverse for branch in exceptions},
        ),
    )
