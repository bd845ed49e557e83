"""Shared project resolution helpers for commands."""

from __future__ import annotations

from pathlib import Path

from .. import config, git, paths
from ..errors import NotARepositoryError
from ..models import WorkflowConfig


def git_gateway(repo_dir: Path) -> git.GitGateway:
    """Return the gateway commands use to talk to git."""
    return git.SubprocessGitGateway(repo_dir)


def resolve_repository() -> tuple[Path, git.GitGateway]:
    """Resolve the project directory and require it to be a git work tree."""
    project_dir = paths.project_dir()
    gateway = git_gateway(project_dir)
    if not gateway.is_repository():
        raise NotARepositoryError(
            f"this is not a Git repository: {project_dir}",
            recovery_hint="run dflow from inside a git work tree",
        )
    return project_dir, gateway


def resolve_initialized_project() -> tuple[Path, WorkflowConfig, git.GitGateway]:
    """Resolve the repository plus its loaded ``.dflow.yaml``."""
    project_dir, gateway = resolve_repository()
    return project_dir, config.load_config(project_dir), gateway
