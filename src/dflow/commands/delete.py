"""Implementation for the ``dflow delete`` command."""

from __future__ import annotations

from .. import log, paths
from ..io import confirm
from ..services import DeleteBranchRequest, DeleteBranchService
from .resolve import git_gateway, resolve_initialized_project


def _confirm_delete(branch: str) -> bool:
    return confirm(
        f"Are you sure you want to delete branch '{branch}' locally and remotely?",
        default=False,
    )


def complete_local_branches(incomplete: str) -> list[str]:
    """Shell-completion source: local branch names starting with ``incomplete``."""
    branches = git_gateway(paths.project_dir()).list_local_branch_names()
    return [branch for branch in branches if branch.startswith(incomplete)]


def delete_branch(args: object) -> None:
    """Delete a branch locally and on origin after confirmation.

    Args:
        args: CLI argument object with ``branch`` and ``yes``.
    """
    branch = str(getattr(args, "branch", ""))
    yes = bool(getattr(args, "yes", False))

    _, _, gateway = resolve_initialized_project()
    service = DeleteBranchService(gateway, confirm_delete=_confirm_delete)
    outcome = service(DeleteBranchRequest(branch=branch, yes=yes))
    if not outcome.confirmed:
        for message in outcome.messages:
            log.warning(message)
        return
    for message in outcome.messages:
        log.info(message)
    log.success(f"Branch '{outcome.branch}' deleted locally and remotely (if existed).")
