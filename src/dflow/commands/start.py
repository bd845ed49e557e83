"""Implementation for the ``dflow start`` command."""

from __future__ import annotations

from .. import log
from ..io import confirm
from ..services import StartBranchRequest, StartBranchService
from .resolve import resolve_initialized_project


def _confirm_publish(branch: str) -> bool:
    return confirm(f"Do you want to publish '{branch}' to origin?", default=True)


def start_branch(args: object) -> None:
    """Create and switch to a new feature, release, hotfix or bugfix branch.

    Args:
        args: CLI argument object with ``branch_type``, ``name`` (a list of
            words joined with spaces, then hyphenated) and ``push``
            (``True``/``False`` or ``None`` to ask).

    Example:
        $ dflow start feat login form
    """
    branch_type = str(getattr(args, "branch_type", ""))
    words = getattr(args, "name", None) or []
    name = " ".join(str(word) for word in words)
    push = getattr(args, "push", None)

    _, workflow_config, gateway = resolve_initialized_project()
    service = StartBranchService(gateway, confirm_push=_confirm_publish)
    outcome = service(
        StartBranchRequest(
            config=workflow_config, branch_type=branch_type, name=name, push=push
        )
    )
    plan = outcome.plan
    log.debug(f"Resolved {plan.branch_type} branch: prefix={plan.prefix!r} base={plan.base!r}")
    if plan.merge_target:
        log.debug(f"Merge target: {plan.merge_target} ({plan.merge_mode} merge)")
    for message in outcome.messages:
        log.success(message)
