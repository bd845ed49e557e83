"""Implementation for the ``dflow init`` command.

``dflow init`` asks for the main, develop and UAT branch names and the merge
policy, writes ``.dflow.yaml`` to the project root, makes sure the base
branches exist locally and optionally publishes them.
"""

from __future__ import annotations

from .. import config, log
from ..io import checkbox, confirm, prompt, say, select
from ..models import MergeMode
from ..services import InitializeWorkflowRequest, InitializeWorkflowService
from ..validation import validate_branch_name
from .resolve import resolve_repository

MERGE_MODE_CHOICES = {
    "manual (via Pull Requests)": "manual",
    "auto (direct merge from CLI)": "auto",
}


def _branch_name_problem(value: str) -> str | None:
    valid, reason = validate_branch_name(value)
    return None if valid else reason


def _ask_branch(label: str, default: str) -> str:
    return prompt(label, default=default, required=True, validate=_branch_name_problem)


def _ask_merge_mode() -> MergeMode:
    say("")
    say("dflow supports two merge modes:")
    say("  - manual: you open Pull Requests and merge via your platform (e.g. GitHub, GitLab).")
    say("  - auto: dflow merges branches directly using git commands (no PRs needed).")
    labels = list(MERGE_MODE_CHOICES)
    choice = select(
        "How do you manage merges by default in this project?",
        labels,
        default=labels[0],
    )
    return "auto" if MERGE_MODE_CHOICES[choice] == "auto" else "manual"


def _confirm_push(branches: tuple[str, ...]) -> bool:
    return confirm(
        f"Do you want to push the base branches ({', '.join(branches)}) to 'origin'?",
        default=True,
    )


def init_workflow(args: object) -> None:
    """Initialize the dflow branching configuration for the current repository.

    Args:
        args: CLI argument object with ``push`` (``True``/``False`` or
            ``None`` to ask) and ``yes`` (overwrite an existing config
            without asking).

    Example:
        $ dflow init
    """
    push = getattr(args, "push", None)
    yes = bool(getattr(args, "yes", False))

    project_dir, gateway = resolve_repository()
    if config.config_exists(project_dir) and not yes:
        if not confirm("A .dflow.yaml already exists. Overwrite it?", default=False):
            log.warning("Initialization cancelled; existing configuration kept.")
            return

    main = _ask_branch("Main branch name", "main")
    develop = _ask_branch("Development branch name", "develop")
    uat = _ask_branch("UAT branch name", "uat")
    default_mode = _ask_merge_mode()
    inverse = config.inverse_merge_mode(default_mode)
    candidates = list(dict.fromkeys([main, develop, uat]))
    exceptions = checkbox(
        f"Which branches should use '{inverse}' instead of the default '{default_mode}' mode?",
        candidates,
    )

    service = InitializeWorkflowService(gateway, confirm_push=_confirm_push)
    outcome = service(
        InitializeWorkflowRequest(
            directory=project_dir,
            main=main,
            develop=develop,
            uat=uat,
            default_merge_mode=default_mode,
            exceptions=tuple(exceptions),
            push=push,
        )
    )
    for message in outcome.messages:
        log.success(message)

    say("")
    say("Merge behavior summary:")
    say(f"   Default mode: {default_mode}")
    if exceptions:
        say(f"   Exceptions ({inverse}): {', '.join(exceptions)}")
    else:
        say("   No branch exceptions defined.")
    say("")
    log.success("dflow is ready! Use `dflow start` to begin a new branch.")
