"""Implementation for the ``dflow config`` commands.

Author metadata lives in the repository's local git configuration under the
``dflow`` section, separate from ``.dflow.yaml``.
"""

from __future__ import annotations

import json

from .. import git, log
from ..git import raise_for_failure
from ..io import prompt, say
from .resolve import resolve_initialized_project, resolve_repository


def set_author(args: object) -> None:
    """Store the author name and email in the local git config.

    Args:
        args: CLI argument object with optional ``name`` and ``email``;
            missing values are prompted.
    """
    _, gateway = resolve_repository()
    name = (getattr(args, "name", None) or "").strip()
    if not name:
        name = prompt("Enter author name", required=True)
    email = (getattr(args, "email", None) or "").strip()
    if not email:
        email = prompt("Enter author email", required=True)

    raise_for_failure(
        gateway.config_set(git.AUTHOR_KEY, name), f"failed to set {git.AUTHOR_KEY}"
    )
    raise_for_failure(
        gateway.config_set(git.EMAIL_KEY, email), f"failed to set {git.EMAIL_KEY}"
    )
    log.success("Author and email saved to project-local git config")


def get_author(args: object) -> None:
    """Print the stored author name and email."""
    del args
    _, gateway = resolve_repository()
    author = gateway.config_get(git.AUTHOR_KEY)
    email = gateway.config_get(git.EMAIL_KEY)
    if author is None or email is None:
        log.error("Author or email not set. Use `dflow config set-author`")
        return
    say(f"Author: {author}")
    say(f"Email: {email}")


def list_config(args: object) -> None:
    """Print every ``dflow.*`` entry of the local git config."""
    del args
    _, gateway = resolve_repository()
    entries = gateway.config_list(git.CONFIG_SECTION)
    if not entries:
        log.warning("No dflow configuration found in this project.")
        return
    for key, value in entries:
        say(f"{key} {value}")


def show_config(args: object) -> None:
    """Print the loaded ``.dflow.yaml`` as JSON."""
    del args
    _, workflow_config, _ = resolve_initialized_project()
    say(json.dumps(workflow_config.model_dump(), indent=2))
