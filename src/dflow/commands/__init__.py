"""Command implementations exposed by the dflow CLI."""

from .config import get_author, list_config, set_author, show_config
from .delete import delete_branch
from .init import init_workflow
from .start import start_branch

__all__ = [
    "delete_branch",
    "get_author",
    "init_workflow",
    "list_config",
    "set_author",
    "show_config",
    "start_branch",
]
