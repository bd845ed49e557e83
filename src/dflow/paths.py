"""Path helpers for locating the dflow project directory and config file."""

import os
from pathlib import Path

CONFIG_FILENAME = ".dflow.yaml"
PROJECT_DIR_ENV = "DFLOW_CWD"


def project_dir(directory: Path | str | None = None) -> Path:
    """Return the directory holding ``.dflow.yaml``.

    Args:
        directory: Explicit directory. When omitted, ``DFLOW_CWD`` is used if
            set, otherwise the current working directory.

    Returns:
        Project directory path.

    Example:
        >>> project_dir("/repo").as_posix()
        '/repo'
    """
    if directory is not None:
        return Path(directory)
    override = os.environ.get(PROJECT_DIR_ENV, "").strip()
    if override:
        return Path(override)
    return Path.cwd()


def config_path(directory: Path | str | None = None) -> Path:
    """Return the path to ``.dflow.yaml`` for a project directory.

    Example:
        >>> config_path("/repo").as_posix()
        '/repo/.dflow.yaml'
    """
    return project_dir(directory) / CONFIG_FILENAME
