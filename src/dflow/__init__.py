"""dflow package metadata.

Exports the package version resolved from installed distribution
information.

Example:
    >>> from dflow import __version__
    >>> isinstance(__version__, str)
    True
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

__all__ = ["__version__"]

try:
    __version__ = version("dflow")
except PackageNotFoundError:  # pragma: no cover - source checkouts
    __version__ = "0.0.0"
