"""Leveled terminal output for dflow commands.

Success, warning and error lines carry a short marker so they stand out in
plain (uncoloured) terminals. Warnings and errors go to stderr.
"""

from __future__ import annotations

import os
import sys
from enum import IntEnum
from typing import NamedTuple

from rich.console import Console
from rich.text import Text


class LogLevel(IntEnum):
    TRACE = 10
    DEBUG = 20
    INFO = 30
    SUCCESS = 35
    WARNING = 40
    ERROR = 50


class _Presentation(NamedTuple):
    style: str
    marker: str
    stderr: bool


_PRESENTATION = {
    LogLevel.TRACE: _Presentation("dim", "", False),
    LogLevel.DEBUG: _Presentation("cyan", "", False),
    LogLevel.INFO: _Presentation("", "", False),
    LogLevel.SUCCESS: _Presentation("green", "✔ ", False),
    LogLevel.WARNING: _Presentation("yellow", "! ", True),
    LogLevel.ERROR: _Presentation("bold red", "✖ ", True),
}

LEVEL_NAMES = tuple(level.name.lower() for level in LogLevel)
LEVEL_ENV = "DFLOW_LOG_LEVEL"
_DEFAULT_LEVEL = LogLevel.INFO

_configured_level: LogLevel | None = None
_no_color_override: bool | None = None


def _normalize_level(value: str | None) -> LogLevel:
    normalized = (value or "").strip().upper()
    if normalized == "WARN":
        normalized = "WARNING"
    return LogLevel.__members__.get(normalized, _DEFAULT_LEVEL)


def configured_level() -> LogLevel:
    """Return the active level, reading ``DFLOW_LOG_LEVEL`` on first use."""
    global _configured_level
    if _configured_level is None:
        _configured_level = _normalize_level(os.environ.get(LEVEL_ENV))
    return _configured_level


def set_level(value: str | None) -> None:
    global _configured_level
    _configured_level = _normalize_level(value)


def set_no_color(value: bool) -> None:
    """Force colour off (``True``) or defer to the environment (``False``)."""
    global _no_color_override
    _no_color_override = True if value else None


def color_disabled() -> bool:
    if _no_color_override is not None:
        return _no_color_override
    return bool(os.environ.get("NO_COLOR") or os.environ.get("DFLOW_NO_COLOR"))


def is_enabled(level: LogLevel) -> bool:
    return level >= configured_level()


def emit(
    level: LogLevel,
    message: str,
    *,
    style: str | None = None,
    stderr: bool | None = None,
    marker: bool = True,
) -> None:
    if not is_enabled(level):
        return
    presentation = _PRESENTATION[level]
    prefix = presentation.marker if marker else ""
    console = Console(
        file=sys.stderr if (presentation.stderr if stderr is None else stderr) else sys.stdout,
        soft_wrap=True,
        highlight=False,
        no_color=color_disabled(),
    )
    console.print(Text(f"{prefix}{message}", style=style or presentation.style))


def trace(message: str) -> None:
    emit(LogLevel.TRACE, message)


def debug(message: str) -> None:
    emit(LogLevel.DEBUG, message)


def info(message: str) -> None:
    emit(LogLevel.INFO, message)


def success(message: str) -> None:
    emit(LogLevel.SUCCESS, message)


def warning(message: str) -> None:
    emit(LogLevel.WARNING, message)


def error(message: str) -> None:
    emit(LogLevel.ERROR, message)


def banner(text: str) -> None:
    """Print the startup banner to stderr; hidden above the info level."""
    emit(LogLevel.INFO, text, style="bold magenta", stderr=True, marker=False)
