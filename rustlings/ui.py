"""Coloured status lines printed to the terminal."""

from __future__ import annotations

import os
import sys

from rich.console import Console
from rich.text import Text

_WARN_SYMBOL = "⚠️ "
_WARN_FALLBACK = "!"
_SUCCESS_SYMBOL = "✅"
_SUCCESS_FALLBACK = "✓"


def no_emoji() -> bool:
    """Return True when the NO_EMOJI environment variable is set."""
    return "NO_EMOJI" in os.environ


def _emit(symbol: str, fallback: str, message: str, style: str) -> str:
    prefix = fallback if no_emoji() else symbol
    line = f"{prefix} {message}"
    console = Console(file=sys.stdout, highlight=False)
    console.print(Text(line, style=style), soft_wrap=True)
    return line


def warn(message: str) -> str:
    """Print a red warning line and return its plain text."""
    return _emit(_WARN_SYMBOL, _WARN_FALLBACK, message, "red")


def success(message: str) -> str:
    """Print a green success line and return its plain text."""
    return _emit(_SUCCESS_SYMBOL, _SUCCESS_FALLBACK, message, "green")