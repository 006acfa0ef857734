"""Color helpers for terminal output.

- Color only when the stream is a TTY, unless FORCE_COLOR=1.
- NO_COLOR disables color entirely.
"""
from __future__ import annotations

import os
from typing import TextIO

RESET = "\033[0m"
GREEN = "\033[32m"
YELLOW = "\033[33m"

DONE_COLOR = GREEN
PENDING_COLOR = YELLOW


def color_enabled(stream: TextIO) -> bool:
    if os.environ.get("NO_COLOR") is not None:
        return False
    if os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}:
        return True
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def color(text: str, style: str, enabled: bool = True) -> str:
    """Wrap text in an ANSI style when enabled."""
    if not enabled:
        return text
    return style + text + RESET
