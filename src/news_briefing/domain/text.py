"""Text shaping for slides: whitespace/quote cleanup and greedy word wrap."""

import re
from typing import List

_WHITESPACE = re.compile(r"\s+")
_DOUBLE_QUOTES = re.compile(r"[\"“”]")


def sanitize_text(text: str) -> str:
    """Collapse whitespace runs, turn double quotes into apostrophes, trim."""
    text = _WHITESPACE.sub(" ", text or "")
    return _DOUBLE_QUOTES.sub("'", text).strip()


def wrap_text(text: str, max_chars_per_line: int) -> List[str]:
    """
    Greedy word wrap.

    Words are never split: a word longer than ``max_chars_per_line`` ends up
    alone on its own line. Joining the result with single spaces gives back
    the whitespace-normalized input.
    """
    lines: List[str] = []
    current = ""
    for word in (text or "").split():
        candidate = f"{current} {word}" if current else word
        if len(candidate) > max_chars_per_line and current:
            lines.append(current)
            current = word
        else:
            current = candidate
    if current:
        lines.append(current)
    return lines
