"""Whitespace helpers shared by every extraction step."""

import re

_WHITESPACE = re.compile(r"\s+")


def clean_text(text: str | None) -> str:
    """Collapse runs of whitespace (newlines included) and trim."""
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text).strip()


def clean_lines(text: str | None) -> list[str]:
    """Split raw element text on newlines and clean every line.

    Empty lines are kept out of the result.
    """
    if not text:
        return []
    return [line for line in (clean_text(raw) for raw in text.split("\n")) if line]
