"""
Text Cleaner Utility

Normalises raw document text before key-phrase extraction: anything that is
not a word character, whitespace or plain sentence punctuation becomes a
space, and whitespace runs collapse to one space.
"""

import re

_DISALLOWED = re.compile(r"[^\w\s.,!?;:()'\"]")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """
    Clean ``text`` for the heuristic preprocessor.

    Args:
        text: Raw document text

    Returns:
        Single-spaced text, or ``""`` for empty input
    """
    if not text:
        return ""
    text = _DISALLOWED.sub(" ", text)
    return _WHITESPACE.sub(" ", text).strip()
