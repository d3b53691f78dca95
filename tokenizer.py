"""Whitespace tokenization and word validation."""

from __future__ import annotations

WORD_SEPARATOR = " "
MINUS_PREFIX = "-"


def split_into_words(text: str) -> list[str]:
    """Split text on spaces, dropping empty runs between consecutive separators."""
    return [word for word in text.split(WORD_SEPARATOR) if word]


def is_valid_word(text: str) -> bool:
    """Reject a lone minus sign and any text holding a control character (U+0000..U+001F)."""
    if text == MINUS_PREFIX:
        return False

    return not any(ord(char) < 0x20 for char in text)
