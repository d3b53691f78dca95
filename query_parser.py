"""Parsing of raw search queries into plus and minus words."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Container

from tokenizer import MINUS_PREFIX, is_valid_word, split_into_words


@dataclass(frozen=True)
class QueryWord:
    """One parsed query word."""

    data: str
    is_minus: bool
    is_stop: bool


@dataclass
class Query:
    """Deduplicated words a document must contain (plus) or must not contain (minus)."""

    plus_words: set[str] = field(default_factory=set)
    minus_words: set[str] = field(default_factory=set)


def parse_query_word(text: str, stop_words: Container[str]) -> QueryWord | None:
    """Classify a single query word. Returns None for a malformed word."""
    if not is_valid_word(text):
        return None

    is_minus = False
    if text.startswith(MINUS_PREFIX):
        text = text[len(MINUS_PREFIX):]
        if text.startswith(MINUS_PREFIX):
            return None
        is_minus = True

    return QueryWord(data=text, is_minus=is_minus, is_stop=text in stop_words)


def parse_query(text: str, stop_words: Container[str]) -> Query | None:
    """Parse a raw query. Any malformed word invalidates the whole query."""
    result = Query()

    for word in split_into_words(text):
        query_word = parse_query_word(word, stop_words)
        if query_word is None:
            return None

        if query_word.is_stop:
            continue
        if query_word.is_minus:
            result.minus_words.add(query_word.data)
        else:
            result.plus_words.add(query_word.data)

    return result
