"""Document ingestion: stop words, document store and inverted index."""

from __future__ import annotations

import bisect
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from tokenizer import is_valid_word, split_into_words

INVALID_DOCUMENT_ID = -1


class DocumentStatus(Enum):
    """Lifecycle status attached to every stored document."""

    ACTUAL = "ACTUAL"
    IRRELEVANT = "IRRELEVANT"
    BANNED = "BANNED"
    REMOVED = "REMOVED"


@dataclass(frozen=True)
class DocumentRecord:
    """Stored metadata of a single indexed document."""

    rating: int
    status: DocumentStatus


@dataclass
class IndexData:
    """Complete in-memory search index."""

    stop_words: set[str] = field(default_factory=set)
    word_to_document_freqs: dict[str, dict[int, float]] = field(default_factory=dict)
    documents: dict[int, DocumentRecord] = field(default_factory=dict)
    document_ids: list[int] = field(default_factory=list)


class Indexer:
    """Adds documents to the inverted index and keeps the stop-word set."""

    def __init__(
        self,
        stop_words: Iterable[str] | str | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._index = IndexData()
        self._logger = logger or logging.getLogger("search_server.indexer")

        if isinstance(stop_words, str):
            stop_words = split_into_words(stop_words)
        for word in stop_words or ():
            if word:
                self._index.stop_words.add(word)

    @property
    def index(self) -> IndexData:
        return self._index

    def set_stop_words(self, text: str) -> None:
        """Add every space-separated word of ``text`` to the stop-word set."""
        for word in split_into_words(text):
            self._index.stop_words.add(word)
        self._logger.debug("Stop-word set now holds %d words", len(self._index.stop_words))

    def is_stop_word(self, word: str) -> bool:
        return word in self._index.stop_words

    def add_document(
        self,
        document_id: int,
        document: str,
        status: DocumentStatus,
        ratings: list[int],
    ) -> bool:
        """Index a document. Returns False without touching the index when it is rejected."""
        if document_id < 0:
            self._logger.info("Rejected document with negative id %d", document_id)
            return False
        if document_id in self._index.documents:
            self._logger.info("Rejected document %d: id already indexed", document_id)
            return False
        if not is_valid_word(document):
            self._logger.info("Rejected document %d: text contains control characters", document_id)
            return False

        words = self._split_into_words_no_stop(document)
        if words:
            inv_word_count = 1 / len(words)
            for word in words:
                freqs = self._index.word_to_document_freqs.setdefault(word, {})
                freqs[document_id] = freqs.get(document_id, 0.0) + inv_word_count

        self._index.documents[document_id] = DocumentRecord(
            rating=_compute_average_rating(ratings),
            status=status,
        )
        bisect.insort(self._index.document_ids, document_id)

        self._logger.debug("Indexed document %d (%d words)", document_id, len(words))
        return True

    def get_document_count(self) -> int:
        return len(self._index.documents)

    def get_document_id(self, index: int) -> int:
        """Return the id at ``index`` in ascending id order, or INVALID_DOCUMENT_ID."""
        if index < 0 or index >= len(self._index.document_ids):
            return INVALID_DOCUMENT_ID
        return self._index.document_ids[index]

    def _split_into_words_no_stop(self, text: str) -> list[str]:
        return [word for word in split_into_words(text) if not self.is_stop_word(word)]


def _compute_average_rating(ratings: list[int]) -> int:
    if not ratings:
        return 0

    rating_sum = sum(ratings)
    average = abs(rating_sum) // len(ratings)
    return average if rating_sum >= 0 else -average
