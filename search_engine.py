"""TF-IDF search engine with plus/minus word semantics."""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Callable

from indexer import DocumentStatus, IndexData
from query_parser import Query, parse_query
from tokenizer import is_valid_word

MAX_RESULT_DOCUMENT_COUNT = 5
RELEVANCE_EPSILON = 1e-6

DocumentPredicate = Callable[[int, DocumentStatus, int], bool]


@dataclass(frozen=True)
class Document:
    """Single search result."""

    id: int
    relevance: float
    rating: int


def status_predicate(status: DocumentStatus) -> DocumentPredicate:
    """Build a predicate accepting only documents with the given status."""

    def predicate(_document_id: int, document_status: DocumentStatus, _rating: int) -> bool:
        return document_status == status

    return predicate


def rank_documents(documents: list[Document]) -> list[Document]:
    """Order by relevance, falling back to rating for near-equal relevance, and cap the list."""
    ranked = sorted(documents, key=cmp_to_key(_compare_documents))
    return ranked[:MAX_RESULT_DOCUMENT_COUNT]


class SearchEngine:
    """Answers queries against an index built by ``Indexer``."""

    def __init__(self, index_data: IndexData) -> None:
        self._index_data = index_data

    def find_top_documents(
        self,
        raw_query: str,
        predicate: DocumentPredicate | DocumentStatus | None = None,
    ) -> list[Document] | None:
        """Return the best matches, or None when the query is malformed.

        Without a predicate only ACTUAL documents are considered; a status
        restricts results to that status; a callable receives
        ``(document_id, status, rating)`` and decides per document.
        """
        query = self._parse(raw_query)
        if query is None:
            return None

        if predicate is None:
            predicate = DocumentStatus.ACTUAL
        if isinstance(predicate, DocumentStatus):
            predicate = status_predicate(predicate)

        return rank_documents(self.find_all_documents(query, predicate))

    def match_document(
        self, raw_query: str, document_id: int
    ) -> tuple[list[str], DocumentStatus] | None:
        """Return the plus words found in a document together with its status.

        The word list is empty when the document contains any minus word.
        ``document_id`` must already be indexed; an unknown id raises KeyError.
        """
        query = self._parse(raw_query)
        if query is None:
            return None

        status = self._index_data.documents[document_id].status
        word_to_document_freqs = self._index_data.word_to_document_freqs

        for word in query.minus_words:
            if document_id in word_to_document_freqs.get(word, ()):
                return [], status

        matched_words = [
            word
            for word in sorted(query.plus_words)
            if document_id in word_to_document_freqs.get(word, ())
        ]
        return matched_words, status

    def find_all_documents(self, query: Query, predicate: DocumentPredicate) -> list[Document]:
        """Score every document that passes ``predicate`` and holds no minus word."""
        documents = self._index_data.documents
        word_to_document_freqs = self._index_data.word_to_document_freqs
        document_to_relevance: dict[int, float] = {}

        for word in sorted(query.plus_words):
            freqs = word_to_document_freqs.get(word)
            if freqs is None:
                continue

            inverse_document_freq = self._compute_word_inverse_document_freq(word)
            for document_id, term_freq in freqs.items():
                record = documents[document_id]
                if predicate(document_id, record.status, record.rating):
                    document_to_relevance[document_id] = (
                        document_to_relevance.get(document_id, 0.0)
                        + term_freq * inverse_document_freq
                    )

        for word in query.minus_words:
            for document_id in word_to_document_freqs.get(word, ()):
                document_to_relevance.pop(document_id, None)

        return [
            Document(
                id=document_id,
                relevance=relevance,
                rating=documents[document_id].rating,
            )
            for document_id, relevance in sorted(document_to_relevance.items())
        ]

    def _parse(self, raw_query: str) -> Query | None:
        if not is_valid_word(raw_query):
            return None
        return parse_query(raw_query, self._index_data.stop_words)

    def _compute_word_inverse_document_freq(self, word: str) -> float:
        document_count = len(self._index_data.documents)
        return math.log(document_count / len(self._index_data.word_to_document_freqs[word]))


def _compare_documents(lhs: Document, rhs: Document) -> int:
    if abs(lhs.relevance - rhs.relevance) < RELEVANCE_EPSILON:
        return rhs.rating - lhs.rating
    return -1 if lhs.relevance > rhs.relevance else 1
