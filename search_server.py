"""Public search server combining ingestion and retrieval."""

from __future__ import annotations

import logging
from typing import Iterable

from indexer import INVALID_DOCUMENT_ID, DocumentStatus, Indexer
from search_engine import Document, DocumentPredicate, SearchEngine


class SearchServer:
    """In-memory document index answering ranked TF-IDF queries.

    Not synchronized: callers sharing an instance between threads must hold
    their own lock around every call.
    """

    INVALID_DOCUMENT_ID = INVALID_DOCUMENT_ID

    def __init__(
        self,
        stop_words: Iterable[str] | str | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._indexer = Indexer(stop_words, logger=logger)
        self._engine = SearchEngine(self._indexer.index)

    def set_stop_words(self, text: str) -> None:
        self._indexer.set_stop_words(text)

    def add_document(
        self,
        document_id: int,
        document: str,
        status: DocumentStatus = DocumentStatus.ACTUAL,
        ratings: list[int] | None = None,
    ) -> bool:
        return self._indexer.add_document(document_id, document, status, ratings or [])

    def find_top_documents(
        self,
        raw_query: str,
        predicate: DocumentPredicate | DocumentStatus | None = None,
    ) -> list[Document] | None:
        return self._engine.find_top_documents(raw_query, predicate)

    def match_document(
        self, raw_query: str, document_id: int
    ) -> tuple[list[str], DocumentStatus] | None:
        return self._engine.match_document(raw_query, document_id)

    def get_document_count(self) -> int:
        return self._indexer.get_document_count()

    def get_document_id(self, index: int) -> int:
        return self._indexer.get_document_id(index)

    def has_document(self, document_id: int) -> bool:
        return document_id in self._indexer.index.documents
