"""Configuration loading utilities for the search server."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from indexer import DocumentStatus
from tokenizer import split_into_words


@dataclass(frozen=True)
class SeedDocument:
    """Document indexed at startup."""

    document_id: int
    text: str
    status: DocumentStatus = DocumentStatus.ACTUAL
    ratings: list[int] = field(default_factory=list)


@dataclass(frozen=True)
class AppConfig:
    """Application configuration loaded from YAML."""

    stop_words: list[str] = field(default_factory=list)
    documents: list[SeedDocument] = field(default_factory=list)
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"


def load_config(config_path: Path) -> AppConfig:
    """Load and validate configuration from a YAML file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as file:
        raw: dict[str, Any] = yaml.safe_load(file) or {}

    stop_words_raw = raw.get("stop_words", [])
    if isinstance(stop_words_raw, str):
        stop_words = split_into_words(stop_words_raw)
    elif isinstance(stop_words_raw, list) and all(isinstance(word, str) for word in stop_words_raw):
        stop_words = list(stop_words_raw)
    else:
        raise ValueError("'stop_words' must be a string or a list of strings")
    stop_words = [word for word in stop_words if word]

    documents_raw = raw.get("documents", [])
    if not isinstance(documents_raw, list):
        raise ValueError("'documents' must be a list in config.yml")
    documents = [_parse_document(value) for value in documents_raw]

    host = raw.get("host", "127.0.0.1")
    port = raw.get("port", 8000)
    log_level = raw.get("log_level", "INFO")

    if not isinstance(host, str) or not host:
        raise ValueError("'host' must be a non-empty string")
    if not isinstance(port, int) or isinstance(port, bool) or not (1 <= port <= 65535):
        raise ValueError("'port' must be an integer between 1 and 65535")
    if not isinstance(log_level, str) or not isinstance(
        logging.getLevelName(log_level.upper()), int
    ):
        raise ValueError("'log_level' must be a standard logging level name")

    return AppConfig(
        stop_words=stop_words,
        documents=documents,
        host=host,
        port=port,
        log_level=log_level.upper(),
    )


def _parse_document(value: Any) -> SeedDocument:
    if not isinstance(value, dict):
        raise ValueError("Each entry in 'documents' must be a mapping")

    document_id = value.get("id")
    text = value.get("text")
    status_raw = value.get("status", DocumentStatus.ACTUAL.value)
    ratings = value.get("ratings", [])

    if not isinstance(document_id, int) or isinstance(document_id, bool):
        raise ValueError("Document 'id' must be an integer")
    if not isinstance(text, str):
        raise ValueError(f"Document {document_id}: 'text' must be a string")
    if not isinstance(status_raw, str) or status_raw.upper() not in DocumentStatus.__members__:
        raise ValueError(f"Document {document_id}: unknown 'status' {status_raw!r}")
    if not isinstance(ratings, list) or not all(
        isinstance(rating, int) and not isinstance(rating, bool) for rating in ratings
    ):
        raise ValueError(f"Document {document_id}: 'ratings' must be a list of integers")

    return SeedDocument(
        document_id=document_id,
        text=text,
        status=DocumentStatus[status_raw.upper()],
        ratings=ratings,
    )
