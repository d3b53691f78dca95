"""Демонстрация работы поискового сервера без запуска HTTP-сервера."""

from __future__ import annotations

import logging

from indexer import DocumentStatus
from search_engine import Document
from search_server import SearchServer

LOGGER = logging.getLogger("search_server.demo")


def print_document(document: Document) -> None:
    print(
        f"{{ document_id = {document.id}, "
        f"relevance = {document.relevance:g}, "
        f"rating = {document.rating} }}"
    )


def run_demo() -> None:
    """Индексирует несколько документов и выполняет некорректный запрос."""
    search_server = SearchServer("и в на", logger=LOGGER)

    search_server.add_document(1, "пушистый кот пушистый хвост", DocumentStatus.ACTUAL, [7, 2, 7])
    if not search_server.add_document(
        1, "пушистый пёс и модный ошейник", DocumentStatus.ACTUAL, [1, 2]
    ):
        print("Документ не был добавлен, так как его id совпадает с уже имеющимся")
    if not search_server.add_document(
        -1, "пушистый пёс и модный ошейник", DocumentStatus.ACTUAL, [1, 2]
    ):
        print("Документ не был добавлен, так как его id отрицательный")
    if not search_server.add_document(
        3, "большой пёс скво\x12рец", DocumentStatus.ACTUAL, [1, 3, 2]
    ):
        print("Документ не был добавлен, так как содержит спецсимволы")

    documents = search_server.find_top_documents("--пушистый")
    if documents is None:
        print("Ошибка в поисковом запросе")
        return
    for document in documents:
        print_document(document)


def main() -> None:
    """Точка входа демонстрационного режима."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run_demo()


if __name__ == "__main__":
    main()
