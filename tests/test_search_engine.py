import math

import pytest

from indexer import DocumentStatus, Indexer
from query_parser import Query
from search_engine import (
    MAX_RESULT_DOCUMENT_COUNT,
    Document,
    SearchEngine,
    rank_documents,
    status_predicate,
)


def _build_engine() -> SearchEngine:
    indexer = Indexer("и в на")
    indexer.add_document(0, "белый кот и модный ошейник", DocumentStatus.ACTUAL, [8, -3])
    indexer.add_document(1, "пушистый кот пушистый хвост", DocumentStatus.ACTUAL, [7, 2, 7])
    indexer.add_document(2, "ухоженный пёс выразительные глаза", DocumentStatus.ACTUAL, [5, -12, 2, 1])
    indexer.add_document(3, "ухоженный скворец евгений", DocumentStatus.BANNED, [9])
    return SearchEngine(indexer.index)


def test_find_top_documents_ranks_by_relevance() -> None:
    engine = _build_engine()

    results = engine.find_top_documents("пушистый ухоженный кот")

    assert [document.id for document in results] == [1, 0, 2]
    assert results[0].relevance == pytest.approx(
        0.5 * math.log(4 / 1) + 0.25 * math.log(4 / 2)
    )
    assert results[0].rating == 5


def test_find_top_documents_by_status() -> None:
    engine = _build_engine()

    results = engine.find_top_documents("пушистый ухоженный кот", DocumentStatus.BANNED)

    assert [document.id for document in results] == [3]


def test_find_top_documents_with_predicate() -> None:
    engine = _build_engine()

    results = engine.find_top_documents(
        "пушистый ухоженный кот",
        lambda document_id, _status, _rating: document_id % 2 == 0,
    )

    assert [document.id for document in results] == [0, 2]


def test_find_top_documents_minus_word_excludes_document() -> None:
    engine = _build_engine()

    results = engine.find_top_documents("пушистый кот -хвост")

    assert [document.id for document in results] == [0]


def test_find_top_documents_unknown_words_give_empty_list() -> None:
    engine = _build_engine()

    assert engine.find_top_documents("гамма -дельта") == []
    assert engine.find_top_documents("") == []


def test_find_top_documents_invalid_query_returns_none() -> None:
    engine = _build_engine()

    assert engine.find_top_documents("--пушистый") is None
    assert engine.find_top_documents("кот -") is None
    assert engine.find_top_documents("-") is None
    assert engine.find_top_documents("ко\x12т") is None


def test_find_top_documents_caps_result_count() -> None:
    indexer = Indexer()
    for document_id in range(8):
        indexer.add_document(document_id, f"кот номер{document_id}", DocumentStatus.ACTUAL, [])
    indexer.add_document(8, "пёс", DocumentStatus.ACTUAL, [])
    engine = SearchEngine(indexer.index)

    results = engine.find_top_documents("кот")

    assert len(results) == MAX_RESULT_DOCUMENT_COUNT


def test_find_all_documents_applies_predicate_before_scoring() -> None:
    engine = _build_engine()

    results = engine.find_all_documents(
        Query(plus_words={"кот"}),
        status_predicate(DocumentStatus.ACTUAL),
    )

    assert [document.id for document in results] == [0, 1]
    assert results[0].relevance == pytest.approx(0.25 * math.log(2))


def test_find_all_documents_sums_words_in_sorted_order() -> None:
    words = [f"слово{index:02d}" for index in range(25)]
    indexer = Indexer()
    for document_id in range(30):
        text = " ".join(words[(document_id * 7 + offset) % 25] for offset in range(document_id % 9 + 3))
        indexer.add_document(document_id, f"{text} шум{document_id}", DocumentStatus.ACTUAL, [])
    index = indexer.index
    engine = SearchEngine(index)

    results = engine.find_all_documents(
        Query(plus_words=set(reversed(words))),
        status_predicate(DocumentStatus.ACTUAL),
    )

    expected: dict[int, float] = {}
    for word in sorted(words):
        freqs = index.word_to_document_freqs[word]
        idf = math.log(len(index.documents) / len(freqs))
        for document_id, term_freq in freqs.items():
            expected[document_id] = expected.get(document_id, 0.0) + term_freq * idf

    assert {document.id: document.relevance for document in results} == expected


def test_rank_documents_breaks_near_ties_by_rating() -> None:
    documents = [
        Document(id=1, relevance=0.5, rating=1),
        Document(id=2, relevance=0.5 + 1e-7, rating=9),
        Document(id=3, relevance=0.9, rating=-4),
        Document(id=4, relevance=0.1, rating=100),
    ]

    ranked = rank_documents(documents)

    assert [document.id for document in ranked] == [3, 2, 1, 4]


def test_rank_documents_truncates() -> None:
    documents = [Document(id=index, relevance=index / 10, rating=0) for index in range(7)]

    ranked = rank_documents(documents)

    assert [document.id for document in ranked] == [6, 5, 4, 3, 2]


def test_match_document_returns_plus_words_and_status() -> None:
    engine = _build_engine()

    assert engine.match_document("хвост кот пёс", 1) == (["кот", "хвост"], DocumentStatus.ACTUAL)
    assert engine.match_document("скворец", 3) == (["скворец"], DocumentStatus.BANNED)


def test_match_document_minus_word_clears_matches() -> None:
    engine = _build_engine()

    assert engine.match_document("пушистый кот -хвост", 1) == ([], DocumentStatus.ACTUAL)


def test_match_document_invalid_query_returns_none() -> None:
    engine = _build_engine()

    assert engine.match_document("--кот", 1) is None


def test_match_document_unknown_id_raises() -> None:
    engine = _build_engine()

    with pytest.raises(KeyError):
        engine.match_document("кот", 42)
