import logging

import pytest

from littlesearch.index_core import (
    DocumentUnavailableError,
    IndexSealedError,
    Occurrence,
    SearchIndex,
    build_index,
    insert_last_occurrence,
    load_keywords,
)

NOISE = frozenset({"the", "is"})


def _occs(*freqs):
    return [Occurrence(f"d{i}", f) for i, f in enumerate(freqs)]


def _freqs(occs):
    return [o.frequency for o in occs]


# ---------------------------
# insert_last_occurrence
# ---------------------------

def test_insert_into_middle():
    occs = _occs(12, 8, 7, 5, 3, 2, 6)
    mids = insert_last_occurrence(occs)
    assert mids == [2, 4, 3]
    assert _freqs(occs) == [12, 8, 7, 6, 5, 3, 2]
    assert occs[3].document == "d6"


def test_insert_smallest_stays_last():
    occs = _occs(12, 8, 7, 5, 3, 2, 1)
    mids = insert_last_occurrence(occs)
    assert mids == [2, 4, 5]
    assert [o.document for o in occs] == ["d0", "d1", "d2", "d3", "d4", "d5", "d6"]


def test_insert_largest_goes_first():
    occs = _occs(5, 4, 9)
    insert_last_occurrence(occs)
    assert _freqs(occs) == [9, 5, 4]
    assert occs[0].document == "d2"


def test_insert_equal_lands_next_to_match():
    occs = _occs(5, 3, 3, 1, 3)
    mids = insert_last_occurrence(occs)
    assert mids == [1]
    assert _freqs(occs) == [5, 3, 3, 3, 1]
    assert [o.document for o in occs] == ["d0", "d1", "d4", "d2", "d3"]


def test_insert_single_element_returns_none():
    occs = _occs(4)
    assert insert_last_occurrence(occs) is None
    assert _freqs(occs) == [4]


def test_insert_keeps_relative_order_of_others():
    base = _occs(9, 9, 7, 4, 4, 4, 2, 1)
    for freq in range(0, 11):
        occs = list(base) + [Occurrence("new", freq)]
        insert_last_occurrence(occs)
        assert len(occs) == len(base) + 1
        assert _freqs(occs) == sorted(_freqs(occs), reverse=True)
        assert [o for o in occs if o.document != "new"] == base


def test_occurrence_str():
    assert str(Occurrence("doc.txt", 3)) == "(doc.txt,3)"


# ---------------------------
# load_keywords / merge
# ---------------------------

def test_load_keywords_counts_per_document():
    kws = load_keywords("D2", "A cat is a cat!", NOISE)
    assert kws == {"a": Occurrence("D2", 2), "cat": Occurrence("D2", 2)}


def test_load_keywords_skips_noise_and_invalid_tokens():
    kws = load_keywords("D1", "The cat sat on the mat.\nroom 101 wor#d", NOISE)
    assert set(kws) == {"cat", "sat", "on", "mat", "room"}
    assert all(o.frequency == 1 for o in kws.values())


def test_merge_creates_and_inserts():
    index = SearchIndex()
    index.merge_keywords({"cat": Occurrence("D1", 1)})
    index.merge_keywords({"cat": Occurrence("D2", 2)})
    index.merge_keywords({"cat": Occurrence("D3", 1), "dog": Occurrence("D3", 4)})
    assert [str(o) for o in index.occurrences("cat")] == ["(D2,2)", "(D1,1)", "(D3,1)"]
    assert index.occurrences("dog") == [Occurrence("D3", 4)]
    assert index.occurrences("bird") == []
    assert "cat" in index and "bird" not in index
    assert len(index) == 2


# ---------------------------
# build_index
# ---------------------------

def test_build_index_example_corpus():
    docs = [("D1", "The cat sat on the mat."), ("D2", "A cat is a cat!")]
    index = build_index(docs, NOISE)
    assert index.occurrences("cat") == [Occurrence("D2", 2), Occurrence("D1", 1)]
    assert index.occurrences("mat") == [Occurrence("D1", 1)]
    assert index.occurrences("a") == [Occurrence("D2", 2)]
    assert "the" not in index
    assert index.documents == ["D1", "D2"]
    assert index.sealed


def test_build_index_lists_stay_sorted():
    docs = [
        ("d1", "apple apple banana"),
        ("d2", "apple"),
        ("d3", "apple apple apple banana banana"),
        ("d4", "banana banana banana banana apple apple"),
        ("d5", "apple apple"),
    ]
    index = build_index(docs)
    for occs in index.keywords.values():
        assert _freqs(occs) == sorted(_freqs(occs), reverse=True)
        names = [o.document for o in occs]
        assert len(names) == len(set(names))
    assert _freqs(index.occurrences("apple")) == [3, 2, 2, 2, 1]


def test_build_index_unavailable_document_fails():
    docs = [("ok.txt", "hello world"), ("missing.txt", None), ("later.txt", "more")]
    with pytest.raises(DocumentUnavailableError) as excinfo:
        build_index(docs)
    assert excinfo.value.document == "missing.txt"
    assert isinstance(excinfo.value, FileNotFoundError)


def test_build_index_skip_unavailable(caplog):
    docs = [("ok.txt", "hello world"), ("missing.txt", None)]
    with caplog.at_level(logging.WARNING, logger="littlesearch.index_core"):
        index = build_index(docs, skip_unavailable=True)
    assert index.documents == ["ok.txt"]
    assert "missing.txt" in caplog.text


def test_build_index_duplicate_name_indexed_once():
    index = build_index([("d1", "cat cat"), ("d1", "cat")])
    assert index.occurrences("cat") == [Occurrence("d1", 2)]
    assert index.documents == ["d1"]


def test_sealed_index_rejects_merge():
    index = build_index([("d1", "cat")])
    with pytest.raises(IndexSealedError):
        index.merge_keywords({"dog": Occurrence("d2", 1)})


def test_build_index_empty_corpus():
    index = build_index([])
    assert len(index) == 0
    assert index.sealed


def test_build_index_mixed_case_noise_words():
    index = build_index([("D1", "The cat")], frozenset({"The"}))
    assert "the" not in index
    assert index.occurrences("cat") == [Occurrence("D1", 1)]


def test_unreadable_entry_does_not_shadow_later_readable_copy():
    docs = [("d1", None), ("d1", "cat cat"), ("d1", "cat")]
    index = build_index(docs, skip_unavailable=True)
    assert index.documents == ["d1"]
    assert index.occurrences("cat") == [Occurrence("d1", 2)]
