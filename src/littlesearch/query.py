"""
Query processing for "kw1 OR kw2" searches.

Results are document names in descending order of keyword frequency, at most
MAX_RESULTS of them, each name once. On equal frequencies the document found
through the first keyword comes first.
"""

from __future__ import annotations

from typing import List

from .index_core import Occurrence, SearchIndex

MAX_RESULTS = 5


def _norm(term: str) -> str:
    """Normalize query terms (lowercase)."""
    return term.lower()


def _take(result: List[str], occ: Occurrence) -> None:
    if occ.document not in result:
        result.append(occ.document)


def top5_search(index: SearchIndex, kw1: str, kw2: str, limit: int = MAX_RESULTS) -> List[str]:
    """
    Return up to `limit` names of documents in which kw1 or kw2 occurs.

    An empty list means no document matched. A keyword missing from the
    index simply contributes nothing.

    `limit` may lower the cap below MAX_RESULTS but never raise it; a value
    below 1 is a ValueError.
    """
    if limit < 1:
        raise ValueError(f"limit must be at least 1, got {limit}")
    limit = min(limit, MAX_RESULTS)

    kw1, kw2 = _norm(kw1), _norm(kw2)
    first = index.occurrences(kw1)
    second = index.occurrences(kw2)

    if not first and not second:
        return []
    if not first or not second:
        only = first or second
        return [occ.document for occ in only[:limit]]

    result: List[str] = []
    i = j = 0
    while len(result) < limit and i < len(first) and j < len(second):
        if first[i].frequency >= second[j].frequency:
            _take(result, first[i])
            i += 1
        else:
            _take(result, second[j])
            j += 1

    # one side is exhausted: drain the other
    while len(result) < limit and i < len(first):
        _take(result, first[i])
        i += 1
    while len(result) < limit and j < len(second):
        _take(result, second[j])
        j += 1
    return result
