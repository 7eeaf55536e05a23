"""
Core indexing logic: keyword occurrences and the master index

Implements:
- Per-document scan: whitespace tokens -> keywords -> {keyword: Occurrence}
- Merge of one document's keywords into the master index
- Binary-search insertion keeping every occurrence list in descending
  order of frequency
- build_index(): the whole corpus, one document at a time

The master index is sealed once build_index() returns; queries only read it
(see query.py).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import AbstractSet, Dict, Iterable, List, MutableSequence, Optional, Tuple

from .keywords import noise_word_set, normalize_keyword

logger = logging.getLogger(__name__)


# ---------------------------
# Errors
# ---------------------------

class DocumentUnavailableError(FileNotFoundError):
    """A document named in the corpus could not be read."""
    def __init__(self, document: str, reason: str = "document unavailable"):
        super().__init__(f"{reason}: {document!r}")
        self.document = document


class IndexSealedError(RuntimeError):
    """Raised when merging into an index that has already been built."""


# ---------------------------
# Inverted Index Data Classes
# ---------------------------

@dataclass
class Occurrence:
    """A document and how many times a keyword occurs in it."""
    document: str
    frequency: int = 1

    def __str__(self) -> str:
        return f"({self.document},{self.frequency})"


class SearchIndex:
    """Master index: keyword -> occurrences in descending frequency."""
    def __init__(self):
        self.keywords: Dict[str, List[Occurrence]] = {}   # keyword -> [Occurrence]
        self.documents: List[str] = []                    # names in indexing order
        self.sealed: bool = False

    def occurrences(self, keyword: str) -> List[Occurrence]:
        """Return the occurrence list for a keyword, or an empty list."""
        return self.keywords.get(keyword, [])

    def __contains__(self, keyword: str) -> bool:
        return keyword in self.keywords

    def __len__(self) -> int:
        return len(self.keywords)

    def merge_keywords(self, kws: Dict[str, Occurrence]) -> None:
        """Merge one document's keywords into the master index.

        Each new occurrence is appended to the keyword's list and then moved
        to its place by insert_last_occurrence().
        """
        if self.sealed:
            raise IndexSealedError("index is sealed; build a new one to add documents")
        for keyword, occ in kws.items():
            occs = self.keywords.get(keyword)
            if occs is None:
                self.keywords[keyword] = [occ]
                continue
            occs.append(occ)
            insert_last_occurrence(occs)

    def seal(self) -> None:
        self.sealed = True


# ---------------------------
# Sorted insertion
# ---------------------------

def insert_last_occurrence(occs: MutableSequence[Occurrence]) -> Optional[List[int]]:
    """
    Move the last element of `occs` to its place in descending frequency order.

    occs[0..n-2] must already be sorted (non-increasing frequency). The spot is
    found by binary search over those n-1 elements; an element with the same
    frequency gets the candidate placed right after it. Nothing else changes
    relative order.

    Returns the midpoint indexes probed by the search, or None when the list
    holds a single element (nothing to search).
    """
    if len(occs) < 2:
        return None

    candidate = occs[-1]
    freq = candidate.frequency
    mids: List[int] = []
    lo, hi = 0, len(occs) - 2
    while lo <= hi:
        mid = (lo + hi) // 2
        mids.append(mid)
        mid_freq = occs[mid].frequency
        if mid_freq == freq:
            lo = mid + 1
            break
        if mid_freq < freq:
            hi = mid - 1
        else:
            lo = mid + 1

    if lo != len(occs) - 1:
        occs.pop()
        occs.insert(lo, candidate)
    return mids


# ---------------------------
# Index Construction
# ---------------------------

def load_keywords(name: str, text: str, noise_words: AbstractSet[str] = frozenset()) -> Dict[str, Occurrence]:
    """Scan one document and count its keywords."""
    kws: Dict[str, Occurrence] = {}
    for token in text.split():
        word = normalize_keyword(token, noise_words)
        if word is None:
            continue
        occ = kws.get(word)
        if occ is None:
            kws[word] = Occurrence(name, 1)
        else:
            occ.frequency += 1
    return kws


def build_index(
    documents: Iterable[Tuple[str, Optional[str]]],
    noise_words: AbstractSet[str] = frozenset(),
    skip_unavailable: bool = False,
) -> SearchIndex:
    """
    Build a sealed master index from (name, text) pairs.

    A text of None marks a document that could not be read. That fails the
    whole build with DocumentUnavailableError unless `skip_unavailable` is set,
    in which case the document is logged and left out.
    """
    noise_words = noise_word_set(noise_words)
    index = SearchIndex()
    merged = set()
    skipped = 0
    for name, text in documents:
        if name in merged:
            # a second merge would list the document twice under a keyword
            logger.warning("Document %s listed more than once; indexing it once", name)
            continue
        if text is None:
            if not skip_unavailable:
                raise DocumentUnavailableError(name)
            logger.warning("Skipping unavailable document %s", name)
            skipped += 1
            continue
        kws = load_keywords(name, text, noise_words)
        logger.debug("%s: %d distinct keywords", name, len(kws))
        index.merge_keywords(kws)
        index.documents.append(name)
        merged.add(name)
    index.seal()
    logger.info(
        "Indexed %d documents (%d keywords, %d skipped)",
        len(index.documents), len(index), skipped,
    )
    return index
