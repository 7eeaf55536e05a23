"""
Keyword normalization.

A keyword is any word that, after being stripped of trailing punctuation,
consists only of alphabetic letters and is not a noise word. Words are
compared case-insensitively and returned lower case.

Recognized punctuation: . , ? : ; !
"""

from __future__ import annotations

from functools import lru_cache
from typing import AbstractSet, FrozenSet, Iterable, Optional


# ---------------------------
# Tokenization config
# ---------------------------

PUNCTUATION = frozenset(".,?:;!")


def is_punctuation(ch: str) -> bool:
    return ch in PUNCTUATION


@lru_cache(maxsize=16)
def _lowered(noise_words: FrozenSet[str]) -> FrozenSet[str]:
    return frozenset(w.lower() for w in noise_words)


def noise_word_set(words: Iterable[str]) -> FrozenSet[str]:
    """Lower-cased, immutable copy of a noise-word collection."""
    if isinstance(words, frozenset):
        return _lowered(words)
    return frozenset(w.lower() for w in words)


def _stops_stripping(ch: str) -> bool:
    # digits stop the strip loop even though they are rejected afterwards
    return ch.isalpha() or ch.isdigit()


def normalize_keyword(token: str, noise_words: AbstractSet[str] = frozenset()) -> Optional[str]:
    """Return `token` as a keyword, or None if it does not pass the keyword test.

    >>> normalize_keyword("Word!!")
    'word'
    >>> normalize_keyword("wor#d") is None
    True
    """
    word = token.lower()

    while word and not _stops_stripping(word[-1]):
        if not is_punctuation(word[-1]):
            return None
        word = word[:-1]

    if not word:
        return None
    if word in noise_word_set(noise_words):
        return None
    if not word.isalpha():
        return None
    return word
