"""Corpus loading: noise words, document manifest, document text.

Purpose
-------
Feed the indexer from files on disk:
- `load_noise_words(path)`: whitespace-separated noise words, lowercased.
- `load_manifest(path)`: whitespace-separated document file names.
- `read_document(path)`: text of one document. `.html`/`.htm` files go through
  BeautifulSoup so only visible text is indexed.
- `load_corpus(manifest, noise_file)`: all of the above plus `build_index`.

Read failures of individual documents surface as `DocumentUnavailableError`;
whether they abort the build is decided by `build_index`.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import FrozenSet, Iterable, Iterator, List, Optional, Tuple, Union

from bs4 import BeautifulSoup

from .index_core import DocumentUnavailableError, SearchIndex, build_index
from .keywords import noise_word_set

logger = logging.getLogger(__name__)

HTML_SUFFIXES = {".html", ".htm"}

PathLike = Union[str, Path]


def _text_from_html(html: str) -> str:
    """Extract visible text from HTML."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "noscript"]):
        tag.extract()
    return soup.get_text(separator=" ")


def _read_words(path: PathLike) -> List[str]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"File not found: {path}")
    return p.read_text(encoding="utf-8").split()


# ---------- Public API ----------
def load_noise_words(path: PathLike) -> FrozenSet[str]:
    return noise_word_set(_read_words(path))


def load_manifest(path: PathLike) -> List[str]:
    return _read_words(path)


def read_document(path: PathLike) -> str:
    """Return the indexable text of one document."""
    p = Path(path)
    try:
        raw = p.read_text(encoding="utf-8", errors="ignore")
    except OSError as e:
        raise DocumentUnavailableError(str(path), reason=e.strerror or "unreadable") from e
    if p.suffix.lower() in HTML_SUFFIXES:
        return _text_from_html(raw)
    return raw


def iter_documents(names: Iterable[str], base_dir: Optional[PathLike] = None) -> Iterator[Tuple[str, Optional[str]]]:
    """
    Yield (name, text) for each document name, in order.

    Relative names resolve against `base_dir`. An unreadable document yields
    text None; build_index() turns that into an error or a skip.
    """
    base = Path(base_dir) if base_dir is not None else None
    for name in names:
        path = Path(name)
        if base is not None and not path.is_absolute():
            path = base / path
        try:
            text: Optional[str] = read_document(path)
        except DocumentUnavailableError as e:
            logger.debug("Could not read %s: %s", name, e)
            text = None
        yield name, text


def load_corpus(manifest: PathLike, noise_file: PathLike, skip_unavailable: bool = False) -> SearchIndex:
    """
    Index every document listed in `manifest`, ignoring words in `noise_file`.

    Document names in the manifest are relative to the manifest's folder and
    are reported by queries exactly as written there.
    """
    noise_words = load_noise_words(noise_file)
    names = load_manifest(manifest)
    logger.info("Loaded %d noise words, %d documents listed", len(noise_words), len(names))
    docs = iter_documents(names, base_dir=Path(manifest).parent)
    return build_index(docs, noise_words, skip_unavailable=skip_unavailable)
