"""littlesearch launcher: build the keyword index, then answer "kw1 OR kw2"

Usage
-----
# one query
python -m littlesearch.main docs.txt noisewords.txt --query deep world

# interactive loop (blank line quits)
python -m littlesearch.main docs.txt noisewords.txt
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from littlesearch.index_core import SearchIndex
from littlesearch.loader import load_corpus
from littlesearch.query import MAX_RESULTS, top5_search


def print_hits(hits: List[str]) -> None:
    if hits:
        for m in hits:
            print(f"found a match:  {m}")
    else:
        print("no match")


def run_cli(index: SearchIndex, limit: int = MAX_RESULTS) -> None:
    print("Beginning Search:")
    while True:
        line = input("enter two keywords=> ").strip()
        if line == "":
            print("Bye")
            break
        words = line.split()
        if len(words) != 2:
            print("please enter exactly two keywords")
            continue
        print_hits(top5_search(index, words[0], words[1], limit=limit))


def result_limit(value: str) -> int:
    n = int(value)
    if not 1 <= n <= MAX_RESULTS:
        raise argparse.ArgumentTypeError(f"must be between 1 and {MAX_RESULTS}")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Top documents for 'kw1 OR kw2' over a small corpus")
    parser.add_argument("manifest", help="File listing the document file names, whitespace separated")
    parser.add_argument("noise", help="File listing the noise words, whitespace separated")
    parser.add_argument("--query", nargs=2, metavar=("KW1", "KW2"), help="Run a single query and exit")
    parser.add_argument("--limit", type=result_limit, default=MAX_RESULTS, help="Maximum number of documents to list")
    parser.add_argument("--skip-missing", action="store_true", help="Skip unreadable documents instead of failing")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log indexing progress")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        index = load_corpus(args.manifest, args.noise, skip_unavailable=args.skip_missing)
    except (OSError, UnicodeError) as e:  # includes DocumentUnavailableError
        print(f"cannot build index: {e}", file=sys.stderr)
        return 1

    if args.query:
        print_hits(top5_search(index, args.query[0], args.query[1], limit=args.limit))
    else:
        run_cli(index, limit=args.limit)
    return 0


if __name__ == "__main__":
    sys.exit(main())
