"""hash-histogram CLI entry point.

Counts whitespace-separated tokens from files (or stdin) and reports
on the resulting histogram.

Usage: hash-histogram [-v] {rank,mode,sample} [FILE ...]
"""
from __future__ import annotations

import argparse
import logging
import random
import sys
from typing import Iterator

from hash_histogram.errors import HistogramError
from hash_histogram.histogram import HashHistogram
from hash_histogram.report import format_ranking

log = logging.getLogger(__name__)


def _number(text: str) -> int | float:
    try:
        return int(text)
    except ValueError:
        return float(text)


def _non_negative_int(text: str) -> int:
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return value


def _tokens(paths: list[str]) -> Iterator[str]:
    if not paths:
        paths = ["-"]
    for path in paths:
        if path == "-":
            for line in sys.stdin:
                yield from line.split()
            continue
        with open(path, encoding="utf-8") as fh:
            for line in fh:
                yield from line.split()


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "files", nargs="*", metavar="FILE",
        help="Files to read tokens from (default: stdin, '-' also means stdin)",
    )


def _add_rank_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser("rank", help="Print keys by descending count.")
    _add_common(p)
    p.add_argument(
        "--top", type=_non_negative_int, default=None,
        help="Only show the N most frequent keys (default: all)",
    )
    p.add_argument(
        "--normalize", type=_number, default=None, metavar="TARGET",
        help="Rescale counts so they add up to TARGET before ranking.",
    )


def _add_mode_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser("mode", help="Print the most frequent key.")
    _add_common(p)


def _add_sample_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "sample",
        help="Print keys drawn at random, weighted by count.",
    )
    _add_common(p)
    p.add_argument(
        "--draws", type=_non_negative_int, default=10,
        help="Number of keys to draw (default: 10)",
    )
    p.add_argument(
        "--seed", type=int, default=None,
        help="RNG seed for reproducible draws",
    )


def _run(args: argparse.Namespace) -> int:
    hist: HashHistogram[str, int] = HashHistogram(_tokens(args.files))
    log.debug("counted %s tokens, %d distinct", hist.total_count(), len(hist))

    if args.command == "rank":
        if args.normalize is not None:
            hist.normalize(args.normalize)
        print(format_ranking(hist, top=args.top))
        return 0

    if args.command == "mode":
        mode = hist.mode()
        if mode is None:
            print("no mode: input is empty", file=sys.stderr)
            return 1
        print(mode)
        return 0

    rng = random.Random(args.seed)
    for _ in range(args.draws):
        key = hist.pick_random_key(rng)
        if key is None:
            print("nothing to sample: input is empty", file=sys.stderr)
            return 1
        print(key)
    return 0


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="hash-histogram",
        description="Count tokens and report rankings, modes and weighted samples.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging.",
    )
    subparsers = parser.add_subparsers(dest="command")

    _add_rank_parser(subparsers)
    _add_mode_parser(subparsers)
    _add_sample_parser(subparsers)

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        code = _run(args)
    except HistogramError as exc:
        print(f"error: {exc}", file=sys.stderr)
        code = 2
    if code:
        sys.exit(code)
