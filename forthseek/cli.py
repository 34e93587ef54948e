#!/usr/bin/env python3
"""
forthseek - wordlist search-order micro-engine

Command-line interface: replay a command file and print its fingerprint.

Usage:
    forthseek <file>                  Print the fingerprint as hex
    forthseek <file> --trace          Also print every lookup as "name = serial"
    forthseek <file> --stats          Also print a run summary
"""

from __future__ import annotations

import argparse
import logging
import sys
import textwrap
from typing import NoReturn, Optional, Sequence

from forthseek import __version__
from forthseek.engine import run_file
from forthseek.stream import ScanError
from forthseek.table import DEFAULT_CAPACITY


class _Parser(argparse.ArgumentParser):
    """Report usage errors with exit status 1 rather than argparse's 2."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _trace_lookup(name: bytes, found: int) -> None:
    sys.stderr.write(f"{name.decode('latin-1')} = {found}\n")


def _positive(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog="forthseek",
        description="Replay define / set-order / lookup commands and print the fingerprint",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""
        input format:
          \\n<wordlist><name>   define name in wordlist
          \\t<wordlist>...      set the search order (bottom first)
          ' '<name>            look up name
        """),
    )
    parser.add_argument("file", help="Command file to replay")
    parser.add_argument("--trace", action="store_true", help="Print each lookup and its serial number to stderr")
    parser.add_argument("--stats", action="store_true", help="Print a run summary to stderr")
    parser.add_argument("--buckets", type=_positive, default=DEFAULT_CAPACITY,
                        help=f"Buckets per wordlist table (default: {DEFAULT_CAPACITY})")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Log progress to stderr (-vv for debug)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose and not logging.getLogger().handlers:
        logging.basicConfig(
            level=logging.DEBUG if args.verbose > 1 else logging.INFO,
            format="%(levelname)s %(name)s: %(message)s",
        )

    try:
        result = run_file(
            args.file,
            capacity=args.buckets,
            trace=_trace_lookup if args.trace else None,
        )
    except OSError as e:
        print(f"{args.file}: {e.strerror or e}", file=sys.stderr)
        return 1
    except ScanError as e:
        print(f"invalid input: {e}", file=sys.stderr)
        return 1

    print(result.hex)
    if args.stats:
        print(result.summary(), file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
