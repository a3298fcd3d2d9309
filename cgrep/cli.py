"""
cgrep: approximate phrase search over the files of one directory.
Usage: cgrep 'query string' threshold [directory]
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import parse_threshold
from .engine import DirectoryScanner, rank
from .errors import ConfigurationError


USAGE_HELP = "Usage: cgrep '[search string]' [0-1.0 similarity] [directory]"


class UsageError(Exception):
    """Command line that cgrep cannot interpret."""


class CgrepArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = CgrepArgumentParser(
        prog="cgrep",
        description="cgrep: find word sequences similar to a phrase.",
        epilog="Examples:\n"
               "  cgrep 'quick brown fox' 0.8\n"
               "  cgrep 'connection refused' 0.6 /var/log --best\n"
               "  cgrep --best -- '-v flag' 0.5\n",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("query", nargs="?", help="Phrase to search for")
    parser.add_argument("threshold", nargs="?", help="Minimum bigram similarity, 0 to 1")
    parser.add_argument("directory", nargs="?", default=".", help="Directory to search (default: .)")
    parser.add_argument("--best", action="store_true", help="Order matches in each file by similarity")
    parser.add_argument("--workers", type=int, default=None, metavar="N", help="Files read concurrently")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log scan progress to stderr")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    try:
        args, extra = build_parser().parse_known_args(argv)
    except UsageError:
        print(USAGE_HELP)
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr
    )

    # Require the pattern and the similarity threshold, and nothing unrecognised.
    if args.query is None or args.threshold is None or extra:
        print(USAGE_HELP)
        return 0

    try:
        threshold = parse_threshold(args.threshold)
    except ConfigurationError:
        print("Second argument must be a floating-point number.")
        return 0

    overrides = {"max_workers": args.workers} if args.workers is not None else None
    try:
        scanner = DirectoryScanner(overrides)
        results = scanner.scan_windows(args.query, args.directory, threshold)
    except (ConfigurationError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        for filepath in sorted(results):
            matches = rank(results[filepath]) if args.best else results[filepath]
            for m in matches:
                print(f"[{filepath}] '{m.text}'")
    except BrokenPipeError:
        # Handle pipe being closed (e.g., piping to head)
        sys.stderr.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
