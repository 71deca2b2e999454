"""Command-line entry point: ``python -m xml_semantic_diff CONTROL TEST``.

Exit status is 0 when the documents are equivalent, 1 when differences were
reported and 2 when a document could not be loaded or parsed.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from xml_semantic_diff.algorithm.config import CompareConfig, MatchStrategy
from xml_semantic_diff.comparator import XmlComparator
from xml_semantic_diff.exceptions import DocumentError

logger = logging.getLogger("xml_semantic_diff.cli")

EXIT_EQUIVALENT = 0
EXIT_DIFFERENT = 1
EXIT_BROKEN = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xml-semantic-diff",
        description="Compare two XML documents ignoring sibling order and whitespace.",
    )
    parser.add_argument("control", help="Logical path of the expected document")
    parser.add_argument("test", help="Logical path of the actual document")
    parser.add_argument(
        "--root",
        metavar="DIR",
        default=None,
        help="Directory the document paths are resolved against (default: cwd)",
    )
    parser.add_argument(
        "--strategy",
        choices=[s.value for s in MatchStrategy],
        default=MatchStrategy.STRICT.value,
        help="Element pairing policy (default: strict)",
    )
    parser.add_argument(
        "--keep-whitespace",
        action="store_true",
        help="Compare text content verbatim instead of collapsing whitespace",
    )
    parser.add_argument(
        "--no-prolog",
        action="store_true",
        help="Skip XML version, standalone and DOCTYPE comparison",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    config = CompareConfig(
        match_strategy=MatchStrategy(args.strategy),
        normalize_whitespace=not args.keep_whitespace,
        compare_prolog=not args.no_prolog,
    )
    comparator = XmlComparator(config=config, resource_root=args.root)

    try:
        result = comparator.aggregate(args.control, args.test)
    except DocumentError as exc:
        logger.error("cannot compare documents: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_BROKEN

    if result.is_equivalent():
        print(f"{args.control} and {args.test} are equivalent")
        return EXIT_EQUIVALENT

    print(f"{len(result)} difference(s) between {args.control} and {args.test}:")
    for message in result.messages:
        print(f"- {message}")
    return EXIT_DIFFERENT


if __name__ == "__main__":
    sys.exit(main())
