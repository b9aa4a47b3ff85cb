"""Inspect DRY source files: parse them and print their document trees."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from dryparse import DocumentNode, DryError, parse_from_file
from dryparse.config import DRYPARSE_DEFAULT_EXTENSION, DRYPARSE_LOG_LEVEL
from dryparse.file_utils import collect_sources
from dryparse.output_formatter import format_document

logger = logging.getLogger("inspect_dry")


def main() -> int:
    parser = argparse.ArgumentParser(description="Parse DRY files and print their structure.")
    parser.add_argument("paths", nargs="+", help="DRY files or directories to search")
    parser.add_argument("--json", action="store_true", help="Print the parsed tree as JSON")
    parser.add_argument(
        "--extension",
        default=DRYPARSE_DEFAULT_EXTENSION,
        help=f"File extension searched in directories (default: {DRYPARSE_DEFAULT_EXTENSION})",
    )
    args = parser.parse_args()

    logging.basicConfig(level=DRYPARSE_LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    sources = collect_sources(args.paths, extension=args.extension)
    if not sources:
        parser.error("No DRY files found")

    try:
        documents = asyncio.run(load_documents(sources))
    except DryError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    for document in documents:
        print_document(document, as_json=args.json)
    return 0


async def load_documents(sources: list[Path]) -> list[DocumentNode]:
    documents = await asyncio.gather(*(parse_from_file(source) for source in sources))
    logger.info("Parsed %d file(s)", len(documents))
    return list(documents)


def print_document(document: DocumentNode, *, as_json: bool) -> None:
    if as_json:
        print(json.dumps(document.to_dict(), indent=2, ensure_ascii=False))
        return

    formatted = format_document(document)
    print(formatted.summary)
    print()
    print(formatted.sections_tree)
    print()


if __name__ == "__main__":
    sys.exit(main())
