"""File helpers around the parser: async reads and source discovery."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Iterable

from dryparse.config import DRYPARSE_DEFAULT_EXTENSION, DRYPARSE_ENCODING


async def read_text_async(path: Path, encoding: str = DRYPARSE_ENCODING) -> str:
    """Read text from a file asynchronously using a thread pool.

    Args:
        path: Path to the file to read.
        encoding: Text encoding to use.

    Returns:
        The file contents as a string.
    """
    return await asyncio.to_thread(path.read_text, encoding=encoding)


def collect_sources(
    paths: Iterable[str | Path], extension: str = DRYPARSE_DEFAULT_EXTENSION
) -> list[Path]:
    """Expand files and directories into a sorted list of source files.

    Files are taken as given, whatever their extension. Directories are
    searched recursively for files ending in ``extension``.

    Args:
        paths: Files and directories to expand.
        extension: Suffix matched inside directories (e.g. ".dry").

    Returns:
        Source paths, directories expanded in alphabetical order.
    """
    sources: list[Path] = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            sources.extend(sorted(path.rglob(f"*{extension}")))
        else:
            sources.append(path)
    return sources
