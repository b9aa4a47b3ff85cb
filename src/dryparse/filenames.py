"""Derive a document's id and type from its source path."""

from __future__ import annotations

from pathlib import PurePath

from dryparse.exceptions import FilenameError
from dryparse.grammar import ID_SEGMENT_RE


def resolve_filename(path: str | PurePath) -> tuple[str, str | None]:
    """Extract the document id and optional type from a filename.

    The basename is split on ``.`` and the final segment (the extension) is
    discarded. A single remaining segment is the id. With more than one,
    the last is the type and the rest form a dot-qualified id::

        test.dry          -> ("test", None)
        test.type.dry     -> ("test", "type")
        foo.bar.type.dry  -> ("foo.bar", "type")

    Args:
        path: Source path; directories are ignored.

    Returns:
        Tuple of (id, type), where type is None when not given.

    Raises:
        FilenameError: If there is no extension or a segment is malformed.
    """
    segments = PurePath(path).name.split(".")
    if len(segments) < 2 or not segments[-1]:
        raise FilenameError(str(path))

    named = segments[:-1]
    if not all(ID_SEGMENT_RE.match(segment) for segment in named):
        raise FilenameError(str(path))

    if len(named) == 1:
        return named[0], None
    return ".".join(named[:-1]), named[-1]
