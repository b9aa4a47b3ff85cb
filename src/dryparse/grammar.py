"""Lexical grammar of the DRY format: sigils, reserved names and id patterns."""

from __future__ import annotations

import re
from typing import Final

MAGIC_OPEN: Final[str] = "{!"
MAGIC_CLOSE: Final[str] = "!}"

SECTION_SIGIL: Final[str] = "@"
TAG_SIGIL: Final[str] = "#"
OPTION_SIGIL: Final[str] = "-"

RESERVED_NAMES: Final[frozenset[str]] = frozenset({"id", "sections", "options", "content"})
TYPE_PROPERTY: Final[str] = "type"

_SEGMENT = r"[A-Za-z0-9_-]+"

ID_SEGMENT_RE: Final[re.Pattern[str]] = re.compile(rf"^{_SEGMENT}$")
ID_RE: Final[re.Pattern[str]] = re.compile(rf"^{_SEGMENT}(?:\.{_SEGMENT})*$")
PROPERTY_RE: Final[re.Pattern[str]] = re.compile(
    r"^([A-Za-z_](?:[A-Za-z0-9_-]*[A-Za-z0-9_])?)\s*:(.*)$", re.DOTALL
)

# Option references: "@" with optional relative dots, or a "#" tag.
OPTION_ID_RE: Final[re.Pattern[str]] = re.compile(rf"^@\.*{_SEGMENT}(?:\.{_SEGMENT})*")
OPTION_TAG_RE: Final[re.Pattern[str]] = re.compile(rf"^#{_SEGMENT}")
CONDITION_RE: Final[re.Pattern[str]] = re.compile(r"^\s+if\s+(.+)$", re.DOTALL)

_HYPHENATED_RE = re.compile(r"-+([A-Za-z0-9])")


def camel_case(name: str) -> str:
    """Convert a hyphenated property name to camel case (``prop-one`` -> ``propOne``)."""
    return _HYPHENATED_RE.sub(lambda match: match.group(1).upper(), name)


def is_blank(line: str) -> bool:
    return not line.strip()


def is_indented(line: str) -> bool:
    return line[:1] in (" ", "\t")


def is_valid_id(candidate: str) -> bool:
    """Return True for a dot-qualified id made of letters, digits, ``_`` and ``-``."""
    return bool(ID_RE.match(candidate))
