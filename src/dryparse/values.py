"""Read property values: continuation lines and verbatim magic blocks."""

from __future__ import annotations

from typing import Any, NamedTuple

from dryparse.grammar import MAGIC_CLOSE, MAGIC_OPEN
from dryparse.schemas import Value


class Segment(NamedTuple):
    """A run of plain text, or one magic block including its markers."""

    text: str
    magic: bool
    closed: bool = True


def split_magic(text: str) -> list[Segment]:
    """Split text into alternating plain and magic segments.

    Magic blocks run from ``{!`` to the first following ``!}``; anything
    between them is literal, including colons, braces and newlines. A block
    with no closing marker is returned with ``closed=False``.
    """
    segments: list[Segment] = []
    pos = 0
    while True:
        start = text.find(MAGIC_OPEN, pos)
        if start < 0:
            segments.append(Segment(text[pos:], magic=False))
            return segments
        if start > pos:
            segments.append(Segment(text[pos:start], magic=False))
        end = text.find(MAGIC_CLOSE, start + len(MAGIC_OPEN))
        if end < 0:
            segments.append(Segment(text[start:], magic=True, closed=False))
            return segments
        end += len(MAGIC_CLOSE)
        segments.append(Segment(text[start:end], magic=True))
        pos = end


def scan_magic(text: str, in_magic: bool = False) -> bool:
    """Return the magic state after reading ``text`` from ``in_magic``.

    Only ``text`` is scanned, so a value read line by line is checked in
    linear time.
    """
    pos = 0
    while True:
        marker = MAGIC_CLOSE if in_magic else MAGIC_OPEN
        found = text.find(marker, pos)
        if found < 0:
            return in_magic
        pos = found + len(marker)
        in_magic = not in_magic


def normalize_value(text: str) -> str:
    """Join plain text and magic blocks with exactly one space between them."""
    parts: list[str] = []
    for segment in split_magic(text):
        if segment.magic:
            parts.append(segment.text)
            continue
        plain = segment.text.strip()
        if plain:
            parts.append(plain)
    return " ".join(parts)


def split_title(text: str) -> tuple[str, str | None]:
    """Split ``condition: title`` at the first colon outside magic.

    Returns the text before the colon and the text after it, or the whole
    text and None when there is no such colon.
    """
    offset = 0
    for segment in split_magic(text):
        if not segment.magic:
            colon = segment.text.find(":")
            if colon >= 0:
                split_at = offset + colon
                return text[:split_at], text[split_at + 1 :]
        offset += len(segment.text)
    return text, None


class ValueBuffer:
    """Accumulates one value across continuation lines.

    While a magic block is open, further lines are appended verbatim after a
    newline; otherwise they are stripped and joined with a single space.
    Lines are kept in a list and joined once; the open/closed magic state is
    updated from each new line alone.
    """

    def __init__(self, text: str, line: int) -> None:
        self.line = line
        self._in_magic = scan_magic(text)
        first = text.lstrip() if self._in_magic else text.strip()
        self._parts: list[str] = [first] if first else []

    @property
    def in_magic(self) -> bool:
        return self._in_magic

    @property
    def raw(self) -> str:
        return "".join(self._parts)

    def extend(self, raw_line: str) -> None:
        if self._in_magic:
            self._parts.append("\n")
            self._parts.append(raw_line)
            self._in_magic = scan_magic(raw_line, self._in_magic)
            return
        addition = raw_line.strip()
        if not addition:
            return
        if self._parts:
            self._parts.append(" ")
        self._parts.append(addition)
        self._in_magic = scan_magic(addition, self._in_magic)

    def to_value(self) -> Value:
        return Value(text=normalize_value(self.raw), line=self.line)


def propval(value: Any) -> Any:
    """Unwrap a Value to its raw text; any other object is returned as is."""
    if isinstance(value, Value):
        return value.text
    return value
