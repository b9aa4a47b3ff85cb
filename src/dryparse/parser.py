"""Parse DRY source text into a document tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from dryparse.config import DRYPARSE_ENCODING
from dryparse.exceptions import (
    GrammarError,
    NamingError,
    ParseError,
    SourceReadError,
    StructureError,
)
from dryparse.file_utils import read_text_async
from dryparse.filenames import resolve_filename
from dryparse.grammar import (
    CONDITION_RE,
    OPTION_ID_RE,
    OPTION_SIGIL,
    OPTION_TAG_RE,
    PROPERTY_RE,
    RESERVED_NAMES,
    SECTION_SIGIL,
    TAG_SIGIL,
    TYPE_PROPERTY,
    camel_case,
    is_blank,
    is_indented,
    is_valid_id,
)
from dryparse.schemas import DocumentNode, OptionEntry, OptionsBlock, Value
from dryparse.values import ValueBuffer, normalize_value, split_title

logger = logging.getLogger(__name__)

_INVALID_PROPERTY = "Invalid property definition."
_INVALID_OPTION = "Invalid property or option definition."
_HYPHENS_REQUIRED = "Hyphens are required in an option block."
_CONTENT_AFTER_OPTIONS = "Found content after an options block."
_UNTERMINATED_MAGIC = "Unterminated magic block."


class ParseState(Enum):
    """Phases of a node, entered strictly in this order."""

    PROPERTIES = "properties"
    CONTENT = "content"
    OPTIONS = "options"
    CLOSED = "closed"


@dataclass
class _NodeParts:
    """Everything collected for one node before it is frozen into a model."""

    type: str | None = None
    properties: dict[str, Value] = field(default_factory=dict)
    content_lines: list[str] = field(default_factory=list)
    options: list[OptionEntry] = field(default_factory=list)
    option_properties: dict[str, Value] = field(default_factory=dict)
    has_options: bool = False

    @property
    def content(self) -> str:
        paragraphs: list[str] = []
        for line in self.content_lines:
            if is_blank(line):
                if paragraphs and paragraphs[-1]:
                    paragraphs.append("")
            else:
                paragraphs.append(line)
        while paragraphs and not paragraphs[-1]:
            paragraphs.pop()
        return "\n".join(paragraphs)

    @property
    def options_block(self) -> OptionsBlock | None:
        if not self.has_options:
            return None
        return OptionsBlock(options=self.options, properties=self.option_properties)


class _DryParser:
    """Single-use line state machine over one document body."""

    def __init__(self, path: str, text: str) -> None:
        self.path = path
        self.lines = [line.rstrip("\r") for line in text.split("\n")]

    def parse(self, doc_id: str, doc_type: str | None) -> DocumentNode:
        root, _ = self._parse_node(0, node_id=doc_id, root_id=doc_id, inferred_type=doc_type)
        return root

    def _error(self, kind: type[ParseError], index: int, message: str) -> ParseError:
        return kind(self.path, index + 1, message)

    # ── nodes ──

    def _parse_node(
        self,
        index: int,
        *,
        node_id: str,
        root_id: str,
        inferred_type: str | None = None,
        header_line: int | None = None,
    ) -> tuple[DocumentNode, int]:
        """Parse one node starting at ``index``.

        The root node goes on to parse every ``@section`` that follows its
        body by calling back into this method; a section stops at the next
        ``@`` header and hands control back to the root.

        Returns:
            The node and the index of the first line it did not consume.
        """
        is_root = header_line is None
        parts, index = self._parse_body(index, is_root=is_root, inferred_type=inferred_type)

        sections: list[DocumentNode] = []
        if is_root:
            seen: set[str] = set()
            while index < len(self.lines):
                local_id = self._section_id(index, root_id=root_id, seen=seen)
                seen.add(local_id)
                section, index = self._parse_node(
                    index + 1,
                    node_id=f"{root_id}.{local_id}",
                    root_id=root_id,
                    header_line=index + 1,
                )
                sections.append(section)

        node_type = None
        if is_root:
            node_type = parts.type if parts.type is not None else inferred_type

        node = DocumentNode(
            id=node_id,
            type=node_type,
            properties=parts.properties,
            content=parts.content,
            options=parts.options_block,
            sections=sections,
            line=header_line,
        )
        return node, index

    def _section_id(self, index: int, *, root_id: str, seen: set[str]) -> str:
        local_id = self.lines[index][len(SECTION_SIGIL) :].rstrip()
        if not is_valid_id(local_id):
            raise self._error(
                NamingError,
                index,
                f"Malformed id '{local_id}' (use letters, numbers, _ and - only).",
            )
        if local_id == root_id:
            raise self._error(NamingError, index, f"Section can't use the file id '{local_id}'.")
        if local_id in seen:
            raise self._error(NamingError, index, f"Section with id '{local_id}' already defined.")
        return local_id

    def _parse_body(
        self, index: int, *, is_root: bool, inferred_type: str | None
    ) -> tuple[_NodeParts, int]:
        parts = _NodeParts()
        state = ParseState.PROPERTIES
        after_blank = False

        while index < len(self.lines):
            line = self.lines[index]
            if line.startswith(SECTION_SIGIL):
                break

            if state is ParseState.PROPERTIES:
                if is_blank(line):
                    state = ParseState.CONTENT
                    after_blank = True
                    index += 1
                    continue
                index = self._parse_property(
                    index, parts, is_root=is_root, inferred_type=inferred_type
                )

            elif state is ParseState.CONTENT:
                if line.startswith(OPTION_SIGIL) and after_blank:
                    state = ParseState.OPTIONS
                    parts.has_options = True
                    continue
                parts.content_lines.append(line)
                after_blank = is_blank(line)
                index += 1

            elif state is ParseState.OPTIONS:
                if is_blank(line):
                    state = ParseState.CLOSED
                    index += 1
                elif line.startswith(TAG_SIGIL):
                    index += 1
                elif line.startswith(OPTION_SIGIL):
                    index = self._parse_option_line(index, parts)
                else:
                    raise self._error(GrammarError, index, _HYPHENS_REQUIRED)

            else:
                if not is_blank(line):
                    raise self._error(StructureError, index, _CONTENT_AFTER_OPTIONS)
                index += 1

        return parts, index

    # ── properties ──

    def _read_value(
        self, index: int, text: str, *, continuation: bool = True
    ) -> tuple[ValueBuffer, int]:
        """Collect a value that starts on line ``index``.

        Lines inside an open magic block are always taken verbatim; indented
        lines after it are taken as continuations when ``continuation`` is set.
        """
        buffer = ValueBuffer(text, index + 1)
        start = index
        index += 1
        while index < len(self.lines):
            line = self.lines[index]
            if buffer.in_magic or (continuation and is_indented(line) and not is_blank(line)):
                buffer.extend(line)
                index += 1
                continue
            break
        if buffer.in_magic:
            raise self._error(GrammarError, start, _UNTERMINATED_MAGIC)
        return buffer, index

    def _parse_property(
        self,
        index: int,
        parts: _NodeParts,
        *,
        is_root: bool,
        inferred_type: str | None,
    ) -> int:
        match = PROPERTY_RE.match(self.lines[index])
        if not match:
            raise self._error(GrammarError, index, _INVALID_PROPERTY)

        name = camel_case(match.group(1))
        if is_root and name == TYPE_PROPERTY:
            if inferred_type is not None or parts.type is not None:
                raise self._error(NamingError, index, f"Property '{name}' is already defined.")
            buffer, next_index = self._read_value(index, match.group(2))
            parts.type = buffer.to_value().text
            return next_index

        self._check_property_name(index, name, parts.properties)
        buffer, next_index = self._read_value(index, match.group(2))
        parts.properties[name] = buffer.to_value()
        return next_index

    def _check_property_name(self, index: int, name: str, defined: dict[str, Value]) -> None:
        if name in RESERVED_NAMES:
            raise self._error(NamingError, index, f"Property '{name}' is a reserved name.")
        if name in defined:
            raise self._error(NamingError, index, f"Property '{name}' is already defined.")

    # ── options ──

    def _parse_option_line(self, index: int, parts: _NodeParts) -> int:
        rest = self.lines[index][len(OPTION_SIGIL) :].lstrip()

        if rest.startswith((SECTION_SIGIL, TAG_SIGIL)):
            buffer, next_index = self._read_value(index, rest, continuation=False)
            entry = self._build_option(index, buffer.raw)
            if any(existing.id == entry.id for existing in parts.options):
                raise self._error(
                    StructureError, index, f"Option with id/tag '{entry.id}' already specified."
                )
            parts.options.append(entry)
            return next_index

        match = PROPERTY_RE.match(rest)
        if not match:
            raise self._error(GrammarError, index, _INVALID_OPTION)
        name = camel_case(match.group(1))
        self._check_property_name(index, name, parts.option_properties)
        buffer, next_index = self._read_value(index, match.group(2))
        parts.option_properties[name] = buffer.to_value()
        return next_index

    def _build_option(self, index: int, text: str) -> OptionEntry:
        match = OPTION_ID_RE.match(text) or OPTION_TAG_RE.match(text)
        if not match:
            raise self._error(GrammarError, index, _INVALID_OPTION)
        option_id = match.group(0)
        remainder = text[match.end() :]
        if option_id.startswith(TAG_SIGIL) and remainder.startswith("."):
            raise self._error(StructureError, index, _INVALID_OPTION)

        condition_text: str | None = None
        title_text: str | None = None
        condition = CONDITION_RE.match(remainder)
        if condition:
            condition_text, title_text = split_title(condition.group(1))
            if not normalize_value(condition_text):
                raise self._error(GrammarError, index, _INVALID_OPTION)
        elif remainder.lstrip().startswith(":"):
            title_text = remainder.lstrip()[1:]
        elif remainder.strip():
            raise self._error(GrammarError, index, _INVALID_OPTION)

        if title_text is not None and not normalize_value(title_text):
            raise self._error(GrammarError, index, _INVALID_OPTION)

        line = index + 1
        title = None
        if title_text is not None:
            title = Value(text=normalize_value(title_text), line=line)
        view_if = None
        if condition_text is not None:
            view_if = Value(text=normalize_value(condition_text), line=line)
        return OptionEntry(id=option_id, title=title, view_if=view_if, line=line)


def parse_from_content(path: str | Path, text: str) -> DocumentNode:
    """Parse DRY source text into a document tree.

    Args:
        path: Source path, used for the document id and type and in errors.
        text: Full document text.

    Returns:
        The root DocumentNode with its sections.

    Raises:
        FilenameError: If no id can be derived from ``path``.
        ParseError: On the first invalid line; no partial tree is returned.
    """
    doc_id, doc_type = resolve_filename(path)
    return _DryParser(str(path), text).parse(doc_id, doc_type)


async def parse_from_file(path: str | Path, *, encoding: str = DRYPARSE_ENCODING) -> DocumentNode:
    """Read a DRY file and parse it.

    Args:
        path: Path to the ``.dry`` file.
        encoding: Text encoding of the file.

    Returns:
        The root DocumentNode.

    Raises:
        SourceReadError: If the file is missing, unreadable or not valid text.
        FilenameError: If no id can be derived from ``path``.
        ParseError: On the first invalid line.
    """
    source = Path(path)
    try:
        text = await read_text_async(source, encoding=encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError(f"Cannot read {source}: {exc}") from exc

    document = parse_from_content(str(path), text)
    logger.debug("Parsed %s: %d sections", source, len(document.sections))
    return document
