"""Format parsed documents into summary, tree and JSON outputs."""

from __future__ import annotations

import json

from dryparse.schemas import DocumentNode, ParseSummary


def format_document(document: DocumentNode) -> ParseSummary:
    """Create summary, section tree and JSON content for a document."""
    summary_lines = [f"Id: {document.id}"]
    if document.type:
        summary_lines.append(f"Type: {document.type}")
    summary_lines.append(f"Properties: {len(document.properties)}")
    summary_lines.append(f"Sections: {count_sections(document)}")
    summary_lines.append(f"Options: {count_options(document)}")

    tree = "Sections:\n" + _create_sections_tree(document)
    content = json.dumps(document.to_dict(), indent=2, ensure_ascii=False)

    return ParseSummary(summary="\n".join(summary_lines), sections_tree=tree, content=content)


def count_sections(document: DocumentNode) -> int:
    """Count total sections below the document."""
    total = 0
    for section in document.sections:
        total += 1
        total += count_sections(section)
    return total


def count_options(document: DocumentNode) -> int:
    """Count option entries in the document and all of its sections."""
    total = len(document.options.options) if document.options else 0
    for section in document.sections:
        total += count_options(section)
    return total


def _create_sections_tree(node: DocumentNode, indent: int = 0) -> str:
    lines = [" " * (indent * 4) + node.id]
    if node.options:
        for entry in node.options.options:
            lines.append(" " * ((indent + 1) * 4) + "- " + entry.id)
    for section in node.sections:
        lines.append(_create_sections_tree(section, indent + 1))
    return "\n".join(lines)
