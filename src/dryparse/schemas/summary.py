"""Formatted parse output model."""

from __future__ import annotations

from pydantic import BaseModel


class ParseSummary(BaseModel):
    """Human-readable view of a parsed document."""

    summary: str
    sections_tree: str
    content: str
