"""Shared schemas for dryparse."""

from dryparse.schemas.document import DocumentNode, OptionEntry, OptionsBlock, Value
from dryparse.schemas.summary import ParseSummary

__all__ = ["DocumentNode", "OptionEntry", "OptionsBlock", "ParseSummary", "Value"]
