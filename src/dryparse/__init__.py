"""dryparse: parse DRY narrative source files into document trees."""

from dryparse.exceptions import (
    DryError,
    FilenameError,
    GrammarError,
    NamingError,
    ParseError,
    SourceReadError,
    StructureError,
)
from dryparse.filenames import resolve_filename
from dryparse.parser import parse_from_content, parse_from_file
from dryparse.schemas import DocumentNode, OptionEntry, OptionsBlock, Value
from dryparse.values import propval

__all__ = [
    "DocumentNode",
    "DryError",
    "FilenameError",
    "GrammarError",
    "NamingError",
    "OptionEntry",
    "OptionsBlock",
    "ParseError",
    "SourceReadError",
    "StructureError",
    "Value",
    "parse_from_content",
    "parse_from_file",
    "propval",
    "resolve_filename",
]
