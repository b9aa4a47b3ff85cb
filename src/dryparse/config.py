"""Local configuration for dryparse."""

from __future__ import annotations

import os


DEFAULT_ENCODING = "utf-8"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_EXTENSION = ".dry"

DRYPARSE_ENCODING = os.getenv("DRYPARSE_ENCODING", DEFAULT_ENCODING)
DRYPARSE_LOG_LEVEL = os.getenv("DRYPARSE_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
# Extension picked up when a directory is passed to the inspection script.
DRYPARSE_DEFAULT_EXTENSION = os.getenv("DRYPARSE_DEFAULT_EXTENSION", DEFAULT_EXTENSION)
