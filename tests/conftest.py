"""Test setup for dryparse."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

FILES = Path(__file__).resolve().parent / "files"


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for pytest.

    File-backed tests can be run selectively:
        pytest -m filesystem
        pytest -m "not filesystem"
    """
    config.addinivalue_line(
        "markers",
        "filesystem: marks tests that read fixture files from tests/files",
    )


@pytest.fixture
def files_dir() -> Path:
    """Directory holding the .dry fixture files."""
    return FILES
