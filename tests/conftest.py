"""Pytest configuration - shared fixtures for the normalizer tests."""
from __future__ import annotations

from pathlib import Path
import pytest

from source_normalizer.model import Options


@pytest.fixture
def options():
    """Report-only options with the default tab size."""
    return Options()


@pytest.fixture
def fix_options():
    return Options(fix=True, tab_width=4)


@pytest.fixture
def write_file(tmp_path):
    """Create a file with the given raw content inside tmp_path."""
    def _write(name: str, content: bytes) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path
    return _write
