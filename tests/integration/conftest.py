"""
Integration Test Fixtures.

Point the application at a throwaway SQLite file so the real engine,
session scope and CLI run end to end.
"""

from collections.abc import Generator
from pathlib import Path

import pytest

from argument.core.config import get_settings


@pytest.fixture
def database_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Route ARGUMENT_DATABASE_URL to a temporary SQLite file."""
    path = tmp_path / "notes.sqlite3"
    monkeypatch.setenv("ARGUMENT_DATABASE_URL", f"sqlite+aiosqlite:///{path}")
    get_settings.cache_clear()
    yield path
    get_settings.cache_clear()
