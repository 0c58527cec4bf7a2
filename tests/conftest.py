"""
Shared fixtures for Miniflux Notify tests.

Provides common test fixtures for use across all test modules.
"""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from miniflux_notify.config import AppConfig, ServerConfig
from miniflux_notify.models import Entry, Feed, Snapshot


# Path to test fixtures directory
FIXTURES_DIR = Path(__file__).parent / "fixtures"

SERVER_URL = "https://miniflux.example.com"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def sample_config_path(fixtures_dir: Path) -> Path:
    """Return path to sample config file."""
    return fixtures_dir / "sample_config.yaml"


@pytest.fixture
def unread_payload(fixtures_dir: Path) -> dict[str, Any]:
    """Return a realistic /v1/entries response body."""
    return json.loads((fixtures_dir / "unread_entries.json").read_text())


@pytest.fixture
def make_entry() -> Callable[..., Entry]:
    """
    Return a factory for entries keyed by hash.

    Returns
    -------
    Callable[..., Entry]
        Factory taking a hash and optional field overrides.
    """
    counter = iter(range(1, 10_000))

    def factory(hash_: str, **fields: Any) -> Entry:
        defaults: dict[str, Any] = {
            "id": next(counter),
            "title": f"Entry {hash_}",
            "author": "",
            "hash": hash_,
            "feed": Feed(title="Test Feed"),
            "url": f"https://example.com/{hash_}",
        }
        defaults.update(fields)
        return Entry(**defaults)

    return factory


@pytest.fixture
def make_snapshot(make_entry: Callable[..., Entry]) -> Callable[..., Snapshot]:
    """Return a factory building a snapshot from a list of hashes."""

    def factory(*hashes: str) -> Snapshot:
        return Snapshot(total=len(hashes), entries=[make_entry(h) for h in hashes])

    return factory


@pytest.fixture
def app_config() -> AppConfig:
    """Create a minimal valid app configuration."""
    return AppConfig(server=ServerConfig(url=SERVER_URL, api_key="secret-key"))


@pytest.fixture
def mock_notifier() -> MagicMock:
    """
    Create a mock notifier.

    Returns
    -------
    MagicMock
        A notifier whose batch call reports every entry as shown.
    """
    notifier = MagicMock()
    notifier.notify = AsyncMock()
    notifier.notify_batch = AsyncMock(side_effect=lambda entries: len(entries))
    notifier.close = AsyncMock()
    return notifier
