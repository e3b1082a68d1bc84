"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from sqlbuilder.core.config import Settings
from sqlbuilder.db.connections import get_engine, get_store_engine, reset_engine
from sqlbuilder.repositories.kv_store import KeyValueStore
from sqlbuilder.repositories.query_repository import SavedQueryRepository


@pytest.fixture
def demo_engine():
    """Fresh seeded in-memory demo database."""
    reset_engine()
    engine = get_engine()
    yield engine
    reset_engine()


@pytest.fixture
def store(tmp_path: Path) -> KeyValueStore:
    """Key-value store backed by a temporary SQLite file."""
    return KeyValueStore(get_store_engine(tmp_path / "store.db"))


@pytest.fixture
def repo(store: KeyValueStore) -> SavedQueryRepository:
    return SavedQueryRepository(store)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        store_path=tmp_path / "store.db",
        api_url="https://api.test/v1/messages",
        model="test-model",
        max_tokens=256,
        export_dir=tmp_path / "exports",
    )
