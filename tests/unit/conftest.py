"""Pytest unit test fixtures."""

import pytest

from weatherbot.conversation.store import InMemoryContextStore, SQLiteContextStore


@pytest.fixture()
def sqlite_store(tmp_path):
    db_path = tmp_path / "contexts.db"
    return SQLiteContextStore(db_path, "conv-1")


@pytest.fixture()
def memory_store():
    return InMemoryContextStore()
