"""Conversation context stores: in-memory and SQLite implementations."""

from __future__ import annotations

import json
import sqlite3
import threading
from abc import ABC, abstractmethod
from collections import OrderedDict
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from .models import ConversationContext

DEFAULT_CONVERSATION_ID = "default"


class ContextStore(ABC):
    """Single slot holding the latest opaque context token of one conversation.

    No history, no expiry and no locking: concurrent turns for the same
    conversation must be serialised by the caller.
    """

    @abstractmethod
    def get(self) -> ConversationContext | None:
        """Return the stored context, or ``None`` before the first turn."""

    @abstractmethod
    def set(self, context: ConversationContext | None) -> None:
        """Replace the stored context wholesale."""


class InMemoryContextStore(ContextStore):
    def __init__(self, context: ConversationContext | None = None) -> None:
        self._context = context

    def get(self) -> ConversationContext | None:
        return self._context

    def set(self, context: ConversationContext | None) -> None:
        self._context = context


class SQLiteContextStore(ContextStore):
    """SQLite-backed slot keyed by conversation id."""

    def __init__(self, db_path: Path, conversation_id: str = DEFAULT_CONVERSATION_ID) -> None:
        self.db_path = Path(db_path)
        self.conversation_id = conversation_id
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        with self._connection() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS contexts (
                    conversation_id TEXT PRIMARY KEY,
                    payload TEXT
                )
                """
            )

    def get(self) -> ConversationContext | None:
        with self._connection() as conn:
            row = conn.execute(
                "SELECT payload FROM contexts WHERE conversation_id = ?",
                (self.conversation_id,),
            ).fetchone()
        if row is None or row["payload"] is None:
            return None
        return json_loads(row["payload"])

    def set(self, context: ConversationContext | None) -> None:
        payload = None if context is None else json_dumps(context)
        with self._connection() as conn:
            conn.execute(
                """
                INSERT INTO contexts (conversation_id, payload) VALUES (?, ?)
                ON CONFLICT(conversation_id) DO UPDATE SET payload=excluded.payload
                """,
                (self.conversation_id, payload),
            )


class ContextStoreProvider:
    """Hand out the context store for a conversation id.

    In-memory stores are cached per id, keeping at most ``max_conversations``
    and evicting the least recently used one beyond that. When ``db_path`` is
    set every id maps to a row in the SQLite ``contexts`` table instead.
    """

    def __init__(self, db_path: Path | None = None, max_conversations: int = 1024) -> None:
        if max_conversations < 1:
            raise ValueError("max_conversations must be at least 1")
        self.db_path = Path(db_path) if db_path else None
        self.max_conversations = max_conversations
        self._memory: OrderedDict[str, InMemoryContextStore] = OrderedDict()
        self._lock = threading.Lock()

    def for_conversation(self, conversation_id: str | None = None) -> ContextStore:
        key = conversation_id or DEFAULT_CONVERSATION_ID
        if self.db_path is not None:
            return SQLiteContextStore(self.db_path, key)
        with self._lock:
            store = self._memory.get(key)
            if store is None:
                store = InMemoryContextStore()
                self._memory[key] = store
                while len(self._memory) > self.max_conversations:
                    self._memory.popitem(last=False)
            else:
                self._memory.move_to_end(key)
            return store


def json_dumps(payload: ConversationContext) -> str:
    return json.dumps(payload, separators=(",", ":"))


def json_loads(value: str) -> Any:
    return json.loads(value)
