from __future__ import annotations

import datetime as dt
import sqlite3
from dataclasses import replace
from pathlib import Path
from threading import Lock
from typing import Any, Optional

from .contact import Message
from .core.matching import Item, ItemType
from .core.matching.models import coerce_item_date

ITEM_COLUMNS = "id, type, title, description, category, location, date, contact, created_at"


class StoreError(Exception):
    """Base class for item store errors."""


class DuplicateItemError(StoreError):
    """Raised when an item id is already present in the store."""


class ItemNotFoundError(StoreError, LookupError):
    """Raised when an operation refers to an item id the store does not hold."""


class ItemStore:
    """SQLite-backed store for listings and contact messages on a single device."""

    def __init__(self, path: Path) -> None:
        self.path = path
        if str(path) != ":memory:":
            self.path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = Lock()
        self._conn = sqlite3.connect(str(self.path), check_same_thread=False)
        self._conn.execute(
            """
            CREATE TABLE IF NOT EXISTS items (
                id TEXT PRIMARY KEY,
                type TEXT NOT NULL,
                title TEXT NOT NULL DEFAULT '',
                description TEXT NOT NULL DEFAULT '',
                category TEXT NOT NULL DEFAULT '',
                location TEXT NOT NULL DEFAULT '',
                date TEXT,
                contact TEXT,
                created_at TEXT NOT NULL
            )
            """
        )
        self._conn.execute(
            """
            CREATE TABLE IF NOT EXISTS messages (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                item_id TEXT NOT NULL,
                sender_alias TEXT NOT NULL,
                body TEXT NOT NULL,
                created_at TEXT NOT NULL
            )
            """
        )
        self._conn.execute("CREATE INDEX IF NOT EXISTS idx_items_type ON items(type)")
        self._conn.execute("CREATE INDEX IF NOT EXISTS idx_messages_item ON messages(item_id)")
        self._conn.commit()

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    def add_item(self, item: Item) -> Item:
        created_at = item.created_at or dt.datetime.now().replace(microsecond=0)
        with self._lock:
            try:
                self._conn.execute(
                    f"INSERT INTO items({ITEM_COLUMNS}) VALUES(?, ?, ?, ?, ?, ?, ?, ?, ?)",
                    (
                        item.id,
                        item.type.value,
                        item.title,
                        item.description,
                        item.category,
                        item.location,
                        item.date.isoformat() if item.date else None,
                        item.contact,
                        created_at.isoformat(),
                    ),
                )
            except sqlite3.IntegrityError as exc:
                raise DuplicateItemError(f"Item {item.id!r} already exists") from exc
            self._conn.commit()
        return replace(item, created_at=created_at)

    def get_item(self, item_id: str) -> Optional[Item]:
        with self._lock:
            cursor = self._conn.execute(
                f"SELECT {ITEM_COLUMNS} FROM items WHERE id = ?",
                (item_id,),
            )
            row = cursor.fetchone()
        if not row:
            return None
        return self._row_to_item(row)

    def list_items(self, item_type: Optional[ItemType] = None) -> list[Item]:
        return self.search(item_type=item_type)

    def delete_item(self, item_id: str) -> bool:
        with self._lock:
            cursor = self._conn.execute("DELETE FROM items WHERE id = ?", (item_id,))
            self._conn.execute("DELETE FROM messages WHERE item_id = ?", (item_id,))
            self._conn.commit()
        return cursor.rowcount > 0

    def search(
        self,
        query: Optional[str] = None,
        item_type: Optional[ItemType] = None,
        category: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Item]:
        where, params = self._filters(query, item_type, category)
        sql = f"SELECT {ITEM_COLUMNS} FROM items{where} ORDER BY created_at DESC, rowid DESC"
        if limit is not None:
            sql += " LIMIT ? OFFSET ?"
            params.extend([int(limit), max(0, int(offset))])
        with self._lock:
            cursor = self._conn.execute(sql, params)
            rows = cursor.fetchall()
        return [self._row_to_item(row) for row in rows]

    def count(
        self,
        query: Optional[str] = None,
        item_type: Optional[ItemType] = None,
        category: Optional[str] = None,
    ) -> int:
        where, params = self._filters(query, item_type, category)
        with self._lock:
            cursor = self._conn.execute(f"SELECT COUNT(*) FROM items{where}", params)
            row = cursor.fetchone()
        return int(row[0]) if row else 0

    def categories(self) -> list[str]:
        with self._lock:
            cursor = self._conn.execute(
                "SELECT DISTINCT category FROM items WHERE category != '' ORDER BY category"
            )
            rows = cursor.fetchall()
        return [row[0] for row in rows]

    def add_message(self, item_id: str, sender_alias: str, body: str) -> Message:
        created_at = dt.datetime.now().replace(microsecond=0)
        with self._lock:
            if not self._conn.execute("SELECT 1 FROM items WHERE id = ?", (item_id,)).fetchone():
                raise ItemNotFoundError(f"No listing with id {item_id!r}")
            cursor = self._conn.execute(
                """
                INSERT INTO messages(item_id, sender_alias, body, created_at)
                VALUES(?, ?, ?, ?)
                """,
                (item_id, sender_alias, body, created_at.isoformat()),
            )
            message_id = cursor.lastrowid
            row = self._conn.execute(
                "SELECT id, item_id, sender_alias, body, created_at FROM messages WHERE id = ?",
                (message_id,),
            ).fetchone()
            self._conn.commit()
        return self._row_to_message(row)

    def list_messages(self, item_id: str) -> list[Message]:
        with self._lock:
            cursor = self._conn.execute(
                """
                SELECT id, item_id, sender_alias, body, created_at
                FROM messages WHERE item_id = ? ORDER BY id
                """,
                (item_id,),
            )
            rows = cursor.fetchall()
        return [self._row_to_message(row) for row in rows]

    @staticmethod
    def _filters(
        query: Optional[str], item_type: Optional[ItemType], category: Optional[str]
    ) -> tuple[str, list[Any]]:
        clauses: list[str] = []
        params: list[Any] = []
        if item_type is not None:
            clauses.append("type = ?")
            params.append(item_type.value)
        if category:
            clauses.append("category = ?")
            params.append(category)
        needle = (query or "").strip()
        if needle:
            pattern = "%" + _escape_like(needle) + "%"
            clauses.append(
                "(title LIKE ? ESCAPE '\\' OR description LIKE ? ESCAPE '\\' OR location LIKE ? ESCAPE '\\')"
            )
            params.extend([pattern, pattern, pattern])
        if not clauses:
            return "", params
        return " WHERE " + " AND ".join(clauses), params

    @staticmethod
    def _row_to_item(row: tuple) -> Item:
        item_id, item_type, title, description, category, location, date, contact, created_at = row
        return Item(
            id=item_id,
            type=ItemType(item_type),
            title=title or "",
            description=description or "",
            category=category or "",
            location=location or "",
            date=coerce_item_date(date),
            contact=contact,
            created_at=_parse_stored_timestamp(created_at),
        )

    @staticmethod
    def _row_to_message(row: tuple) -> Message:
        message_id, item_id, sender_alias, body, created_at = row
        return Message(
            id=int(message_id),
            item_id=item_id,
            sender_alias=sender_alias,
            body=body,
            created_at=_parse_stored_timestamp(created_at),
        )


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _parse_stored_timestamp(value: Optional[str]) -> Optional[dt.datetime]:
    if not value:
        return None
    try:
        return dt.datetime.fromisoformat(value)
    except ValueError:
        return None
