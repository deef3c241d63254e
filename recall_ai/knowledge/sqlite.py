# recall_ai/knowledge/sqlite.py
"""SQLite-backed knowledge store for local, persistent learning."""

from __future__ import annotations

import json
import sqlite3
import threading
import time
from pathlib import Path
from typing import Any, Optional, Sequence

from recall_ai.core.entry import Category, FixRecord, LearnedEntry
from recall_ai.core.exceptions import KnowledgeStoreError, KnowledgeWriteDisabled
from recall_ai.core.paths import RecallPaths
from recall_ai.logging.logger import get_logger
from recall_ai.logging.tags import KNOWLEDGE

from .fixes import format_fix_content, parse_fix_record

logger = get_logger(__name__)

_COLUMNS = "id, type, content, positive_score, source, metadata, user_prompt"


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _like(text: str) -> str:
    return f"%{_escape_like(text)}%"


def _metadata_text(metadata: Any) -> Optional[str]:
    if metadata is None:
        return None
    if isinstance(metadata, str):
        return metadata
    return json.dumps(metadata, sort_keys=True, default=str)


class SqliteKnowledgeStore:
    """
    Local knowledge storage using SQLite.

    One `learned_data` table holds every category. Matching uses LIKE
    (case-insensitive for ASCII); results are ordered by score, then by
    insertion order so repeated queries return identical lists.
    """

    def __init__(self, path: Optional[str | Path] = None):
        self._path = Path(path) if path is not None else RecallPaths.knowledge_db()
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.Lock()
        self._write_enabled = True

    @property
    def db_path(self) -> Path:
        return self._path

    @property
    def conn(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._conn is None:
            if str(self._path) != ":memory:":
                self._path.parent.mkdir(parents=True, exist_ok=True)
            try:
                self._conn = sqlite3.connect(str(self._path), check_same_thread=False)
            except sqlite3.Error as exc:
                raise KnowledgeStoreError(f"Cannot open knowledge store {self._path}") from exc
            self._ensure_schema(self._conn)
        return self._conn

    @staticmethod
    def _ensure_schema(conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS learned_data (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                type TEXT NOT NULL,
                content TEXT NOT NULL,
                positive_score INTEGER DEFAULT 1,
                source TEXT NOT NULL,
                timestamp INTEGER NOT NULL,
                metadata TEXT,
                user_prompt TEXT
            )
        """
        )
        conn.execute("CREATE INDEX IF NOT EXISTS idx_type ON learned_data(type)")
        conn.execute(
            "CREATE INDEX IF NOT EXISTS idx_score ON learned_data(positive_score DESC)"
        )
        conn.execute("CREATE INDEX IF NOT EXISTS idx_user_prompt ON learned_data(user_prompt)")
        conn.commit()

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    # =========================================================================
    # Internals
    # =========================================================================

    def _query(self, sql: str, params: Sequence[Any]) -> list[tuple]:
        with self._lock:
            try:
                return self.conn.execute(sql, tuple(params)).fetchall()
            except sqlite3.Error as exc:
                raise KnowledgeStoreError(f"Knowledge query failed: {exc}") from exc

    @staticmethod
    def _to_entry(row: tuple) -> LearnedEntry:
        id_, type_, content, score, source, metadata, _user_prompt = row
        return LearnedEntry(
            id=id_,
            category=type_,
            content=content,
            positive_score=score,
            source=source,
            metadata=metadata,
        )

    def _select(self, where: str, params: Sequence[Any], limit: int) -> list[LearnedEntry]:
        rows = self._query(
            f"SELECT {_COLUMNS} FROM learned_data WHERE {where} "
            "ORDER BY positive_score DESC, id ASC LIMIT ?",
            [*params, max(limit, 0)],
        )
        return [self._to_entry(row) for row in rows]

    def _check_writable(self) -> None:
        if not self._write_enabled:
            raise KnowledgeWriteDisabled("Knowledge store writes are disabled")

    # =========================================================================
    # Reads
    # =========================================================================

    def search_by_keyword(self, keyword: str, category: Category, limit: int) -> list[LearnedEntry]:
        return self._select(
            "type = ? AND content LIKE ? ESCAPE '\\'", [category.value, _like(keyword)], limit
        )

    def search_by_pattern(self, pattern: str, category: Category, limit: int) -> list[LearnedEntry]:
        return self._select(
            "type = ? AND user_prompt LIKE ? ESCAPE '\\'", [category.value, _like(pattern)], limit
        )

    def top_by_category(
        self, category: Category, limit: int, relevance_hint: Optional[str] = None
    ) -> list[LearnedEntry]:
        if relevance_hint is None:
            return self._select("type = ?", [category.value], limit)
        return self._select(
            "type = ? AND (user_prompt LIKE ? ESCAPE '\\' OR user_prompt IS NULL)",
            [category.value, _like(relevance_hint)],
            limit,
        )

    def search_fixes_by_keywords(self, keywords: Sequence[str], limit: int) -> list[FixRecord]:
        if not keywords:
            return []

        conditions = " OR ".join(
            "content LIKE ? ESCAPE '\\' OR metadata LIKE ? ESCAPE '\\'" for _ in keywords
        )
        params: list[Any] = [Category.FIX_PATCH.value]
        for keyword in keywords:
            params.extend([_like(keyword), _like(keyword)])

        entries = self._select(f"type = ? AND ({conditions})", params, limit)
        logger.debug(f"{KNOWLEDGE} Fix lookup: keywords={list(keywords)}, hits={len(entries)}")
        return [parse_fix_record(e.content, e.metadata, e.positive_score) for e in entries]

    def count_by_category(self) -> dict[Category, int]:
        counts = {category: 0 for category in Category}
        for type_, count in self._query(
            "SELECT type, COUNT(*) FROM learned_data GROUP BY type", []
        ):
            try:
                counts[Category.parse(type_)] = count
            except ValueError:
                logger.warning(f"{KNOWLEDGE} Ignoring unknown category {type_!r}")
        return counts

    # =========================================================================
    # Writes
    # =========================================================================

    def record(
        self,
        category: Category | str,
        content: str,
        source: str,
        metadata: Any = None,
        user_prompt: Optional[str] = None,
        increment_score: bool = True,
        score: int = 1,
    ) -> int:
        """
        Insert an entry, or update the identical (category, content) entry.

        Updating bumps the score by one when increment_score is set.

        Returns:
            Row id of the inserted or updated entry

        Raises:
            KnowledgeWriteDisabled: writes are currently suspended
        """
        category = Category.parse(category)
        metadata_text = _metadata_text(metadata)
        now = int(time.time() * 1000)

        with self._lock:
            self._check_writable()
            conn = self.conn
            try:
                row = conn.execute(
                    "SELECT id, positive_score FROM learned_data WHERE type = ? AND content = ?",
                    (category.value, content),
                ).fetchone()

                if row is not None:
                    entry_id, current = row
                    new_score = current + 1 if increment_score else max(current, 0)
                    conn.execute(
                        "UPDATE learned_data SET positive_score = ?, timestamp = ?, "
                        "metadata = COALESCE(?, metadata), user_prompt = COALESCE(?, user_prompt) "
                        "WHERE id = ?",
                        (new_score, now, metadata_text, user_prompt, entry_id),
                    )
                else:
                    cursor = conn.execute(
                        "INSERT INTO learned_data "
                        "(type, content, positive_score, source, timestamp, metadata, user_prompt) "
                        "VALUES (?, ?, ?, ?, ?, ?, ?)",
                        (category.value, content, score, source, now, metadata_text, user_prompt),
                    )
                    entry_id = cursor.lastrowid
                conn.commit()
            except sqlite3.Error as exc:
                raise KnowledgeStoreError(f"Failed to record entry: {exc}") from exc

        logger.debug(f"{KNOWLEDGE} Recorded {category.value} entry id={entry_id}")
        return int(entry_id)

    def record_fix(
        self,
        old_code: str,
        new_code: str,
        reason: str = "",
        source: str = "user",
        user_prompt: Optional[str] = None,
    ) -> int:
        """Record a fix as a fix_patch entry with structured metadata."""
        return self.record(
            Category.FIX_PATCH,
            format_fix_content(old_code, new_code, reason),
            source,
            metadata={"old_code": old_code, "new_code": new_code, "reason": reason},
            user_prompt=user_prompt,
        )

    def decrement_score(self, entry_id: int) -> None:
        """Apply negative feedback; scores never drop below zero."""
        with self._lock:
            self._check_writable()
            try:
                self.conn.execute(
                    "UPDATE learned_data SET positive_score = MAX(positive_score - 1, 0) "
                    "WHERE id = ?",
                    (entry_id,),
                )
                self.conn.commit()
            except sqlite3.Error as exc:
                raise KnowledgeStoreError(f"Failed to update score: {exc}") from exc

    # =========================================================================
    # Write flag
    # =========================================================================

    def set_write_enabled(self, enabled: bool) -> None:
        self._write_enabled = enabled

    def is_write_enabled(self) -> bool:
        return self._write_enabled


__all__ = ["SqliteKnowledgeStore"]
