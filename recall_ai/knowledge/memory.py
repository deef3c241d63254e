# recall_ai/knowledge/memory.py
"""In-memory knowledge store for tests and throwaway sessions."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from recall_ai.core.entry import Category, EntryMetadata, FixRecord, LearnedEntry
from recall_ai.core.exceptions import KnowledgeWriteDisabled
from recall_ai.logging.logger import get_logger
from recall_ai.logging.tags import KNOWLEDGE

from .fixes import format_fix_content, parse_fix_record

logger = get_logger(__name__)


@dataclass
class _Row:
    entry: LearnedEntry
    user_prompt: Optional[str] = None


def _contains(haystack: Optional[str], needle: str) -> bool:
    return bool(haystack) and needle.lower() in haystack.lower()


class InMemoryKnowledgeStore:
    """
    List-backed knowledge store.

    Matching mirrors the SQLite store: case-insensitive substring search,
    results ordered by score descending then insertion order.
    """

    def __init__(self, entries: Sequence[LearnedEntry] = ()):
        self._rows: list[_Row] = []
        self._lock = threading.Lock()
        self._write_enabled = True
        for entry in entries:
            self._append(entry, None)

    # =========================================================================
    # Writes
    # =========================================================================

    def _append(self, entry: LearnedEntry, user_prompt: Optional[str]) -> LearnedEntry:
        stored = entry.model_copy(update={"id": len(self._rows) + 1})
        self._rows.append(_Row(stored, user_prompt))
        return stored

    def _check_writable(self) -> None:
        if not self._write_enabled:
            raise KnowledgeWriteDisabled("Knowledge store writes are disabled")

    def add(self, entry: LearnedEntry, user_prompt: Optional[str] = None) -> LearnedEntry:
        """Store an entry as-is."""
        with self._lock:
            self._check_writable()
            return self._append(entry, user_prompt)

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
        """Insert an entry or bump the score of an identical one."""
        category = Category.parse(category)
        with self._lock:
            self._check_writable()
            for index, row in enumerate(self._rows):
                if row.entry.category is category and row.entry.content == content:
                    bumped = row.entry.positive_score + 1 if increment_score else row.entry.positive_score
                    update: dict[str, Any] = {"positive_score": max(bumped, 0)}
                    if metadata is not None:
                        update["metadata"] = EntryMetadata.parse(metadata)
                    self._rows[index] = _Row(
                        row.entry.model_copy(update=update), user_prompt or row.user_prompt
                    )
                    return row.entry.id or index + 1

            entry = LearnedEntry(
                content=content,
                category=category,
                source=source,
                positive_score=score,
                metadata=metadata,
            )
            return self._append(entry, user_prompt).id or len(self._rows)

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
        with self._lock:
            self._check_writable()
            for index, row in enumerate(self._rows):
                if row.entry.id == entry_id:
                    score = max(row.entry.positive_score - 1, 0)
                    self._rows[index] = _Row(
                        row.entry.model_copy(update={"positive_score": score}), row.user_prompt
                    )
                    return

    # =========================================================================
    # Reads
    # =========================================================================

    def _select(self, category: Optional[Category], predicate, limit: int) -> list[LearnedEntry]:
        with self._lock:
            rows = [
                row
                for row in self._rows
                if (category is None or row.entry.category is category) and predicate(row)
            ]
        rows.sort(key=lambda row: -row.entry.positive_score)
        return [row.entry for row in rows[: max(limit, 0)]]

    def search_by_keyword(self, keyword: str, category: Category, limit: int) -> list[LearnedEntry]:
        return self._select(category, lambda row: _contains(row.entry.content, keyword), limit)

    def search_by_pattern(self, pattern: str, category: Category, limit: int) -> list[LearnedEntry]:
        return self._select(category, lambda row: _contains(row.user_prompt, pattern), limit)

    def top_by_category(
        self, category: Category, limit: int, relevance_hint: Optional[str] = None
    ) -> list[LearnedEntry]:
        if relevance_hint is None:
            return self._select(category, lambda row: True, limit)
        return self._select(
            category,
            lambda row: row.user_prompt is None or _contains(row.user_prompt, relevance_hint),
            limit,
        )

    def search_fixes_by_keywords(self, keywords: Sequence[str], limit: int) -> list[FixRecord]:
        if not keywords:
            return []

        def matches(row: _Row) -> bool:
            return any(
                _contains(row.entry.content, kw) or row.entry.metadata.mentions(kw)
                for kw in keywords
            )

        entries = self._select(Category.FIX_PATCH, matches, limit)
        logger.debug(f"{KNOWLEDGE} Fix lookup: keywords={list(keywords)}, hits={len(entries)}")
        return [parse_fix_record(e.content, e.metadata, e.positive_score) for e in entries]

    def count_by_category(self) -> dict[Category, int]:
        with self._lock:
            counts = {category: 0 for category in Category}
            for row in self._rows:
                counts[row.entry.category] += 1
        return counts

    # =========================================================================
    # Write flag
    # =========================================================================

    def set_write_enabled(self, enabled: bool) -> None:
        self._write_enabled = enabled

    def is_write_enabled(self) -> bool:
        return self._write_enabled


__all__ = ["InMemoryKnowledgeStore"]
