# recall_ai/knowledge/protocol.py
"""
Knowledge store contract.

The engine only reads from the store, plus toggling its write-enabled flag
for the duration of a request. Implementations must make concurrent reads
safe; the retriever may issue several queries at once.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence, runtime_checkable

from recall_ai.core.entry import Category, FixRecord, LearnedEntry


@runtime_checkable
class KnowledgeStore(Protocol):
    """Protocol for learned-knowledge stores."""

    def search_by_keyword(
        self, keyword: str, category: Category, limit: int
    ) -> list[LearnedEntry]: ...

    def search_by_pattern(
        self, pattern: str, category: Category, limit: int
    ) -> list[LearnedEntry]: ...

    def top_by_category(
        self, category: Category, limit: int, relevance_hint: Optional[str] = None
    ) -> list[LearnedEntry]: ...

    def search_fixes_by_keywords(self, keywords: Sequence[str], limit: int) -> list[FixRecord]: ...

    def set_write_enabled(self, enabled: bool) -> None: ...

    def is_write_enabled(self) -> bool: ...


__all__ = ["KnowledgeStore"]
