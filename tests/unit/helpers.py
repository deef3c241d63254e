# tests/unit/helpers.py
"""Builders and doubles shared by unit tests."""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

from recall_ai.core.entry import Category, FixRecord, LearnedEntry


def make_entry(
    content: str,
    category: Category = Category.CODE_SNIPPET,
    score: int = 1,
    source: str = "test",
    metadata: Any = None,
) -> LearnedEntry:
    return LearnedEntry(
        content=content,
        category=category,
        positive_score=score,
        source=source,
        metadata=metadata,
    )


class RecordingStore:
    """Store double that records calls and returns canned results."""

    def __init__(
        self,
        keyword_results: Optional[dict] = None,
        top_results: Optional[dict] = None,
        fixes: Sequence[FixRecord] = (),
    ):
        self.keyword_results = keyword_results or {}
        self.top_results = top_results or {}
        self.fixes = list(fixes)
        self.calls: List[tuple] = []
        self.write_enabled = True
        self.write_history: List[bool] = []

    def search_by_keyword(self, keyword, category, limit) -> List[LearnedEntry]:
        self.calls.append(("keyword", keyword, category, limit))
        return list(self.keyword_results.get((keyword, category), []))

    def search_by_pattern(self, pattern, category, limit) -> List[LearnedEntry]:
        self.calls.append(("pattern", pattern, category, limit))
        return []

    def top_by_category(self, category, limit, relevance_hint=None) -> List[LearnedEntry]:
        self.calls.append(("top", category, limit, relevance_hint))
        return list(self.top_results.get(category, []))

    def search_fixes_by_keywords(self, keywords, limit) -> List[FixRecord]:
        self.calls.append(("fixes", tuple(keywords), limit))
        return self.fixes[:limit]

    def set_write_enabled(self, enabled: bool) -> None:
        self.write_enabled = enabled
        self.write_history.append(enabled)

    def is_write_enabled(self) -> bool:
        return self.write_enabled
