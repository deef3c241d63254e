# recall_ai/engine/ranking.py
"""
Ranking and deduplication of retrieved entries.

Two stages:
- dedupe_and_rank(): per-category, persisted into RetrievalResult.
  Exact-content dedupe (first wins), score descending, capped.
- SecondaryRanker: synthesis-time tie-breaks. Framework mention first,
  then preferred provenance, then score.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from recall_ai.core.constants import CATEGORY_RESULT_CAP
from recall_ai.core.entry import Category, LearnedEntry
from recall_ai.logging.logger import get_logger
from recall_ai.logging.tags import RANKER

logger = get_logger(__name__)


def dedupe_and_rank(
    entries: Iterable[LearnedEntry], cap: int = CATEGORY_RESULT_CAP
) -> List[LearnedEntry]:
    """
    Deduplicate by exact content and sort by score descending.

    The sort is stable, so equal scores keep their retrieval order.
    """
    seen: set[str] = set()
    unique: List[LearnedEntry] = []

    for entry in entries:
        if entry.content in seen:
            continue
        seen.add(entry.content)
        unique.append(entry)

    unique.sort(key=lambda e: e.positive_score, reverse=True)
    return unique[:cap]


class RetrievalResult(Mapping[Category, Tuple[LearnedEntry, ...]]):
    """
    Ranked entries for every category.

    Always holds all five categories; missing ones are empty. Lists are
    stored as tuples so results cannot be altered after ranking.
    """

    def __init__(self, entries: Optional[Mapping[Category, Sequence[LearnedEntry]]] = None):
        entries = entries or {}
        self._entries: Dict[Category, Tuple[LearnedEntry, ...]] = {
            category: tuple(entries.get(category, ())) for category in Category
        }

    @classmethod
    def from_raw(cls, raw: Mapping[Category, Iterable[LearnedEntry]]) -> "RetrievalResult":
        """Rank raw per-category query output."""
        ranked = {category: dedupe_and_rank(raw.get(category, ())) for category in Category}
        logger.debug(
            f"{RANKER} Ranked: "
            + ", ".join(f"{c.value}={len(v)}" for c, v in ranked.items())
        )
        return cls(ranked)

    def __getitem__(self, category: Category) -> Tuple[LearnedEntry, ...]:
        return self._entries[category]

    def __iter__(self) -> Iterator[Category]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def is_empty(self) -> bool:
        return not any(self._entries.values())

    def total(self) -> int:
        return sum(len(v) for v in self._entries.values())

    def union(self) -> List[LearnedEntry]:
        """All entries across categories, ordered by score descending."""
        merged = [entry for category in Category for entry in self._entries[category]]
        merged.sort(key=lambda e: e.positive_score, reverse=True)
        return merged

    def __repr__(self) -> str:
        counts = ", ".join(f"{c.value}={len(v)}" for c, v in self._entries.items())
        return f"RetrievalResult({counts})"


@dataclass
class SecondaryRanker:
    """
    Synthesis-time ranking.

    Sort key, all descending:
    1. entry belongs to the detected framework (LearnedEntry.matches_framework)
    2. provenance rank (earlier allowlist tag = stronger)
    3. positive_score
    """

    preferred_sources: List[str] = field(default_factory=lambda: ["gemini", "normal_flow"])

    def provenance_rank(self, entry: LearnedEntry) -> int:
        source = entry.source.lower()
        for index, tag in enumerate(self.preferred_sources):
            if tag and tag.lower() in source:
                return len(self.preferred_sources) - index
        return 0

    def rank(
        self, entries: Iterable[LearnedEntry], framework_type: Optional[str] = None
    ) -> List[LearnedEntry]:
        def key(entry: LearnedEntry) -> Tuple[int, int, int]:
            return (
                1 if entry.matches_framework(framework_type) else 0,
                self.provenance_rank(entry),
                entry.positive_score,
            )

        return sorted(entries, key=key, reverse=True)

    def best(
        self, entries: Iterable[LearnedEntry], framework_type: Optional[str] = None
    ) -> Optional[LearnedEntry]:
        ranked = self.rank(entries, framework_type)
        return ranked[0] if ranked else None


__all__ = ["dedupe_and_rank", "RetrievalResult", "SecondaryRanker"]
