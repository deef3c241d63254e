# recall_ai/engine/retrieval.py
"""
Multi-source retrieval against the knowledge store.

For every category three kinds of bounded query are issued:
- one keyword lookup per keyword
- a prompt-pattern lookup when the analysis carries a pattern
- a top-N lookup, biased by the raw message for metadata transformations

Queries run on a thread pool when max_workers > 1. Results are always
collected in submission order, so the concatenated per-category output is
the same no matter which query finishes first.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from functools import partial
from typing import Callable, Dict, List, Sequence, Tuple

from recall_ai.core.constants import KEYWORD_QUERY_LIMIT, PATTERN_QUERY_LIMIT, TOP_QUERY_LIMIT
from recall_ai.core.entry import Category, LearnedEntry
from recall_ai.core.prompt import PromptAnalysis
from recall_ai.knowledge.protocol import KnowledgeStore
from recall_ai.logging.logger import get_logger
from recall_ai.logging.tags import RETRIEVER

from .ranking import RetrievalResult

logger = get_logger(__name__)

Query = Callable[[], List[LearnedEntry]]


@dataclass
class MultiSourceRetriever:
    """
    Fans bounded queries out over every category and ranks the union.

    Args:
        store: Knowledge store to query (read-only)
        max_workers: Concurrent queries; 1 runs them inline
    """

    store: KnowledgeStore
    max_workers: int = 4

    def plan(
        self, message: str, analysis: PromptAnalysis, keywords: Sequence[str]
    ) -> List[Tuple[Category, Query]]:
        """Build the ordered list of queries for a request."""
        queries: List[Tuple[Category, Query]] = []
        pattern = analysis.prompt_pattern

        for category in Category:
            for keyword in keywords:
                queries.append(
                    (
                        category,
                        partial(self.store.search_by_keyword, keyword, category, KEYWORD_QUERY_LIMIT),
                    )
                )
            if pattern:
                queries.append(
                    (
                        category,
                        partial(self.store.search_by_pattern, pattern, category, PATTERN_QUERY_LIMIT),
                    )
                )
            hint = message if category is Category.METADATA_TRANSFORMATION else None
            queries.append(
                (
                    category,
                    partial(self.store.top_by_category, category, TOP_QUERY_LIMIT, hint),
                )
            )

        return queries

    def collect(self, queries: List[Tuple[Category, Query]]) -> Dict[Category, List[LearnedEntry]]:
        """Run queries and concatenate results per category in plan order."""
        raw: Dict[Category, List[LearnedEntry]] = {category: [] for category in Category}

        if self.max_workers <= 1 or len(queries) <= 1:
            for category, query in queries:
                raw[category].extend(query() or [])
            return raw

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [(category, executor.submit(query)) for category, query in queries]
            # Waits in submission order; a failed query re-raises here.
            for category, future in futures:
                raw[category].extend(future.result() or [])

        return raw

    def retrieve(
        self, message: str, analysis: PromptAnalysis, keywords: Sequence[str]
    ) -> RetrievalResult:
        queries = self.plan(message, analysis, keywords)
        logger.debug(
            f"{RETRIEVER} Issuing {len(queries)} queries (keywords={len(keywords)}, "
            f"pattern={'yes' if analysis.prompt_pattern else 'no'}, workers={self.max_workers})"
        )

        result = RetrievalResult.from_raw(self.collect(queries))
        logger.info(f"{RETRIEVER} Retrieved {result.total()} entries")
        return result


__all__ = ["MultiSourceRetriever"]
