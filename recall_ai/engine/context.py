# recall_ai/engine/context.py
"""
Context assembly.

Builds one prioritized text blob from ranked retrieval results:
framework knowledge, then code snippets, then API usage, then fixes
(fixes only when the request talks about fixing or errors).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from recall_ai.core.entry import Category, LearnedEntry
from recall_ai.core.prompt import PromptAnalysis
from recall_ai.logging.logger import get_logger
from recall_ai.logging.tags import CONTEXT

from .ranking import RetrievalResult, SecondaryRanker

logger = get_logger(__name__)

CONTEXT_HEADER = "Based on learned knowledge and framework patterns, here's relevant information:\n\n"

FRAMEWORK_LIMIT = 3
SNIPPET_LIMIT = 5
API_LIMIT = 3
FIX_LIMIT = 3

_FIX_TRIGGERS = ("fix", "error")


def render_block(entry: LearnedEntry) -> str:
    """Render one entry as a labeled block, with its declared imports if any."""
    header = f"// [{entry.category.value}] (score: {entry.positive_score})\n"
    if entry.metadata.import_patterns:
        header += f"// Imports: {entry.metadata.import_patterns}\n"
    return f"{header}{entry.content}\n\n"


@dataclass
class ContextAssembler:
    """Pure (RetrievalResult, PromptAnalysis, message) -> text."""

    ranker: SecondaryRanker = field(default_factory=SecondaryRanker)

    def framework_entries(
        self, result: RetrievalResult, analysis: PromptAnalysis
    ) -> List[LearnedEntry]:
        entries = list(result[Category.FRAMEWORK_KNOWLEDGE])
        framework = analysis.framework_type
        if framework:
            entries = [e for e in entries if e.matches_framework(framework)]
        return entries[:FRAMEWORK_LIMIT]

    def snippet_entries(
        self, result: RetrievalResult, analysis: PromptAnalysis
    ) -> List[LearnedEntry]:
        ranked = self.ranker.rank(result[Category.CODE_SNIPPET], analysis.framework_type)
        return ranked[:SNIPPET_LIMIT]

    def assemble(self, result: RetrievalResult, analysis: PromptAnalysis, message: str) -> str:
        blocks: List[LearnedEntry] = []
        blocks.extend(self.framework_entries(result, analysis))
        blocks.extend(self.snippet_entries(result, analysis))
        blocks.extend(result[Category.API_USAGE][:API_LIMIT])

        lowered = message.lower()
        if any(trigger in lowered for trigger in _FIX_TRIGGERS):
            blocks.extend(result[Category.FIX_PATCH][:FIX_LIMIT])

        logger.debug(f"{CONTEXT} Assembled {len(blocks)} blocks")
        return CONTEXT_HEADER + "".join(render_block(entry) for entry in blocks)


__all__ = ["CONTEXT_HEADER", "ContextAssembler", "render_block"]
