# recall_ai/engine/synthesis.py
"""
Response synthesis.

Dispatches on the classified intent and builds the response text from
ranked retrieval results. Every branch is total: when nothing usable was
learned it returns one of the fixed fallback texts instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from recall_ai.core.constants import (
    FIX_FIELD_TRUNCATION,
    FIX_QUERY_LIMIT,
    QUESTION_CITATION_LENGTH,
)
from recall_ai.core.entry import Category, FixRecord, LearnedEntry
from recall_ai.core.exceptions import MalformedLearnedEntry
from recall_ai.core.prompt import Intent, PromptAnalysis
from recall_ai.knowledge.protocol import KnowledgeStore
from recall_ai.logging.logger import get_logger
from recall_ai.logging.tags import SYNTHESIS

from .context import ContextAssembler
from .messages import APOLOGY, NEED_MORE_KNOWLEDGE
from .ranking import RetrievalResult, SecondaryRanker
from .self_check import SelfCheckReport

logger = get_logger(__name__)

FIX_LOOKUP_TOOL = "search_fixes_by_keywords"

EVENT_HINT_FRAMEWORKS = ("HTML", "JavaScript")


@dataclass(frozen=True)
class ToolActivity:
    """An external lookup made while synthesizing."""

    name: str
    arguments: Dict[str, Any] = field(default_factory=dict)
    payload: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SynthesizedResponse:
    """Final response text with the lookups and self-check behind it."""

    text: str
    intent: Intent
    tool_activity: List[ToolActivity] = field(default_factory=list)
    self_check: Optional[SelfCheckReport] = None


@dataclass
class SynthesisRequest:
    """Everything a synthesis branch may look at."""

    message: str
    analysis: PromptAnalysis
    result: RetrievalResult
    keywords: Sequence[str]
    tool_activity: List[ToolActivity] = field(default_factory=list)


def _contents(entries: Sequence[LearnedEntry]) -> str:
    return "".join(f"{entry.content}\n\n" for entry in entries)


def render_fix(fix: FixRecord) -> str:
    """
    Render a fix as a json-fenced block.

    Code fields are inserted verbatim and cut to FIX_FIELD_TRUNCATION
    characters.
    """
    return (
        "```json\n{\n"
        f'  "old_code": "{fix.old_code[:FIX_FIELD_TRUNCATION]}",\n'
        f'  "new_code": "{fix.new_code[:FIX_FIELD_TRUNCATION]}",\n'
        f'  "reason": "{fix.reason}",\n'
        f'  "score": {fix.score}\n'
        "}\n```\n\n"
    )


def adapt_code(code: str, analysis: PromptAnalysis) -> str:
    """Fill {file}/{function} placeholders from the request's names."""
    if analysis.file_names:
        code = code.replace("{file}", analysis.file_names[0])
    if analysis.function_names:
        code = code.replace("{function}", analysis.function_names[0])
    return f"{code}\n\n// Adapted from learned knowledge and framework patterns"


@dataclass
class ResponseSynthesizer:
    """
    Intent-driven response builder.

    Args:
        store: Knowledge store, used only for the fix lookup
        ranker: Synthesis-time tie-break ranking
        assembler: Context blob builder for general requests
    """

    store: KnowledgeStore
    ranker: SecondaryRanker = field(default_factory=SecondaryRanker)
    assembler: Optional[ContextAssembler] = None

    def __post_init__(self):
        if self.assembler is None:
            self.assembler = ContextAssembler(ranker=self.ranker)
        self._branches: Dict[Intent, Callable[[SynthesisRequest], str]] = {
            Intent.ANSWER_QUESTION: self.answer_question,
            Intent.CREATE_CODE: self.create_code,
            Intent.FIX_CODE: self.fix_code,
            Intent.USE_API: self.use_api,
            Intent.RUN_TEST: self.run_test,
            Intent.GENERAL: self.general,
        }

    def synthesize(
        self,
        message: str,
        analysis: PromptAnalysis,
        result: RetrievalResult,
        keywords: Sequence[str] = (),
    ) -> SynthesizedResponse:
        request = SynthesisRequest(message, analysis, result, list(keywords))
        text = self._branches[analysis.intent](request)

        logger.info(
            f"{SYNTHESIS} intent={analysis.intent.value}, length={len(text)}, "
            f"tools={len(request.tool_activity)}"
        )
        return SynthesizedResponse(
            text=text, intent=analysis.intent, tool_activity=list(request.tool_activity)
        )

    # =========================================================================
    # Branches
    # =========================================================================

    def answer_question(self, request: SynthesisRequest) -> str:
        entries = request.result[Category.METADATA_TRANSFORMATION]
        qa_entries = [e for e in entries if e.metadata.has_question_answer]

        if qa_entries:
            best = qa_entries[0]
            try:
                qa = best.metadata.question_answer()
            except MalformedLearnedEntry as e:
                logger.debug(f"{SYNTHESIS} Q&A entry {best.id} unusable, using raw content: {e}")
                return f"Based on learned knowledge:\n\n{best.content}"

            citation = qa.question[:QUESTION_CITATION_LENGTH]
            return (
                f"Based on learned knowledge:\n\n{qa.answer}"
                f'\n\n(Learned from previous question: "{citation}")'
            )

        if entries:
            return "Based on learned knowledge:\n\n" + _contents(entries[:3])

        return APOLOGY

    def create_code(self, request: SynthesisRequest) -> str:
        analysis = request.analysis
        framework = analysis.framework_type

        best = self.ranker.best(request.result[Category.CODE_SNIPPET], framework)
        if best is None:
            best = self.ranker.best(request.result[Category.FRAMEWORK_KNOWLEDGE], framework)
        if best is None:
            return APOLOGY

        parts = ["Based on learned patterns and framework knowledge, here's a solution:\n\n"]
        if best.metadata.code_template:
            parts.append(f"// Template: {best.metadata.code_template}\n\n")
        if analysis.import_patterns:
            parts.append("// Required imports:\n")
            parts.extend(f"// {imp}\n" for imp in analysis.import_patterns.split(", "))
            parts.append("\n")

        parts.append(adapt_code(best.content, analysis))

        handlers = analysis.event_handler_patterns or best.metadata.event_handler_patterns
        if handlers and (framework or best.metadata.framework_type) in EVENT_HINT_FRAMEWORKS:
            parts.append(f"\n// Event handlers: {handlers}\n")

        return "".join(parts)

    def fix_code(self, request: SynthesisRequest) -> str:
        keywords = list(request.keywords)
        fixes = self.store.search_fixes_by_keywords(keywords, FIX_QUERY_LIMIT)
        request.tool_activity.append(
            ToolActivity(
                name=FIX_LOOKUP_TOOL,
                arguments={"keywords": keywords, "limit": FIX_QUERY_LIMIT},
                payload={"count": len(fixes)},
            )
        )

        if fixes:
            header = (
                f"Based on learned fixes (retrieved by keywords: {', '.join(keywords)}), "
                "here are potential solutions:\n\n"
            )
            return header + "".join(render_fix(fix) for fix in fixes)

        patches = request.result[Category.FIX_PATCH][:2]
        if patches:
            return "Based on learned fixes:\n\n" + _contents(patches)

        return APOLOGY

    def use_api(self, request: SynthesisRequest) -> str:
        entries = request.result[Category.API_USAGE][:3]
        if not entries:
            return APOLOGY
        return "Based on learned API usage:\n\n" + _contents(entries)

    def run_test(self, request: SynthesisRequest) -> str:
        entries = [e for e in request.result[Category.CODE_SNIPPET] if e.mentions("test")][:3]
        if not entries:
            return APOLOGY
        return "Based on learned test patterns:\n\n" + _contents(entries)

    def general(self, request: SynthesisRequest) -> str:
        context = self.assembler.assemble(request.result, request.analysis, request.message)
        top = request.result.union()[:5]

        if top:
            body = "Here's relevant learned knowledge:\n\n" + _contents(top)
        else:
            body = NEED_MORE_KNOWLEDGE

        return f"{context}\n\nBased on the learned knowledge above, here's my response:\n{body}"


__all__ = [
    "FIX_LOOKUP_TOOL",
    "ToolActivity",
    "SynthesizedResponse",
    "ResponseSynthesizer",
    "adapt_code",
    "render_fix",
]
