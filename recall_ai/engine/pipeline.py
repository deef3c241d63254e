# recall_ai/engine/pipeline.py
"""
OfflineEngine - Core orchestration for offline answers.

Flow: keywords + analysis → retrieval → ranking → synthesis → self-check → streaming

The whole run happens with knowledge-store writes suspended. The terminal
event (Done, Error or Cancelled) is yielded only after writes have been
restored, so an observer reacting to it sees the store's original state.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Generator, Iterator, List, Optional, Sequence, Tuple

from recall_ai.analysis.classifier import (
    HeuristicClassifier,
    PromptClassifier,
    PromptModel,
    create_classifier,
)
from recall_ai.analysis.keywords import extract_keywords
from recall_ai.core.cancellation import CancellationToken
from recall_ai.core.events import (
    Cancelled,
    Chunk,
    Done,
    EngineEvent,
    Error,
    TerminalEvent,
    ToolCall,
    ToolResult,
)
from recall_ai.core.exceptions import (
    ClassificationModelNotReady,
    NoRelevantKnowledge,
    SynthesisFailure,
)
from recall_ai.core.prompt import PromptAnalysis
from recall_ai.knowledge.guard import suspend_writes
from recall_ai.knowledge.protocol import KnowledgeStore
from recall_ai.logging.logger import get_logger
from recall_ai.logging.tags import PIPELINE

from .messages import APOLOGY, GUIDANCE_LINES
from .ranking import RetrievalResult, SecondaryRanker
from .retrieval import MultiSourceRetriever
from .self_check import run_self_check
from .streaming import StreamingEmitter
from .synthesis import ResponseSynthesizer, SynthesizedResponse

if TYPE_CHECKING:
    from recall_ai.config.schema import RecallConfig

logger = get_logger(__name__)

Run = Generator[EngineEvent, None, TerminalEvent]


class OfflineEngine:
    """
    Offline knowledge engine.

    One stream() call serves one request and yields EngineEvents until
    exactly one terminal event.
    """

    def __init__(
        self,
        store: KnowledgeStore,
        classifier: Optional[PromptClassifier] = None,
        retriever: Optional[MultiSourceRetriever] = None,
        synthesizer: Optional[ResponseSynthesizer] = None,
        emitter: Optional[StreamingEmitter] = None,
        ranker: Optional[SecondaryRanker] = None,
    ):
        self.store = store
        self.classifier = classifier or HeuristicClassifier()
        self.retriever = retriever or MultiSourceRetriever(store)
        self.ranker = ranker or SecondaryRanker()
        self.synthesizer = synthesizer or ResponseSynthesizer(store, ranker=self.ranker)
        self.emitter = emitter or StreamingEmitter()

        logger.info(f"{PIPELINE} OfflineEngine initialized")

    # =========================================================================
    # Public API
    # =========================================================================

    def stream(self, message: str, cancel: Optional[CancellationToken] = None) -> Iterator[EngineEvent]:
        """
        Answer a request as a stream of events.

        Args:
            message: The user's request
            cancel: Optional token; cancelling stops the stream with Cancelled

        Yields:
            Chunk / ToolCall / ToolResult events, then one terminal event
        """
        cancel = cancel or CancellationToken()
        terminal: TerminalEvent = Done()

        with suspend_writes(self.store):
            try:
                terminal = yield from self._run(message, cancel)
            except SynthesisFailure as exc:
                logger.error(f"{PIPELINE} {exc} (request: {message[:80]!r})")
                terminal = Error(str(exc))

        logger.debug(f"{PIPELINE} Finished with {type(terminal).__name__}")
        yield terminal

    def respond(
        self, message: str, cancel: Optional[CancellationToken] = None
    ) -> Tuple[str, TerminalEvent]:
        """Run a request to completion and return (text, terminal event)."""
        parts: List[str] = []
        terminal: TerminalEvent = Done()
        for event in self.stream(message, cancel):
            if isinstance(event, Chunk):
                parts.append(event.text)
            elif isinstance(event, (Done, Error, Cancelled)):
                terminal = event
        return "".join(parts), terminal

    # =========================================================================
    # Stages
    # =========================================================================

    def _run(self, message: str, cancel: CancellationToken) -> Run:
        keywords = extract_keywords(message)

        try:
            analysis = self._analyze(message)
        except ClassificationModelNotReady:
            logger.warning(f"{PIPELINE} Classification model not ready, sending guidance")
            for line in GUIDANCE_LINES:
                yield Chunk(line)
            return Done()

        if cancel.is_cancelled:
            return Cancelled()

        try:
            result = self._retrieve(message, analysis, keywords)
        except NoRelevantKnowledge:
            logger.info(f"{PIPELINE} No relevant knowledge for request")
            yield Chunk(APOLOGY)
            return Done()

        if cancel.is_cancelled:
            return Cancelled()

        response = self._synthesize(message, analysis, result, keywords)

        for activity in response.tool_activity:
            yield ToolCall(activity.name, dict(activity.arguments))
            yield ToolResult(activity.name, dict(activity.payload))

        if cancel.is_cancelled:
            return Cancelled()

        completed = yield from self.emitter.emit(response.text, cancel)
        return Done() if completed else Cancelled()

    def _analyze(self, message: str) -> PromptAnalysis:
        try:
            analysis = self.classifier.classify(message)
        except ClassificationModelNotReady:
            raise
        except Exception as exc:
            raise SynthesisFailure(f"Analysis failed: {exc}") from exc

        logger.debug(f"{PIPELINE} Intent: {analysis.intent.value}")
        return analysis

    def _retrieve(
        self, message: str, analysis: PromptAnalysis, keywords: Sequence[str]
    ) -> RetrievalResult:
        try:
            result = self.retriever.retrieve(message, analysis, keywords)
        except Exception as exc:
            raise SynthesisFailure(f"Retrieval failed: {exc}") from exc

        if result.is_empty:
            raise NoRelevantKnowledge("Knowledge store returned no entries")
        return result

    def _synthesize(
        self,
        message: str,
        analysis: PromptAnalysis,
        result: RetrievalResult,
        keywords: Sequence[str],
    ) -> SynthesizedResponse:
        try:
            response = self.synthesizer.synthesize(message, analysis, result, keywords)
        except Exception as exc:
            raise SynthesisFailure(f"Synthesis failed: {exc}") from exc

        return replace(response, self_check=run_self_check(response.text, analysis))

    # =========================================================================
    # Factory
    # =========================================================================

    @classmethod
    def from_config(
        cls,
        config: "RecallConfig",
        store: Optional[KnowledgeStore] = None,
        model: Optional[PromptModel] = None,
    ) -> "OfflineEngine":
        """
        Create an engine from configuration.

        Args:
            config: Validated RecallConfig
            store: Store to use instead of the configured one
            model: Prompt model for the "model" analysis strategy
        """
        from recall_ai.knowledge import create_store

        if store is None:
            store = create_store(config.knowledge)

        ranker = SecondaryRanker(preferred_sources=list(config.ranking.preferred_sources))
        return cls(
            store=store,
            classifier=create_classifier(config.analysis, model),
            retriever=MultiSourceRetriever(store, max_workers=config.retrieval.max_workers),
            synthesizer=ResponseSynthesizer(store, ranker=ranker),
            ranker=ranker,
        )


__all__ = ["OfflineEngine"]
