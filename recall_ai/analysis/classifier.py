# recall_ai/analysis/classifier.py
"""
Request classification strategies.

Both strategies turn a message into a PromptAnalysis:

- HeuristicClassifier: fixed keyword rules, always available.
- ModelBackedClassifier: delegates to an external prompt model and parses
  its JSON answer. Raises ClassificationModelNotReady when the model is
  missing or still loading so the pipeline can answer with guidance.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional, Protocol, Union, runtime_checkable

from pydantic import ValidationError

from recall_ai.analysis.hints import PromptHintExtractor
from recall_ai.core.exceptions import ClassificationModelNotReady
from recall_ai.core.prompt import AnalysisMetadata, Intent, PromptAnalysis
from recall_ai.logging.logger import get_logger
from recall_ai.logging.tags import ANALYSIS

if TYPE_CHECKING:
    from recall_ai.config.schema import AnalysisConfig

logger = get_logger(__name__)

QUESTION_WORDS = (
    "what",
    "how",
    "why",
    "when",
    "where",
    "which",
    "who",
    "does",
    "do",
    "did",
    "will",
    "would",
    "should",
    "can",
    "could",
)

# Evaluated in order after the question check; first match wins.
INTENT_RULES = (
    (Intent.CREATE_CODE, ("create", "write", "generate", "implement")),
    (Intent.FIX_CODE, ("fix", "error", "bug", "issue")),
    (Intent.USE_API, ("api", "call", "request")),
)

_QUESTION_RE = re.compile(r"\b(?:" + "|".join(QUESTION_WORDS) + r")\b")


class PromptClassifier(Protocol):
    """Strategy contract: message -> PromptAnalysis."""

    def classify(self, message: str) -> PromptAnalysis: ...


@runtime_checkable
class PromptModel(Protocol):
    """External model able to analyze a request."""

    def is_ready(self) -> bool: ...

    def analyze(self, message: str) -> Union[str, dict]: ...


def detect_intent(message: str) -> Intent:
    """Apply the fixed intent rules to a message."""
    lowered = message.lower().strip()

    if lowered.endswith("?") or _QUESTION_RE.search(lowered):
        return Intent.ANSWER_QUESTION

    for intent, terms in INTENT_RULES:
        if any(term in lowered for term in terms):
            return intent

    return Intent.GENERAL


# =============================================================================
# Heuristic Strategy
# =============================================================================


@dataclass
class HeuristicClassifier:
    """
    Deterministic rule-based classifier.

    Intent comes from detect_intent(). When extract_hints is on, framework,
    file and function hints are filled in by PromptHintExtractor.
    """

    extract_hints: bool = True
    extractor: PromptHintExtractor = field(default_factory=PromptHintExtractor)

    def classify(self, message: str) -> PromptAnalysis:
        intent = detect_intent(message)

        if not self.extract_hints:
            return PromptAnalysis(intent=intent)

        hints = self.extractor.extract(message)
        analysis = PromptAnalysis(
            intent=intent,
            framework_type=hints.framework_type,
            file_types=hints.file_types,
            import_patterns=hints.import_patterns,
            event_handler_patterns=hints.event_handler_patterns,
            prompt_pattern=hints.prompt_pattern,
            metadata=AnalysisMetadata(
                file_names=hints.file_names,
                function_names=hints.function_names,
                keywords=hints.keywords,
            ),
        )
        logger.debug(
            f"{ANALYSIS} Heuristic: intent={intent.value}, framework={hints.framework_type}"
        )
        return analysis


# =============================================================================
# Model-Backed Strategy
# =============================================================================


def _parse_json(response: str) -> dict[str, Any]:
    """Parse JSON from a model response, handling markdown code blocks."""
    text = response.strip()

    # Try to find JSON in code block
    if "```" in text:
        for part in text.split("```"):
            part = part.strip()
            if part.startswith("json"):
                part = part[4:].strip()
            if part.startswith("{"):
                try:
                    return json.loads(part)
                except json.JSONDecodeError:
                    continue

    # Try direct parse
    try:
        data = json.loads(text)
        return data if isinstance(data, dict) else {}
    except json.JSONDecodeError:
        pass

    # Try to find JSON object in text
    start = text.find("{")
    if start >= 0:
        depth = 0
        for i, char in enumerate(text[start:], start):
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    try:
                        return json.loads(text[start : i + 1])
                    except json.JSONDecodeError:
                        break

    return {}


def _normalize_intent(value: Any) -> Optional[Intent]:
    if not isinstance(value, str):
        return None
    text = value.strip().lower().replace("-", "_").replace(" ", "_")
    compact = text.replace("_", "")
    for intent in Intent:
        if compact == intent.value.replace("_", ""):
            return intent
    return None


@dataclass
class ModelBackedClassifier:
    """
    Classifier backed by an external prompt model.

    The model answers with JSON shaped like PromptAnalysis (camelCase or
    snake_case keys). Output that cannot be parsed falls back to the
    heuristic analysis.
    """

    model: Optional[PromptModel]
    fallback: HeuristicClassifier = field(default_factory=HeuristicClassifier)

    def is_ready(self) -> bool:
        if self.model is None:
            return False
        try:
            return bool(self.model.is_ready())
        except Exception as e:
            logger.warning(f"{ANALYSIS} Model readiness check failed: {e}")
            return False

    def classify(self, message: str) -> PromptAnalysis:
        if not self.is_ready():
            raise ClassificationModelNotReady("Prompt classification model is not ready")

        try:
            raw = self.model.analyze(message)
        except Exception as e:
            logger.warning(f"{ANALYSIS} Model analysis failed: {e}")
            return self.fallback.classify(message)

        data = raw if isinstance(raw, dict) else _parse_json(str(raw))
        analysis = self._to_analysis(data)
        if analysis is None:
            logger.warning(f"{ANALYSIS} Unusable model output, using heuristic analysis")
            return self.fallback.classify(message)

        logger.debug(f"{ANALYSIS} Model: intent={analysis.intent.value}")
        return analysis

    @staticmethod
    def _to_analysis(data: dict[str, Any]) -> Optional[PromptAnalysis]:
        intent = _normalize_intent(data.get("intent"))
        if intent is None:
            return None

        metadata = data.get("metadata") if isinstance(data.get("metadata"), dict) else {}
        try:
            return PromptAnalysis(
                intent=intent,
                framework_type=data.get("framework_type", data.get("frameworkType")),
                file_types=data.get("file_types", data.get("fileTypes")),
                import_patterns=data.get("import_patterns", data.get("importPatterns")),
                event_handler_patterns=data.get(
                    "event_handler_patterns", data.get("eventHandlerPatterns")
                ),
                prompt_pattern=data.get("prompt_pattern", data.get("promptPattern")),
                metadata=metadata,
            )
        except ValidationError as e:
            logger.warning(f"{ANALYSIS} Model output failed validation: {e}")
            return None


# =============================================================================
# Factory
# =============================================================================


def create_classifier(
    config: "AnalysisConfig", model: Optional[PromptModel] = None
) -> Union[HeuristicClassifier, ModelBackedClassifier]:
    """Build the classifier selected by analysis.strategy."""
    heuristic = HeuristicClassifier(extract_hints=config.extract_hints)
    if config.strategy == "model":
        return ModelBackedClassifier(model=model, fallback=heuristic)
    return heuristic


__all__ = [
    "QUESTION_WORDS",
    "PromptClassifier",
    "PromptModel",
    "HeuristicClassifier",
    "ModelBackedClassifier",
    "detect_intent",
    "create_classifier",
]
