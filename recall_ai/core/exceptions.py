# recall_ai/core/exceptions.py
"""
All exceptions for recall_ai.

Hierarchy:
    EngineError
    ├── ConfigurationError - Config file missing, unreadable or invalid
    ├── KnowledgeStoreError - Knowledge store I/O failures
    │   └── KnowledgeWriteDisabled - Write attempted while learning is off
    ├── ClassificationModelNotReady - Model-backed analysis unavailable
    ├── NoRelevantKnowledge - Retrieval produced nothing usable
    ├── MalformedLearnedEntry - Structured metadata failed strict parsing
    └── SynthesisFailure - Unforeseen fault in retrieval/ranking/synthesis

Only SynthesisFailure ever reaches the caller, as an Error event. The other
engine conditions are recovered inside the pipeline.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class EngineError(Exception):
    """Base class for every recall_ai error."""

    pass


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(EngineError):
    """Configuration could not be loaded or validated."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        if path:
            message = f"{message} (file: {path})"
        super().__init__(message)


# =============================================================================
# Knowledge Store Errors
# =============================================================================


class KnowledgeStoreError(EngineError):
    """Knowledge store operation failed."""

    pass


class KnowledgeWriteDisabled(KnowledgeStoreError):
    """A write was attempted while the store's write-enabled flag is off."""

    pass


# =============================================================================
# Pipeline Conditions
# =============================================================================


class ClassificationModelNotReady(EngineError):
    """The model-backed classifier is absent or not ready."""

    pass


class NoRelevantKnowledge(EngineError):
    """Retrieval returned no entries in any category."""

    pass


class MalformedLearnedEntry(EngineError):
    """A learned entry's structured metadata does not match its schema."""

    def __init__(self, message: str, content: str | None = None):
        self.content = content
        super().__init__(message)


class SynthesisFailure(EngineError):
    """Unforeseen fault while retrieving, ranking or synthesizing."""

    pass


__all__ = [
    "EngineError",
    "ConfigurationError",
    "KnowledgeStoreError",
    "KnowledgeWriteDisabled",
    "ClassificationModelNotReady",
    "NoRelevantKnowledge",
    "MalformedLearnedEntry",
    "SynthesisFailure",
]
