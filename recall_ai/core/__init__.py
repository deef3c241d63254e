# recall_ai/core/__init__.py
"""
recall_ai core - Types and contracts shared by every component.

Public API:
    - LearnedEntry, FixRecord, Category, EntryMetadata: Knowledge model
    - PromptAnalysis, Intent: Request analysis
    - Chunk, ToolCall, ToolResult, Done, Error, Cancelled: Event protocol
    - CancellationToken: Cooperative cancellation
    - RecallPaths: Workspace path management
    - Exceptions: Standard error hierarchy
"""

from .cancellation import CancellationToken
from .entry import Category, EntryMetadata, FixRecord, LearnedEntry, QuestionAnswer
from .events import (
    Cancelled,
    Chunk,
    Done,
    EngineEvent,
    Error,
    TerminalEvent,
    ToolCall,
    ToolResult,
    is_terminal,
)
from .exceptions import (
    ClassificationModelNotReady,
    ConfigurationError,
    EngineError,
    KnowledgeStoreError,
    KnowledgeWriteDisabled,
    MalformedLearnedEntry,
    NoRelevantKnowledge,
    SynthesisFailure,
)
from .paths import RecallPaths
from .prompt import AnalysisMetadata, Intent, PromptAnalysis

__all__ = [
    # Knowledge model
    "Category",
    "EntryMetadata",
    "QuestionAnswer",
    "LearnedEntry",
    "FixRecord",
    # Analysis
    "Intent",
    "AnalysisMetadata",
    "PromptAnalysis",
    # Events
    "Chunk",
    "ToolCall",
    "ToolResult",
    "Done",
    "Error",
    "Cancelled",
    "EngineEvent",
    "TerminalEvent",
    "is_terminal",
    # Cancellation
    "CancellationToken",
    # Paths
    "RecallPaths",
    # Exceptions
    "EngineError",
    "ConfigurationError",
    "KnowledgeStoreError",
    "KnowledgeWriteDisabled",
    "ClassificationModelNotReady",
    "NoRelevantKnowledge",
    "MalformedLearnedEntry",
    "SynthesisFailure",
]
