# recall_ai/__init__.py
"""
recall_ai - Offline answers from previously learned code knowledge.

Given a request and a store of learned entries (code snippets, API usage,
fixes, Q&A transformations, framework knowledge), the engine retrieves and
ranks relevant entries, classifies the request, synthesizes a response
without any network call and streams it back as events.

Example:
    >>> from recall_ai import OfflineEngine, InMemoryKnowledgeStore
    >>> engine = OfflineEngine(InMemoryKnowledgeStore())
    >>> for event in engine.stream("Create a login form in HTML"):
    ...     print(event)
"""

__version__ = "0.1.0"

from recall_ai.core import (
    CancellationToken,
    Cancelled,
    Category,
    Chunk,
    Done,
    EngineError,
    Error,
    FixRecord,
    Intent,
    LearnedEntry,
    PromptAnalysis,
    ToolCall,
    ToolResult,
)
from recall_ai.engine import OfflineEngine
from recall_ai.knowledge import InMemoryKnowledgeStore, SqliteKnowledgeStore

__all__ = [
    "__version__",
    "OfflineEngine",
    "InMemoryKnowledgeStore",
    "SqliteKnowledgeStore",
    "LearnedEntry",
    "FixRecord",
    "Category",
    "Intent",
    "PromptAnalysis",
    "CancellationToken",
    "Chunk",
    "ToolCall",
    "ToolResult",
    "Done",
    "Error",
    "Cancelled",
    "EngineError",
]
