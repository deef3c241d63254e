# recall_ai/core/events.py
"""
Caller-facing event protocol.

A request produces an ordered sequence of Chunk, ToolCall and ToolResult
events terminated by exactly one of Done, Error or Cancelled.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Union


@dataclass(frozen=True)
class Chunk:
    """A slice of response text."""

    text: str


@dataclass(frozen=True)
class ToolCall:
    """The engine invoked an external lookup."""

    name: str
    arguments: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ToolResult:
    """Outcome of a previously announced ToolCall."""

    name: str
    payload: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Done:
    """Response finished normally."""


@dataclass(frozen=True)
class Error:
    """Response aborted by an unforeseen fault."""

    message: str


@dataclass(frozen=True)
class Cancelled:
    """Response stopped because the caller cancelled it."""


EngineEvent = Union[Chunk, ToolCall, ToolResult, Done, Error, Cancelled]
TerminalEvent = Union[Done, Error, Cancelled]


def is_terminal(event: EngineEvent) -> bool:
    """Whether the event ends a response."""
    return isinstance(event, (Done, Error, Cancelled))


__all__ = [
    "Chunk",
    "ToolCall",
    "ToolResult",
    "Done",
    "Error",
    "Cancelled",
    "EngineEvent",
    "TerminalEvent",
    "is_terminal",
]
