# recall_ai/core/entry.py
"""
LearnedEntry - Core data model for recall_ai.

A learned entry is the unit of past knowledge held by the knowledge store.
Entries are immutable once retrieved. Their metadata is parsed exactly once,
when the entry is built at the store boundary, into EntryMetadata.

This module provides:
- Category: The closed set of artifact categories
- EntryMetadata: Typed view over an entry's raw metadata
- QuestionAnswer: Strict schema for learned question/answer pairs
- LearnedEntry: The canonical entry model
- FixRecord: Structured fix returned by the fix lookup
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import MalformedLearnedEntry


class Category(str, Enum):
    """Artifact categories known to the knowledge store."""

    CODE_SNIPPET = "code_snippet"
    API_USAGE = "api_usage"
    FIX_PATCH = "fix_patch"
    METADATA_TRANSFORMATION = "metadata_transformation"
    FRAMEWORK_KNOWLEDGE = "framework_knowledge"

    @classmethod
    def parse(cls, value: str | "Category") -> "Category":
        """Resolve a category from its value or member name, case-insensitively."""
        if isinstance(value, Category):
            return value
        text = str(value).strip().lower().replace("-", "_")
        for member in cls:
            if text in (member.value, member.name.lower()):
                return member
        raise ValueError(f"Unknown category: {value!r}")


def _text_field(fields: Dict[str, Any], *keys: str) -> Optional[str]:
    """First non-empty string among keys, else None."""
    for key in keys:
        value = fields.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return None


class QuestionAnswer(BaseModel):
    """A learned question/answer pair stored in entry metadata."""

    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)

    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)


class EntryMetadata(BaseModel):
    """
    Typed view over an entry's metadata.

    The raw text is kept for substring checks. Known keys are lifted into
    optional fields; anything missing or of the wrong type becomes None.
    """

    raw: Optional[str] = None
    fields: Dict[str, Any] = Field(default_factory=dict)
    framework_type: Optional[str] = None
    import_patterns: Optional[str] = None
    event_handler_patterns: Optional[str] = None
    code_template: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def parse(cls, value: Any) -> "EntryMetadata":
        """Build metadata from a JSON string, a mapping, or nothing."""
        if isinstance(value, EntryMetadata):
            return value
        if value is None:
            return cls()

        if isinstance(value, dict):
            fields = dict(value)
            raw = json.dumps(value, sort_keys=True, default=str)
        else:
            raw = str(value)
            try:
                decoded = json.loads(raw)
            except (json.JSONDecodeError, ValueError):
                decoded = None
            fields = decoded if isinstance(decoded, dict) else {}

        return cls(
            raw=raw,
            fields=fields,
            framework_type=_text_field(fields, "framework_type", "frameworkType"),
            import_patterns=_text_field(fields, "import_patterns", "importPatterns"),
            event_handler_patterns=_text_field(
                fields, "event_handler_patterns", "eventHandlerPatterns"
            ),
            code_template=_text_field(fields, "code_template", "codeTemplate"),
        )

    def mentions(self, text: str) -> bool:
        """Case-insensitive substring check against the raw metadata."""
        if not text or not self.raw:
            return False
        return text.lower() in self.raw.lower()

    @property
    def has_question_answer(self) -> bool:
        """Whether the metadata claims to carry a question/answer pair."""
        if "question" in self.fields and "answer" in self.fields:
            return True
        return bool(self.raw) and '"question"' in self.raw and '"answer"' in self.raw

    def question_answer(self) -> QuestionAnswer:
        """
        Parse the question/answer pair.

        Raises:
            MalformedLearnedEntry: metadata is not a JSON object with
                non-empty string "question" and "answer" fields.
        """
        if not self.fields:
            raise MalformedLearnedEntry("Q&A metadata is not a JSON object")
        try:
            return QuestionAnswer.model_validate(self.fields)
        except ValidationError as exc:
            raise MalformedLearnedEntry(f"Q&A metadata failed validation: {exc}") from exc


class LearnedEntry(BaseModel):
    """
    Canonical learned entry.

    - content: The stored text (code, usage pattern, fix, answer, ...)
    - metadata: Typed metadata, parsed from whatever the store holds
    - source: Provenance tag (e.g. generator name)
    - positive_score: Ranking weight, higher is better
    - category: Artifact category
    """

    content: str = Field(..., description="Entry text content")
    category: Category = Field(..., description="Artifact category")
    source: str = Field(default="", description="Provenance tag")
    positive_score: int = Field(default=1, description="Ranking weight")
    metadata: EntryMetadata = Field(default_factory=EntryMetadata)
    id: Optional[int] = Field(default=None, description="Store-assigned identifier")

    model_config = ConfigDict(frozen=True)

    @field_validator("metadata", mode="before")
    @classmethod
    def _parse_metadata(cls, value: Any) -> EntryMetadata:
        return EntryMetadata.parse(value)

    @field_validator("category", mode="before")
    @classmethod
    def _parse_category(cls, value: Any) -> Category:
        return Category.parse(value)

    def mentions(self, text: Optional[str]) -> bool:
        """Case-insensitive check that the content mentions text."""
        if not text:
            return False
        return text.lower() in self.content.lower()

    def matches_framework(self, framework: Optional[str]) -> bool:
        """
        Whether the entry belongs to framework.

        A declared metadata framework_type decides; entries without one
        match when their content mentions the framework.
        """
        if not framework:
            return False
        declared = self.metadata.framework_type
        if declared is not None:
            return declared.lower() == framework.lower()
        return self.mentions(framework)


class FixRecord(BaseModel):
    """A structured fix returned by the fix lookup."""

    old_code: str = ""
    new_code: str = ""
    reason: str = ""
    score: int = 0

    model_config = ConfigDict(frozen=True)


__all__ = [
    "Category",
    "EntryMetadata",
    "QuestionAnswer",
    "LearnedEntry",
    "FixRecord",
]
