# recall_ai/core/prompt.py
"""
PromptAnalysis - Structured reading of a user request.

Produced fresh for every request by a classifier strategy and never
mutated afterwards.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Intent(str, Enum):
    """Classified purpose of a request."""

    ANSWER_QUESTION = "answer_question"
    CREATE_CODE = "create_code"
    FIX_CODE = "fix_code"
    USE_API = "use_api"
    RUN_TEST = "run_test"
    GENERAL = "general"


def _string_list(value: Any) -> List[str]:
    """Coerce loosely-typed input to a list of non-empty strings."""
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return []
    return [str(item) for item in value if item is not None and str(item)]


class AnalysisMetadata(BaseModel):
    """Names and keywords pulled out of the request."""

    file_names: List[str] = Field(default_factory=list)
    function_names: List[str] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("file_names", "function_names", "keywords", mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> List[str]:
        return _string_list(value)


class PromptAnalysis(BaseModel):
    """
    Result of classifying a request.

    Attributes:
        intent: Classified intent
        framework_type: Detected framework/language, e.g. "HTML" or "Python"
        file_types: Ordered file types mentioned in the request
        import_patterns: Comma-separated import hints
        event_handler_patterns: Comma-separated event handler hints
        prompt_pattern: Normalized request used for pattern lookups
        metadata: File/function names required by the request
    """

    intent: Intent = Intent.GENERAL
    framework_type: Optional[str] = None
    file_types: List[str] = Field(default_factory=list)
    import_patterns: Optional[str] = None
    event_handler_patterns: Optional[str] = None
    prompt_pattern: str = ""
    metadata: AnalysisMetadata = Field(default_factory=AnalysisMetadata)

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("file_types", mode="before")
    @classmethod
    def _coerce_file_types(cls, value: Any) -> List[str]:
        return _string_list(value)

    @field_validator("prompt_pattern", mode="before")
    @classmethod
    def _coerce_pattern(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""

    @field_validator("metadata", mode="before")
    @classmethod
    def _coerce_metadata(cls, value: Any) -> Any:
        return value if value is not None else {}

    @property
    def file_names(self) -> List[str]:
        return self.metadata.file_names

    @property
    def function_names(self) -> List[str]:
        return self.metadata.function_names


__all__ = ["Intent", "AnalysisMetadata", "PromptAnalysis"]
