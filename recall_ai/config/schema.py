# recall_ai/config/schema.py
"""
Configuration schema for recall_ai.

This is the SINGLE source of truth for engine configuration.

Schema hierarchy:
- RecallConfig: The main config consumed by the engine and CLI
- KnowledgeConfig: Knowledge store backend settings
- AnalysisConfig: Request classification strategy
- RetrievalConfig: Query fan-out settings
- RankingConfig: Synthesis-time tie-break settings
- LoggingConfig: Logging settings

Result caps, query limits and stream pacing are fixed constants
(recall_ai.core.constants) and intentionally absent here.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# =============================================================================
# Knowledge Store Configuration
# =============================================================================


class KnowledgeConfig(BaseModel):
    """
    Knowledge store configuration.

    Example YAML:
        knowledge:
          backend: sqlite
          path: ./.recall/knowledge.db
          seed_framework_knowledge: true
    """

    backend: Literal["sqlite", "memory"] = Field(
        default="sqlite", description="Store implementation"
    )
    path: Optional[str] = Field(
        default=None, description="SQLite file (defaults to the workspace knowledge.db)"
    )
    seed_framework_knowledge: bool = Field(
        default=True, description="Load built-in framework knowledge into an empty store"
    )

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# Analysis Configuration
# =============================================================================


class AnalysisConfig(BaseModel):
    """
    Request classification configuration.

    heuristic: deterministic keyword rules, always available.
    model: an external prompt model; requests are refused with guidance
           when it is missing or not ready.
    """

    strategy: Literal["heuristic", "model"] = "heuristic"
    extract_hints: bool = Field(
        default=True,
        description="Populate framework/file/function hints with the rule-based extractor",
    )

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# Retrieval Configuration
# =============================================================================


class RetrievalConfig(BaseModel):
    """Retrieval fan-out configuration."""

    max_workers: int = Field(
        default=4, ge=1, description="Concurrent store queries per category (1 = sequential)"
    )

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# Ranking Configuration
# =============================================================================


class RankingConfig(BaseModel):
    """
    Synthesis-time ranking configuration.

    preferred_sources is an ordered provenance allowlist; entries whose
    source contains an earlier tag rank above later ones.
    """

    preferred_sources: list[str] = Field(default_factory=lambda: ["gemini", "normal_flow"])

    model_config = ConfigDict(extra="forbid")

    @field_validator("preferred_sources", mode="before")
    @classmethod
    def normalize_sources(cls, v: Any) -> Any:
        """Lowercase tags and drop blanks."""
        if not isinstance(v, list):
            return v
        return [str(tag).strip().lower() for tag in v if str(tag).strip()]


# =============================================================================
# Logging Configuration
# =============================================================================


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# Main Configuration
# =============================================================================


class RecallConfig(BaseModel):
    """
    Complete configuration for recall_ai.

    Examples:
        Load from YAML:
        >>> from recall_ai.config import load_config
        >>> config = load_config("config.yaml")

        Create from dict:
        >>> config = RecallConfig.from_dict({
        ...     "knowledge": {"backend": "memory"},
        ...     "analysis": {"strategy": "heuristic"},
        ... })
    """

    knowledge: KnowledgeConfig = Field(default_factory=KnowledgeConfig)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    retrieval: RetrievalConfig = Field(default_factory=RetrievalConfig)
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RecallConfig":
        """Validate a raw dictionary (e.g. parsed YAML)."""
        return cls.model_validate(data or {})


__all__ = [
    "RecallConfig",
    "KnowledgeConfig",
    "AnalysisConfig",
    "RetrievalConfig",
    "RankingConfig",
    "LoggingConfig",
]
