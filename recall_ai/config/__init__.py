# recall_ai/config/__init__.py
"""
Configuration for recall_ai.

Usage:
    >>> from recall_ai.config import load_config
    >>> config = load_config()
    >>> config.analysis.strategy
    'heuristic'
"""

from .loader import get_default_config_path, load_config, load_config_dict
from .schema import (
    AnalysisConfig,
    KnowledgeConfig,
    LoggingConfig,
    RankingConfig,
    RecallConfig,
    RetrievalConfig,
)

__all__ = [
    "RecallConfig",
    "KnowledgeConfig",
    "AnalysisConfig",
    "RetrievalConfig",
    "RankingConfig",
    "LoggingConfig",
    "load_config",
    "load_config_dict",
    "get_default_config_path",
]
