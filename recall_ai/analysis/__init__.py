# recall_ai/analysis/__init__.py
"""
Request analysis for recall_ai.

Public API:
    - extract_keywords: Bounded keyword set for store lookups
    - PromptHintExtractor: Framework/file/function hints
    - HeuristicClassifier, ModelBackedClassifier: Classification strategies
    - create_classifier: Build the configured strategy
"""

from .classifier import (
    HeuristicClassifier,
    ModelBackedClassifier,
    PromptClassifier,
    PromptModel,
    create_classifier,
    detect_intent,
)
from .hints import PromptHintExtractor, PromptHints
from .keywords import extract_keywords

__all__ = [
    "extract_keywords",
    "PromptHints",
    "PromptHintExtractor",
    "PromptClassifier",
    "PromptModel",
    "HeuristicClassifier",
    "ModelBackedClassifier",
    "detect_intent",
    "create_classifier",
]
