# recall_ai/core/constants.py
"""
Fixed engine constants.

These bound every query and every rendered block. They are deliberately not
part of the YAML configuration.
"""

from __future__ import annotations

# =============================================================================
# Extraction
# =============================================================================

KEYWORD_CAP = 10
MIN_KEYWORD_LENGTH = 4

# =============================================================================
# Retrieval & Ranking
# =============================================================================

KEYWORD_QUERY_LIMIT = 10
PATTERN_QUERY_LIMIT = 5
TOP_QUERY_LIMIT = 5
CATEGORY_RESULT_CAP = 20
FIX_QUERY_LIMIT = 5

# =============================================================================
# Synthesis
# =============================================================================

FIX_FIELD_TRUNCATION = 200
QUESTION_CITATION_LENGTH = 100

# =============================================================================
# Streaming
# =============================================================================

STREAM_FLUSH_TOKENS = 5
STREAM_PACING_SECONDS = 0.05


__all__ = [
    "KEYWORD_CAP",
    "MIN_KEYWORD_LENGTH",
    "KEYWORD_QUERY_LIMIT",
    "PATTERN_QUERY_LIMIT",
    "TOP_QUERY_LIMIT",
    "CATEGORY_RESULT_CAP",
    "FIX_QUERY_LIMIT",
    "FIX_FIELD_TRUNCATION",
    "QUESTION_CITATION_LENGTH",
    "STREAM_FLUSH_TOKENS",
    "STREAM_PACING_SECONDS",
]
