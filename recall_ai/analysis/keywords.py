# recall_ai/analysis/keywords.py
"""Keyword extraction for knowledge lookups."""

from __future__ import annotations

import re
from typing import List

from recall_ai.core.constants import KEYWORD_CAP, MIN_KEYWORD_LENGTH

_SPLIT_RE = re.compile(r"[^a-zA-Z0-9]+")

PROGRAMMING_TERMS = (
    "function",
    "class",
    "method",
    "api",
    "fix",
    "error",
    "bug",
    "code",
    "implementation",
    "create",
    "generate",
    "write",
)


def extract_keywords(message: str) -> List[str]:
    """
    Turn a message into an ordered, deduplicated keyword list.

    Word tokens of MIN_KEYWORD_LENGTH or more come first, then any
    programming term found anywhere in the message. Capped at KEYWORD_CAP.
    """
    lowered = message.lower()
    keywords: List[str] = []

    for token in _SPLIT_RE.split(lowered):
        if len(token) >= MIN_KEYWORD_LENGTH and token not in keywords:
            keywords.append(token)

    for term in PROGRAMMING_TERMS:
        if term in lowered and term not in keywords:
            keywords.append(term)

    return keywords[:KEYWORD_CAP]


__all__ = ["PROGRAMMING_TERMS", "extract_keywords"]
