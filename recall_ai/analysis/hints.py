# recall_ai/analysis/hints.py
"""
Rule-based prompt hint extraction.

Pulls framework, file and function hints out of a request without any
model. The hints steer retrieval and code adaptation; they never decide
the intent.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from recall_ai.analysis.keywords import extract_keywords

# Ordered: first framework with a matching term wins.
FRAMEWORK_TERMS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("HTML", ("html", "html5")),
    ("CSS", ("css", "stylesheet", "flexbox")),
    ("JavaScript", ("javascript", "js", "es6", "dom", "vanilla js")),
    ("Node.js", ("node", "nodejs", "express", "npm")),
    ("Python", ("python", "django", "flask", "fastapi")),
    ("Java", ("java", "spring", "spring boot", "jvm")),
    ("Kotlin", ("kotlin", "android", "coroutine", "coroutines")),
)

FILE_TYPE_TERMS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("html", ("html", ".html")),
    ("css", ("css", ".css", "stylesheet")),
    ("javascript", ("javascript", "js", ".js")),
    ("typescript", ("typescript", "ts", ".ts")),
    ("python", ("python", "py", ".py")),
    ("java", ("java", ".java")),
    ("kotlin", ("kotlin", "kt", ".kt")),
    ("json", ("json", ".json")),
    ("xml", ("xml", ".xml")),
    ("yaml", ("yaml", "yml", ".yaml", ".yml")),
)

DEFAULT_IMPORTS: Dict[str, Tuple[str, ...]] = {
    "Node.js": ("require('express')", "require('fs')", "require('path')"),
    "Python": ("import json", "import os", "from typing import"),
    "Java": ("import java.util",),
    "Kotlin": ("import kotlinx.coroutines",),
}

DEFAULT_EVENT_HANDLERS: Dict[str, Tuple[str, ...]] = {
    "HTML": ("onclick", "onchange", "onsubmit", "onload", "onfocus", "onblur"),
    "JavaScript": ("addEventListener", "onclick", "onchange", "onsubmit"),
}

_FILE_NAME_RE = re.compile(
    r"[\"']([^\"']+\.(?:html|css|js|ts|py|java|kt|json|xml))[\"']", re.IGNORECASE
)
_FUNCTION_NAME_RE = re.compile(
    r"\b(?:function|def|fun|class|interface)\s+([a-zA-Z_][a-zA-Z0-9_]*)", re.IGNORECASE
)
_IMPORT_RE = re.compile(r"\b(?:import|require)\s+[\"']?([^\"'\s]+)[\"']?", re.IGNORECASE)
_EVENT_RE = re.compile(
    r"\b(?:on|handle)(?:click|change|submit|load|focus|blur|mouse\w*|key\w*|input)\b",
    re.IGNORECASE,
)
_QUOTED_RE = re.compile(r"[\"'][^\"']+[\"']")
_NUMBER_RE = re.compile(r"\d+")
_DOTTED_RE = re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*\.[a-zA-Z]+")
_SPACE_RE = re.compile(r"\s+")


def _has_term(text: str, term: str) -> bool:
    """Whole-word match so 'js' does not fire inside 'json'."""
    return re.search(rf"(?<![a-z0-9]){re.escape(term)}(?![a-z0-9])", text) is not None


def _unique(items: List[str]) -> List[str]:
    seen: List[str] = []
    for item in items:
        if item not in seen:
            seen.append(item)
    return seen


@dataclass(frozen=True)
class PromptHints:
    """Hints extracted from a request."""

    framework_type: Optional[str] = None
    file_types: List[str] = field(default_factory=list)
    file_names: List[str] = field(default_factory=list)
    function_names: List[str] = field(default_factory=list)
    keywords: List[str] = field(default_factory=list)
    prompt_pattern: str = ""
    import_patterns: Optional[str] = None
    event_handler_patterns: Optional[str] = None


class PromptHintExtractor:
    """Extracts PromptHints from raw request text."""

    def extract(self, message: str) -> PromptHints:
        normalized = message.lower().strip()
        framework = self.framework_type(normalized)

        return PromptHints(
            framework_type=framework,
            file_types=self.file_types(normalized),
            file_names=_unique(_FILE_NAME_RE.findall(message)),
            function_names=_unique(_FUNCTION_NAME_RE.findall(message)),
            keywords=extract_keywords(message),
            prompt_pattern=self.prompt_pattern(normalized),
            import_patterns=self.import_patterns(message, framework),
            event_handler_patterns=self.event_handler_patterns(message, framework),
        )

    @staticmethod
    def framework_type(normalized: str) -> Optional[str]:
        for name, terms in FRAMEWORK_TERMS:
            if any(_has_term(normalized, term) for term in terms):
                return name
        return None

    @staticmethod
    def file_types(normalized: str) -> List[str]:
        return [
            file_type
            for file_type, terms in FILE_TYPE_TERMS
            if any(
                term in normalized if term.startswith(".") else _has_term(normalized, term)
                for term in terms
            )
        ]

    @staticmethod
    def prompt_pattern(normalized: str) -> str:
        """Generalize a request so similar requests share one pattern."""
        pattern = _QUOTED_RE.sub("{value}", normalized)
        pattern = _NUMBER_RE.sub("{number}", pattern)
        pattern = _DOTTED_RE.sub("{file}", pattern)
        return _SPACE_RE.sub(" ", pattern).strip()

    @staticmethod
    def import_patterns(message: str, framework: Optional[str]) -> Optional[str]:
        imports = _IMPORT_RE.findall(message)
        imports.extend(DEFAULT_IMPORTS.get(framework or "", ()))
        return ", ".join(_unique(imports)) or None

    @staticmethod
    def event_handler_patterns(message: str, framework: Optional[str]) -> Optional[str]:
        events = [match.group(0).lower() for match in _EVENT_RE.finditer(message)]
        events.extend(DEFAULT_EVENT_HANDLERS.get(framework or "", ()))
        return ", ".join(_unique(events)) or None


__all__ = ["PromptHints", "PromptHintExtractor"]
