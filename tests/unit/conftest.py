# tests/unit/conftest.py
"""
Test fixtures for unit tests.

Provides in-memory stores, a zero-delay engine factory and a temporary
workspace.
"""

from __future__ import annotations

from typing import Callable

import pytest

from recall_ai.core.paths import RecallPaths
from recall_ai.engine.pipeline import OfflineEngine
from recall_ai.engine.retrieval import MultiSourceRetriever
from recall_ai.engine.streaming import StreamingEmitter
from recall_ai.knowledge.memory import InMemoryKnowledgeStore


def pytest_collection_modifyitems(items):
    """Add tier markers to unit tests based on type.

    Tier 1 (every commit): Pure logic tests with no I/O
    Tier 2 (PR merge): Tests touching stores, files or the CLI
    """
    TIER1_PATTERNS = [
        "test_keywords",
        "test_classifier",
        "test_hints",
        "test_ranking",
        "test_context",
        "test_synthesis",
        "test_self_check",
        "test_streaming",
        "test_entry",
        "test_fixes",
    ]

    for item in items:
        fspath = str(item.fspath)

        # Only process tests in unit directory
        if "/unit/" not in fspath and "\\unit\\" not in fspath:
            continue

        has_tier = any(marker.name.startswith("tier") for marker in item.iter_markers())
        if has_tier:
            continue

        if any(pattern in fspath for pattern in TIER1_PATTERNS):
            item.add_marker(pytest.mark.tier1)
        else:
            item.add_marker(pytest.mark.tier2)


@pytest.fixture
def memory_store() -> InMemoryKnowledgeStore:
    return InMemoryKnowledgeStore()


@pytest.fixture
def engine_factory() -> Callable[..., OfflineEngine]:
    """Build engines that stream without pacing and query inline."""

    def factory(store=None, **kwargs) -> OfflineEngine:
        store = store if store is not None else InMemoryKnowledgeStore()
        kwargs.setdefault("retriever", MultiSourceRetriever(store, max_workers=1))
        kwargs.setdefault("emitter", StreamingEmitter(delay=0))
        return OfflineEngine(store, **kwargs)

    return factory


@pytest.fixture
def workspace(tmp_path):
    """Point RecallPaths at a temporary workspace."""
    RecallPaths.set_workspace(tmp_path / ".recall")
    yield tmp_path / ".recall"
    RecallPaths.reset()
