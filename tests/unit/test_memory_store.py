# tests/unit/test_memory_store.py
"""Tests for the in-memory knowledge store."""

from __future__ import annotations

import pytest

from recall_ai.core.entry import Category
from recall_ai.core.exceptions import KnowledgeWriteDisabled
from recall_ai.knowledge.memory import InMemoryKnowledgeStore
from recall_ai.knowledge.protocol import KnowledgeStore

from .helpers import make_entry


def test_satisfies_protocol(memory_store):
    assert isinstance(memory_store, KnowledgeStore)


def test_keyword_search_is_case_insensitive_and_score_ordered(memory_store):
    memory_store.add(make_entry("Login form", score=1))
    memory_store.add(make_entry("LOGIN handler", score=5))
    memory_store.add(make_entry("logout", score=9))

    found = memory_store.search_by_keyword("login", Category.CODE_SNIPPET, 10)

    assert [e.content for e in found] == ["LOGIN handler", "Login form"]


def test_search_respects_category_and_limit(memory_store):
    for i in range(5):
        memory_store.add(make_entry(f"api {i}", Category.API_USAGE))
    memory_store.add(make_entry("api snippet"))

    found = memory_store.search_by_keyword("api", Category.API_USAGE, 3)

    assert len(found) == 3
    assert all(e.category is Category.API_USAGE for e in found)


def test_pattern_search_matches_user_prompt(memory_store):
    memory_store.record(
        Category.CODE_SNIPPET, "<form>", "gemini", user_prompt="create a {value} form"
    )
    memory_store.record(Category.CODE_SNIPPET, "<div>", "gemini")

    found = memory_store.search_by_pattern("{value} form", Category.CODE_SNIPPET, 5)

    assert [e.content for e in found] == ["<form>"]


def test_top_by_category_relevance_hint(memory_store):
    memory_store.record(
        Category.METADATA_TRANSFORMATION, "answer a", "gemini", user_prompt="how do coroutines work"
    )
    memory_store.record(
        Category.METADATA_TRANSFORMATION, "answer b", "gemini", user_prompt="unrelated prompt"
    )
    memory_store.record(Category.METADATA_TRANSFORMATION, "answer c", "gemini")

    hinted = memory_store.top_by_category(Category.METADATA_TRANSFORMATION, 5, "coroutines")
    unhinted = memory_store.top_by_category(Category.METADATA_TRANSFORMATION, 5)

    assert [e.content for e in hinted] == ["answer a", "answer c"]
    assert len(unhinted) == 3


def test_record_bumps_score_of_identical_content(memory_store):
    first = memory_store.record(Category.CODE_SNIPPET, "x = 1", "normal_flow")
    second = memory_store.record(Category.CODE_SNIPPET, "x = 1", "normal_flow")

    entries = memory_store.top_by_category(Category.CODE_SNIPPET, 5)

    assert first == second
    assert len(entries) == 1
    assert entries[0].positive_score == 2


def test_decrement_score_never_negative(memory_store):
    entry_id = memory_store.record(Category.CODE_SNIPPET, "x", "test")

    memory_store.decrement_score(entry_id)
    memory_store.decrement_score(entry_id)

    assert memory_store.top_by_category(Category.CODE_SNIPPET, 1)[0].positive_score == 0


def test_fix_lookup_by_keywords(memory_store):
    memory_store.record_fix("obj.name", "obj?.name", "null pointer")
    memory_store.record_fix("a + b", "a - b", "wrong sign")

    fixes = memory_store.search_fixes_by_keywords(["pointer"], 5)

    assert len(fixes) == 1
    assert fixes[0].new_code == "obj?.name"
    assert memory_store.search_fixes_by_keywords([], 5) == []


def test_writes_refused_while_disabled(memory_store):
    memory_store.set_write_enabled(False)

    with pytest.raises(KnowledgeWriteDisabled):
        memory_store.record(Category.CODE_SNIPPET, "x", "test")
    with pytest.raises(KnowledgeWriteDisabled):
        memory_store.add(make_entry("y"))

    memory_store.set_write_enabled(True)
    memory_store.record(Category.CODE_SNIPPET, "x", "test")
    assert memory_store.count_by_category()[Category.CODE_SNIPPET] == 1


def test_reads_allowed_while_disabled():
    store = InMemoryKnowledgeStore([make_entry("cached")])
    store.set_write_enabled(False)

    assert store.top_by_category(Category.CODE_SNIPPET, 5)[0].content == "cached"
