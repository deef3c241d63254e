# tests/unit/test_ranking.py
"""Tests for deduplication, ranking and the synthesis-time tie-breaks."""

from __future__ import annotations

from recall_ai.core.entry import Category
from recall_ai.engine.ranking import RetrievalResult, SecondaryRanker, dedupe_and_rank

from .helpers import make_entry

# =============================================================================
# dedupe_and_rank
# =============================================================================


def test_dedupe_keeps_first_occurrence():
    first = make_entry("same", score=1, source="first")
    second = make_entry("same", score=9, source="second")

    ranked = dedupe_and_rank([first, second])

    assert ranked == [first]


def test_sorted_by_score_descending():
    entries = [make_entry(f"e{i}", score=s) for i, s in enumerate([3, 7, 1, 7, 5])]

    ranked = dedupe_and_rank(entries)
    scores = [e.positive_score for e in ranked]

    assert scores == sorted(scores, reverse=True)
    assert all(a.positive_score >= b.positive_score for a, b in zip(ranked, ranked[1:]))


def test_equal_scores_keep_retrieval_order():
    entries = [make_entry("b", score=2), make_entry("a", score=2), make_entry("c", score=2)]
    assert [e.content for e in dedupe_and_rank(entries)] == ["b", "a", "c"]


def test_capped_at_twenty():
    entries = [make_entry(f"entry {i}", score=i) for i in range(50)]

    ranked = dedupe_and_rank(entries)

    assert len(ranked) == 20
    assert ranked[0].positive_score == 49


def test_dedupe_is_exact_content():
    ranked = dedupe_and_rank([make_entry("Value"), make_entry("value"), make_entry("value ")])
    assert len(ranked) == 3


# =============================================================================
# RetrievalResult
# =============================================================================


def test_retrieval_result_has_every_category():
    result = RetrievalResult({Category.API_USAGE: [make_entry("x", Category.API_USAGE)]})

    assert set(result) == set(Category)
    assert result[Category.CODE_SNIPPET] == ()
    assert len(result[Category.API_USAGE]) == 1
    assert not result.is_empty


def test_empty_result():
    assert RetrievalResult().is_empty
    assert RetrievalResult().union() == []


def test_from_raw_ranks_each_category():
    raw = {
        Category.FIX_PATCH: [
            make_entry("a", Category.FIX_PATCH, score=1),
            make_entry("b", Category.FIX_PATCH, score=4),
            make_entry("a", Category.FIX_PATCH, score=8),
        ]
    }

    result = RetrievalResult.from_raw(raw)

    assert [e.content for e in result[Category.FIX_PATCH]] == ["b", "a"]
    assert result.total() == 2


def test_union_orders_by_score():
    result = RetrievalResult(
        {
            Category.CODE_SNIPPET: [make_entry("low", score=1)],
            Category.API_USAGE: [make_entry("high", Category.API_USAGE, score=9)],
        }
    )
    assert [e.content for e in result.union()] == ["high", "low"]


# =============================================================================
# SecondaryRanker
# =============================================================================


def test_framework_then_provenance_then_score():
    plain_high = make_entry("plain", score=10, source="user")
    kotlin_low = make_entry("Kotlin coroutine scope", score=1, source="user")
    gemini = make_entry("plain two", score=5, source="gemini-pro")
    normal = make_entry("plain three", score=5, source="normal_flow")

    ranked = SecondaryRanker().rank([plain_high, gemini, normal, kotlin_low], "Kotlin")

    assert ranked == [kotlin_low, gemini, normal, plain_high]


def test_declared_framework_type_outranks_content_mention():
    declared = make_entry("data class User", score=1, metadata={"framework_type": "Kotlin"})
    other_language = make_entry(
        "ported from Kotlin", score=9, metadata={"framework_type": "Python"}
    )
    undeclared = make_entry("Kotlin scope", score=5)

    ranked = SecondaryRanker().rank([other_language, undeclared, declared], "kotlin")

    assert ranked == [undeclared, declared, other_language]


def test_without_framework_provenance_leads():
    low_trusted = make_entry("a", score=1, source="GEMINI")
    high_untrusted = make_entry("b", score=50, source="manual")

    ranked = SecondaryRanker().rank([high_untrusted, low_trusted])

    assert ranked[0] is low_trusted


def test_custom_allowlist():
    ranker = SecondaryRanker(preferred_sources=["reviewed"])
    reviewed = make_entry("a", score=1, source="reviewed")
    gemini = make_entry("b", score=1, source="gemini")

    assert ranker.best([gemini, reviewed]) is reviewed


def test_best_of_nothing():
    assert SecondaryRanker().best([]) is None
