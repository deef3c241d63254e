# tests/unit/test_context.py
"""Tests for the context assembler."""

from __future__ import annotations

from recall_ai.core.entry import Category
from recall_ai.core.prompt import PromptAnalysis
from recall_ai.engine.context import CONTEXT_HEADER, ContextAssembler
from recall_ai.engine.ranking import RetrievalResult

from .helpers import make_entry


def _result():
    return RetrievalResult(
        {
            Category.FRAMEWORK_KNOWLEDGE: [
                make_entry("<form>HTML form</form>", Category.FRAMEWORK_KNOWLEDGE, score=100),
                make_entry(
                    "data class User",
                    Category.FRAMEWORK_KNOWLEDGE,
                    score=100,
                    metadata={"framework_type": "Kotlin"},
                ),
            ],
            Category.CODE_SNIPPET: [make_entry(f"snippet {i}", score=10 - i) for i in range(7)],
            Category.API_USAGE: [
                make_entry(f"api {i}", Category.API_USAGE, score=5) for i in range(4)
            ],
            Category.FIX_PATCH: [make_entry("fix patch", Category.FIX_PATCH, score=2)],
        }
    )


def test_sections_in_priority_order():
    text = ContextAssembler().assemble(_result(), PromptAnalysis(), "show me things")

    assert text.startswith(CONTEXT_HEADER)
    assert text.index("HTML form") < text.index("snippet 0") < text.index("api 0")


def test_caps_per_category():
    text = ContextAssembler().assemble(_result(), PromptAnalysis(), "show me things")

    assert "snippet 4" in text
    assert "snippet 5" not in text
    assert "api 2" in text
    assert "api 3" not in text


def test_fix_patches_only_when_requested():
    assembler = ContextAssembler()

    assert "fix patch" not in assembler.assemble(_result(), PromptAnalysis(), "show me")
    assert "fix patch" in assembler.assemble(_result(), PromptAnalysis(), "an ERROR occurs")
    assert "fix patch" in assembler.assemble(_result(), PromptAnalysis(), "please Fix it")


def test_framework_filter_uses_content_or_metadata():
    text = ContextAssembler().assemble(
        _result(), PromptAnalysis(framework_type="Kotlin"), "show"
    )

    assert "data class User" in text
    assert "HTML form" not in text


def test_blocks_are_labeled():
    text = ContextAssembler().assemble(_result(), PromptAnalysis(), "show")
    assert "// [code_snippet] (score: 10)\nsnippet 0\n\n" in text


def test_empty_result_is_header_only():
    assert ContextAssembler().assemble(RetrievalResult(), PromptAnalysis(), "x") == CONTEXT_HEADER


def test_declared_framework_type_decides_over_content():
    result = RetrievalResult(
        {
            Category.FRAMEWORK_KNOWLEDGE: [
                make_entry(
                    "fetch() from JavaScript inside a script tag",
                    Category.FRAMEWORK_KNOWLEDGE,
                    metadata={"framework_type": "HTML"},
                ),
                make_entry(
                    "document.addEventListener(...)",
                    Category.FRAMEWORK_KNOWLEDGE,
                    metadata={"framework_type": "JavaScript"},
                ),
            ]
        }
    )

    text = ContextAssembler().assemble(
        result, PromptAnalysis(framework_type="JavaScript"), "show"
    )

    assert "document.addEventListener" in text
    assert "script tag" not in text


def test_blocks_carry_declared_imports():
    result = RetrievalResult(
        {
            Category.CODE_SNIPPET: [
                make_entry(
                    "launch { repo.load() }",
                    metadata={"import_patterns": "import kotlinx.coroutines.*"},
                ),
                make_entry("print('plain')"),
            ]
        }
    )

    text = ContextAssembler().assemble(result, PromptAnalysis(), "show")

    assert (
        "// [code_snippet] (score: 1)\n// Imports: import kotlinx.coroutines.*\n"
        "launch { repo.load() }\n\n"
    ) in text
    assert "// [code_snippet] (score: 1)\nprint('plain')\n\n" in text
