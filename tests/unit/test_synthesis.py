# tests/unit/test_synthesis.py
"""Tests for intent-driven response synthesis."""

from __future__ import annotations

import re

from recall_ai.core.entry import Category, FixRecord
from recall_ai.core.prompt import Intent, PromptAnalysis
from recall_ai.engine.messages import APOLOGY, NEED_MORE_KNOWLEDGE
from recall_ai.engine.ranking import RetrievalResult
from recall_ai.engine.synthesis import FIX_LOOKUP_TOOL, ResponseSynthesizer

from .helpers import RecordingStore, make_entry


def synthesize(intent, entries=None, store=None, message="msg", keywords=(), **analysis):
    synthesizer = ResponseSynthesizer(store or RecordingStore())
    return synthesizer.synthesize(
        message,
        PromptAnalysis(intent=intent, **analysis),
        RetrievalResult(entries or {}),
        keywords,
    )


# =============================================================================
# AnswerQuestion
# =============================================================================


def test_answer_from_question_answer_metadata():
    entry = make_entry(
        "raw",
        Category.METADATA_TRANSFORMATION,
        metadata={"question": "How do I start asyncio?", "answer": "Use asyncio.run(main())."},
    )

    response = synthesize(Intent.ANSWER_QUESTION, {Category.METADATA_TRANSFORMATION: [entry]})

    assert response.text == (
        "Based on learned knowledge:\n\nUse asyncio.run(main()).\n\n"
        '(Learned from previous question: "How do I start asyncio?")'
    )


def test_question_citation_is_truncated():
    entry = make_entry(
        "raw",
        Category.METADATA_TRANSFORMATION,
        metadata={"question": "q" * 150, "answer": "a"},
    )

    response = synthesize(Intent.ANSWER_QUESTION, {Category.METADATA_TRANSFORMATION: [entry]})

    assert f'"{"q" * 100}")' in response.text
    assert "q" * 101 not in response.text


def test_malformed_question_answer_falls_back_to_content():
    entry = make_entry(
        "stored raw answer",
        Category.METADATA_TRANSFORMATION,
        metadata='{"question": "What?", "answer": 42}',
    )

    response = synthesize(Intent.ANSWER_QUESTION, {Category.METADATA_TRANSFORMATION: [entry]})

    assert response.text == "Based on learned knowledge:\n\nstored raw answer"


def test_non_json_question_answer_falls_back_to_content():
    entry = make_entry(
        "plain content",
        Category.METADATA_TRANSFORMATION,
        metadata='"question": "half "answer": broken',
    )

    response = synthesize(Intent.ANSWER_QUESTION, {Category.METADATA_TRANSFORMATION: [entry]})

    assert response.text.endswith("plain content")


def test_answer_without_qa_uses_top_three_entries():
    entries = [make_entry(f"note {i}", Category.METADATA_TRANSFORMATION) for i in range(4)]

    response = synthesize(Intent.ANSWER_QUESTION, {Category.METADATA_TRANSFORMATION: entries})

    assert "note 2" in response.text
    assert "note 3" not in response.text


def test_answer_without_entries_apologizes():
    assert synthesize(Intent.ANSWER_QUESTION).text == APOLOGY


# =============================================================================
# CreateCode
# =============================================================================


def test_create_code_adapts_best_snippet():
    snippet = make_entry("function {function}() { save('{file}'); }", source="gemini")
    other = make_entry("unrelated", score=50, source="user")

    response = synthesize(
        Intent.CREATE_CODE,
        {Category.CODE_SNIPPET: [other, snippet]},
        framework_type="JavaScript",
        import_patterns="import a, import b",
        event_handler_patterns="onclick, onchange",
        metadata={"file_names": ["form.js"], "function_names": ["submitForm"]},
    )

    text = response.text
    assert "// Required imports:\n// import a\n// import b\n\n" in text
    assert "function submitForm() { save('form.js'); }" in text
    assert "// Adapted from learned knowledge and framework patterns" in text
    assert text.endswith("\n// Event handlers: onclick, onchange\n")
    assert "unrelated" not in text


def test_event_hint_only_for_html_and_javascript():
    response = synthesize(
        Intent.CREATE_CODE,
        {Category.CODE_SNIPPET: [make_entry("print('hi')")]},
        framework_type="Python",
        event_handler_patterns="onclick",
    )
    assert "Event handlers" not in response.text


def test_create_code_falls_back_to_framework_knowledge():
    framework = make_entry("<!DOCTYPE html>", Category.FRAMEWORK_KNOWLEDGE, score=100)

    response = synthesize(Intent.CREATE_CODE, {Category.FRAMEWORK_KNOWLEDGE: [framework]})

    assert "<!DOCTYPE html>" in response.text


def test_create_code_uses_framework_entry_metadata():
    framework = make_entry(
        "<form onsubmit=\"{function}()\"></form>",
        Category.FRAMEWORK_KNOWLEDGE,
        score=100,
        metadata={
            "framework_type": "HTML",
            "event_handler_patterns": "onsubmit, onchange",
            "code_template": "HTML form with validation",
        },
    )

    response = synthesize(Intent.CREATE_CODE, {Category.FRAMEWORK_KNOWLEDGE: [framework]})

    text = response.text
    assert "// Template: HTML form with validation\n\n" in text
    assert text.endswith("\n// Event handlers: onsubmit, onchange\n")


def test_request_event_handlers_win_over_entry_metadata():
    framework = make_entry(
        "<button></button>",
        Category.FRAMEWORK_KNOWLEDGE,
        metadata={"framework_type": "HTML", "event_handler_patterns": "onsubmit"},
    )

    response = synthesize(
        Intent.CREATE_CODE,
        {Category.FRAMEWORK_KNOWLEDGE: [framework]},
        framework_type="HTML",
        event_handler_patterns="onclick",
    )

    assert response.text.endswith("\n// Event handlers: onclick\n")


def test_create_code_without_entries_apologizes():
    assert synthesize(Intent.CREATE_CODE).text == APOLOGY


# =============================================================================
# FixCode
# =============================================================================


def _fix_field(text, name):
    match = re.search(rf'^  "{name}": "(.*?)",\n  "', text, re.DOTALL | re.MULTILINE)
    return match.group(1)


def test_scenario_c_fix_fields_are_truncated():
    store = RecordingStore(
        fixes=[FixRecord(old_code="o" * 500, new_code="n" * 300, reason="null check", score=4)]
    )

    response = synthesize(
        Intent.FIX_CODE,
        store=store,
        message="Fix the null pointer error in UserService",
        keywords=["null", "pointer", "error"],
    )

    assert response.text.count("```json\n") == 1
    assert _fix_field(response.text, "old_code") == "o" * 200
    assert _fix_field(response.text, "new_code") == "n" * 200
    assert '  "reason": "null check",\n  "score": 4\n}\n```' in response.text


def test_multiline_fix_code_is_bounded_and_verbatim():
    old_code = 'if (user != null) {\n    log("x");\n}\n' * 20
    new_code = 'user?.let {\n    log("y")\n}\n' * 20
    store = RecordingStore(fixes=[FixRecord(old_code=old_code, new_code=new_code, score=1)])

    response = synthesize(Intent.FIX_CODE, store=store, keywords=["null"])

    rendered_old = _fix_field(response.text, "old_code")
    rendered_new = _fix_field(response.text, "new_code")
    assert len(rendered_old) <= 200
    assert len(rendered_new) <= 200
    assert rendered_old == old_code[:200]
    assert rendered_new == new_code[:200]


def test_fix_lookup_is_recorded_as_tool_activity():
    store = RecordingStore(fixes=[FixRecord(old_code="a", new_code="b")])

    response = synthesize(Intent.FIX_CODE, store=store, keywords=["crash"])

    assert store.calls == [("fixes", ("crash",), 5)]
    assert len(response.tool_activity) == 1
    activity = response.tool_activity[0]
    assert activity.name == FIX_LOOKUP_TOOL
    assert activity.arguments == {"keywords": ["crash"], "limit": 5}
    assert activity.payload == {"count": 1}


def test_fix_falls_back_to_top_two_patches():
    patches = [make_entry(f"patch {i}", Category.FIX_PATCH) for i in range(3)]

    response = synthesize(Intent.FIX_CODE, {Category.FIX_PATCH: patches})

    assert response.text == "Based on learned fixes:\n\npatch 0\n\npatch 1\n\n"


def test_fix_without_anything_apologizes():
    assert synthesize(Intent.FIX_CODE).text == APOLOGY


# =============================================================================
# UseApi / RunTest / General
# =============================================================================


def test_use_api_top_three():
    entries = [make_entry(f"GET /v{i}", Category.API_USAGE) for i in range(5)]

    text = synthesize(Intent.USE_API, {Category.API_USAGE: entries}).text

    assert "GET /v2" in text
    assert "GET /v3" not in text
    assert synthesize(Intent.USE_API).text == APOLOGY


def test_run_test_filters_snippets():
    entries = [
        make_entry("def test_login(): ..."),
        make_entry("def login(): ..."),
        make_entry("class LoginTest: ..."),
    ]

    text = synthesize(Intent.RUN_TEST, {Category.CODE_SNIPPET: entries}).text

    assert "test_login" in text
    assert "LoginTest" in text
    assert "def login(): ..." not in text.replace("def test_login(): ...", "")


def test_run_test_without_tests_apologizes():
    text = synthesize(Intent.RUN_TEST, {Category.CODE_SNIPPET: [make_entry("x = 1")]}).text
    assert text == APOLOGY


def test_general_combines_context_and_top_entries():
    entries = {
        Category.CODE_SNIPPET: [make_entry("snippet", score=1)],
        Category.API_USAGE: [make_entry("api call", Category.API_USAGE, score=9)],
    }

    text = synthesize(Intent.GENERAL, entries).text

    assert "Based on the learned knowledge above, here's my response:\n" in text
    tail = text.split("here's my response:\n", 1)[1]
    assert tail.index("api call") < tail.index("snippet")


def test_general_without_entries_needs_more_knowledge():
    text = synthesize(Intent.GENERAL).text
    assert text.endswith(NEED_MORE_KNOWLEDGE)


def test_every_branch_is_total():
    for intent in Intent:
        response = synthesize(intent)
        assert response.text
        assert response.intent == intent
