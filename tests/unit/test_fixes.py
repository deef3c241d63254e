# tests/unit/test_fixes.py
"""Tests for FixRecord parsing."""

from __future__ import annotations

from recall_ai.core.entry import EntryMetadata
from recall_ai.knowledge.fixes import format_fix_content, parse_fix_record


def test_metadata_takes_precedence():
    metadata = EntryMetadata.parse(
        {"old_code": "a = b.c", "new_code": "a = b?.c", "reason": "null safety"}
    )

    record = parse_fix_record("OLD:\nignored\n\nNEW:\nignored", metadata, score=3)

    assert record.old_code == "a = b.c"
    assert record.new_code == "a = b?.c"
    assert record.reason == "null safety"
    assert record.score == 3


def test_content_layout_fallback():
    content = format_fix_content("if (x == null)", "if (x === null)", "strict equality")

    record = parse_fix_record(content, EntryMetadata(), score=1)

    assert record.old_code == "if (x == null)"
    assert record.new_code == "if (x === null)"
    assert record.reason == "strict equality"


def test_content_without_reason():
    record = parse_fix_record("OLD:\nfoo()\n\nNEW:\nbar()", EntryMetadata(), score=0)

    assert record.new_code == "bar()"
    assert record.reason == ""


def test_unstructured_content_gives_empty_fields():
    record = parse_fix_record("just a note", EntryMetadata.parse("not json"), score=2)

    assert (record.old_code, record.new_code, record.reason) == ("", "", "")
    assert record.score == 2
