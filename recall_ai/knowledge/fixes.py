# recall_ai/knowledge/fixes.py
"""
FixRecord parsing.

A stored fix carries its structure either as JSON metadata
({"old_code": ..., "new_code": ..., "reason": ...}) or in the content
itself using the layout:

    OLD:
    <old code>

    NEW:
    <new code>

    REASON: <why>
"""

from __future__ import annotations

import re
from typing import Optional

from recall_ai.core.entry import EntryMetadata, FixRecord

_OLD_RE = re.compile(r"OLD:\s*\n([\s\S]*?)\n\nNEW:")
_NEW_RE = re.compile(r"NEW:\s*\n([\s\S]*?)(?:\n\nREASON:|$)")
_REASON_RE = re.compile(r"REASON:\s*([\s\S]*)")


def _from_metadata(metadata: EntryMetadata, score: int) -> Optional[FixRecord]:
    fields = metadata.fields
    old_code = fields.get("old_code")
    new_code = fields.get("new_code")
    if not isinstance(old_code, str) or not isinstance(new_code, str):
        return None
    reason = fields.get("reason")
    return FixRecord(
        old_code=old_code,
        new_code=new_code,
        reason=reason if isinstance(reason, str) else "",
        score=score,
    )


def _group(pattern: re.Pattern[str], text: str) -> str:
    match = pattern.search(text)
    return match.group(1).strip() if match else ""


def parse_fix_record(content: str, metadata: EntryMetadata, score: int) -> FixRecord:
    """Build a FixRecord, preferring JSON metadata over the content layout."""
    record = _from_metadata(metadata, score)
    if record is not None:
        return record

    return FixRecord(
        old_code=_group(_OLD_RE, content),
        new_code=_group(_NEW_RE, content),
        reason=_group(_REASON_RE, content),
        score=score,
    )


def format_fix_content(old_code: str, new_code: str, reason: str = "") -> str:
    """Render a fix in the content layout understood by parse_fix_record()."""
    text = f"OLD:\n{old_code}\n\nNEW:\n{new_code}"
    if reason:
        text += f"\n\nREASON: {reason}"
    return text


__all__ = ["parse_fix_record", "format_fix_content"]
