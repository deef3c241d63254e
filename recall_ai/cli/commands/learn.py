# recall_ai/cli/commands/learn.py
"""
Learn command.

Usage:
    recall learn code_snippet "def add(a, b): return a + b" --source normal_flow
    recall learn metadata_transformation "Use asyncio.run" \
        -m '{"question": "How do I start asyncio?", "answer": "Use asyncio.run(main())"}'
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import typer

from recall_ai.cli.ui import ui
from recall_ai.cli.utils import load_config_safe
from recall_ai.core.entry import Category
from recall_ai.core.exceptions import KnowledgeStoreError
from recall_ai.knowledge.sqlite import SqliteKnowledgeStore
from recall_ai.logging.logger import get_logger
from recall_ai.logging.tags import CLI

logger = get_logger(__name__)


def _parse_metadata(metadata: Optional[str]) -> Any:
    if metadata is None:
        return None
    try:
        return json.loads(metadata)
    except json.JSONDecodeError as e:
        ui.error(f"Metadata is not valid JSON: {e}")
        raise typer.Exit(1)


def command(
    category: str,
    content: str,
    source: str = "cli",
    score: int = 1,
    metadata: Optional[str] = None,
    prompt: Optional[str] = None,
    config: Optional[Path] = None,
) -> None:
    """Record a learned entry."""
    try:
        parsed_category = Category.parse(category)
    except ValueError:
        choices = ", ".join(c.value for c in Category)
        ui.error(f"Unknown category '{category}'. Choose one of: {choices}")
        raise typer.Exit(1)

    if not content.strip():
        ui.error("Content must not be empty")
        raise typer.Exit(1)

    parsed_metadata = _parse_metadata(metadata)
    typed_config = load_config_safe(config)
    store = SqliteKnowledgeStore(typed_config.knowledge.path)

    try:
        entry_id = store.record(
            parsed_category,
            content,
            source,
            metadata=parsed_metadata,
            user_prompt=prompt,
            score=score,
        )
    except KnowledgeStoreError as e:
        ui.error(f"Failed to record entry: {e}")
        raise typer.Exit(1)
    finally:
        store.close()

    logger.debug(f"{CLI} learned {parsed_category.value} id={entry_id}")
    ui.success(f"Recorded {parsed_category.value} entry #{entry_id}")
