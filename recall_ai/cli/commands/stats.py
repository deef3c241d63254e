# recall_ai/cli/commands/stats.py
"""
Stats command.

Usage:
    recall stats
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from recall_ai.cli.ui import ui
from recall_ai.cli.utils import load_config_safe
from recall_ai.core.exceptions import KnowledgeStoreError
from recall_ai.knowledge.sqlite import SqliteKnowledgeStore


def command(config: Optional[Path] = None) -> None:
    """Print entry counts per category."""
    typed_config = load_config_safe(config)
    store = SqliteKnowledgeStore(typed_config.knowledge.path)

    try:
        counts = store.count_by_category()
    except KnowledgeStoreError as e:
        ui.error(f"Failed to read knowledge store: {e}")
        raise typer.Exit(1)
    finally:
        store.close()

    ui.table(
        f"Knowledge store: {store.db_path}",
        ["Category", "Entries"],
        [(category.value, str(count)) for category, count in counts.items()],
    )
    ui.info(f"Total: {sum(counts.values())}")
