# recall_ai/knowledge/seed.py
"""
Built-in framework knowledge.

Entries live in data/framework_knowledge.yaml and are recorded as
framework_knowledge rows with a high fixed score so they rank above
anything learned from a single interaction.
"""

from __future__ import annotations

from importlib import resources
from typing import Any, Dict, List, Optional

import yaml

from recall_ai.core.entry import Category
from recall_ai.core.exceptions import KnowledgeStoreError
from recall_ai.logging.logger import get_logger
from recall_ai.logging.tags import KNOWLEDGE

logger = get_logger(__name__)

FRAMEWORK_SOURCE = "framework_knowledge_base"
FRAMEWORK_SCORE = 100

_METADATA_KEYS = ("framework_type", "import_patterns", "event_handler_patterns", "code_template")


def load_framework_entries(text: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Load framework knowledge definitions.

    Args:
        text: YAML document to parse. Defaults to the packaged data file.

    Returns:
        List of dicts with "content" and the metadata keys.
    """
    if text is None:
        text = (
            resources.files("recall_ai.knowledge")
            .joinpath("data/framework_knowledge.yaml")
            .read_text(encoding="utf-8")
        )

    try:
        data = yaml.safe_load(text) or []
    except yaml.YAMLError as exc:
        raise KnowledgeStoreError(f"Invalid framework knowledge data: {exc}") from exc

    if not isinstance(data, list):
        raise KnowledgeStoreError("Framework knowledge data must be a list of entries")

    entries = []
    for item in data:
        if not isinstance(item, dict) or not str(item.get("content", "")).strip():
            logger.warning(f"{KNOWLEDGE} Skipping framework entry without content")
            continue
        entries.append(item)
    return entries


def seed_framework_knowledge(store: Any, entries: Optional[List[Dict[str, Any]]] = None) -> int:
    """
    Record built-in framework knowledge into a store.

    Re-seeding is idempotent: existing rows keep their score.

    Returns:
        Number of entries recorded.
    """
    if entries is None:
        entries = load_framework_entries()

    for item in entries:
        metadata = {key: str(item.get(key) or "") for key in _METADATA_KEYS}
        store.record(
            Category.FRAMEWORK_KNOWLEDGE,
            str(item["content"]).rstrip("\n"),
            FRAMEWORK_SOURCE,
            metadata=metadata,
            increment_score=False,
            score=FRAMEWORK_SCORE,
        )

    logger.info(f"{KNOWLEDGE} Seeded {len(entries)} framework knowledge entries")
    return len(entries)


__all__ = [
    "FRAMEWORK_SCORE",
    "FRAMEWORK_SOURCE",
    "load_framework_entries",
    "seed_framework_knowledge",
]
