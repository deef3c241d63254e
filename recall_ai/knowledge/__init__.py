# recall_ai/knowledge/__init__.py
"""
Knowledge storage for recall_ai.

Public API:
    - KnowledgeStore: Read contract used by the engine
    - InMemoryKnowledgeStore, SqliteKnowledgeStore: Implementations
    - suspend_writes: Request-scoped write guard
    - create_store: Build the configured store
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

from recall_ai.core.entry import Category
from recall_ai.logging.logger import get_logger
from recall_ai.logging.tags import KNOWLEDGE

from .fixes import format_fix_content, parse_fix_record
from .guard import suspend_writes
from .memory import InMemoryKnowledgeStore
from .protocol import KnowledgeStore
from .seed import seed_framework_knowledge
from .sqlite import SqliteKnowledgeStore

if TYPE_CHECKING:
    from recall_ai.config.schema import KnowledgeConfig

logger = get_logger(__name__)


def create_store(
    config: "KnowledgeConfig",
) -> Union[InMemoryKnowledgeStore, SqliteKnowledgeStore]:
    """
    Build the store described by config.

    Framework knowledge is seeded only when the store holds none yet.
    """
    if config.backend == "memory":
        store: Union[InMemoryKnowledgeStore, SqliteKnowledgeStore] = InMemoryKnowledgeStore()
    else:
        store = SqliteKnowledgeStore(config.path)

    logger.debug(f"{KNOWLEDGE} Using {config.backend} knowledge store")

    if config.seed_framework_knowledge:
        if store.count_by_category()[Category.FRAMEWORK_KNOWLEDGE] == 0:
            seed_framework_knowledge(store)

    return store


__all__ = [
    "KnowledgeStore",
    "InMemoryKnowledgeStore",
    "SqliteKnowledgeStore",
    "suspend_writes",
    "create_store",
    "seed_framework_knowledge",
    "parse_fix_record",
    "format_fix_content",
]
