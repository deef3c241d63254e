# recall_ai/knowledge/guard.py
"""
Write guard for the knowledge store.

While a response is being synthesized from the store, the store must not
learn from that same response. suspend_writes() turns writes off on entry
and restores the previous value on every exit path.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from recall_ai.logging.logger import get_logger
from recall_ai.logging.tags import KNOWLEDGE

from .protocol import KnowledgeStore

logger = get_logger(__name__)


@contextmanager
def suspend_writes(store: KnowledgeStore) -> Iterator[bool]:
    """
    Disable store writes for the duration of the block.

    Yields:
        The write-enabled value that will be restored on exit.
    """
    previous = store.is_write_enabled()
    store.set_write_enabled(False)
    logger.debug(f"{KNOWLEDGE} Writes suspended (previous={previous})")
    try:
        yield previous
    finally:
        store.set_write_enabled(previous)
        logger.debug(f"{KNOWLEDGE} Writes restored to {previous}")


__all__ = ["suspend_writes"]
