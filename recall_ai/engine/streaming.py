# recall_ai/engine/streaming.py
"""
Streaming emitter.

Slices a response into paced chunks. A chunk is flushed once the buffer
spans more than one line or holds STREAM_FLUSH_TOKENS tokens; whatever is
left at the end is flushed as a final partial chunk. Tokens keep their
trailing whitespace, so joining all chunks gives back the exact text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Generator, List, Optional

from recall_ai.core.cancellation import CancellationToken
from recall_ai.core.constants import STREAM_FLUSH_TOKENS, STREAM_PACING_SECONDS
from recall_ai.core.events import Chunk
from recall_ai.logging.logger import get_logger
from recall_ai.logging.tags import STREAM

logger = get_logger(__name__)

_TOKEN_RE = re.compile(r"\S+\s*")


def tokenize(text: str) -> List[str]:
    """Split into whitespace-delimited tokens that concatenate back to text."""
    tokens = _TOKEN_RE.findall(text)
    if not tokens:
        return [text] if text else []

    leading = text[: len(text) - len(text.lstrip())]
    if leading:
        tokens[0] = leading + tokens[0]
    return tokens


def _is_flush(chunk: str, flush_tokens: int) -> bool:
    return "\n" in chunk or len(tokenize(chunk)) >= flush_tokens


def split_chunks(text: str, flush_tokens: int = STREAM_FLUSH_TOKENS) -> List[str]:
    """Group tokens into flushable chunks."""
    chunks: List[str] = []
    buffer: List[str] = []

    for token in tokenize(text):
        buffer.append(token)
        joined = "".join(buffer)
        if _is_flush(joined, flush_tokens):
            chunks.append(joined)
            buffer = []

    if buffer:
        chunks.append("".join(buffer))
    return chunks


@dataclass
class StreamingEmitter:
    """
    Emits Chunk events with a fixed pause after every flush. The final
    partial chunk is not followed by a pause.

    The cancellation token is checked before every flush, and the pause
    itself returns early on cancellation.
    """

    delay: float = STREAM_PACING_SECONDS
    flush_tokens: int = STREAM_FLUSH_TOKENS

    def emit(
        self, text: str, cancel: Optional[CancellationToken] = None
    ) -> Generator[Chunk, None, bool]:
        """
        Yield chunks of text.

        Returns:
            True when every chunk was emitted, False when cancelled.
        """
        cancel = cancel or CancellationToken()
        chunks = split_chunks(text, self.flush_tokens)
        logger.debug(f"{STREAM} Streaming {len(chunks)} chunks")

        for index, piece in enumerate(chunks):
            if cancel.is_cancelled:
                logger.debug(f"{STREAM} Cancelled after {index} chunks")
                return False
            yield Chunk(piece)
            if not _is_flush(piece, self.flush_tokens):
                continue
            if cancel.wait(self.delay) and index < len(chunks) - 1:
                logger.debug(f"{STREAM} Cancelled after {index + 1} chunks")
                return False

        return True


__all__ = ["StreamingEmitter", "split_chunks", "tokenize"]
