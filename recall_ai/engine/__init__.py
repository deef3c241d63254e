# recall_ai/engine/__init__.py
"""
Offline response engine.

Public API:
    - OfflineEngine: Request → event stream
    - MultiSourceRetriever, RetrievalResult, SecondaryRanker: Retrieval & ranking
    - ContextAssembler, ResponseSynthesizer: Response building
    - run_self_check, StreamingEmitter: Verification & output
"""

from .context import ContextAssembler
from .messages import APOLOGY, GUIDANCE_LINES, NEED_MORE_KNOWLEDGE
from .pipeline import OfflineEngine
from .ranking import RetrievalResult, SecondaryRanker, dedupe_and_rank
from .retrieval import MultiSourceRetriever
from .self_check import SelfCheckReport, run_self_check
from .streaming import StreamingEmitter, split_chunks
from .synthesis import ResponseSynthesizer, SynthesizedResponse, ToolActivity

__all__ = [
    "OfflineEngine",
    "MultiSourceRetriever",
    "RetrievalResult",
    "SecondaryRanker",
    "dedupe_and_rank",
    "ContextAssembler",
    "ResponseSynthesizer",
    "SynthesizedResponse",
    "ToolActivity",
    "SelfCheckReport",
    "run_self_check",
    "StreamingEmitter",
    "split_chunks",
    "APOLOGY",
    "NEED_MORE_KNOWLEDGE",
    "GUIDANCE_LINES",
]
