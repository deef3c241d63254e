# recall_ai/engine/messages.py
"""Fixed user-facing texts emitted by the engine."""

APOLOGY = (
    "I don't have enough learned knowledge to help with this request yet. "
    "Please use other providers to generate solutions, and I'll learn from them.\n"
)

NEED_MORE_KNOWLEDGE = "I need more learned knowledge to help with this request."

# Emitted in order, one Chunk per line block, when the classification model is not ready.
GUIDANCE_LINES = (
    "Warning: offline answers require a prompt classification model to be configured and ready.\n\n",
    "To enable it:\n",
    "1. Install or download a supported prompt model\n",
    "2. Register it with the engine (analysis.strategy: model)\n",
    "3. Or switch to the built-in rules (analysis.strategy: heuristic)\n\n",
    "Once a model is ready, requests will be classified and answered from learned knowledge.\n",
)

__all__ = ["APOLOGY", "NEED_MORE_KNOWLEDGE", "GUIDANCE_LINES"]
