# recall_ai/logging/tags.py
"""
Subsystem tags prefixed to log messages.

Changing a tag here updates it project-wide.
"""

ANALYSIS = "[ANALYSIS]"
RETRIEVER = "[RETRIEVER]"
RANKER = "[RANKER]"
CONTEXT = "[CONTEXT]"
SYNTHESIS = "[SYNTHESIS]"
SELF_CHECK = "[SELF_CHECK]"
STREAM = "[STREAM]"
PIPELINE = "[PIPELINE]"
KNOWLEDGE = "[KNOWLEDGE]"
CLI = "[CLI]"
