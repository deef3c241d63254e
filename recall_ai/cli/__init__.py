# recall_ai/cli/__init__.py
"""Command-line interface for recall_ai."""
