# recall_ai/cli/commands/__init__.py
"""CLI command implementations, loaded lazily by recall_ai.cli.cli."""
