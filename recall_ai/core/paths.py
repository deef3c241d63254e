# recall_ai/core/paths.py
"""
Central path management for recall_ai.

All paths are relative to the workspace root, which defaults to
{CWD}/.recall and can be overridden for tests.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class RecallPaths:
    """
    Workspace-relative paths.

    Usage:
        from recall_ai.core.paths import RecallPaths

        config_path = RecallPaths.config()
        db_path = RecallPaths.knowledge_db()

        # Override workspace for testing
        RecallPaths.set_workspace("/tmp/test_recall")
    """

    _workspace_override: Optional[Path] = None

    @classmethod
    def set_workspace(cls, path: Optional[str | Path]) -> None:
        """Override the workspace root. Pass None to reset to default (CWD)."""
        cls._workspace_override = None if path is None else Path(path)

    @classmethod
    def reset(cls) -> None:
        cls._workspace_override = None

    @classmethod
    def workspace(cls) -> Path:
        """The .recall workspace directory."""
        if cls._workspace_override is not None:
            return cls._workspace_override
        return Path.cwd() / ".recall"

    @classmethod
    def config(cls) -> Path:
        """User config file: {workspace}/config.yaml"""
        return cls.workspace() / "config.yaml"

    @classmethod
    def knowledge_db(cls) -> Path:
        """SQLite knowledge store: {workspace}/knowledge.db"""
        return cls.workspace() / "knowledge.db"


__all__ = ["RecallPaths"]
