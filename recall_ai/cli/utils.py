# recall_ai/cli/utils.py
"""Helpers shared by CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from recall_ai.cli.ui import ui
from recall_ai.config.loader import load_config
from recall_ai.config.schema import RecallConfig
from recall_ai.core.exceptions import ConfigurationError
from recall_ai.logging.logger import configure_logging


def load_config_safe(path: Optional[Path] = None) -> RecallConfig:
    """Load config and set up logging, or exit with a readable message."""
    try:
        config = load_config(path)
    except ConfigurationError as e:
        ui.error(f"Failed to load config: {e}")
        raise typer.Exit(1)

    configure_logging(config.logging.level)
    return config
