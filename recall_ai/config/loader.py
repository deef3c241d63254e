# recall_ai/config/loader.py
"""
Configuration loader for recall_ai.

Usage:
    >>> from recall_ai.config.loader import load_config
    >>> config = load_config()  # Loads user config or default.yaml
    >>> config = load_config("my_config.yaml")  # Loads custom config
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from recall_ai.config.schema import RecallConfig
from recall_ai.core.exceptions import ConfigurationError
from recall_ai.core.paths import RecallPaths
from recall_ai.logging.logger import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "default.yaml"


def _load_yaml(path: Path) -> dict:
    """Load YAML file and return dict."""
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML: {exc}", path) from exc

    if not isinstance(data, dict):
        raise ConfigurationError("Config root must be a mapping", path)

    # Handle nested recall: key for unified config files
    if "recall" in data and isinstance(data["recall"], dict):
        return data["recall"]

    return data


def get_default_config_path() -> Path:
    """Get path to the packaged default config file."""
    return DEFAULT_CONFIG_PATH


def resolve_config_path(path: Optional[str | Path] = None) -> Path:
    """
    Resolve which config file to read.

    Resolution order:
    1. Explicit path if provided
    2. User config at .recall/config.yaml
    3. Package default at recall_ai/config/default.yaml
    """
    if path is None:
        user_config = RecallPaths.config()
        return user_config if user_config.exists() else get_default_config_path()

    config_path = Path(path)
    if config_path.is_dir():
        raise ConfigurationError("Config path points to a directory", config_path)
    return config_path


def load_config(path: Optional[str | Path] = None) -> RecallConfig:
    """
    Load recall_ai configuration.

    Args:
        path: Optional path to YAML config file.
              If None, uses resolution order.

    Returns:
        Validated RecallConfig instance

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    config_path = resolve_config_path(path)
    if not config_path.exists():
        raise ConfigurationError("Config file not found", config_path)

    raw = _load_yaml(config_path)
    try:
        config = RecallConfig.from_dict(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Config validation failed: {exc}", config_path) from exc

    logger.debug(f"Loaded config from {config_path}")
    return config


def load_config_dict(path: Optional[str | Path] = None) -> dict:
    """Load configuration as a raw dictionary, without validation."""
    return _load_yaml(resolve_config_path(path))


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "get_default_config_path",
    "resolve_config_path",
    "load_config",
    "load_config_dict",
]
