# recall_ai/logging/__init__.py
"""Logging helpers shared by every recall_ai module."""

from .logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
