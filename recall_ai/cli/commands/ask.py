# recall_ai/cli/commands/ask.py
"""
Ask command.

Usage:
    recall ask "Create a login form in HTML"
    recall ask "Fix the null pointer error" --no-stream
    recall ask "What is a coroutine?" -s model
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from recall_ai.cli.ui import ui
from recall_ai.cli.utils import load_config_safe
from recall_ai.core.cancellation import CancellationToken
from recall_ai.core.events import Cancelled, Chunk, Error, ToolCall, ToolResult
from recall_ai.core.exceptions import EngineError
from recall_ai.engine.pipeline import OfflineEngine
from recall_ai.engine.streaming import StreamingEmitter
from recall_ai.logging.logger import get_logger
from recall_ai.logging.tags import CLI

logger = get_logger(__name__)

STRATEGIES = ("heuristic", "model")


def command(
    message: str,
    config: Optional[Path] = None,
    strategy: Optional[str] = None,
    no_stream: bool = False,
) -> None:
    """Answer a request and print the streamed response."""
    if strategy is not None and strategy not in STRATEGIES:
        ui.error(f"Unknown strategy '{strategy}'. Choose one of: {', '.join(STRATEGIES)}")
        raise typer.Exit(1)

    typed_config = load_config_safe(config)
    if strategy is not None:
        typed_config = typed_config.model_copy(
            update={"analysis": typed_config.analysis.model_copy(update={"strategy": strategy})}
        )

    try:
        engine = OfflineEngine.from_config(typed_config)
    except EngineError as e:
        ui.error(f"Failed to open knowledge store: {e}")
        raise typer.Exit(1)

    if no_stream:
        engine.emitter = StreamingEmitter(delay=0)

    cancel = CancellationToken()
    events = engine.stream(message, cancel)
    failed = False

    try:
        for event in events:
            if isinstance(event, Chunk):
                ui.stream_text(event.text)
            elif isinstance(event, ToolCall):
                ui.info(f"→ {event.name}({event.arguments})")
            elif isinstance(event, ToolResult):
                ui.info(f"← {event.name}: {event.payload}")
            elif isinstance(event, Error):
                ui.print("")
                ui.error(event.message)
                failed = True
            elif isinstance(event, Cancelled):
                ui.print("")
                ui.warning("Cancelled")
    except KeyboardInterrupt:
        cancel.cancel()
        events.close()
        ui.print("")
        ui.warning("Cancelled")
        raise typer.Exit(130)

    ui.print("")
    logger.debug(f"{CLI} ask finished (failed={failed})")
    if failed:
        raise typer.Exit(1)
