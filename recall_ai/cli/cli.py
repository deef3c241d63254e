# recall_ai/cli/cli.py
"""
Recall CLI - Main application.

Commands:
    recall ask      Answer a request from learned knowledge
    recall learn    Record a learned entry
    recall stats    Show knowledge store contents per category

NOTE: Commands use lazy loading - imports only happen when a command is invoked.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="recall",
    help="Recall - offline answers from previously learned code knowledge.",
    no_args_is_help=True,
    add_completion=False,
)


# =============================================================================
# LAZY COMMANDS
# =============================================================================


@app.command("ask")
def ask(
    message: str = typer.Argument(..., help="Request to answer."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file path."),
    strategy: Optional[str] = typer.Option(
        None, "--strategy", "-s", help="Classification strategy (heuristic or model)."
    ),
    no_stream: bool = typer.Option(False, "--no-stream", help="Print the answer without pacing."),
) -> None:
    """Answer a request from learned knowledge."""
    from recall_ai.cli.commands import ask as mod

    mod.command(message=message, config=config, strategy=strategy, no_stream=no_stream)


@app.command("learn")
def learn(
    category: str = typer.Argument(..., help="Category, e.g. code_snippet or fix_patch."),
    content: str = typer.Argument(..., help="Entry content."),
    source: str = typer.Option("cli", "--source", help="Provenance tag."),
    score: int = typer.Option(1, "--score", min=0, help="Initial score for a new entry."),
    metadata: Optional[str] = typer.Option(None, "--metadata", "-m", help="JSON metadata."),
    prompt: Optional[str] = typer.Option(None, "--prompt", "-p", help="Request the entry answers."),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file path."),
) -> None:
    """Record a learned entry in the knowledge store."""
    from recall_ai.cli.commands import learn as mod

    mod.command(
        category=category,
        content=content,
        source=source,
        score=score,
        metadata=metadata,
        prompt=prompt,
        config=config,
    )


@app.command("stats")
def stats(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file path."),
) -> None:
    """Show entry counts per category."""
    from recall_ai.cli.commands import stats as mod

    mod.command(config=config)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
