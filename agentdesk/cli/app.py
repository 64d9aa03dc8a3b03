"""
Main CLI application for agentdesk-core.

Usage:
    agentdesk transform PATH [--provider NAME] [--format pretty|json] [--profile NAME]
    agentdesk config show|validate
    agentdesk version
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console

from agentdesk.config import AgentDeskConfig, ConfigError, find_config_path, load_config

app = typer.Typer(name="agentdesk", help="AgentDesk - conversation transcript tools")
config_app = typer.Typer(help="Configuration management")

app.add_typer(config_app, name="config")

console = Console()

_log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _load_config_or_exit(profile: str | None = None, cli_overrides: dict | None = None) -> AgentDeskConfig:
    try:
        return load_config(find_config_path(), profile=profile, cli_overrides=cli_overrides)
    except ConfigError as e:
        console.print(f"[red]Config error:[/red] {e}")
        raise typer.Exit(1)


def _setup_logging(cfg: AgentDeskConfig, verbose: bool = False) -> None:
    """Route diagnostics to stderr so JSON on stdout stays clean."""
    level = logging.DEBUG if verbose else getattr(logging, cfg.logging.level.upper(), logging.WARNING)
    logging.basicConfig(level=logging.WARNING, format=cfg.logging.format)
    logging.getLogger("agentdesk").setLevel(level)


def _load_transcript(path: Path) -> list[Any]:
    """
    Read a transcript file.

    Accepts a bare JSON array of messages, or an object holding the array
    under ``messages`` (provider log) or ``history`` (saved agent file).
    """
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        for key in ("messages", "history"):
            if isinstance(data.get(key), list):
                return data[key]
        raise ValueError("expected a 'messages' or 'history' array")
    if not isinstance(data, list):
        raise ValueError("expected a JSON array of messages")
    return data


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@app.command()
def transform(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Transcript JSON file"),
    provider: Optional[str] = typer.Option(None, help="Provider type: openai, azure, custom, glm"),
    fmt: str = typer.Option("pretty", "--format", "-f", help="Output format: pretty, json"),
    profile: Optional[str] = typer.Option(None, help="Config profile name"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Convert a provider transcript into display turns."""
    from agentdesk.cli.output import TurnFormatter, turns_to_json
    from agentdesk.conversation.transformer import create_transformer

    overrides = {"display.provider_type": provider} if provider else None
    cfg = _load_config_or_exit(profile, overrides)
    _setup_logging(cfg, verbose)

    if fmt not in ("pretty", "json"):
        console.print(f"[red]Unknown format:[/red] {fmt}")
        raise typer.Exit(1)

    try:
        transformer = create_transformer(cfg.display.provider_type)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    try:
        messages = _load_transcript(path)
    except (OSError, ValueError) as e:
        console.print(f"[red]Could not read transcript {path}:[/red] {e}")
        raise typer.Exit(1)

    _log.debug("Transforming %d messages with %s", len(messages), type(transformer).__name__)
    turns = transformer.transform(messages)

    if fmt == "json":
        typer.echo(turns_to_json(turns))
        return

    formatter = TurnFormatter(
        console,
        show_parameters=cfg.display.show_parameters,
        show_reasoning=cfg.display.show_reasoning,
        max_result_chars=cfg.display.max_result_chars,
    )
    formatter.format_turns(turns)


@config_app.command("show")
def config_show(profile: Optional[str] = typer.Option(None, help="Config profile name")):
    """Show effective config."""
    from agentdesk.cli.output import TurnFormatter

    cfg = _load_config_or_exit(profile)
    TurnFormatter(console).format_config(cfg.to_dict())


@config_app.command("validate")
def config_validate(profile: Optional[str] = typer.Option(None, help="Config profile name")):
    """Validate config and show any type issues."""
    from agentdesk.conversation.transformer import create_transformer

    config_path = find_config_path()
    cfg = _load_config_or_exit(profile)
    try:
        transformer = create_transformer(cfg.display.provider_type)
    except ValueError as e:
        console.print(f"[red]Config validation failed:[/red] {e}")
        raise typer.Exit(1)

    console.print("[green]Config is valid.[/green]")
    if config_path:
        console.print(f"  Loaded from: {config_path}")
    else:
        console.print("  [dim]No config file found, using defaults.[/dim]")
    console.print(f"  Provider: {cfg.display.provider_type} ({type(transformer).__name__})")
    console.print(f"  Log level: {cfg.logging.level}")


@app.command()
def version():
    """Show version."""
    console.print("agentdesk-core v0.1.0")


def main():
    app()


if __name__ == "__main__":
    main()
