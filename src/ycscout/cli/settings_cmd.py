"""CLI commands for inspecting and validating YC Scout settings."""

from __future__ import annotations

import json

import typer
from rich.console import Console

settings_app = typer.Typer(help="Inspect and validate YC Scout configuration.")
console = Console()


@settings_app.command("show")
def show_settings() -> None:
    """Display the currently resolved settings (secrets masked)."""
    from ycscout.settings import get_settings

    settings = get_settings()
    console.print_json(json.dumps(settings.redacted_dump(), indent=2, default=str))


@settings_app.command("validate")
def validate_settings() -> None:
    """Validate settings and report missing credentials."""
    from ycscout.exceptions import ConfigurationError
    from ycscout.settings import get_settings

    try:
        settings = get_settings()
        settings.require_credentials()
    except ConfigurationError as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(code=1)
    except Exception as e:
        console.print(f"[red]✗[/red] Settings validation failed: {e}")
        raise typer.Exit(code=1)

    console.print("[green]✓[/green] Settings are valid.")
    console.print(f"  Environment: {settings.env}")
    console.print(f"  Extraction model: {settings.extraction.model_name}")
    console.print(f"  Directory URL: {settings.scout.directory_url}")
