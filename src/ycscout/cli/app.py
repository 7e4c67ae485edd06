"""Unified CLI entry point for YC Scout.

Config precedence: settings.default.toml -> settings.local.toml -> env vars (YCSCOUT_* with double underscores) -> CLI flags.
"""

from __future__ import annotations

from typing import Optional

import typer

from ycscout import __version__
from ycscout.cli.search import search
from ycscout.cli.settings_cmd import settings_app

APP_HELP = (
    "ycscout: find Y Combinator companies matching a free-text query. "
    "Config precedence: settings.default.toml -> settings.local.toml -> env vars (YCSCOUT_* with __) -> CLI flags."
)

app = typer.Typer(add_completion=True, help=APP_HELP)

app.command("search")(search)
app.add_typer(settings_app, name="settings")


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (defaults to api.host)."),
    port: Optional[int] = typer.Option(None, "--port", help="Bind port (defaults to api.port)."),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on code changes."),
) -> None:
    """Run the API server and web page with uvicorn."""
    import uvicorn

    from ycscout.settings import get_settings

    settings = get_settings()
    uvicorn.run(
        "ycscout.api.app:build_default_app",
        factory=True,
        host=host or settings.api.host,
        port=port or settings.api.port,
        reload=reload,
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Show help when no subcommand is provided."""
    if version:
        typer.echo(f"ycscout {__version__}")
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    from ycscout.logging_setup import configure_logging
    from ycscout.settings import get_settings

    settings = get_settings()
    level = "DEBUG" if verbose else settings.logging.level
    configure_logging(level, json_format=settings.logging.json_format)


if __name__ == "__main__":
    app()
