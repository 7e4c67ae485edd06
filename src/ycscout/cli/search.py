"""CLI command for running a single scout from the terminal."""

from __future__ import annotations

import asyncio
import json

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from ycscout.models.company import ScoutResult
from ycscout.settings import Settings

console = Console()


def search(
    query: str = typer.Argument(..., help="Free-text description of the companies to find."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON envelope instead of a table."),
) -> None:
    """Search the YC directory for companies matching QUERY."""
    from ycscout.settings import get_settings

    settings = get_settings()

    try:
        if as_json:
            result = asyncio.run(_run(query, settings))
        else:
            with Progress(SpinnerColumn(), TextColumn("[progress.description]{task.description}"), console=console) as progress:
                task = progress.add_task(f"Scouting: {query}", total=None)
                result = asyncio.run(_run(query, settings))
                progress.update(task, completed=True)
    except Exception as e:
        if as_json:
            typer.echo(json.dumps({"error": str(e) or "Something went wrong with the scout request."}))
        else:
            console.print(f"\n[red]✗[/red] Scout failed: {e}")
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(result.to_envelope(), indent=2))
        return
    _print_table(result)


async def _run(query: str, settings: Settings) -> ScoutResult:
    from ycscout.browser.factory import create_browser_provider, extraction_client_factory
    from ycscout.monitoring.event_bus import EventBus, LoggingSink, jsonl_file_sink
    from ycscout.scout.runner import run_scout

    settings.require_credentials()
    bus = EventBus()
    bus.add_sink(LoggingSink())
    provider = create_browser_provider(settings)
    try:
        with jsonl_file_sink(bus, settings.logging.events_jsonl_path):
            return await run_scout(
                query,
                provider=provider,
                client_factory=extraction_client_factory(settings),
                settings=settings,
                bus=bus,
            )
    finally:
        await provider.aclose()


def _print_table(result: ScoutResult) -> None:
    table = Table(title=f"YC companies: {result.query}")
    table.add_column("Name", style="bold")
    table.add_column("Description")
    table.add_column("Website")
    table.add_column("Location")
    table.add_column("Batch")
    table.add_column("Public")
    for company in result.companies:
        public = "" if company.is_public is None else ("yes" if company.is_public else "no")
        table.add_row(
            company.name,
            company.description,
            company.website,
            company.location or "",
            company.batch or "",
            public,
        )
    console.print(table)
    if result.returned_count != result.requested_count:
        console.print(
            f"[yellow]⚠[/yellow] Returned {result.returned_count} of {result.requested_count} requested companies."
        )
