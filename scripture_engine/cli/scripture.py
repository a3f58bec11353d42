"""CLI commands for passage lookup, book listing, search and tier status."""

from __future__ import annotations

import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from scripture_engine.bootstrap import build_default_service_container
from scripture_engine.core.config import config
from scripture_engine.services import runtime
from scripture_engine.services.resolver import TieredResolver, missing_verses
from scripture_engine.utils.verse_ranges import WHOLE_CHAPTER_SENTINEL

console = Console()


def _get_resolver() -> TieredResolver:
    """Use the registered container, building the default one on first use."""
    try:
        return runtime.get_resolver()
    except RuntimeError:
        runtime.set_services(build_default_service_container())
        return runtime.get_resolver()


def passage(
    book: str = typer.Argument(..., help="Book name or abbreviation, e.g. 'Ps' or '1 John'"),
    chapter: int = typer.Argument(..., help="Chapter number"),
    verses: str = typer.Argument(WHOLE_CHAPTER_SENTINEL, help="Verse range, e.g. 1-3,5"),
    version: Optional[str] = typer.Option(None, "--version", "-v", help="Reference-link version"),
) -> None:
    """Print a passage, or a reference link when no tier has it."""
    resolver = _get_resolver()
    result = asyncio.run(resolver.resolve_passage(book, chapter, verses))
    if result is None:
        console.print(
            f"[yellow]{book} {chapter}:{verses} is not available in the loaded data.[/yellow]"
        )
        console.print(f"Read it online: {resolver.reference_link(book, chapter, verses, version)}")
        raise typer.Exit(1)

    heading = f"{result.book} {result.chapter}:{result.requested_range}"
    console.print(f"[bold]{heading}[/bold] [dim]({result.source})[/dim]")
    for verse in result.verses:
        console.print(f"[cyan]{verse.verse}[/cyan] {verse.text}")
    absent = missing_verses(result, verses)
    if absent:
        console.print(f"[dim]Not available: {', '.join(str(n) for n in absent)}[/dim]")


def books() -> None:
    """List the books and chapters held across the tiers."""
    resolver = _get_resolver()
    asyncio.run(resolver.load_all())
    listing = resolver.books()
    if not listing:
        console.print("[dim]No scripture data loaded.[/dim]")
        return

    table = Table(title="Available books")
    table.add_column("Book", style="cyan")
    table.add_column("Chapters")
    for book, chapters in listing.items():
        table.add_row(book, ", ".join(str(ch) for ch in chapters))
    console.print(table)


def search(
    query: str = typer.Argument(..., help="Text to search for (case-insensitive)"),
    limit: int = typer.Option(
        config.SEARCH_DEFAULT_LIMIT, "--limit", "-l", min=1, help="Maximum results"
    ),
) -> None:
    """Search verse text across the tiers."""
    resolver = _get_resolver()
    results = asyncio.run(resolver.resolve_search(query, min(limit, config.SEARCH_MAX_LIMIT)))
    if not results:
        console.print("[dim]No matching verses found.[/dim]")
        return

    table = Table(title=f"Verses matching '{query}'")
    table.add_column("Reference", style="cyan")
    table.add_column("Text")
    for verse in results:
        table.add_row(verse.reference, verse.text)
    console.print(table)


def status() -> None:
    """Load every tier and show its state and counts."""
    resolver = _get_resolver()
    asyncio.run(resolver.load_all())

    table = Table(title="Scripture tiers")
    table.add_column("Tier", style="cyan")
    table.add_column("State")
    table.add_column("Verses", justify="right")
    table.add_column("Books", justify="right")
    table.add_column("Chapters", justify="right")
    for tier in resolver.status():
        colour = "green" if tier.has_data else "yellow"
        state = f"[{colour}]{tier.state.value}[/{colour}]"
        table.add_row(
            tier.name,
            state,
            str(tier.stats.total_verses),
            str(tier.stats.total_books),
            str(tier.stats.total_chapters),
        )
    console.print(table)

    stats = resolver.stats()
    console.print(
        f"[bold]Active corpus:[/bold] {stats.total_verses} verses, "
        f"{stats.total_books} books, {stats.total_chapters} chapters"
    )


def register_commands(app: typer.Typer) -> None:
    """Attach the scripture commands to ``app``."""
    app.command("passage")(passage)
    app.command("books")(books)
    app.command("search")(search)
    app.command("status")(status)


__all__ = ["books", "passage", "register_commands", "search", "status"]
