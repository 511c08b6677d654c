"""Command line interface for ContentFinder."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from contentfinder.config import AppConfig
from contentfinder.errors import RebuildError, SearchQueryError
from contentfinder.service import IndexService


console = Console()
app = typer.Typer(help="ContentFinder - full-text search over a git content tree")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _build_config(
    root: Optional[Path],
    repo: Optional[str],
    reset: Optional[bool],
    db: Optional[Path],
) -> AppConfig:
    config = AppConfig.from_env()
    if root is not None:
        config.content_root = root
    if repo is not None:
        config.git_repository = repo
    if reset is not None:
        config.reset_on_rebuild = reset
    if db is not None:
        config.db_path = db
    return config


def _rebuild(service: IndexService) -> None:
    try:
        status = service.rebuild_index()
    except RebuildError as exc:
        console.print(f"[red]Rebuild failed:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    console.print(
        f"Indexed [bold]{status.count}[/bold] items at {status.completed_at:%Y-%m-%d %H:%M:%S}"
    )


@app.command()
def rebuild(
    root: Path = typer.Option(None, "--root", help="Local content repository directory"),
    repo: str = typer.Option(None, "--repo", help="Git repository URL to clone"),
    reset: Optional[bool] = typer.Option(None, "--reset/--no-reset", help="Delete and re-clone before indexing"),
    db: Path = typer.Option(None, "--db", help="SQLite database path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Rebuild the content index."""
    _setup_logging(verbose)
    service = IndexService(_build_config(root, repo, reset, db), base_dir=Path.cwd())
    try:
        _rebuild(service)
    finally:
        service.close()


@app.command()
def search(
    query: str = typer.Argument(..., help="Full-text query"),
    root: Path = typer.Option(None, "--root", help="Local content repository directory"),
    repo: str = typer.Option(None, "--repo", help="Git repository URL to clone"),
    reset: Optional[bool] = typer.Option(None, "--reset/--no-reset", help="Delete and re-clone before indexing"),
    db: Path = typer.Option(None, "--db", help="SQLite database path"),
    offset: int = typer.Option(0, min=0, help="Index of the first result"),
    page_size: int = typer.Option(10, min=1, help="Number of results to display"),
    include_unlisted: bool = typer.Option(False, "--all", help="Include unlisted items"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Index the content tree, then run a search against it."""
    _setup_logging(verbose)
    service = IndexService(_build_config(root, repo, reset, db), base_dir=Path.cwd())
    try:
        _rebuild(service)
        try:
            page = service.search(query, offset, page_size, not include_unlisted)
        except SearchQueryError as exc:
            raise typer.BadParameter(str(exc)) from exc
    finally:
        service.close()

    if not page.items:
        console.print(f"[yellow]No matches found.[/yellow] (total: {page.total})")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Date")
    table.add_column("Title")
    table.add_column("Path")
    table.add_column("Listed")

    for item in page.items:
        table.add_row(f"{item.date:%Y-%m-%d}", item.title, item.path, "yes" if item.listed else "no")

    console.print(table)
    console.print(f"Showing {page.offset + 1}-{page.offset + len(page.items)} of {page.total}")
