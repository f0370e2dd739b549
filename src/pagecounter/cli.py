"""Command line interface for PageCounter."""

from __future__ import annotations

import logging
import signal
import threading
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn
from rich.table import Table

from pagecounter.config import AppConfig
from pagecounter.models import ScanOptions, ScanProgress, ScanReport
from pagecounter.providers.registry import ProviderRegistry
from pagecounter.scan.scanner import PageCountScanner


console = Console()
app = typer.Typer(help="PageCounter - estimate printed pages for a folder of files")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _build_config(
    chars_per_page: int,
    lines_per_page: int,
    rows_per_page: int,
    columns_per_page: int,
) -> AppConfig:
    return AppConfig(
        chars_per_page=chars_per_page,
        lines_per_page=lines_per_page,
        rows_per_page=rows_per_page,
        columns_per_page=columns_per_page,
    )


def _print_summary(report: ScanReport) -> None:
    if report.was_cancelled:
        status = "[yellow]Cancelled[/yellow]"
    elif report.is_complete:
        status = "[green]Complete[/green]"
    else:
        status = "[red]Incomplete[/red]"

    console.print(f"Status: {status}")
    console.print(
        f"Found: {report.total_files_found}, processed: {report.files_processed}, "
        f"errors: {report.files_with_errors}, pages: {report.total_pages}"
    )
    console.print(f"Duration: {report.duration.total_seconds():.2f}s")


def _print_files(report: ScanReport) -> None:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("File")
    table.add_column("Type")
    table.add_column("Size", justify="right")
    table.add_column("Pages", justify="right")
    table.add_column("Notes")

    for item in report.files:
        pages = str(item.page_count) if item.page_count is not None else "-"
        style = None if item.processed_successfully else "red"
        table.add_row(
            escape(str(item.full_path)),
            item.file_type,
            str(item.file_size_bytes),
            pages,
            escape(item.notes[:120]),
            style=style,
        )

    console.print(table)


@app.command()
def scan(
    root: Path = typer.Argument(..., help="Folder to scan.", resolve_path=True),
    subfolders: bool = typer.Option(
        AppConfig().include_subfolders, "--subfolders/--no-subfolders", help="Include subfolders"
    ),
    max_depth: Optional[int] = typer.Option(None, "--max-depth", help="Maximum folder depth"),
    file_types: Optional[List[str]] = typer.Option(
        None, "--type", "-t", help="Only include this extension (repeatable)"
    ),
    chars_per_page: int = typer.Option(AppConfig().chars_per_page, help="Characters per page"),
    lines_per_page: int = typer.Option(AppConfig().lines_per_page, help="Lines per page"),
    rows_per_page: int = typer.Option(AppConfig().rows_per_page, help="Spreadsheet rows per page"),
    columns_per_page: int = typer.Option(
        AppConfig().columns_per_page, help="Spreadsheet columns per page"
    ),
    show_files: bool = typer.Option(True, "--show-files/--no-show-files", help="List every file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Scan a folder and estimate page counts for every file."""
    _setup_logging(verbose)
    config = _build_config(chars_per_page, lines_per_page, rows_per_page, columns_per_page)
    options = ScanOptions(
        root_path=root,
        include_subfolders=subfolders,
        max_depth=max_depth,
        file_types=tuple(file_types) if file_types else None,
    )
    scanner = PageCountScanner.from_config(config)

    cancel = threading.Event()
    previous_handler = signal.signal(signal.SIGINT, lambda signum, frame: cancel.set())

    console.print(f"Scanning [bold]{root}[/bold]...")
    try:
        with Progress(
            TextColumn("{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task("Discovering files...", total=None)

            def on_progress(update: ScanProgress) -> None:
                if update.is_enumerating:
                    progress.update(task, description=update.status_message)
                    return
                progress.update(
                    task,
                    description=update.status_message,
                    total=update.total_count or None,
                    completed=update.processed_count,
                )

            report = scanner.scan(options, on_progress=on_progress, cancel=cancel)
    finally:
        signal.signal(signal.SIGINT, previous_handler)

    if report.total_files_found == 0:
        console.print("[yellow]No files found.[/yellow]")
    elif show_files:
        _print_files(report)
    _print_summary(report)


@app.command()
def estimate(
    path: Path = typer.Argument(..., help="File to estimate.", resolve_path=True),
    chars_per_page: int = typer.Option(AppConfig().chars_per_page, help="Characters per page"),
    lines_per_page: int = typer.Option(AppConfig().lines_per_page, help="Lines per page"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Estimate the page count of a single file."""
    _setup_logging(verbose)
    if not path.is_file():
        raise typer.BadParameter(f"File not found: {path}")

    config = _build_config(
        chars_per_page, lines_per_page, AppConfig().rows_per_page, AppConfig().columns_per_page
    )
    result = PageCountScanner.from_config(config).estimate_single(path)
    if result.success:
        console.print(f"[bold]{path.name}[/bold]: {result.page_count} page(s)")
    else:
        console.print(f"[red]{path.name}: no page count[/red]")
    console.print(escape(result.notes))
    if not result.success:
        raise typer.Exit(code=1)


@app.command()
def types() -> None:
    """List the supported file types by provider."""
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Provider")
    table.add_column("Extensions")
    registry = ProviderRegistry.default()
    for provider in registry.providers:
        table.add_row(provider.name, ", ".join(provider.supported_extensions))
    console.print(table)
    console.print(f"{len(registry.supported_extensions())} extensions supported")
