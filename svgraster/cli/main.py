"""
Main CLI Application
Typer application converting SVG files to PNG through a headless browser
"""

import asyncio
from enum import Enum
from pathlib import Path
from typing import Annotated, Dict, List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
)
from rich.table import Table

from svgraster.cli import __version__
from svgraster.config import Settings
from svgraster.core.batch.coordinator import BatchCoordinator
from svgraster.core.batch.models import BatchOutcome
from svgraster.core.batch.results import BatchReportBuilder
from svgraster.core.exceptions import ContentReadError
from svgraster.utils.logging import setup_logging

app = typer.Typer(
    name="svgraster",
    help="Batch SVG to PNG converter driven by a headless browser",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

console = Console()

# State shared between the callback and the commands
state = {"verbose": False, "json_logs": False}


class ReportFormat(str, Enum):
    """Report format options"""

    json = "json"
    csv = "csv"


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"svgraster {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-V",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
    json_logs: Annotated[
        bool, typer.Option("--json-logs", help="Emit logs as JSON")
    ] = False,
):
    """
    Convert SVG files to PNG, resized to a target height
    """
    state["verbose"] = verbose
    state["json_logs"] = json_logs


def _build_settings(concurrency: Optional[int], height: Optional[float]) -> Settings:
    overrides = {}
    if concurrency is not None:
        overrides["concurrency_limit"] = concurrency
    if height is not None:
        overrides["probe_height"] = height
    if state["verbose"]:
        overrides["log_level"] = "DEBUG"
        overrides["log_page_console"] = True
    if state["json_logs"]:
        overrides["json_logs"] = True

    try:
        settings = Settings(**overrides)
    except ValidationError as e:
        console.print(f"[red]Invalid configuration:[/red] {e}")
        raise typer.Exit(2)

    setup_logging(log_level=settings.log_level, json_logs=settings.json_logs)
    return settings


def _print_summary(outcome: BatchOutcome) -> None:
    table = Table(title="Batch Conversion Summary", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Total Files", str(outcome.result.total))
    table.add_row("Succeeded", f"[green]{len(outcome.result.succeeded)}[/green]")
    if outcome.result.failures:
        table.add_row("Failed", f"[red]{len(outcome.result.failures)}[/red]")
    table.add_row("Elapsed", f"{outcome.elapsed_seconds:.2f}s")

    console.print()
    console.print(table)

    for failure in outcome.result.failures:
        console.print(f"[red]✗[/red] {failure.job.source_path}: {failure.message}")


def _write_report(
    outcome: BatchOutcome, report: ReportFormat, report_file: Optional[Path]
) -> None:
    content = BatchReportBuilder().generate_summary_report(outcome, report.value)
    if report_file:
        report_file.write_text(content, encoding="utf-8")
        console.print(f"Report written to {report_file}")
    else:
        console.print(content, markup=False, highlight=False)


def _execute(
    coordinator: BatchCoordinator,
    file_map: Dict[str, str],
    report: Optional[ReportFormat],
    report_file: Optional[Path],
) -> None:
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        MofNCompleteColumn(),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Converting...", total=len(file_map))
        outcome = asyncio.run(
            coordinator.run(file_map, lambda _: progress.advance(task))
        )

    if outcome.engine_error is not None:
        console.print(f"[red]Renderer failed to start:[/red] {outcome.engine_error}")
        raise typer.Exit(1)

    _print_summary(outcome)
    if report is not None:
        _write_report(outcome, report, report_file)

    if not outcome.ok:
        raise typer.Exit(1)
    console.print("[green]Batch conversion complete![/green]")


@app.command(name="files")
def convert_files_command(
    sources: Annotated[List[Path], typer.Argument(help="SVG files to convert")],
    output_dir: Annotated[
        Optional[Path],
        typer.Option(
            "-o", "--output-dir", help="Output directory (default: beside each source)"
        ),
    ] = None,
    concurrency: Annotated[
        Optional[int],
        typer.Option("-j", "--concurrency", min=1, help="Pages rendered at once"),
    ] = None,
    height: Annotated[
        Optional[float],
        typer.Option("--height", min=1, help="Target height in px"),
    ] = None,
    report: Annotated[
        Optional[ReportFormat],
        typer.Option("--report", help="Print a json or csv report"),
    ] = None,
    report_file: Annotated[
        Optional[Path], typer.Option("--report-file", help="Write the report here")
    ] = None,
):
    """
    Convert the given SVG files

    Examples:
      svgraster files logo.svg icons/*.svg -o build/png
      svgraster files drawing.svg --height 128
    """
    settings = _build_settings(concurrency, height)

    file_map = {}
    claimed = {}
    for source in sources:
        target_dir = output_dir if output_dir else source.parent
        destination = str(target_dir / (source.stem + settings.output_extension))
        previous = claimed.setdefault(destination, str(source))
        if previous != str(source):
            console.print(
                f"[red]{previous} and {source} would both be written "
                f"to {destination}[/red]"
            )
            raise typer.Exit(2)
        file_map[str(source)] = destination

    if output_dir:
        output_dir.mkdir(parents=True, exist_ok=True)

    _execute(BatchCoordinator(settings), file_map, report, report_file)


@app.command(name="dir")
def convert_directory_command(
    source_dir: Annotated[
        Path,
        typer.Argument(file_okay=False, help="Directory holding SVG files"),
    ],
    destination_dir: Annotated[
        Path, typer.Argument(file_okay=False, help="Directory for PNG files")
    ],
    concurrency: Annotated[
        Optional[int],
        typer.Option("-j", "--concurrency", min=1, help="Pages rendered at once"),
    ] = None,
    height: Annotated[
        Optional[float],
        typer.Option("--height", min=1, help="Target height in px"),
    ] = None,
    report: Annotated[
        Optional[ReportFormat],
        typer.Option("--report", help="Print a json or csv report"),
    ] = None,
    report_file: Annotated[
        Optional[Path], typer.Option("--report-file", help="Write the report here")
    ] = None,
):
    """
    Convert every SVG file of a directory

    Examples:
      svgraster dir assets/svg assets/png
      svgraster dir icons out -j 8 --report json
    """
    settings = _build_settings(concurrency, height)
    coordinator = BatchCoordinator(settings)

    try:
        file_map = coordinator.directory_mapping(source_dir, destination_dir)
    except ContentReadError as e:
        console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(2)

    if not file_map:
        console.print(
            f"[yellow]No {settings.source_extension} files found "
            f"in {source_dir}[/yellow]"
        )
        raise typer.Exit(0)

    destination_dir.mkdir(parents=True, exist_ok=True)
    _execute(coordinator, file_map, report, report_file)


if __name__ == "__main__":
    app()
