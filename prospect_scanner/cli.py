"""Command-line interface for the prospect scanner.

Takes page images, runs them through the extractor one by one with a live
status table, prints the aggregated prospects and writes them to CSV.
"""

import asyncio
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from prospect_scanner.config.settings import Settings
from prospect_scanner.intake.exceptions import IntakeError
from prospect_scanner.intake.file_intake import FileIntake
from prospect_scanner.logging.logger import Log
from prospect_scanner.processor.processor import SequentialProcessor, build_processor
from prospect_scanner.results.csv_exporter import CsvExporter
from prospect_scanner.session.models import PROSPECT_FIELDS, FileStatus, Prospect, SessionState
from prospect_scanner.session.previews import PreviewStore
from prospect_scanner.session.session import Session

app = typer.Typer(
    name="prospect-scanner",
    help="Extract contact lists from page images and export them as CSV",
    add_completion=False,
)
console = Console()

_STATUS_STYLE = {
    FileStatus.PENDING: "[dim]Pending[/dim]",
    FileStatus.PROCESSING: "[yellow]Processing[/yellow]",
    FileStatus.COMPLETED: "[green]Done[/green]",
    FileStatus.ERROR: "[red]Error[/red]",
}


def files_table(state: SessionState) -> Table:
    table = Table(title="Images")
    table.add_column("#", justify="right", style="dim")
    table.add_column("File", style="cyan")
    table.add_column("Status", justify="center")
    table.add_column("Prospects", justify="right")
    for index, uploaded in enumerate(state.files, start=1):
        found = "" if uploaded.extracted_data is None else str(len(uploaded.extracted_data))
        table.add_row(str(index), Text(uploaded.source.name), _STATUS_STYLE[uploaded.status], found)
    return table


def prospects_table(prospects: list[Prospect], total: int) -> Table:
    table = Table(title=f"Prospects (showing {len(prospects)} of {total})")
    for f in PROSPECT_FIELDS:
        table.add_column(f.header)
    for prospect in prospects:
        table.add_row(*(Text(value) for value in prospect.values()))
    return table


async def _run_passes(processor: SequentialProcessor, session: Session, passes: int) -> None:
    with Live(files_table(session.state), console=console, refresh_per_second=8) as live:
        session.subscribe(lambda state: live.update(files_table(state)))
        for attempt in range(passes):
            summary = await processor.run(session)
            if summary.is_noop or summary.failed == 0:
                break
            if attempt + 1 < passes:
                Log.warning(f"Retrying {summary.failed} failed files")


@app.command()
def extract(
    images: List[Path] = typer.Argument(..., help="Image files or directories of images"),
    output: Path = typer.Option(Path("."), "--output", "-o", help="Directory for the CSV file"),
    filename: Optional[str] = typer.Option(None, "--filename", "-f", help="CSV file name"),
    search: str = typer.Option("", "--search", "-s", help="Only show prospects matching this text"),
    drop: bool = typer.Option(
        False,
        "--drop",
        help="Accept any image type, like a drag-and-drop upload",
    ),
    retries: int = typer.Option(0, "--retries", "-r", min=0, help="Extra passes over failed files"),
) -> None:
    """Extract prospects from page images and export them to CSV."""
    settings = Settings()
    Log.configure(settings.log_level, stream=sys.stderr)

    intake = FileIntake(settings.accepted_mime_types)
    try:
        candidates = intake.from_drop(images) if drop else intake.from_paths(images)
    except IntakeError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(1)

    session = Session(PreviewStore(settings.preview_max_size), max_files=settings.max_files)
    try:
        if not session.submit_files(candidates):
            console.print(f"[red]Error:[/red] {escape(session.error or 'No images to process')}")
            raise typer.Exit(1)

        processor = build_processor(settings)
        asyncio.run(_run_passes(processor, session, retries + 1))
        console.print(session.status().describe())

        all_prospects = session.prospects()
        if not all_prospects:
            console.print("No prospects found")
            return

        path = CsvExporter(settings.export_filename).export(all_prospects, output, filename)
        console.print(prospects_table(session.search(search), len(all_prospects)))
        if path is not None:
            console.print(f"[green]✓[/green] Exported {len(all_prospects)} prospects to {escape(str(path))}")
    finally:
        session.close()


@app.command("version")
def show_version() -> None:
    """Print the installed version."""
    try:
        console.print(version("prospect-scanner"))
    except PackageNotFoundError:
        console.print("unknown")
