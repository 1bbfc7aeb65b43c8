"""High-level build: read the input folder and write the card sheet PDF."""
from __future__ import annotations

from pathlib import Path
from typing import List

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from .geometry import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_REFERENCE_CARD_SIZE,
    GridOptions,
    PageSize,
    ReferenceCardSize,
)
from .images import SkippedFile, read_image_items
from .paginator import count_slots
from .pdf_generator import get_file_size_str, write_cards_pdf

# Rich console instance for beautiful output
console = Console()


def build_cards_pdf(
    output_path: Path,
    input_dir: Path,
    options: GridOptions = GridOptions(),
    page_size: PageSize = DEFAULT_PAGE_SIZE,
    reference_card_size: ReferenceCardSize = DEFAULT_REFERENCE_CARD_SIZE,
    cut_guides: bool = False,
) -> int:
    """
    High-level helper:
    - Reads all JPEG/PNG files in the input folder
    - Writes a single PDF with the configured grid.

    Args:
        output_path: Path to the output PDF file
        input_dir: Directory holding the card images
        options: Grid settings in millimetres
        page_size: Page dimensions in points, turned to landscape
        reference_card_size: Nominal card size in points
        cut_guides: Draw cut marks along the page edges

    Returns:
        Number of pages written

    Raises:
        RuntimeError: If the input folder holds no usable images
        InvalidGeometry: If the grid does not fit on the page
    """
    config = options.to_grid_config()
    page_size = page_size.landscape()

    # Ensure the output directory exists
    output_path.parent.mkdir(parents=True, exist_ok=True)

    console.print()
    console.print(Panel.fit(
        "[bold magenta]🃏 Card Proxy[/bold magenta]\n"
        "[dim]Creating printable card sheets[/dim]",
        border_style="magenta",
    ))
    console.print()

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
    ) as progress:
        items, skipped = read_image_items(input_dir)
        if not items:
            console.print(f"[red]✘[/red] No JPEG or PNG images found in {input_dir}.")
            raise RuntimeError(f"No card images found in {input_dir}.")

        task_id = progress.add_task("[green]Writing PDF pages...", total=None)

        def on_page(page_num: int, total_pages: int) -> None:
            progress.update(
                task_id,
                completed=page_num,
                total=total_pages,
                description=f"[green]Writing page [bold]{page_num}/{total_pages}[/bold]...",
            )

        num_pages = write_cards_pdf(
            items,
            output_path,
            config=config,
            page_size=page_size,
            reference_card_size=reference_card_size,
            progress_callback=on_page,
            cut_guides=cut_guides,
        )

    console.print()

    table = Table(box=box.ROUNDED, border_style="green")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("🖼️  Images read", f"[bold]{len(items)}[/bold]")
    table.add_row("🃏 Cards placed", f"[bold]{count_slots(items)}[/bold]")
    table.add_row("📐 Grid", f"[bold]{options.num_cols} x {options.num_rows}[/bold]")
    table.add_row("📄 Pages created", f"[bold]{num_pages}[/bold]")
    table.add_row("💾 Output file", f"[bold]{output_path}[/bold]")
    table.add_row("📊 File size", f"[bold]{get_file_size_str(output_path)}[/bold]")

    console.print(table)
    print_skipped_files_report(skipped)

    console.print()
    console.print("[green]✔[/green] [bold green]Done![/bold green] Your card sheets are ready to print.")
    console.print()
    return num_pages


def print_skipped_files_report(skipped: List[SkippedFile]) -> None:
    """Print report of files that were skipped or only partly used."""
    if not skipped:
        return

    console.print()
    console.print(f"[yellow]⚠ {len(skipped)} files need attention:[/yellow]")
    skipped_table = Table(box=box.SIMPLE, border_style="yellow", show_header=True)
    skipped_table.add_column("File", style="white")
    skipped_table.add_column("Reason", style="yellow")
    for f in skipped[:20]:
        skipped_table.add_row(f.name, f.reason[:60] + "..." if len(f.reason) > 60 else f.reason)
    if len(skipped) > 20:
        skipped_table.add_row(f"[dim]and {len(skipped) - 20} more[/dim]", "")
    console.print(skipped_table)
