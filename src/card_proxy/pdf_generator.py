"""PDF generation for card sheets."""
from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Callable, List, Optional, Sequence, Union

from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from .geometry import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_REFERENCE_CARD_SIZE,
    CardGeometry,
    GridConfig,
    PageSize,
    ReferenceCardSize,
    compute_geometry,
)
from .paginator import ImageItem, count_slots, group_pages, page_count, paginate


# Length of the cut marks, in points
CUT_MARK_LENGTH = 12


def write_cards_pdf(
    items: Sequence[ImageItem],
    output: Union[Path, BinaryIO],
    config: GridConfig = GridConfig(),
    page_size: PageSize = DEFAULT_PAGE_SIZE,
    reference_card_size: ReferenceCardSize = DEFAULT_REFERENCE_CARD_SIZE,
    progress_callback: Optional[Callable[[int, int], None]] = None,
    cut_guides: bool = False,
) -> int:
    """
    Create a PDF that arranges card images in a grid.

    - Images are used in the order of `items`, each `repeat_count` times.
    - At most `num_cols * num_rows` cards per page.
    - Every card is drawn at the same size, derived from the reference card.

    Args:
        items: Images to print
        output: Path or binary file object to write the PDF to
        config: Grid settings in points
        page_size: Page dimensions in points
        reference_card_size: Nominal card size in points
        progress_callback: Optional callback(current_page, total_pages)
        cut_guides: Draw cut marks along the page edges

    Returns:
        Number of pages written

    Raises:
        ValueError: If items sequence is empty
        InvalidGeometry: If the grid does not fit on the page
    """
    if not items:
        raise ValueError("No card images found - input list is empty.")

    # Fails before anything is written
    geometry = compute_geometry(page_size, config, reference_card_size)
    pages = group_pages(paginate(items, geometry, config))
    total_pages = page_count(count_slots(items), config)

    target = str(output) if isinstance(output, Path) else output
    c = canvas.Canvas(target, pagesize=(page_size.width, page_size.height))

    # One reader per item so repeated cards are embedded once
    readers = {}

    for page in pages:
        if progress_callback is not None:
            progress_callback(page.index + 1, total_pages)

        if cut_guides:
            draw_cut_guides(c, page_size, config, geometry)

        for placement in page.placements:
            key = id(placement.item)
            if key not in readers:
                readers[key] = ImageReader(BytesIO(placement.item.data))
            c.drawImage(
                readers[key],
                placement.x,
                placement.y,
                width=placement.width,
                height=placement.height,
                mask="auto",  # Respect transparent corners (e.g., PNG with alpha)
            )

        c.showPage()

    c.save()
    return total_pages


def render_cards_pdf(
    items: Sequence[ImageItem],
    config: GridConfig = GridConfig(),
    page_size: PageSize = DEFAULT_PAGE_SIZE,
    reference_card_size: ReferenceCardSize = DEFAULT_REFERENCE_CARD_SIZE,
    cut_guides: bool = False,
) -> bytes:
    """Same as `write_cards_pdf`, returning the PDF as bytes."""
    buffer = BytesIO()
    write_cards_pdf(
        items,
        buffer,
        config=config,
        page_size=page_size,
        reference_card_size=reference_card_size,
        cut_guides=cut_guides,
    )
    return buffer.getvalue()


def cut_positions(config: GridConfig, geometry: CardGeometry) -> tuple[List[float], List[float]]:
    """
    X positions of vertical and Y positions of horizontal cutting lines.

    With a gap each card gets two lines; without one, neighbours share a line.
    """
    x_positions = _edges(
        geometry.horizontal_margin / 2.0,
        geometry.card_width,
        config.horizontal_gap,
        config.num_cols,
    )
    y_positions = _edges(
        geometry.vertical_margin / 2.0,
        geometry.card_height,
        config.vertical_gap,
        config.num_rows,
    )
    return x_positions, y_positions


def draw_cut_guides(
    c: canvas.Canvas,
    page_size: PageSize,
    config: GridConfig,
    geometry: CardGeometry,
) -> None:
    """
    Draw cut marks on the canvas for a grid of cards.

    The marks sit on the page edges, in line with every card edge:
    - vertical marks at top and bottom
    - horizontal marks at left and right
    """
    c.setLineWidth(0.5)
    c.setStrokeColorRGB(0, 0, 0)

    x_positions, y_positions = cut_positions(config, geometry)

    for x in x_positions:
        c.line(x, page_size.height, x, page_size.height - CUT_MARK_LENGTH)
        c.line(x, 0, x, CUT_MARK_LENGTH)

    for y in y_positions:
        c.line(0, y, CUT_MARK_LENGTH, y)
        c.line(page_size.width, y, page_size.width - CUT_MARK_LENGTH, y)


def get_file_size_str(file_path: Path) -> str:
    """
    Get a human-readable file size string.

    Args:
        file_path: Path to the file

    Returns:
        Size string like "1.5 MB" or "256.0 KB"
    """
    file_size = file_path.stat().st_size
    if file_size >= 1024 * 1024:
        return f"{file_size / (1024 * 1024):.1f} MB"
    else:
        return f"{file_size / 1024:.1f} KB"


def _edges(origin: float, size: float, gap: float, count: int) -> List[float]:
    edges: List[float] = []
    for i in range(count):
        start = origin + i * (size + gap)
        for edge in (start, start + size):
            if not edges or abs(edges[-1] - edge) > 1e-6:
                edges.append(edge)
    return edges
