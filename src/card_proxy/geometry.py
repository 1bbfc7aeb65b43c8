"""Grid geometry: card size and margins derived from the page and grid settings."""
from __future__ import annotations

from dataclasses import dataclass

from reportlab.lib.pagesizes import A4

from .errors import InvalidGeometry


# Points per millimetre (1 point = 1/72 inch)
MM_TO_PX = 2.8346666667

# Default grid layout
DEFAULT_COLS = 4
DEFAULT_ROWS = 2

# Default spacing, in millimetres
DEFAULT_GAP_MM = 3.0
DEFAULT_MIN_MARGIN_MM = 6.35

# Standard trading card, in millimetres
REFERENCE_CARD_WIDTH_MM = 59.0
REFERENCE_CARD_HEIGHT_MM = 86.0


def mm_to_px(mm: float) -> float:
    """Convert millimetres to points."""
    return mm * MM_TO_PX


@dataclass(frozen=True)
class PageSize:
    """Page dimensions in points."""

    width: float
    height: float

    def landscape(self) -> "PageSize":
        """Return this size with the wider dimension as width."""
        if self.width < self.height:
            return PageSize(width=self.height, height=self.width)
        return self


@dataclass(frozen=True)
class ReferenceCardSize:
    """Nominal card size; every card is scaled uniformly from it."""

    width: float
    height: float


@dataclass(frozen=True)
class GridConfig:
    """Grid settings with all lengths in points."""

    num_cols: int = DEFAULT_COLS
    num_rows: int = DEFAULT_ROWS
    horizontal_gap: float = mm_to_px(DEFAULT_GAP_MM)
    vertical_gap: float = mm_to_px(DEFAULT_GAP_MM)
    min_horizontal_margin: float = mm_to_px(DEFAULT_MIN_MARGIN_MM)
    min_vertical_margin: float = mm_to_px(DEFAULT_MIN_MARGIN_MM)

    @property
    def cards_per_page(self) -> int:
        return self.num_cols * self.num_rows

    def validate(self) -> None:
        """
        Check the grid invariants.

        Raises:
            InvalidGeometry: If the grid has no cells or a length is negative
        """
        if self.num_cols < 1 or self.num_rows < 1:
            raise InvalidGeometry(
                f"Grid needs at least one column and one row, "
                f"got {self.num_cols}x{self.num_rows}"
            )
        lengths = {
            "horizontal_gap": self.horizontal_gap,
            "vertical_gap": self.vertical_gap,
            "min_horizontal_margin": self.min_horizontal_margin,
            "min_vertical_margin": self.min_vertical_margin,
        }
        for name, value in lengths.items():
            if value < 0:
                raise InvalidGeometry(f"{name} must not be negative, got {value}")


@dataclass(frozen=True)
class GridOptions:
    """User-facing grid settings, lengths in millimetres."""

    num_cols: int = DEFAULT_COLS
    num_rows: int = DEFAULT_ROWS
    horizontal_gap: float = DEFAULT_GAP_MM
    vertical_gap: float = DEFAULT_GAP_MM
    min_horizontal_margin: float = DEFAULT_MIN_MARGIN_MM
    min_vertical_margin: float = DEFAULT_MIN_MARGIN_MM

    def to_grid_config(self) -> GridConfig:
        return GridConfig(
            num_cols=self.num_cols,
            num_rows=self.num_rows,
            horizontal_gap=mm_to_px(self.horizontal_gap),
            vertical_gap=mm_to_px(self.vertical_gap),
            min_horizontal_margin=mm_to_px(self.min_horizontal_margin),
            min_vertical_margin=mm_to_px(self.min_vertical_margin),
        )


@dataclass(frozen=True)
class CardGeometry:
    """
    Resolved card size and margins.

    The margins are totals per axis; each page edge receives half.
    """

    card_width: float
    card_height: float
    horizontal_margin: float
    vertical_margin: float


DEFAULT_PAGE_SIZE = PageSize(*A4).landscape()

DEFAULT_REFERENCE_CARD_SIZE = ReferenceCardSize(
    width=mm_to_px(REFERENCE_CARD_WIDTH_MM),
    height=mm_to_px(REFERENCE_CARD_HEIGHT_MM),
)


def compute_geometry(
    page_size: PageSize,
    config: GridConfig,
    reference_card_size: ReferenceCardSize,
) -> CardGeometry:
    """
    Compute the shared card size and the resulting margins.

    One scale factor is applied to the reference card on both axes, so all
    cards keep the reference aspect ratio and are drawn at the same size no
    matter what the source images measure. The axis with less room decides
    the scale; the other axis keeps its slack as extra margin.

    Args:
        page_size: Page dimensions in points
        config: Grid settings in points
        reference_card_size: Nominal card size in points

    Returns:
        CardGeometry with card size and total margin per axis

    Raises:
        InvalidGeometry: If the configuration leaves no room for a card
    """
    config.validate()
    if page_size.width <= 0 or page_size.height <= 0:
        raise InvalidGeometry(f"Page size must be positive, got {page_size}")
    if reference_card_size.width <= 0 or reference_card_size.height <= 0:
        raise InvalidGeometry(
            f"Reference card size must be positive, got {reference_card_size}"
        )

    max_card_width = _max_card_size(
        page_size.width,
        config.min_horizontal_margin,
        config.num_cols,
        config.horizontal_gap,
    )
    max_card_height = _max_card_size(
        page_size.height,
        config.min_vertical_margin,
        config.num_rows,
        config.vertical_gap,
    )
    if max_card_width <= 0:
        raise InvalidGeometry(
            f"No horizontal room for {config.num_cols} columns: margin and gaps "
            f"exceed the page width of {page_size.width:.2f}pt"
        )
    if max_card_height <= 0:
        raise InvalidGeometry(
            f"No vertical room for {config.num_rows} rows: margin and gaps "
            f"exceed the page height of {page_size.height:.2f}pt"
        )

    width_scale = max_card_width / reference_card_size.width
    height_scale = max_card_height / reference_card_size.height
    card_scale = min(width_scale, height_scale)

    card_width = reference_card_size.width * card_scale
    card_height = reference_card_size.height * card_scale

    return CardGeometry(
        card_width=card_width,
        card_height=card_height,
        horizontal_margin=_actual_margin(
            card_width, page_size.width, config.num_cols, config.horizontal_gap
        ),
        vertical_margin=_actual_margin(
            card_height, page_size.height, config.num_rows, config.vertical_gap
        ),
    )


def _max_card_size(total_size: float, margin: float, num_items: int, gap: float) -> float:
    total_gap = (num_items - 1) * gap
    return (total_size - (margin + total_gap)) / num_items


def _actual_margin(card_size: float, page_size: float, num_items: int, gap: float) -> float:
    content_size = num_items * card_size
    total_gap = (num_items - 1) * gap
    return page_size - (content_size + total_gap)
