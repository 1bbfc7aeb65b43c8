"""Slot assignment: expands repeated cards and places them page by page."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Sequence, Tuple

from .geometry import CardGeometry, GridConfig


class ImageFormat(Enum):
    JPEG = "JPEG"
    PNG = "PNG"


@dataclass(frozen=True)
class ImageItem:
    """One input image and how many grid cells it fills."""

    data: bytes = field(repr=False)
    format: ImageFormat
    repeat_count: int = 1
    name: str = ""

    def __post_init__(self) -> None:
        if self.repeat_count < 1:
            raise ValueError(
                f"repeat_count must be at least 1, got {self.repeat_count} for {self.name!r}"
            )


@dataclass(frozen=True)
class Placement:
    """A card drawn at a resolved position on a page (origin bottom-left)."""

    page_index: int
    row: int
    col: int
    item: ImageItem
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class Page:
    index: int
    placements: Tuple[Placement, ...]


def expand_items(items: Sequence[ImageItem]) -> Iterator[ImageItem]:
    """Yield each item once per repeat, in input order."""
    for item in items:
        for _ in range(item.repeat_count):
            yield item


def count_slots(items: Sequence[ImageItem]) -> int:
    return sum(item.repeat_count for item in items)


def page_count(total_slots: int, config: GridConfig) -> int:
    """Number of pages needed for `total_slots` cards."""
    return math.ceil(total_slots / config.cards_per_page)


def paginate(
    items: Sequence[ImageItem],
    geometry: CardGeometry,
    config: GridConfig,
) -> List[Placement]:
    """
    Assign every expanded slot a page, row and column in row-major order.

    - Slot `i` lands on page `i // (cols * rows)`.
    - Within a page, rows fill from the bottom edge (row 0) upwards.
    - The sequence stops at the last slot; trailing cells stay empty.

    Args:
        items: Images in print order
        geometry: Card size and margins from `compute_geometry`
        config: Grid settings used to compute `geometry`

    Returns:
        Placements in slot order
    """
    per_page = config.cards_per_page
    x_step = geometry.card_width + config.horizontal_gap
    y_step = geometry.card_height + config.vertical_gap
    x_origin = geometry.horizontal_margin / 2.0
    y_origin = geometry.vertical_margin / 2.0

    placements: List[Placement] = []
    for slot, item in enumerate(expand_items(items)):
        page_index, within_page = divmod(slot, per_page)
        row, col = divmod(within_page, config.num_cols)
        placements.append(
            Placement(
                page_index=page_index,
                row=row,
                col=col,
                item=item,
                x=x_origin + col * x_step,
                y=y_origin + row * y_step,
                width=geometry.card_width,
                height=geometry.card_height,
            )
        )
    return placements


def group_pages(placements: Sequence[Placement]) -> List[Page]:
    """
    Group placements into pages.

    A page only exists once a placement lands on it, so no page is empty.
    Placements must be in slot order, as returned by `paginate`.
    """
    grouped: List[List[Placement]] = []
    for placement in placements:
        if not grouped or grouped[-1][0].page_index != placement.page_index:
            grouped.append([])
        grouped[-1].append(placement)
    return [Page(index=group[0].page_index, placements=tuple(group)) for group in grouped]
