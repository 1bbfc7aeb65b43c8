"""
Package initialization for card_proxy.

This package arranges card images (JPEG/PNG scans) in a regular grid on
landscape pages and writes them to a single printable PDF.

Modules:
    - geometry: Card size and margins from page and grid settings
    - paginator: Repeat expansion and page/row/column placement
    - images: Input folder discovery and `X<N> - <name>` repeat prefixes
    - pdf_generator: PDF generation for card sheets
    - layout: High-level API orchestrating the above modules
"""

from .errors import (
    CardProxyError,
    ConfigurationError,
    InvalidGeometry,
    MalformedRepeatPrefix,
    UnsupportedFormat,
)
from .geometry import (
    # Data classes
    CardGeometry,
    GridConfig,
    GridOptions,
    PageSize,
    ReferenceCardSize,
    # Defaults
    DEFAULT_PAGE_SIZE,
    DEFAULT_REFERENCE_CARD_SIZE,
    # Core functions
    compute_geometry,
    mm_to_px,
)
from .paginator import (
    ImageFormat,
    ImageItem,
    Page,
    Placement,
    group_pages,
    page_count,
    paginate,
)
from .images import parse_repeat_prefix, read_image_items
from .pdf_generator import render_cards_pdf, write_cards_pdf
from .layout import build_cards_pdf

__all__ = [
    "CardProxyError",
    "ConfigurationError",
    "InvalidGeometry",
    "MalformedRepeatPrefix",
    "UnsupportedFormat",
    "CardGeometry",
    "GridConfig",
    "GridOptions",
    "PageSize",
    "ReferenceCardSize",
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_REFERENCE_CARD_SIZE",
    "compute_geometry",
    "mm_to_px",
    "ImageFormat",
    "ImageItem",
    "Page",
    "Placement",
    "group_pages",
    "page_count",
    "paginate",
    "parse_repeat_prefix",
    "read_image_items",
    "render_cards_pdf",
    "write_cards_pdf",
    "build_cards_pdf",
]
