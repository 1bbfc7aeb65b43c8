"""CLI entry point for card_proxy."""
from __future__ import annotations

import argparse
import logging
import math
import sys
from dataclasses import fields
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from rich import box
from rich.table import Table

from card_proxy.errors import ConfigurationError
from card_proxy.geometry import GridOptions
from card_proxy.layout import build_cards_pdf, console
from card_proxy.log import setup_logging

logger = logging.getLogger("card_proxy.cli")

DEFAULT_INPUT_DIR = "img"
DEFAULT_OUTPUT = "out.pdf"
DEFAULT_ERROR_LOG = "error.log"

# Grid options that take whole numbers; the other grid options are millimetres
INTEGER_OPTIONS = {"num_cols", "num_rows"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="card-proxy",
        description="Card Proxy – Arrange card images in a grid on printable PDF pages",
        allow_abbrev=False,
    )
    parser.add_argument(
        "--input-dir",
        type=str,
        default=DEFAULT_INPUT_DIR,
        help=f"Folder with the JPEG/PNG card images (default: {DEFAULT_INPUT_DIR}).",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=DEFAULT_OUTPUT,
        help=f"Path to output file (default: {DEFAULT_OUTPUT}).",
    )
    parser.add_argument(
        "--error-log",
        type=str,
        default=DEFAULT_ERROR_LOG,
        help=f"File that receives parsing errors (default: {DEFAULT_ERROR_LOG}).",
    )
    parser.add_argument(
        "--cut-guides",
        action="store_true",
        help="Draw cut marks along the page edges.",
    )

    defaults = GridOptions()
    grid = parser.add_argument_group("grid options")
    for field in fields(GridOptions):
        unit = "" if field.name in INTEGER_OPTIONS else " in mm"
        grid.add_argument(
            "--" + field.name.replace("_", "-"),
            dest=field.name,
            nargs="?",
            const="",
            default=None,
            metavar="N",
            help=f"{field.name.replace('_', ' ').capitalize()}{unit} "
            f"(default: {getattr(defaults, field.name)}).",
        )
    return parser


def parse_number(raw: str, integer: bool) -> Union[int, float]:
    """
    Parse a numeric option value.

    Raises:
        ValueError: If `raw` is not a finite number (or not whole, for `integer`)
    """
    if integer:
        return int(raw)
    value = float(raw)
    if not math.isfinite(value):
        raise ValueError(f"not a finite number: {raw!r}")
    return value


def parse_grid_options(args: argparse.Namespace) -> GridOptions:
    """Build GridOptions from parsed arguments, skipping malformed values."""
    overrides: Dict[str, Union[int, float]] = {}
    for field in fields(GridOptions):
        raw = getattr(args, field.name, None)
        if raw is None:
            continue
        flag = "--" + field.name.replace("_", "-")
        try:
            overrides[field.name] = parse_number(raw, field.name in INTEGER_OPTIONS)
        except ValueError:
            logger.warning("invalid command line argument '%s=%s', I will skip it", flag, raw)
    return GridOptions(**overrides)


def parse_args(argv: Optional[Sequence[str]] = None) -> tuple[argparse.Namespace, GridOptions]:
    parser = build_parser()
    args, unknown = parser.parse_known_args(argv)
    for arg in unknown:
        logger.warning("unrecognized command line argument '%s', I will skip it", arg)
    return args, parse_grid_options(args)


def print_options_table(args: argparse.Namespace, options: GridOptions) -> None:
    table = Table(box=box.ROUNDED, border_style="cyan")
    table.add_column("Option", style="cyan")
    table.add_column("Value", style="white")
    for field in fields(GridOptions):
        unit = "" if field.name in INTEGER_OPTIONS else " mm"
        table.add_row(field.name, f"{getattr(options, field.name)}{unit}")
    table.add_row("input_dir", str(args.input_dir))
    table.add_row("output", str(args.output))
    table.add_row("cut_guides", "yes" if args.cut_guides else "no")
    console.print(table)


def main(argv: Optional[List[str]] = None) -> int:
    setup_logging(console)
    args, options = parse_args(argv)
    setup_logging(console, error_log=Path(args.error_log))

    print_options_table(args, options)

    try:
        build_cards_pdf(
            output_path=Path(args.output).resolve(),
            input_dir=Path(args.input_dir).resolve(),
            options=options,
            cut_guides=args.cut_guides,
        )
    except ConfigurationError as e:
        console.print(f"[red]✘[/red] Invalid grid configuration: {e}")
        return 2
    except (FileNotFoundError, RuntimeError) as e:
        console.print(f"[red]✘[/red] {e}")
        return 1

    console.print(f"generated proxy file successfully! I wrote it to '{args.output}'")
    return 0


if __name__ == "__main__":
    sys.exit(main())
