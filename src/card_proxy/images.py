"""Input discovery: image files, their formats and repeat counts."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import List, Optional, Tuple

from PIL import Image, UnidentifiedImageError

from .errors import MalformedRepeatPrefix, UnsupportedFormat
from .paginator import ImageFormat, ImageItem

logger = logging.getLogger(__name__)


# Supported image extensions
IMAGE_EXTENSIONS = {
    ".jpg": ImageFormat.JPEG,
    ".jpeg": ImageFormat.JPEG,
    ".png": ImageFormat.PNG,
}

REPEAT_MARKER = "X"
REPEAT_SEPARATOR = " - "

REPEAT_NAMING_HINT = (
    "names of files you want to repeat should be: X<number> - <file name>; "
    "if you did not intend to make the file repeating, make sure it does not "
    "start with a capital X; a name without the ' - ' separator, such as "
    "X2.png, is printed once"
)


@dataclass
class SkippedFile:
    """A file that was left out of the batch, or only partly honoured."""

    name: str
    reason: str


def parse_repeat_prefix(name: str) -> Tuple[int, str]:
    """
    Split a `X<N> - <name>` file name into its repeat count and the rest.

    Names that do not start with `X` repeat once and are returned unchanged.

    Raises:
        MalformedRepeatPrefix: If the name starts with `X` but `<N>` is not
            a non-negative integer followed by ` - `
    """
    if not name.startswith(REPEAT_MARKER):
        return 1, name

    head, separator, rest = name.partition(REPEAT_SEPARATOR)
    digits = head[len(REPEAT_MARKER):]
    if not separator or not (digits.isascii() and digits.isdigit()):
        raise MalformedRepeatPrefix(name, digits)

    return int(digits), rest


def repeat_count_for(name: str) -> Tuple[int, Optional[MalformedRepeatPrefix]]:
    """
    Repeat count for a file name, falling back to 1 if the prefix is malformed.

    The fallback is logged as an error and the parsing error is returned
    alongside the count, so callers can report it.
    """
    try:
        count, _ = parse_repeat_prefix(name)
    except MalformedRepeatPrefix as e:
        logger.error(
            "detected that the file '%s' should be repeated, but was unable "
            "to parse the multiplier (%s); %s",
            name,
            e,
            REPEAT_NAMING_HINT,
        )
        return 1, e
    return count, None


def detect_format(name: str) -> ImageFormat:
    """
    Image format from the file extension.

    Raises:
        UnsupportedFormat: If the extension is not JPEG or PNG
    """
    suffix = Path(name).suffix
    try:
        return IMAGE_EXTENSIONS[suffix.lower()]
    except KeyError:
        raise UnsupportedFormat(name, suffix) from None


def sniff_format(name: str, data: bytes) -> ImageFormat:
    """
    Image format from the file content.

    Raises:
        UnsupportedFormat: If Pillow cannot read the content as JPEG or PNG
    """
    try:
        with Image.open(BytesIO(data)) as img:
            pil_format = img.format
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError):
        raise UnsupportedFormat(name, "unreadable content") from None

    try:
        return ImageFormat(pil_format)
    except ValueError:
        raise UnsupportedFormat(name, str(pil_format)) from None


def list_image_files(input_dir: Path) -> List[Path]:
    """
    List all files directly in the input directory, sorted by name.

    Raises:
        FileNotFoundError: If `input_dir` is not a directory
    """
    if not input_dir.is_dir():
        raise FileNotFoundError(f"Input directory not found: {input_dir}")
    return sorted(
        (path for path in input_dir.iterdir() if path.is_file()),
        key=lambda path: path.name,
    )


def read_image_items(
    input_dir: Path,
    max_workers: Optional[int] = None,
) -> Tuple[List[ImageItem], List[SkippedFile]]:
    """
    Read every supported image in `input_dir` into an ImageItem.

    - Files are taken in name order.
    - Files that are not JPEG or PNG, by extension or by content, are
      skipped with a warning.
    - A malformed `X<N> - ` prefix falls back to a single copy.
    - A repeat count of 0 leaves the file out.

    File contents are read in parallel; the returned list is complete and in
    name order.

    Args:
        input_dir: Directory holding the card images
        max_workers: Thread pool size for reading files

    Returns:
        Tuple of (items, skipped files)
    """
    skipped: List[SkippedFile] = []
    selected: List[Tuple[Path, int]] = []

    for path in list_image_files(input_dir):
        try:
            detect_format(path.name)
        except UnsupportedFormat as e:
            logger.warning("'%s' is not a JPEG or PNG file, I will ignore it...", path.name)
            skipped.append(SkippedFile(name=path.name, reason=str(e)))
            continue

        repeat_count, prefix_error = repeat_count_for(path.name)
        if prefix_error is not None:
            skipped.append(SkippedFile(name=path.name, reason=f"{prefix_error}, printed once"))

        if repeat_count == 0:
            logger.info("'%s' has a repeat count of 0, I will leave it out", path.name)
            skipped.append(SkippedFile(name=path.name, reason="repeat count is 0"))
            continue

        selected.append((path, repeat_count))

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        contents = list(pool.map(lambda entry: entry[0].read_bytes(), selected))

    items: List[ImageItem] = []
    for (path, repeat_count), data in zip(selected, contents):
        try:
            image_format = sniff_format(path.name, data)
        except UnsupportedFormat as e:
            logger.warning("'%s' does not hold a readable JPEG or PNG image, I will skip it...", path.name)
            skipped.append(SkippedFile(name=path.name, reason=str(e)))
            continue

        items.append(
            ImageItem(
                data=data,
                format=image_format,
                repeat_count=repeat_count,
                name=path.name,
            )
        )

    logger.debug("Read %d images from %s", len(items), input_dir)
    return items, skipped
