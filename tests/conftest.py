import logging
import sys
from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image

# Add src to sys.path so we can import card_proxy
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from card_proxy.paginator import ImageFormat, ImageItem  # noqa: E402


def _image_bytes(fmt: str, size=(59, 86), color="white") -> bytes:
    buffer = BytesIO()
    Image.new("RGB", size, color=color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def jpeg_bytes():
    """Bytes of a small JPEG card scan."""
    return _image_bytes("JPEG")


@pytest.fixture
def png_bytes():
    """Bytes of a small PNG card scan."""
    return _image_bytes("PNG", size=(60, 80), color="red")


@pytest.fixture
def item_factory(jpeg_bytes):
    """Factory for ImageItems sharing one JPEG payload."""
    def _create(name: str = "card.jpg", repeat_count: int = 1):
        return ImageItem(
            data=jpeg_bytes,
            format=ImageFormat.JPEG,
            repeat_count=repeat_count,
            name=name,
        )
    return _create


@pytest.fixture
def image_dir(tmp_path: Path, jpeg_bytes, png_bytes):
    """Input folder with two JPEGs, one repeated PNG and a text file."""
    folder = tmp_path / "img"
    folder.mkdir()
    (folder / "a.jpg").write_bytes(jpeg_bytes)
    (folder / "b.jpg").write_bytes(jpeg_bytes)
    (folder / "X3 - c.png").write_bytes(png_bytes)
    (folder / "notes.txt").write_text("not a card")
    return folder


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo handlers installed by the CLI so caplog keeps working."""
    yield
    logger = logging.getLogger("card_proxy")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
