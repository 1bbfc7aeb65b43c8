"""Tests for the high-level build helper."""

import pytest
from pypdf import PdfReader

from card_proxy.geometry import GridOptions, PageSize
from card_proxy.layout import build_cards_pdf


def test_build_cards_pdf(image_dir, tmp_path):
    output = tmp_path / "nested" / "out.pdf"

    num_pages = build_cards_pdf(output, image_dir, options=GridOptions(num_cols=1, num_rows=1))

    # a.jpg, b.jpg and three copies of c.png
    assert num_pages == 5
    assert len(PdfReader(str(output)).pages) == 5


def test_build_cards_pdf_turns_page_to_landscape(image_dir, tmp_path):
    output = tmp_path / "out.pdf"

    build_cards_pdf(output, image_dir, page_size=PageSize(200, 300), cut_guides=True)

    box = PdfReader(str(output)).pages[0].mediabox
    assert (float(box.width), float(box.height)) == (300, 200)


def test_build_cards_pdf_without_images(tmp_path):
    with pytest.raises(RuntimeError, match="No card images"):
        build_cards_pdf(tmp_path / "out.pdf", tmp_path)
