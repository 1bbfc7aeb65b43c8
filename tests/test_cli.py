"""Tests for the command line interface."""

import logging

import pytest
from pypdf import PdfReader

from card_proxy.__main__ import build_parser, main, parse_args, parse_number
from card_proxy.geometry import GridOptions


class TestParseArgs:

    def test_defaults(self):
        args, options = parse_args([])

        assert options == GridOptions()
        assert args.input_dir == "img"
        assert args.output == "out.pdf"
        assert args.error_log == "error.log"
        assert args.cut_guides is False

    def test_grid_options(self):
        _, options = parse_args([
            "--num-cols=3",
            "--num-rows=1",
            "--horizontal-gap=0",
            "--vertical-gap=2.5",
            "--min-horizontal-margin=10",
            "--min-vertical-margin=4",
        ])

        assert options == GridOptions(
            num_cols=3,
            num_rows=1,
            horizontal_gap=0,
            vertical_gap=2.5,
            min_horizontal_margin=10,
            min_vertical_margin=4,
        )

    def test_unknown_flag_is_skipped(self, caplog):
        with caplog.at_level(logging.WARNING, logger="card_proxy"):
            _, options = parse_args(["--page-size=5", "--num-cols=2"])

        assert options.num_cols == 2
        assert "unrecognized command line argument '--page-size=5'" in caplog.text

    @pytest.mark.parametrize("arg", ["--num-cols=abc", "--num-rows=2.5", "--vertical-gap=nan", "--horizontal-gap"])
    def test_malformed_value_keeps_default(self, arg, caplog):
        with caplog.at_level(logging.WARNING, logger="card_proxy"):
            _, options = parse_args([arg])

        assert options == GridOptions()
        assert "invalid command line argument" in caplog.text

    def test_help_lists_grid_options(self):
        help_text = build_parser().format_help()
        for flag in ("--num-cols", "--num-rows", "--horizontal-gap", "--vertical-gap",
                     "--min-horizontal-margin", "--min-vertical-margin"):
            assert flag in help_text


class TestParseNumber:

    def test_integer(self):
        assert parse_number("4", integer=True) == 4

    def test_float(self):
        assert parse_number("6.35", integer=False) == pytest.approx(6.35)

    @pytest.mark.parametrize("raw", ["", "1.5", "four"])
    def test_bad_integer(self, raw):
        with pytest.raises(ValueError):
            parse_number(raw, integer=True)

    @pytest.mark.parametrize("raw", ["inf", "", "3mm"])
    def test_bad_length(self, raw):
        with pytest.raises(ValueError):
            parse_number(raw, integer=False)


class TestMain:

    def test_builds_pdf(self, image_dir, tmp_path):
        output = tmp_path / "build" / "cards.pdf"

        exit_code = main([
            f"--input-dir={image_dir}",
            f"--output={output}",
            f"--error-log={tmp_path / 'error.log'}",
            "--num-cols=2",
            "--num-rows=2",
            "--bogus=1",
        ])

        # 1 + 1 + 3 cards on a 2x2 grid
        assert exit_code == 0
        assert len(PdfReader(str(output)).pages) == 2
        assert not (tmp_path / "error.log").exists()

    def test_malformed_prefix_goes_to_error_log(self, tmp_path, jpeg_bytes):
        image_dir = tmp_path / "img"
        image_dir.mkdir()
        (image_dir / "Xtra - card.jpg").write_bytes(jpeg_bytes)
        error_log = tmp_path / "error.log"

        exit_code = main([
            f"--input-dir={image_dir}",
            f"--output={tmp_path / 'out.pdf'}",
            f"--error-log={error_log}",
        ])

        assert exit_code == 0
        logging.getLogger("card_proxy").handlers[-1].flush()
        assert "unable to parse the multiplier" in error_log.read_text(encoding="utf-8")

    def test_unreadable_image_does_not_stop_the_batch(self, tmp_path, jpeg_bytes):
        image_dir = tmp_path / "img"
        image_dir.mkdir()
        (image_dir / "good.jpg").write_bytes(jpeg_bytes)
        (image_dir / "broken.jpg").write_bytes(b"this is not an image")
        output = tmp_path / "out.pdf"

        exit_code = main([
            f"--input-dir={image_dir}",
            f"--output={output}",
            f"--error-log={tmp_path / 'error.log'}",
        ])

        assert exit_code == 0
        assert len(PdfReader(str(output)).pages) == 1

    def test_impossible_grid(self, image_dir, tmp_path):
        exit_code = main([
            f"--input-dir={image_dir}",
            f"--output={tmp_path / 'out.pdf'}",
            f"--error-log={tmp_path / 'error.log'}",
            "--min-horizontal-margin=1000",
        ])

        assert exit_code == 2
        assert not (tmp_path / "out.pdf").exists()

    def test_missing_input_dir(self, tmp_path):
        exit_code = main([
            f"--input-dir={tmp_path / 'missing'}",
            f"--output={tmp_path / 'out.pdf'}",
            f"--error-log={tmp_path / 'error.log'}",
        ])

        assert exit_code == 1

    def test_no_images(self, tmp_path):
        empty = tmp_path / "img"
        empty.mkdir()

        exit_code = main([
            f"--input-dir={empty}",
            f"--output={tmp_path / 'out.pdf'}",
            f"--error-log={tmp_path / 'error.log'}",
        ])

        assert exit_code == 1
