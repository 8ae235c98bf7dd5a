#!/usr/bin/env python3
"""
Functional tests for the image format size models.

Verifies:
1. Per-format base size formulas (Baseline, JP2, BMP)
2. Pyramid overhead for Baseline and BMP, none for JP2
3. get_size() idempotence
4. Format registry lookup, aliases and errors
"""

import math
import sys
from pathlib import Path

import pytest

# Add repo root to path for imports
repo_root = Path(__file__).resolve().parent.parent.parent
sys.path.insert(0, str(repo_root))

from formats import available_formats, create_image, resolve_format
from formats.base import ImageAsset
from formats.baseline import BaselineImage
from formats.bmp import BMPImage
from formats.jp2 import JP2Image
from utilities import Print, round_half_up


@pytest.mark.parametrize("width,height", [(0, 0), (1, 1), (3, 7), (640, 480), (1920, 1080)])
def test_bmp_base_size_is_pixel_count(width, height):
    image = BMPImage(width, height, identifier=1)
    assert image.base_size(width, height) == width * height


@pytest.mark.parametrize("width,height", [(0, 0), (1, 1), (3, 7), (5, 5), (640, 480)])
def test_baseline_base_size_is_fifth_of_pixels(width, height):
    image = BaselineImage(width, height, identifier=1)
    assert image.base_size(width, height) == round_half_up(width * height * 0.2)


def test_baseline_rounds_to_nearest():
    image = BaselineImage(3, 1, identifier=1)
    assert image.base_size(3, 1) == 1
    assert image.base_size(2, 1) == 0


def test_bmp_small_image_has_no_pyramid():
    Print("HEADER", "BMP 100x100")
    image = BMPImage(100, 100, identifier=1)
    assert image.get_size() == 10000
    assert image.pyramid_total == 0


def test_baseline_1000_square():
    Print("HEADER", "Baseline 1000x1000")
    image = BaselineImage(1000, 1000, identifier=1)

    # 200000 + 50000 (500x500) + 12500 (250x250); 125x125 is not above 128
    assert image.get_size() == 262500
    assert image.pyramid_total == 62500


def test_jp2_has_no_pyramid():
    image = JP2Image(1000, 1000, identifier=1)
    expected = round_half_up((1000 * 1000 * 0.4) / math.log(math.log(1000 * 1000 + 16)))

    assert image.get_size() == expected
    assert image.get_size() == 152335
    assert image.get_size() == image.base_size(1000, 1000)


def test_jp2_zero_pixels_is_zero():
    image = JP2Image(0, 0, identifier=1)
    assert image.get_size() == 0


def test_jp2_degenerate_logarithm_gives_zero():
    # With no offset, ln(ln(1)) is undefined and ln(ln(2)) is negative
    image = JP2Image(1, 1, identifier=1, config={'height_factor': 0})
    assert image.base_size(0, 0) == 0
    assert image.base_size(1, 2) == 0


def test_bmp_600_square_pyramid():
    image = BMPImage(600, 600, identifier=1)
    # 360000 + 300x300 + 150x150; 75x75 stops
    assert image.get_size() == 360000 + 90000 + 22500


def test_pyramid_stops_at_exact_min_size():
    # 256 / 2 == 128 is not strictly above the floor
    assert BMPImage(256, 256, identifier=1).get_size() == 65536
    assert BMPImage(258, 258, identifier=2).get_size() == 258 * 258 + 129 * 129


def test_odd_dimensions_halve_by_truncation():
    # 257 -> 128 stops; 301 -> 150 kept -> 75 stops
    assert BMPImage(257, 257, identifier=1).get_size() == 66049
    assert BMPImage(301, 301, identifier=2).get_size() == 113101


def test_image_asset_requires_base_size():
    with pytest.raises(TypeError):
        ImageAsset(10, 10, identifier=1)


def test_get_size_walks_pyramid_once():
    calls = []

    class CountingBMP(BMPImage):
        def base_size(self, width, height):
            calls.append((width, height))
            return super().base_size(width, height)

    image = CountingBMP(1000, 1000, identifier=1)
    assert image.get_size() == 1000000 + 250000 + 62500
    assert sorted(calls) == [(250, 250), (500, 500), (1000, 1000)]


def test_pyramid_needs_both_dimensions_above_floor():
    image = BMPImage(4000, 200, identifier=1)
    assert image.get_size() == 4000 * 200


def test_get_size_is_idempotent():
    for image in (BaselineImage(3000, 2000, 1), BMPImage(1024, 768, 2), JP2Image(800, 600, 3)):
        first = image.get_size()
        second = image.get_size()
        Print("INFO", f"{image!r}: {first} / {second}")
        assert first == second


def test_dimensions_are_read_only():
    image = BMPImage(10, 20, identifier=1)
    with pytest.raises(AttributeError):
        image.width = 50
    assert (image.width, image.height) == (10, 20)


def test_negative_dimensions_rejected():
    with pytest.raises(ValueError):
        BMPImage(-1, 10, identifier=1)


def test_scale_factor_from_config():
    image = BaselineImage(100, 100, identifier=1, config={'scale_factor': 0.5})
    assert image.get_size() == 5000


def test_registry_knows_all_formats():
    assert available_formats() == ['baseline', 'bmp', 'jp2']


@pytest.mark.parametrize("tag,expected", [
    ("baseline", "baseline"),
    ("JPG", "baseline"),
    ("j", "baseline"),
    ("jpeg", "baseline"),
    ("jp2", "jp2"),
    ("JPEG2000", "jp2"),
    ("bmp", "bmp"),
])
def test_resolve_format_aliases(tag, expected):
    assert resolve_format(tag) == expected


def test_create_image_dispatches_on_tag():
    image = create_image("jpeg2000", 640, 480, identifier=7)
    assert isinstance(image, JP2Image)
    assert image.identifier == 7
    assert image.grouped is False


def test_unknown_format_raises():
    with pytest.raises(ValueError, match="Unknown image format"):
        create_image("png", 10, 10, identifier=1)
