from __future__ import annotations

import pytest
from PIL import Image

from msd347.errors import OutOfRangeError
from msd347.printer.raster import MAX_HEIGHT_DOTS, MAX_WIDTH_BYTES, check_limits, rasterize


def test_black_image_packs_to_all_ones() -> None:
    bitmap = rasterize(Image.new("RGB", (64, 10), (0, 0, 0)))
    assert bitmap.width_bytes == 8
    assert bitmap.height == 10
    assert bitmap.data == b"\xff" * 80


def test_white_image_packs_to_all_zeros() -> None:
    bitmap = rasterize(Image.new("L", (16, 3), 255))
    assert bitmap.data == b"\x00" * 6


def test_bits_are_msb_first_row_major() -> None:
    img = Image.new("L", (16, 2), 255)
    img.putpixel((0, 0), 0)   # byte 0, mask 0x80
    img.putpixel((9, 0), 0)   # byte 1, mask 0x40
    img.putpixel((7, 1), 0)   # byte 2, mask 0x01
    bitmap = rasterize(img)
    assert bitmap.data == bytes([0x80, 0x40, 0x01, 0x00])


def test_trailing_columns_are_dropped() -> None:
    bitmap = rasterize(Image.new("1", (13, 4), 0))
    assert bitmap.width_bytes == 1
    assert bitmap.width_dots == 8
    assert bitmap.data == b"\xff" * 4


def test_transparent_pixels_print_as_paper() -> None:
    bitmap = rasterize(Image.new("RGBA", (8, 2), (0, 0, 0, 0)))
    assert bitmap.data == b"\x00\x00"


def test_gray_is_dithered_not_thresholded() -> None:
    bitmap = rasterize(Image.new("L", (64, 64), 128))
    ones = sum(bin(b).count("1") for b in bitmap.data)
    total = 64 * 64
    # Roughly half the dots inked for mid-gray
    assert 0.35 * total < ones < 0.65 * total


def test_maximum_size_is_accepted() -> None:
    check_limits(MAX_WIDTH_BYTES * 8 + 7, MAX_HEIGHT_DOTS)


def test_width_limit() -> None:
    with pytest.raises(OutOfRangeError) as exc_info:
        check_limits((MAX_WIDTH_BYTES + 2) * 8, 10)
    err = exc_info.value
    assert err.dimension == "width"
    assert err.value == 130
    assert err.excess == 2
    assert "width" in str(err)


def test_height_limit() -> None:
    with pytest.raises(OutOfRangeError) as exc_info:
        rasterize(Image.new("L", (8, MAX_HEIGHT_DOTS + 1), 255))
    assert exc_info.value.dimension == "height"
    assert exc_info.value.excess == 1
