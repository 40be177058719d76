"""
Image rasterization for the GS v 0 raster command.

Converts an arbitrary Pillow image into the packed 1-bit bitmap the
printer expects: Floyd-Steinberg dithering to black/white, then rows
packed MSB-first, eight dots per byte.

Device limits: 128 bytes (1024 dots) wide, 4095 dots tall. Pixel
columns past the last full group of 8 are dropped.
"""

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from PIL import Image

from msd347.errors import OutOfRangeError

logger = logging.getLogger(__name__)

MAX_WIDTH_BYTES = 128
MAX_HEIGHT_DOTS = 4095


@dataclass(frozen=True)
class RasterBitmap:
    """Packed monochrome bitmap, row-major, one bit per dot."""

    width_bytes: int
    height: int
    data: bytes

    @property
    def width_dots(self) -> int:
        return self.width_bytes * 8


def check_limits(width: int, height: int) -> None:
    """
    Validate pixel dimensions against the device raster limits.

    Raises:
        OutOfRangeError: width or height exceeds what GS v 0 accepts
    """
    width_bytes = width // 8
    if width_bytes > MAX_WIDTH_BYTES:
        raise OutOfRangeError("width", width_bytes, MAX_WIDTH_BYTES, "bytes")
    if height > MAX_HEIGHT_DOTS:
        raise OutOfRangeError("height", height, MAX_HEIGHT_DOTS, "dots")


def dither(image: Image.Image) -> Image.Image:
    """Reduce an image to 1-bit with Floyd-Steinberg error diffusion.

    Transparent areas are composited onto white first so they come out
    as bare paper.
    """
    if image.mode in ("RGBA", "LA", "PA") or (image.mode == "P" and "transparency" in image.info):
        rgba = image.convert("RGBA")
        background = Image.new("RGBA", rgba.size, (255, 255, 255, 255))
        image = Image.alpha_composite(background, rgba)

    # Grayscale first, then 1-bit
    return image.convert("L").convert("1", dither=Image.Dither.FLOYDSTEINBERG)


def pack_bits(ink: NDArray[np.bool_]) -> bytes:
    """Pack a (height, width) ink mask into MSB-first bytes.

    ``width`` must be a multiple of 8.
    """
    return np.packbits(ink, axis=1, bitorder="big").tobytes()


def rasterize(image: Image.Image) -> RasterBitmap:
    """
    Convert an image to a RasterBitmap.

    Args:
        image: Any Pillow image

    Returns:
        Packed bitmap ready for the raster image command

    Raises:
        OutOfRangeError: image exceeds device limits
    """
    width, height = image.size
    check_limits(width, height)

    width_bytes = width // 8
    mono = dither(image)

    # In mode "1" black is 0; black dots are ink
    pixels = np.asarray(mono, dtype=np.uint8)
    ink = pixels[:, :width_bytes * 8] == 0
    data = pack_bits(ink)

    if width % 8:
        logger.debug(f"Dropped {width % 8} trailing pixel column(s)")

    return RasterBitmap(width_bytes=width_bytes, height=height, data=data)
