"""
ESC/POS-style command encoding for the MSD347 ticket printer.

Each function returns the exact byte sequence for one printer
operation. Nothing here touches a transport or checks device state;
the session writes the bytes and surfaces any I/O failure.

Wire layouts:
    Initialize            ESC @
    Buttons enabled       ESC c 5 n        (n=0 enabled, n=1 disabled)
    Justification         ESC a j          (0=left, 1=center, 2=right)
    Full cut              ESC i
    Raster image          GS v 0 m xL xH yL yH d1...dk
    Error status query    DLE EOT 3        (1 byte reply)
    Ticket status query   DLE EOT 5        (1 byte reply)
"""

from enum import IntEnum
from typing import Tuple

__all__ = [
    "ESC",
    "GS",
    "DLE",
    "EOT",
    "RASTER_HEADER_SIZE",
    "PrintMode",
    "Justification",
    "initialize",
    "set_buttons_enabled",
    "set_justification",
    "full_cut",
    "raster_image_header",
    "decode_raster_header",
    "query_error_status",
    "query_ticket_status",
]

# Control bytes
ESC = 0x1B
GS = 0x1D
DLE = 0x10
EOT = 0x04

RASTER_HEADER_SIZE = 8
_RASTER_SELECTOR = bytes([GS, ord("v"), ord("0")])


class PrintMode(IntEnum):
    """Device-side scaling applied to a raster image."""

    NORMAL = 0
    DOUBLE_HEIGHT = 1
    DOUBLE_WIDTH = 2
    QUADRUPLE = 3


class Justification(IntEnum):
    """Horizontal placement of subsequent text and images."""

    LEFT = 0
    CENTER = 1
    RIGHT = 2


def initialize() -> bytes:
    """ESC @ - reset the printer to its power-on mode."""
    return bytes([ESC, ord("@")])


def set_buttons_enabled(enabled: bool) -> bytes:
    """ESC c 5 n - enable or disable the panel buttons."""
    n = 0 if enabled else 1
    return bytes([ESC, ord("c"), ord("5"), n])


def set_justification(justification: Justification) -> bytes:
    """ESC a n - select justification."""
    return bytes([ESC, ord("a"), Justification(justification).value])


def full_cut() -> bytes:
    """ESC i - full cut."""
    return bytes([ESC, ord("i")])


def raster_image_header(mode: PrintMode, width_bytes: int, height: int) -> bytes:
    """
    Build the 8-byte GS v 0 header that precedes a raster payload.

    Args:
        mode: Print mode byte
        width_bytes: Image width in bytes (8 dots per byte)
        height: Image height in dots

    Returns:
        Header bytes; width and height are little-endian 16-bit
    """
    return _RASTER_SELECTOR + bytes([
        PrintMode(mode).value,
        width_bytes & 0xFF,
        (width_bytes >> 8) & 0xFF,
        height & 0xFF,
        (height >> 8) & 0xFF,
    ])


def decode_raster_header(data: bytes) -> Tuple[PrintMode, int, int]:
    """
    Parse a GS v 0 header back into (mode, width_bytes, height).

    Raises:
        ValueError: data is too short or is not a raster image command
    """
    if len(data) < RASTER_HEADER_SIZE:
        raise ValueError(f"raster header needs {RASTER_HEADER_SIZE} bytes, got {len(data)}")
    if bytes(data[:3]) != _RASTER_SELECTOR:
        raise ValueError(f"not a raster image command: {bytes(data[:3]).hex(' ')}")

    mode = PrintMode(data[3])
    width_bytes = data[4] | (data[5] << 8)
    height = data[6] | (data[7] << 8)
    return mode, width_bytes, height


def query_error_status() -> bytes:
    """DLE EOT 3 - transmit error status."""
    return bytes([DLE, EOT, 3])


def query_ticket_status() -> bytes:
    """DLE EOT 5 - transmit ticket status."""
    return bytes([DLE, EOT, 5])
