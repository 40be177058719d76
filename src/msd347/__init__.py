"""MSD347 thermal ticket printer driver."""

from msd347.errors import (
    DeviceError,
    OutOfRangeError,
    PrinterClosedError,
    PrinterError,
    ProtocolViolationError,
    TransportError,
)
from msd347.printer import (
    ErrorInfo,
    Justification,
    PrinterSession,
    PrintMode,
    RasterBitmap,
    TicketInfo,
    connect,
    rasterize,
)

__version__ = "0.1.0"

__all__ = [
    "connect",
    "PrinterSession",
    "PrintMode",
    "Justification",
    "RasterBitmap",
    "rasterize",
    "ErrorInfo",
    "TicketInfo",
    "PrinterError",
    "TransportError",
    "OutOfRangeError",
    "ProtocolViolationError",
    "DeviceError",
    "PrinterClosedError",
]
