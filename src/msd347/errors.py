"""
Exception hierarchy for the MSD347 printer driver.

Every failure surfaced by the driver derives from PrinterError so
callers can catch the whole family at once, or inspect the concrete
type to decide between reinitializing the device, asking an operator
to intervene, or abandoning the job.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from msd347.printer.status import ErrorInfo


class PrinterError(Exception):
    """Base class for all printer driver errors."""


class TransportError(PrinterError):
    """I/O failure on the underlying byte channel."""


class OutOfRangeError(PrinterError):
    """Image exceeds the raster limits of the device."""

    def __init__(self, dimension: str, value: int, limit: int, unit: str):
        self.dimension = dimension
        self.value = value
        self.limit = limit
        self.unit = unit
        super().__init__(
            f"{dimension} {value} {unit} exceeds max {limit} {unit} "
            f"by {self.excess}"
        )

    @property
    def excess(self) -> int:
        return self.value - self.limit


class ProtocolViolationError(PrinterError):
    """Status exchange returned fewer bytes than the protocol requires."""

    def __init__(self, query: str, expected: int, received: int):
        self.query = query
        self.expected = expected
        self.received = received
        super().__init__(
            f"{query}: expected to read {expected} byte(s), got {received}"
        )


class DeviceError(PrinterError):
    """Printer reported an error condition in its status byte.

    The decoded flags are available as ``info``.
    """

    def __init__(self, info: "ErrorInfo"):
        self.info = info
        super().__init__(info.summary)


class PrinterClosedError(PrinterError):
    """Operation attempted on a session that has been closed."""
