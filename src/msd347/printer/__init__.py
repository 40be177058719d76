"""Protocol core for the MSD347 ticket printer."""

from msd347.printer.commands import Justification, PrintMode
from msd347.printer.raster import RasterBitmap, rasterize
from msd347.printer.session import PrinterSession, connect
from msd347.printer.status import ErrorInfo, TicketInfo

__all__ = [
    "Justification",
    "PrintMode",
    "RasterBitmap",
    "rasterize",
    "ErrorInfo",
    "TicketInfo",
    "PrinterSession",
    "connect",
]
