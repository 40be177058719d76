"""
Printer session for the MSD347 ticket printer.

A PrinterSession owns one transport for its lifetime. Plain commands
are fire-and-forget writes. Status queries are write-then-read round
trips and hold the session's exchange guard for the whole exchange so
concurrent callers never read each other's reply byte.
"""

import contextlib
import logging
import threading
from typing import ContextManager, Optional

from PIL import Image

from msd347.config.settings import PrinterSettings, get_settings
from msd347.errors import PrinterClosedError, ProtocolViolationError, TransportError
from msd347.hardware.base import Transport
from msd347.hardware.mock import MockTransport
from msd347.hardware.usb import UsbTransport
from msd347.printer import commands
from msd347.printer.commands import Justification, PrintMode
from msd347.printer.raster import rasterize
from msd347.printer.status import ErrorInfo, TicketInfo, check_error_status, decode_error_status, decode_ticket_status

logger = logging.getLogger(__name__)


class PrinterSession:
    """Synchronous driver for one connected printer.

    All methods block on the transport. Once ``close`` has been called
    every other operation raises PrinterClosedError.
    """

    def __init__(self, transport: Transport, settings: Optional[PrinterSettings] = None):
        """
        Args:
            transport: Open byte channel to the printer
            settings: Chunk size and locking behaviour
        """
        settings = settings or get_settings()
        self._transport = transport
        self._chunk_size = settings.chunk_size
        self._exclusive_io = settings.exclusive_io
        self._status_lock = threading.Lock()
        self._closed = False

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def transport(self) -> Transport:
        return self._transport

    def close(self) -> None:
        """Close the session and its transport.

        Calling close twice passes the second call through to the
        transport as well.
        """
        self._closed = True
        self._transport.close()
        logger.info("Printer session closed")

    def __enter__(self) -> "PrinterSession":
        return self

    def __exit__(self, *exc_info) -> None:
        if not self._closed:
            self.close()

    # Plain commands

    def initialize(self) -> None:
        """Reset the printer (ESC @)."""
        self._send("initialize", commands.initialize())

    def set_buttons_enabled(self, enabled: bool) -> None:
        self._send("set_buttons_enabled", commands.set_buttons_enabled(enabled))

    def set_justification(self, justification: Justification) -> None:
        self._send("set_justification", commands.set_justification(justification))

    def full_cut(self) -> None:
        self._send("full_cut", commands.full_cut())

    def print_image(self, image: Image.Image, mode: PrintMode = PrintMode.NORMAL) -> None:
        """
        Dither, pack and print an image with GS v 0.

        The image is validated against the device limits before
        anything is written. A transport failure mid-stream aborts the
        print and leaves the printer expecting more raster data; the
        caller should reinitialize or resend from the start.

        Args:
            image: Any Pillow image
            mode: Device-side scaling

        Raises:
            OutOfRangeError: image is larger than the device accepts
            TransportError: a chunk could not be written
        """
        self._ensure_open()
        mode = PrintMode(mode)
        bitmap = rasterize(image)

        data = commands.raster_image_header(mode, bitmap.width_bytes, bitmap.height) + bitmap.data
        logger.info(
            f"Printing image {bitmap.width_dots}x{bitmap.height} dots "
            f"({mode.name.lower()}, {len(data)} bytes)"
        )

        with self._io_guard():
            chunks = 0
            for i in range(0, len(data), self._chunk_size):
                self._write_all(data[i:i + self._chunk_size])
                chunks += 1
        logger.debug(f"Raster sent in {chunks} chunk(s) of <= {self._chunk_size} bytes")

    # Status queries

    def read_error_info(self) -> ErrorInfo:
        """Query error status (DLE EOT 3) and decode every flag."""
        value = self._exchange("error status", commands.query_error_status())
        return decode_error_status(value)

    def query_error(self) -> None:
        """
        Query error status and raise if the printer reports a fault.

        Raises:
            DeviceError: one or more error flags are set
            ProtocolViolationError: the printer sent no reply byte
        """
        value = self._exchange("error status", commands.query_error_status())
        error = check_error_status(value)
        if error is not None:
            logger.warning(f"Printer reported {error.info.summary} (0x{value:02x})")
            raise error

    def get_ticket_info(self) -> TicketInfo:
        """Query ticket status (DLE EOT 5)."""
        value = self._exchange("ticket info", commands.query_ticket_status())
        return decode_ticket_status(value)

    # Internals

    def _ensure_open(self) -> None:
        if self._closed:
            raise PrinterClosedError("Printer session is closed")

    def _io_guard(self) -> ContextManager:
        """Guard for plain commands; only locks when exclusive_io is on."""
        if self._exclusive_io:
            return self._status_lock
        return contextlib.nullcontext()

    def _send(self, name: str, data: bytes) -> None:
        self._ensure_open()
        with self._io_guard():
            self._write_all(data)
        logger.debug(f"Sent {name}: {data.hex(' ')}")

    def _write_all(self, data: bytes) -> None:
        written = self._transport.write(data)
        if written < len(data):
            raise TransportError(f"Short write: {written} of {len(data)} bytes")

    def _exchange(self, query: str, request: bytes) -> int:
        """Write a status request and read its one-byte reply."""
        self._ensure_open()
        with self._status_lock:
            self._write_all(request)
            reply = self._transport.read(1)
        if len(reply) < 1:
            raise ProtocolViolationError(query, expected=1, received=len(reply))
        logger.debug(f"{query} reply: 0x{reply[0]:02x}")
        return reply[0]


def connect(
    settings: Optional[PrinterSettings] = None,
    transport: Optional[Transport] = None,
) -> PrinterSession:
    """
    Open a session to the printer.

    Args:
        settings: Addressing and behaviour; defaults to get_settings()
        transport: Use this transport instead of opening one

    Returns:
        Open PrinterSession

    Raises:
        TransportError: printer not found or could not be claimed
    """
    settings = settings or get_settings()

    if transport is None:
        if settings.mock:
            logger.info("MSD347 printer in mock mode")
            transport = MockTransport()
        else:
            transport = UsbTransport.open(settings)

    logger.info("Printer session opened")
    return PrinterSession(transport, settings)
