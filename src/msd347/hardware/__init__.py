"""Byte-stream transports for the MSD347 printer."""

from .base import Transport
from .mock import MockTransport
from .usb import UsbTransport

__all__ = [
    "Transport",
    "MockTransport",
    "UsbTransport",
]
