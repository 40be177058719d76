"""PyUSB transport for the MSD347 ticket printer.

Talks to the printer over a pair of bulk endpoints. Device discovery
and interface claiming happen in ``UsbTransport.open``; after that the
transport is a plain byte pipe.
"""

import logging
from typing import Optional

import usb.core
import usb.util

from msd347.config.settings import PrinterSettings, get_settings
from msd347.errors import TransportError
from msd347.hardware.base import Transport

logger = logging.getLogger(__name__)


class UsbTransport(Transport):
    """Bulk-endpoint transport backed by pyusb."""

    def __init__(
        self,
        device: usb.core.Device,
        settings: PrinterSettings,
        kernel_driver_detached: bool = False,
    ):
        self._dev = device
        self._kernel_driver_detached = kernel_driver_detached
        self._interface = settings.interface
        self._ep_out = settings.out_endpoint
        self._ep_in = settings.in_endpoint
        self._timeout = settings.timeout_ms

    @classmethod
    def open(cls, settings: Optional[PrinterSettings] = None) -> "UsbTransport":
        """Find the printer and claim its interface.

        Args:
            settings: USB addressing; defaults to the MSD347 constants

        Returns:
            Connected transport

        Raises:
            TransportError: device missing or interface could not be claimed
        """
        settings = settings or get_settings()

        dev = usb.core.find(idVendor=settings.vendor_id, idProduct=settings.product_id)
        if dev is None:
            raise TransportError(
                f"USB printer {settings.vendor_id:04x}:{settings.product_id:04x} not found"
            )

        detached = False
        try:
            # Detach kernel driver if necessary (Linux)
            try:
                if dev.is_kernel_driver_active(settings.interface):
                    dev.detach_kernel_driver(settings.interface)
                    detached = True
                    logger.debug("Detached kernel driver")
            except NotImplementedError:
                logger.debug("Kernel driver query not supported on this platform")

            dev.set_configuration(settings.configuration)
            usb.util.claim_interface(dev, settings.interface)
            if settings.alt_setting:
                dev.set_interface_altsetting(settings.interface, settings.alt_setting)
        except usb.core.USBError as e:
            usb.util.dispose_resources(dev)
            raise TransportError(f"Failed to claim USB printer: {e}") from e

        logger.info(
            f"USB printer {settings.vendor_id:04x}:{settings.product_id:04x} claimed "
            f"(OUT 0x{settings.out_endpoint:02x}, IN 0x{settings.in_endpoint:02x})"
        )
        return cls(dev, settings, kernel_driver_detached=detached)

    def read(self, size: int) -> bytes:
        try:
            data = self._dev.read(self._ep_in, size, timeout=self._timeout)
        except usb.core.USBError as e:
            raise TransportError(f"USB read failed: {e}") from e
        return bytes(data)

    def write(self, data: bytes) -> int:
        try:
            return self._dev.write(self._ep_out, data, timeout=self._timeout)
        except usb.core.USBError as e:
            raise TransportError(f"USB write failed: {e}") from e

    def close(self) -> None:
        """Release the interface, hand it back to the kernel and free the handle.

        The device handle is freed even when releasing fails.
        """
        try:
            usb.util.release_interface(self._dev, self._interface)
            if self._kernel_driver_detached:
                self._dev.attach_kernel_driver(self._interface)
                self._kernel_driver_detached = False
                logger.debug("Reattached kernel driver")
        except usb.core.USBError as e:
            raise TransportError(f"USB close failed: {e}") from e
        finally:
            usb.util.dispose_resources(self._dev)
        logger.debug("USB interface released")
