"""
Abstract base class for printer transports.

The printer protocol only needs a duplex byte channel. Real USB
hardware and the in-memory mock both implement this contract, so the
protocol layer can be exercised without a device attached.
"""

from abc import ABC, abstractmethod


class Transport(ABC):
    """Duplex byte stream with blocking read, blocking write and close."""

    @abstractmethod
    def read(self, size: int) -> bytes:
        """
        Read up to ``size`` bytes.

        May return fewer bytes than requested, including none.
        Raises TransportError on I/O failure.
        """
        ...

    @abstractmethod
    def write(self, data: bytes) -> int:
        """
        Write ``data`` to the device.

        Returns:
            Number of bytes written
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """Release the underlying channel."""
        ...
