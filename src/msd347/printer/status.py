"""
Status byte decoding for the MSD347 ticket printer.

Error status (DLE EOT 3):
    bit 2  mechanical error
    bit 3  autocutter error
    bit 5  unrecoverable error
    bit 6  auto-recoverable error

Ticket status (DLE EOT 5):
    bit 2  set while the ticket is still in the presenter

Remaining bits are fixed or reserved and ignored.
"""

from dataclasses import dataclass
from typing import Optional

from msd347.errors import DeviceError

ERROR_MECHANICAL = 1 << 2
ERROR_AUTOCUTTER = 1 << 3
ERROR_UNRECOVERABLE = 1 << 5
ERROR_AUTORECOVERABLE = 1 << 6

TICKET_PRESENT = 1 << 2


@dataclass(frozen=True)
class ErrorInfo:
    """Error flags reported by the printer."""

    mechanical_error: bool = False
    autocutter_error: bool = False
    unrecoverable_error: bool = False
    autorecoverable_error: bool = False

    @property
    def ok(self) -> bool:
        """True when no error flag is set."""
        return not (
            self.mechanical_error
            or self.autocutter_error
            or self.unrecoverable_error
            or self.autorecoverable_error
        )

    @property
    def summary(self) -> str:
        """Human-readable description; the first matching cause wins."""
        if self.mechanical_error:
            s = "mechanical error"
        elif self.autocutter_error:
            s = "autocutter error"
        else:
            s = "printer error"

        if self.unrecoverable_error:
            s += " (unrecoverable)"
        elif self.autorecoverable_error:
            s += " (recoverable)"

        return s

    def __str__(self) -> str:
        return self.summary


@dataclass(frozen=True)
class TicketInfo:
    """Ticket presenter state."""

    ticket_taken: bool


def decode_error_status(value: int) -> ErrorInfo:
    """Decode a DLE EOT 3 reply byte."""
    return ErrorInfo(
        mechanical_error=bool(value & ERROR_MECHANICAL),
        autocutter_error=bool(value & ERROR_AUTOCUTTER),
        unrecoverable_error=bool(value & ERROR_UNRECOVERABLE),
        autorecoverable_error=bool(value & ERROR_AUTORECOVERABLE),
    )


def check_error_status(value: int) -> Optional[DeviceError]:
    """
    Turn an error status byte into a failure, or None when all clear.

    Args:
        value: Reply byte from DLE EOT 3

    Returns:
        DeviceError carrying the decoded flags, or None
    """
    info = decode_error_status(value)
    if info.ok:
        return None
    return DeviceError(info)


def decode_ticket_status(value: int) -> TicketInfo:
    """Decode a DLE EOT 5 reply byte (bit clear means taken)."""
    return TicketInfo(ticket_taken=not (value & TICKET_PRESENT))
