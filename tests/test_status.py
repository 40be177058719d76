from __future__ import annotations

from msd347.errors import DeviceError
from msd347.printer.status import (
    ErrorInfo,
    check_error_status,
    decode_error_status,
    decode_ticket_status,
)


def test_clear_status_is_success() -> None:
    assert check_error_status(0x00) is None


def test_reserved_bits_do_not_fail() -> None:
    # Bits 1 and 4 are fixed high on ESC/POS-style printers
    assert check_error_status(0x12) is None


def test_mechanical_error() -> None:
    err = check_error_status(0x04)
    assert isinstance(err, DeviceError)
    assert err.info.mechanical_error
    assert "mechanical error" in str(err)


def test_flags_decode_independently() -> None:
    info = decode_error_status(0x08 | 0x20 | 0x40)
    assert info == ErrorInfo(
        mechanical_error=False,
        autocutter_error=True,
        unrecoverable_error=True,
        autorecoverable_error=True,
    )


def test_summary_first_match_wins() -> None:
    assert ErrorInfo(mechanical_error=True, autocutter_error=True).summary == "mechanical error"
    assert ErrorInfo(autocutter_error=True, unrecoverable_error=True).summary == "autocutter error (unrecoverable)"
    assert ErrorInfo(unrecoverable_error=True, autorecoverable_error=True).summary == "printer error (unrecoverable)"
    assert ErrorInfo(autorecoverable_error=True).summary == "printer error (recoverable)"


def test_recoverable_error_is_not_ok() -> None:
    assert not decode_error_status(0x40).ok
    assert isinstance(check_error_status(0x40), DeviceError)


def test_ticket_taken_when_bit_clear() -> None:
    assert decode_ticket_status(0x00).ticket_taken is True
    assert decode_ticket_status(0x04).ticket_taken is False
    assert decode_ticket_status(0xFB).ticket_taken is True
