from __future__ import annotations

import pytest

from msd347.errors import TransportError
from msd347.hardware.mock import MockTransport


def test_replies_then_default() -> None:
    transport = MockTransport(default_reply=b"\x12")
    transport.queue_reply(b"\x04\x05")
    assert transport.read(1) == b"\x04"
    assert transport.read(1) == b"\x12"


def test_records_writes() -> None:
    transport = MockTransport()
    transport.write(b"\x1b\x40")
    transport.write(bytearray(b"\x1b\x69"))
    assert transport.writes == [b"\x1b\x40", b"\x1b\x69"]
    assert transport.written == b"\x1b\x40\x1b\x69"


def test_fail_after() -> None:
    transport = MockTransport(fail_after=1)
    transport.write(b"\x00")
    with pytest.raises(TransportError):
        transport.write(b"\x00")


def test_io_after_close_fails() -> None:
    transport = MockTransport()
    transport.close()
    with pytest.raises(TransportError):
        transport.write(b"\x00")
    with pytest.raises(TransportError):
        transport.read(1)
