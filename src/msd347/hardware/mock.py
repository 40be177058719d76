"""In-memory transport for tests and mock mode."""

import logging
from collections import deque
from typing import Optional

from msd347.errors import TransportError
from msd347.hardware.base import Transport

logger = logging.getLogger(__name__)


class MockTransport(Transport):
    """Records writes and plays back queued replies.

    When no reply is queued, ``read`` answers with ``default_reply``
    (an all-clear status byte unless told otherwise).
    """

    def __init__(self, default_reply: bytes = b"\x00", fail_after: Optional[int] = None):
        """
        Args:
            default_reply: Bytes returned by read when the queue is empty
            fail_after: Number of successful writes before writes start failing
        """
        self.writes: list[bytes] = []
        self.default_reply = default_reply
        self.fail_after = fail_after
        self.closed = False
        self.close_calls = 0
        self._replies: deque[bytes] = deque()

    def queue_reply(self, data: bytes) -> None:
        """Queue bytes for the next read. Queue ``b""`` for a short read."""
        self._replies.append(data)

    @property
    def written(self) -> bytes:
        """All bytes written so far, concatenated."""
        return b"".join(self.writes)

    def read(self, size: int) -> bytes:
        if self.closed:
            raise TransportError("Mock transport closed")
        data = self._replies.popleft() if self._replies else self.default_reply
        return data[:size]

    def write(self, data: bytes) -> int:
        if self.closed:
            raise TransportError("Mock transport closed")
        if self.fail_after is not None and len(self.writes) >= self.fail_after:
            raise TransportError("Mock write failure")
        self.writes.append(bytes(data))
        logger.debug(f"Mock send: {len(data)} bytes")
        return len(data)

    def close(self) -> None:
        self.close_calls += 1
        self.closed = True
