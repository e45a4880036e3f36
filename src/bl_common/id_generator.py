"""Business ID generation.

Draws and purchase references get time-ordered snowflake-style IDs. Tickets get random UUID4 strings: the public board exposes the first
4 characters, which must not leak issue order or be trivially guessable.
"""

import threading
import time
import uuid


class SnowflakeIdGenerator:
    """Time-ordered 63-bit IDs: 41 bits ms since epoch | 10 bits node | 12 bits sequence."""

    _EPOCH_MS = 1_704_067_200_000  # 2024-01-01T00:00:00Z
    _NODE_BITS = 10
    _SEQUENCE_BITS = 12
    _SEQUENCE_MASK = (1 << _SEQUENCE_BITS) - 1

    def __init__(self, node_id: int = 0) -> None:
        if not (0 <= node_id < (1 << self._NODE_BITS)):
            raise ValueError(f"node_id must be 0-{(1 << self._NODE_BITS) - 1}")
        self._node_id = node_id
        self._sequence = 0
        self._last_ms = -1
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            now_ms = time.time_ns() // 1_000_000
            if now_ms < self._last_ms:
                # Clock stepped backwards: keep issuing on the last seen millisecond
                now_ms = self._last_ms
            if now_ms == self._last_ms:
                self._sequence = (self._sequence + 1) & self._SEQUENCE_MASK
                if self._sequence == 0:
                    while now_ms <= self._last_ms:
                        now_ms = time.time_ns() // 1_000_000
            else:
                self._sequence = 0
            self._last_ms = now_ms
            value = (
                (now_ms - self._EPOCH_MS) << (self._NODE_BITS + self._SEQUENCE_BITS)
                | self._node_id << self._SEQUENCE_BITS
                | self._sequence
            )
            return str(value)


_default_generator = SnowflakeIdGenerator()


def generate_id() -> str:
    return _default_generator.next_id()


def generate_ticket_id() -> str:
    return str(uuid.uuid4())
