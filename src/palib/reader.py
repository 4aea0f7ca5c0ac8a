from __future__ import annotations

import struct


class CursorExhausted(EOFError):
    """Raised when a read would run past the end of the buffer."""


class ByteCursor:
    """Forward-only, bounds-checked reader over a fixed byte buffer.

    All lengths in the stream use the variable-length *count* encoding: the
    two high bits of the lead byte select a 1, 2 or 4 byte big-endian value.

    A failed read marks the cursor as exhausted. The flag is sticky: every
    later read fails too, without consuming anything, so a caller may either
    stop at the first ``CursorExhausted`` or keep going and check
    ``exhausted`` once at the end.
    """

    def __init__(self, data: bytes):
        self.data = bytes(data)
        self.position = 0
        self.exhausted = False

    @property
    def remaining(self) -> int:
        return len(self.data) - self.position

    def can_advance(self, n: int) -> bool:
        if self.exhausted:
            return False
        ok = n >= 0 and self.position + n <= len(self.data)
        self.exhausted = not ok
        return ok

    def _take(self, n: int) -> bytes:
        if not self.can_advance(n):
            raise CursorExhausted(
                f"Need {n} bytes at offset {self.position}, {max(self.remaining, 0)} left"
            )
        out = self.data[self.position:self.position + n]
        self.position += n
        return out

    def read_byte(self) -> int:
        return self._take(1)[0]

    def read_count(self) -> int:
        b0 = self.read_byte()
        tag = b0 & 0xC0
        if tag in (0x00, 0x40):
            return b0
        if tag == 0xC0:
            rest = self.read_memory(3)
            return ((b0 & 0x3F) << 24) | (rest[0] << 16) | (rest[1] << 8) | rest[2]
        return ((b0 & 0x3F) << 8) | self.read_byte()

    def read_memory(self, n: int) -> bytes:
        """Read exactly ``n`` raw bytes (no count prefix)."""
        return self._take(n)

    def read_block(self, expected_size: int = 0) -> bytes:
        """Read a count-prefixed block.

        When ``expected_size`` is non-zero the declared count must match it.
        """
        count = self.read_count()
        if expected_size > 0 and count != expected_size:
            self.exhausted = True
            raise CursorExhausted(f"Expected block of {expected_size} bytes, got {count}")
        return self._take(count)

    def read_string(self) -> str:
        return self.read_block().decode("utf-8")

    def skip(self, n: int) -> None:
        self._take(n)

    def read_u16(self) -> int:
        return struct.unpack(">H", self._take(2))[0]

    def read_u32(self) -> int:
        return struct.unpack(">I", self._take(4))[0]

    def read_u64(self) -> int:
        return struct.unpack(">Q", self._take(8))[0]
