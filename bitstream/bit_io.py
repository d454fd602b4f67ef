#!/usr/bin/env python3


class BitWriter:
    """Packs bits MSB-first into a byte buffer."""

    def __init__(self) -> None:
        self._buf = bytearray()
        self._acc = 0
        self._nbits = 0
        self._total = 0

    @property
    def total_bits(self) -> int:
        # padding added by finish() is not counted
        return self._total

    def write_bit(self, bit: int) -> None:
        self._acc = (self._acc << 1) | (bit & 1)
        self._nbits += 1
        self._total += 1
        if self._nbits == 8:
            self._buf.append(self._acc & 0xFF)
            self._acc = 0
            self._nbits = 0

    def write_repeat(self, bit: int, count: int) -> None:
        for _ in range(count):
            self.write_bit(bit)

    def finish(self) -> bytes:
        if self._nbits:
            self._acc <<= (8 - self._nbits)
            self._buf.append(self._acc & 0xFF)
            self._acc = 0
            self._nbits = 0
        return bytes(self._buf)


class BitReader:
    """Yields bits MSB-first; read_bit() returns -1 once the data is exhausted."""

    def __init__(self, data: bytes, offset: int = 0) -> None:
        self._data = data
        self._idx = offset
        self._acc = 0
        self._nbits = 0

    def read_bit(self) -> int:
        if self._nbits == 0:
            if self._idx >= len(self._data):
                return -1
            self._acc = self._data[self._idx]
            self._idx += 1
            self._nbits = 8
        bit = (self._acc >> (self._nbits - 1)) & 1
        self._nbits -= 1
        return bit
