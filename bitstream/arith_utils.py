#!/usr/bin/env python3
from typing import Iterable, List, Optional, Tuple

from bit_io import BitReader, BitWriter
from codec_errors import DataError, FormatError
from freq_model import build_cumulative, find_symbol


CODE_BITS = 32
MAX_CODE = (1 << CODE_BITS) - 1
HALF = (MAX_CODE // 2) + 1
QUARTER = HALF // 2
THREE_QUARTER = QUARTER * 3


class RangeEncoder:
    def __init__(self, cum: List[int], writer: Optional[BitWriter] = None) -> None:
        self._cum = cum
        self._total = cum[-1]
        if self._total <= 0:
            raise DataError("Bad total.")
        self.writer = writer if writer is not None else BitWriter()
        self.low = 0
        self.high = MAX_CODE
        self.pending = 0

    def _output_with_pending(self, bit: int) -> None:
        self.writer.write_bit(bit)
        self.writer.write_repeat(1 - bit, self.pending)
        self.pending = 0

    def encode_symbol(self, sym: int) -> None:
        if sym < 0 or sym >= len(self._cum) - 1:
            raise DataError(f"Symbol out of range: {sym}")
        sym_low = self._cum[sym]
        sym_high = self._cum[sym + 1]
        if sym_low == sym_high:
            raise DataError(f"Symbol {sym} has zero frequency in the model.")

        low = self.low
        current_range = self.high - low + 1
        high = low + (current_range * sym_high // self._total) - 1
        low = low + (current_range * sym_low // self._total)

        while True:
            if high < HALF:
                self._output_with_pending(0)
            elif low >= HALF:
                self._output_with_pending(1)
                low -= HALF
                high -= HALF
            elif low >= QUARTER and high < THREE_QUARTER:
                self.pending += 1
                low -= QUARTER
                high -= QUARTER
            else:
                break
            low = (low << 1) & MAX_CODE
            high = ((high << 1) & MAX_CODE) | 1

        self.low = low
        self.high = high

    def finish(self) -> Tuple[bytes, int]:
        """Emit the disambiguating tail and return (payload, meaningful bit count)."""
        self.pending += 1
        if self.low < QUARTER:
            self._output_with_pending(0)
        else:
            self._output_with_pending(1)
        bit_count = self.writer.total_bits
        return self.writer.finish(), bit_count


class RangeDecoder:
    def __init__(
        self,
        data: bytes,
        cum: List[int],
        bit_count: Optional[int] = None,
        offset: int = 0,
    ) -> None:
        self._cum = cum
        self._total = cum[-1]
        if self._total <= 0:
            raise DataError("Bad total.")
        self._reader = BitReader(data, offset)
        # None means every byte of the payload is meaningful
        self._budget = bit_count
        self.bits_read = 0
        self.missing_bits = 0
        self.low = 0
        self.high = MAX_CODE
        self.value = 0
        for _ in range(CODE_BITS):
            self.value = ((self.value << 1) | self._next_bit()) & MAX_CODE

    def _next_bit(self) -> int:
        if self._budget is not None and self.bits_read >= self._budget:
            self.bits_read += 1
            return 0
        self.bits_read += 1
        bit = self._reader.read_bit()
        if bit < 0:
            if self._budget is not None:
                self.missing_bits += 1
            return 0
        return bit

    @property
    def truncated(self) -> bool:
        return self.missing_bits > 0

    def decode_symbol(self) -> int:
        low = self.low
        high = self.high
        value = self.value
        current_range = high - low + 1
        scaled = ((value - low + 1) * self._total - 1) // current_range
        sym = find_symbol(self._cum, scaled)
        sym_low = self._cum[sym]
        sym_high = self._cum[sym + 1]
        if sym_low == sym_high:
            raise FormatError("Decode failed: resolved zero-frequency symbol.")

        high = low + (current_range * sym_high // self._total) - 1
        low = low + (current_range * sym_low // self._total)

        while True:
            if high < HALF:
                pass
            elif low >= HALF:
                low -= HALF
                high -= HALF
                value -= HALF
            elif low >= QUARTER and high < THREE_QUARTER:
                low -= QUARTER
                high -= QUARTER
                value -= QUARTER
            else:
                break
            low = (low << 1) & MAX_CODE
            high = ((high << 1) & MAX_CODE) | 1
            value = ((value << 1) & MAX_CODE) | self._next_bit()

        self.low = low
        self.high = high
        self.value = value
        return sym


def arithmetic_encode(symbols: Iterable[int], freqs: List[int]) -> Tuple[bytes, int]:
    cum, _ = build_cumulative(freqs)
    encoder = RangeEncoder(cum)
    for sym in symbols:
        encoder.encode_symbol(sym)
    return encoder.finish()
