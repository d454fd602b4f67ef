#!/usr/bin/env python3
import bisect
import math
from typing import List, Tuple, Union

import numpy as np

from codec_errors import DataError


ALPHABET = 256


def as_u8(data: Union[bytes, bytearray, np.ndarray]) -> np.ndarray:
    if isinstance(data, np.ndarray):
        return data.astype(np.uint8, copy=False).reshape(-1)
    return np.frombuffer(bytes(data), dtype=np.uint8)


def build_frequency_table(data: Union[bytes, bytearray, np.ndarray]) -> List[int]:
    u8 = as_u8(data)
    if u8.size == 0:
        raise DataError("Input is empty.")
    return np.bincount(u8, minlength=ALPHABET).astype(np.int64).tolist()


def build_cumulative(freqs: List[int]) -> Tuple[List[int], int]:
    if len(freqs) != ALPHABET:
        raise DataError(f"Frequency table must have {ALPHABET} entries, got {len(freqs)}.")
    total = 0
    cum = [0]
    for f in freqs:
        if f < 0:
            raise DataError("Negative frequency not allowed.")
        total += int(f)
        cum.append(total)
    if total <= 0:
        raise DataError("Bad total: all frequencies are zero.")
    return cum, total


def find_symbol(cum: List[int], scaled: int) -> int:
    """Smallest s with cum[s] <= scaled < cum[s + 1].

    Zero-frequency symbols share their boundary with the next symbol, so
    bisect_right lands past them. Out-of-range values clamp to the last
    symbol; a correct decoder never produces one.
    """
    sym = bisect.bisect_right(cum, scaled) - 1
    if sym < 0:
        return 0
    return min(sym, ALPHABET - 1)


def entropy_bits(freqs: List[int]) -> float:
    total = sum(freqs)
    if total <= 0:
        return 0.0
    bits = 0.0
    for f in freqs:
        if f > 0:
            bits -= f * math.log2(f / total)
    return bits
