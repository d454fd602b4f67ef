#!/usr/bin/env python3
"""Framing for the arithmetic-coded container.

Layout (little-endian, packed):
    magic            uint32   0x41524331
    orig_size        uint32   number of original bytes
    freq[256]        uint32   raw per-byte frequency table
    encoded_bits     uint64   meaningful bits in the payload, padding excluded
    payload          bytes    MSB-first bit-packed code stream
"""
import warnings
from typing import List, NamedTuple, Union

import numpy as np

from arith_utils import QUARTER, RangeDecoder, arithmetic_encode
from codec_errors import DataError, FormatError, TruncatedStreamWarning
from freq_model import ALPHABET, as_u8, build_cumulative, build_frequency_table


MAGIC = 0x41524331
# every symbol keeps a non-empty sub-interval only while total <= QUARTER
MAX_ORIG_SIZE = QUARTER

HEADER_DTYPE = np.dtype([
    ("magic", "<u4"),
    ("orig_size", "<u4"),
    ("freq", "<u4", (ALPHABET,)),
    ("encoded_bits", "<u8"),
])
HEADER_SIZE = HEADER_DTYPE.itemsize  # 1040


class Header(NamedTuple):
    magic: int
    orig_size: int
    freqs: List[int]
    encoded_bits: int


def pack_header(orig_size: int, freqs: List[int], encoded_bits: int) -> bytes:
    rec = np.zeros(1, dtype=HEADER_DTYPE)
    rec["magic"] = MAGIC
    rec["orig_size"] = orig_size
    rec["freq"] = np.asarray(freqs, dtype=np.uint32)
    rec["encoded_bits"] = encoded_bits
    return rec.tobytes()


def read_header(blob: bytes) -> Header:
    if len(blob) < HEADER_SIZE:
        raise FormatError(f"Header read error: need {HEADER_SIZE} bytes, got {len(blob)}.")
    rec = np.frombuffer(blob, dtype=HEADER_DTYPE, count=1)[0]
    magic = int(rec["magic"])
    if magic != MAGIC:
        raise FormatError(f"Bad format: magic 0x{magic:08X}, expected 0x{MAGIC:08X}.")
    return Header(
        magic=magic,
        orig_size=int(rec["orig_size"]),
        freqs=rec["freq"].astype(np.int64).tolist(),
        encoded_bits=int(rec["encoded_bits"]),
    )


def encode_bytes(data: Union[bytes, bytearray, np.ndarray]) -> bytes:
    u8 = as_u8(data)
    if u8.size > MAX_ORIG_SIZE:
        raise DataError(f"Input of {u8.size} bytes exceeds the {MAX_ORIG_SIZE} byte limit of 32-bit coding.")
    freqs = build_frequency_table(u8)
    payload, bit_count = arithmetic_encode(u8.tolist(), freqs)
    return pack_header(u8.size, freqs, bit_count) + payload


def decode_bytes(blob: bytes) -> bytes:
    header = read_header(blob)
    cum, _ = build_cumulative(header.freqs)

    decoder = RangeDecoder(blob, cum, header.encoded_bits, offset=HEADER_SIZE)
    out = [decoder.decode_symbol() for _ in range(header.orig_size)]
    if decoder.truncated:
        warnings.warn(
            f"Bitstream truncated: {decoder.missing_bits} of {header.encoded_bits} bits missing, "
            "decoded as zero.",
            TruncatedStreamWarning,
            stacklevel=2,
        )
    return np.array(out, dtype=np.uint8).tobytes()
