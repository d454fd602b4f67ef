#!/usr/bin/env python3
import argparse
import json
import os
import sys
import time
import warnings
from typing import Dict, Optional

from codec_errors import CodecError, TruncatedStreamWarning
from container import decode_bytes, read_header


def write_json(path: str, payload: Dict) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)


def decompress_file(
    in_path: str,
    out_path: str,
    verify_path: Optional[str] = None,
    stats_json: Optional[str] = None,
) -> int:
    t0 = time.perf_counter()
    try:
        with open(in_path, "rb") as f:
            blob = f.read()
    except OSError as exc:
        print(f"Cannot open input: {in_path} ({exc})", file=sys.stderr)
        return 1

    try:
        header = read_header(blob)
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", TruncatedStreamWarning)
            data = decode_bytes(blob)
    except CodecError as exc:
        print(f"Decompression failed for {in_path}: {exc}", file=sys.stderr)
        return 2
    truncated = any(issubclass(w.category, TruncatedStreamWarning) for w in caught)
    for w in caught:
        print(f"Warning: {w.message}", file=sys.stderr)

    try:
        with open(out_path, "wb") as f:
            f.write(data)
    except OSError as exc:
        print(f"Cannot create output: {out_path} ({exc})", file=sys.stderr)
        return 1

    elapsed_ms = (time.perf_counter() - t0) * 1000.0
    stats = {
        "mode": "decompress",
        "input": in_path,
        "output": out_path,
        "input_bytes": len(blob),
        "output_bytes": len(data),
        "compression_pct": (1.0 - len(blob) / len(data)) * 100.0 if data else 0.0,
        "ratio": len(data) / len(blob) if blob else 0.0,
        "encoded_bits": header.encoded_bits,
        "truncated": truncated,
        "time_ms": elapsed_ms,
    }

    print("Decompressed OK")
    print(f"Input:  {len(blob)} bytes")
    print(f"Output: {len(data)} bytes")
    print(f"Compression: {stats['compression_pct']:.2f}%")
    print(f"Ratio: {stats['ratio']:.3f}")
    print(f"Time: {elapsed_ms:.0f} ms")

    status = 0
    if verify_path:
        try:
            with open(verify_path, "rb") as f:
                orig = f.read()
        except OSError as exc:
            print(f"Cannot open reference: {verify_path} ({exc})", file=sys.stderr)
            return 1
        stats["verified"] = orig == data
        if stats["verified"]:
            print(f"Verified: matches {verify_path}")
        else:
            print(f"Mismatch: {out_path} differs from {verify_path}", file=sys.stderr)
            status = 2
    if stats_json:
        write_json(stats_json, stats)
    return status


def main() -> int:
    parser = argparse.ArgumentParser(description="Decompress an arithmetic-coded container.")
    parser.add_argument("--input", required=True, help="Container to decode.")
    parser.add_argument("--output", required=True, help="Destination for the restored bytes.")
    parser.add_argument("--verify", default=None, help="Original file to compare the result against.")
    parser.add_argument("--stats-json", default=None, help="Write run statistics to this JSON file.")
    parser.add_argument("--overwrite", action="store_true")
    args = parser.parse_args()

    if not args.overwrite and os.path.exists(args.output):
        print(f"Output exists: {args.output} (use --overwrite)", file=sys.stderr)
        return 1
    return decompress_file(args.input, args.output, args.verify, args.stats_json)


if __name__ == "__main__":
    raise SystemExit(main())
