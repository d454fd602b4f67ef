#!/usr/bin/env python3
import argparse
import json
import os
import sys
import time
from typing import Dict, Optional

from codec_errors import CodecError
from container import encode_bytes


def write_json(path: str, payload: Dict) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)


def compression_pct(raw: int, comp: int) -> float:
    return (1.0 - comp / raw) * 100.0 if raw > 0 else 0.0


def compress_file(in_path: str, out_path: str, stats_json: Optional[str] = None) -> int:
    t0 = time.perf_counter()
    try:
        with open(in_path, "rb") as f:
            data = f.read()
    except OSError as exc:
        print(f"Cannot open input: {in_path} ({exc})", file=sys.stderr)
        return 1

    try:
        blob = encode_bytes(data)
    except CodecError as exc:
        print(f"Compression failed for {in_path}: {exc}", file=sys.stderr)
        return 2

    try:
        with open(out_path, "wb") as f:
            f.write(blob)
    except OSError as exc:
        print(f"Cannot create output: {out_path} ({exc})", file=sys.stderr)
        return 1

    elapsed_ms = (time.perf_counter() - t0) * 1000.0
    in_size = len(data)
    out_size = os.path.getsize(out_path)
    stats = {
        "mode": "compress",
        "input": in_path,
        "output": out_path,
        "input_bytes": in_size,
        "output_bytes": out_size,
        "compression_pct": compression_pct(in_size, out_size),
        "ratio": in_size / out_size if out_size else 0.0,
        "time_ms": elapsed_ms,
    }

    print("Compressed OK")
    print(f"Input:  {in_size} bytes")
    print(f"Output: {out_size} bytes")
    print(f"Compression: {stats['compression_pct']:.2f}%")
    print(f"Ratio: {stats['ratio']:.3f}")
    print(f"Time: {elapsed_ms:.0f} ms")
    if stats_json:
        write_json(stats_json, stats)
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Compress a file with static order-0 arithmetic coding.")
    parser.add_argument("--input", required=True, help="File to compress.")
    parser.add_argument("--output", required=True, help="Destination container.")
    parser.add_argument("--stats-json", default=None, help="Write run statistics to this JSON file.")
    parser.add_argument("--overwrite", action="store_true")
    args = parser.parse_args()

    if not args.overwrite and os.path.exists(args.output):
        print(f"Output exists: {args.output} (use --overwrite)", file=sys.stderr)
        return 1
    return compress_file(args.input, args.output, args.stats_json)


if __name__ == "__main__":
    raise SystemExit(main())
