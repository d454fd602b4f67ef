#!/usr/bin/env python3
import argparse
import csv
import os
import sys
from typing import Dict, Iterator, List

from codec_errors import CodecError
from container import HEADER_SIZE, decode_bytes, encode_bytes, read_header
from freq_model import entropy_bits


def iter_files(root: str) -> Iterator[str]:
    for dirpath, _, filenames in os.walk(root):
        for name in sorted(filenames):
            yield os.path.join(dirpath, name)


def ratio(raw: float, comp: float) -> float:
    return raw / comp if comp > 0 else 0.0


def analyze_file(path: str) -> Dict:
    with open(path, "rb") as f:
        data = f.read()
    blob = encode_bytes(data)
    header = read_header(blob)
    ok = decode_bytes(blob) == data
    return {
        "path": path,
        "raw_bytes": len(data),
        "comp_bytes": len(blob),
        "payload_bytes": len(blob) - HEADER_SIZE,
        "encoded_bits": header.encoded_bits,
        "entropy_bytes": entropy_bits(header.freqs) / 8.0,
        "ratio": ratio(len(data), len(blob)),
        "ok": ok,
    }


def write_csv(path: str, rows: List[Dict]) -> None:
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=list(rows[0].keys()) if rows else [])
        writer.writeheader()
        writer.writerows(rows)


def main() -> int:
    parser = argparse.ArgumentParser(description="Benchmark arithmetic coding over every file in a directory.")
    parser.add_argument("--input-dir", required=True)
    parser.add_argument("--out-dir", default="out")
    args = parser.parse_args()

    paths = list(iter_files(args.input_dir))
    if not paths:
        print(f"No files found under {args.input_dir}", file=sys.stderr)
        return 1

    os.makedirs(args.out_dir, exist_ok=True)
    rows = []
    empty = 0
    errors = 0
    for path in paths:
        if os.path.getsize(path) == 0:
            empty += 1
            continue
        try:
            rows.append(analyze_file(path))
        except (OSError, CodecError) as exc:
            print(f"Error {path}: {exc}", file=sys.stderr)
            errors += 1

    failed = [r for r in rows if not r["ok"]]
    raw_total = sum(r["raw_bytes"] for r in rows)
    comp_total = sum(r["comp_bytes"] for r in rows)
    payload_total = sum(r["payload_bytes"] for r in rows)
    entropy_total = sum(r["entropy_bytes"] for r in rows)

    csv_path = os.path.join(args.out_dir, "arith_metrics.csv")
    write_csv(csv_path, rows)

    summary_path = os.path.join(args.out_dir, "arith_summary.md")
    with open(summary_path, "w", encoding="utf-8") as f:
        f.write("# Arithmetic Coding Summary\n\n")
        f.write(f"- Files analyzed: {len(rows)}\n")
        f.write(f"- Empty files skipped: {empty}\n")
        f.write(f"- Errors: {errors}\n")
        f.write(f"- Roundtrip failures: {len(failed)}\n\n")
        f.write(f"- Raw bytes: {raw_total}\n")
        f.write(f"- Compressed bytes (with headers): {comp_total}\n")
        f.write(f"- Payload bytes: {payload_total}\n")
        f.write(f"- Order-0 entropy bound: {entropy_total:.1f} bytes\n")
        f.write(f"- Weighted ratio: {ratio(raw_total, comp_total):.3f}\n")
        f.write(f"- Weighted payload ratio: {ratio(raw_total, payload_total):.3f}\n")

    print(f"Wrote {csv_path}")
    print(f"Wrote {summary_path}")
    for r in failed:
        print(f"Mismatch: {r['path']}", file=sys.stderr)
    if failed or errors:
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
