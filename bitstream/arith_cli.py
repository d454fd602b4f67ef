#!/usr/bin/env python3
import argparse
import sys
from typing import Optional

from decode_arith import decompress_file
from encode_arith import compress_file


MENU = "1) Compress (Arithmetic)\n2) Decompress (Arithmetic)"


def ask(prompt: str, given: Optional[str]) -> str:
    if given is not None:
        return given
    return input(prompt).strip()


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Arithmetic coding compressor. Prompts for anything not given on the command line."
    )
    parser.add_argument("--mode", default=None, help="1 = compress, 2 = decompress.")
    parser.add_argument("--input", default=None)
    parser.add_argument("--output", default=None)
    parser.add_argument("--stats-json", default=None)
    args = parser.parse_args()

    if args.mode is None:
        print(MENU)
    choice = ask("Choose: ", args.mode)
    in_path = ask("Input file: ", args.input)
    out_path = ask("Output file: ", args.output)

    try:
        mode = int(choice)
    except ValueError:
        mode = 0
    if mode == 1:
        return compress_file(in_path, out_path, stats_json=args.stats_json)
    if mode == 2:
        return decompress_file(in_path, out_path, stats_json=args.stats_json)
    print(f"Wrong choice: {choice!r}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
