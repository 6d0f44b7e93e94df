"""Replay a saved capture (.npz) through the Alice code generator."""

from __future__ import annotations

import argparse
import sys
from typing import Optional

from lib_mocap.alice import AliceCodeGenerator
from lib_mocap.config import ROOT_HEIGHT, STEP_SIZE, GeneratorConfig
from lib_mocap.errors import MissingJointError
from lib_mocap.io import load_skeletons, save_code


def generate_code(
    input_path: str, config: Optional[GeneratorConfig] = None
) -> tuple[str, int, int]:
    """Return (code, generated frame count, skipped frame count) for a capture."""

    skeletons = load_skeletons(input_path)
    generator = AliceCodeGenerator(config)
    generator.init()

    blocks: list[str] = []
    skipped = 0
    for index, skeleton in enumerate(skeletons):
        try:
            blocks.append(generator.frame_code(skeleton))
        except MissingJointError as e:
            skipped += 1
            print(f"frame {index}: skipped ({e})", file=sys.stderr)
    return "".join(blocks), len(blocks), skipped


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("input", help="Capture file written by the recorder (.npz).")
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output text file (default: input path with a .txt suffix).",
    )
    parser.add_argument(
        "--step-size",
        type=float,
        default=STEP_SIZE,
        help=f"Whole-body displacement per frame (default: {STEP_SIZE}).",
    )
    parser.add_argument(
        "--root-height",
        type=float,
        default=ROOT_HEIGHT,
        help=f"Height of the biped root joint (default: {ROOT_HEIGHT}).",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    output = args.output
    if output is None:
        output = args.input[:-4] if args.input.endswith(".npz") else args.input
        output += ".txt"

    try:
        config = GeneratorConfig(root_height=args.root_height, step_size=args.step_size)
        code, generated, skipped = generate_code(args.input, config)
        save_code(output, code)
    except (OSError, ValueError) as e:
        print(f"Could not generate code from {args.input}: {e}", file=sys.stderr)
        return 2

    print(f"Wrote {generated} frames to {output} ({skipped} skipped)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
