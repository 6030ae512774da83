#!/usr/bin/env python3
"""
Backward-compatibility test executor for compiler releases.

Commands:
  1) extract-compilers - unpack the compiler archive into the run directory
  2) gen-refs          - compile the sample with each compiler and store the result as its reference
  3) test              - compile the sample again and compare against the stored references

Usage:
  python backtrack_cli.py extract-compilers
  python backtrack_cli.py gen-refs '*'
  python backtrack_cli.py test v0-6-0,v0-7-0 --timeout 300
  python backtrack_cli.py --config backtrack.yaml test
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from cli.args.base import add_base_args
from cli.args.compile import add_compile_args
from cli.args.extract import add_extract_args
from cli.dispatch import dispatch
from harness.wiring import build_harness


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="backtrack",
        description="Check that newer compiler builds still produce byte-identical output for old sources.",
    )
    add_base_args(parser)

    sub = parser.add_subparsers(dest="command", required=True)

    p_extract = sub.add_parser("extract-compilers", help="Extract the compiler archive (.7z needs the 7-Zip CLI).")
    add_extract_args(p_extract)

    p_gen = sub.add_parser("gen-refs", help="Generate reference documents.")
    add_compile_args(p_gen)

    p_test = sub.add_parser("test", help="Test compilers against their references.")
    add_compile_args(p_test)

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def run(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    env_path = Path(args.env_file).expanduser() if args.env_file else None
    try:
        harness = build_harness(env_path=env_path, verbose=bool(args.verbose))
    except ValueError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    return dispatch(args, harness)


def main(argv: Optional[List[str]] = None) -> None:
    raise SystemExit(run(argv))


if __name__ == "__main__":
    main()
