from __future__ import annotations

import argparse

from cli.common import compilers_arg, non_negative_int


def add_compile_args(parser: argparse.ArgumentParser) -> None:
    """Register the flags shared by ``gen-refs`` and ``test``."""

    parser.add_argument(
        "compilers",
        nargs="?",
        type=compilers_arg,
        default=None,
        help=(
            "A comma-separated list of names of the compilers to use, "
            "or '*' to use all available compilers (default: *)."
        ),
    )
    parser.add_argument(
        "--sample",
        default=None,
        help="The sample source file (default: tests/sample.typ).",
    )
    parser.add_argument(
        "--ref-dir",
        dest="ref_dir",
        default=None,
        help="The directory that contains (or will contain) reference documents (default: tests/refs).",
    )
    parser.add_argument(
        "--project-root",
        dest="project_root",
        default=None,
        help="The project root to pass to the compiler (default: .).",
    )
    parser.add_argument(
        "--timeout",
        dest="timeout_seconds",
        type=non_negative_int,
        default=None,
        help="Kill a compiler invocation after this many seconds (default: 0 = never).",
    )
    parser.add_argument(
        "--no-summary",
        dest="no_summary",
        action="store_true",
        help="Do not write <run-dir>/<operation>-results.json.",
    )
