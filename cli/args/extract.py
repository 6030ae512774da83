from __future__ import annotations

import argparse


def add_extract_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "archive",
        nargs="?",
        default=None,
        help=(
            "The compiler archive to extract (default: tests/compilers.7z). "
            ".7z archives need 7z, 7za or 7zz on PATH; .zip and .tar.* are handled natively."
        ),
    )
