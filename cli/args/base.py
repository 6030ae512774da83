from __future__ import annotations

import argparse


def add_base_args(parser: argparse.ArgumentParser) -> None:
    """Register CLI flags that are shared across all subcommands."""

    parser.add_argument(
        "--run-dir",
        dest="run_dir",
        default=None,
        help="The directory to store intermediate files in (default: tests/run).",
    )
    parser.add_argument(
        "--config",
        dest="config",
        default=None,
        help="Optional YAML file with run defaults (command-line flags take precedence).",
    )
    parser.add_argument(
        "--env-file",
        dest="env_file",
        default=None,
        help="Load environment defaults from this file instead of ./.env.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output (commands, collected compilers, summary paths).",
    )
