"""cli.dispatch

Route a parsed command line to the matching command module.
"""

from __future__ import annotations

import argparse
import logging
from typing import Callable, Dict

from cli.commands.compile import run_gen_refs, run_test
from cli.commands.extract import run_extract
from harness.config import HarnessConfig, load_config_yaml
from harness.pipeline import BacktrackHarness

logger = logging.getLogger(__name__)

CommandFn = Callable[[argparse.Namespace, BacktrackHarness, HarnessConfig], int]

COMMANDS: Dict[str, CommandFn] = {
    "extract-compilers": run_extract,
    "gen-refs": run_gen_refs,
    "test": run_test,
}


def load_config(args: argparse.Namespace) -> HarnessConfig:
    if not args.config:
        return HarnessConfig()
    return load_config_yaml(args.config)


def dispatch(args: argparse.Namespace, harness: BacktrackHarness) -> int:
    """Run the selected subcommand and return its exit code.

    Bad configuration (unreadable YAML, invalid keys, malformed environment
    values) is reported through the log and turned into exit code 1.
    """
    try:
        fn = COMMANDS[args.command]
    except KeyError:
        raise SystemExit(f"Unknown command: {args.command}")

    try:
        config = load_config(args)
        return int(fn(args, harness, config))
    except (FileNotFoundError, ValueError) as e:
        logger.error("%s", e)
        return 1
