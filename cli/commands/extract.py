from __future__ import annotations

import argparse

from cli.common import as_path, first_set
from harness.config import HarnessConfig
from harness.core import default_run_dir, asset_path
from harness.pipeline import BacktrackHarness


def run_extract(args: argparse.Namespace, harness: BacktrackHarness, config: HarnessConfig) -> int:
    archive = first_set(as_path(args.archive), config.archive) or asset_path("compilers.7z")
    run_dir = first_set(as_path(args.run_dir), config.run_dir) or default_run_dir()
    return harness.extract(archive, run_dir)
