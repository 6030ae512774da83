from __future__ import annotations

import argparse
from pathlib import Path
from typing import Mapping, Optional

from cli.common import as_path, first_set
from harness.config import HarnessConfig
from harness.core import default_run_dir, default_timeout_seconds, asset_path
from harness.models import CompilersSpec, Operation, RunRequest
from harness.pipeline import BacktrackHarness


def build_run_request(
    args: argparse.Namespace,
    config: HarnessConfig,
    operation: Operation,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> RunRequest:
    """Resolve every input: flag, then config file, then environment, then default."""
    run_dir = first_set(as_path(args.run_dir), config.run_dir) or default_run_dir(environ)
    compilers = first_set(args.compilers, config.compilers) or CompilersSpec.all()
    sample = first_set(as_path(args.sample), config.sample) or asset_path("sample.typ", environ)
    ref_dir = first_set(as_path(args.ref_dir), config.ref_dir) or asset_path("refs", environ)
    project_root = first_set(as_path(args.project_root), config.project_root) or Path(".")

    timeout = first_set(args.timeout_seconds, config.timeout_seconds)
    if timeout is None:
        timeout = default_timeout_seconds(environ)

    return RunRequest(
        operation=operation,
        run_dir=run_dir,
        compilers=compilers,
        sample=sample,
        ref_dir=ref_dir,
        project_root=project_root,
        timeout_seconds=int(timeout),
        write_summary=not bool(args.no_summary),
    )


def run_gen_refs(args: argparse.Namespace, harness: BacktrackHarness, config: HarnessConfig) -> int:
    return harness.run(build_run_request(args, config, Operation.GEN_REFS))


def run_test(args: argparse.Namespace, harness: BacktrackHarness, config: HarnessConfig) -> int:
    return harness.run(build_run_request(args, config, Operation.TEST))
