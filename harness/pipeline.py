"""harness.pipeline

A *single, high-level* object representing this repo's capabilities.

Callers (the CLI, CI scripts, tests) use :class:`BacktrackHarness` instead of
wiring :mod:`harness.orchestrator` and :mod:`tools.archive` themselves:

- ``extract(...)``: unpack the compiler archive into the run directory
- ``run(...)``: generate references or test every selected compiler

Both return a process exit code.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from harness.errors import HarnessSetupError
from harness.models import RunOutcome, RunRequest
from harness.orchestrator import run_compilers
from tools.archive import extract_compilers

logger = logging.getLogger(__name__)


class BacktrackHarness:
    """High-level facade over the harness.

    Build it via :func:`harness.wiring.build_harness`; the constructor hooks
    exist so tests can swap implementations.
    """

    def __init__(
        self,
        *,
        run_fn: Callable[[RunRequest], RunOutcome] = run_compilers,
        extract_fn: Callable[[Path, Path], None] = extract_compilers,
    ) -> None:
        self._run_fn = run_fn
        self._extract_fn = extract_fn

    def run(self, req: RunRequest) -> int:
        try:
            outcome = self._run_fn(req)
        except HarnessSetupError as e:
            logger.error("%s", e)
            return 1
        return outcome.exit_code

    def extract(self, archive: Path, run_dir: Path) -> int:
        try:
            Path(run_dir).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error("Failed to create the run directory %s: %s", run_dir, e)
            return 1
        try:
            self._extract_fn(Path(archive), Path(run_dir))
        except (OSError, RuntimeError) as e:
            logger.error("Failed to extract the compilers: %s", e)
            return 1
        return 0
