"""harness.wiring

This module is the **composition root** for the Python runtime.

"Composition root" means: the single place where we *assemble* the running
application from its building blocks:

- load configuration / environment variables (``.env`` via python-dotenv)
- configure logging
- build the high-level harness facade object

Keeping this wiring in one place prevents configuration and logging setup
from being duplicated across entrypoints (CLI, scripts, CI).
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from harness.core import ENV_LOG_LEVEL
from harness.pipeline import BacktrackHarness

ENV_PATH: Path = Path(".env")

LOG_FORMAT = "[%(levelname)s] %(message)s"
# Loggers owned by this project; third-party loggers are left alone.
PROJECT_LOGGERS = ("harness", "tools", "cli")


def resolve_log_level(*, verbose: bool = False) -> int:
    if verbose:
        return logging.DEBUG
    raw = (os.environ.get(ENV_LOG_LEVEL) or "").strip().upper()
    if not raw:
        return logging.INFO
    level = logging.getLevelName(raw)
    if not isinstance(level, int):
        raise ValueError(f"{ENV_LOG_LEVEL} must be a logging level name, got {raw!r}")
    return level


def configure_logging(level: int = logging.INFO) -> None:
    """Attach one stream handler to the project loggers (idempotent)."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    for name in PROJECT_LOGGERS:
        lg = logging.getLogger(name)
        for old in list(lg.handlers):
            lg.removeHandler(old)
        lg.addHandler(handler)
        lg.setLevel(level)


def build_harness(
    *,
    env_path: Optional[Path] = None,
    load_env: bool = True,
    verbose: bool = False,
) -> BacktrackHarness:
    """Build the high-level harness facade.

    Variables already present in the environment are never overridden by the
    ``.env`` file.
    """
    if load_env:
        load_dotenv(env_path or ENV_PATH, override=False)

    configure_logging(resolve_log_level(verbose=verbose))
    return BacktrackHarness()
