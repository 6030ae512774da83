# harness/core.py
from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

# Compiler directory entries whose names start with this are considered compilers.
COMPILER_NAME_PREFIX = "v"

COMPILERS_DIRNAME = "compilers"
CMPS_DIRNAME = "cmps"
ARTIFACT_SUFFIX = ".pdf"

ENV_TESTS_DIR = "BACKTRACK_TESTS_DIR"
ENV_RUN_DIR = "BACKTRACK_RUN_DIR"
ENV_COMPILE_TIMEOUT = "BACKTRACK_COMPILE_TIMEOUT"
ENV_LOG_LEVEL = "BACKTRACK_LOG_LEVEL"

DEFAULT_TESTS_DIR = Path("tests")


def asset_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Root of the test assets (sample, references, compiler archive)."""
    env = os.environ if environ is None else environ
    raw = (env.get(ENV_TESTS_DIR) or "").strip()
    return Path(raw) if raw else DEFAULT_TESTS_DIR


def asset_path(name: str, environ: Optional[Mapping[str, str]] = None) -> Path:
    return asset_dir(environ) / name


def default_run_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    env = os.environ if environ is None else environ
    raw = (env.get(ENV_RUN_DIR) or "").strip()
    return Path(raw) if raw else asset_path("run", env)


def default_timeout_seconds(environ: Optional[Mapping[str, str]] = None) -> int:
    """Per-invocation timeout from the environment (0 = unbounded)."""
    env = os.environ if environ is None else environ
    raw = (env.get(ENV_COMPILE_TIMEOUT) or "").strip()
    if not raw:
        return 0
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{ENV_COMPILE_TIMEOUT} must be an integer number of seconds, got {raw!r}")
    if value < 0:
        raise ValueError(f"{ENV_COMPILE_TIMEOUT} must not be negative, got {value}")
    return value
