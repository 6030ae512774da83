"""cli.common

Small shared helpers for CLI command modules.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, TypeVar

from harness.models import CompilersSpec

T = TypeVar("T")


def compilers_arg(raw: str) -> CompilersSpec:
    """argparse ``type=`` for the compiler selection."""
    try:
        return CompilersSpec.parse(raw)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def non_negative_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {raw!r}")
    if value < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return value


def first_set(*values: Optional[T]) -> Optional[T]:
    """First value that is not ``None`` (flag > config file > environment > default)."""
    for v in values:
        if v is not None:
            return v
    return None


def as_path(raw: Optional[str]) -> Optional[Path]:
    return Path(raw).expanduser() if raw is not None else None
