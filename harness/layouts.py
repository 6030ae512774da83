"""harness.layouts

Command-line shapes accepted by historical compiler builds.

Why this exists
---------------
The compiler's CLI changed twice across its history:

- dated builds from before 0.1.0 had no ``compile`` subcommand at all
- 0.1.0 up to 0.7.0 expected ``--root`` *before* the subcommand
- 0.7.0 onwards expects the subcommand first

Every other part of the harness asks this module for the argument shape
instead of branching on version strings itself.
"""

from __future__ import annotations

import enum
import re
from pathlib import Path
from typing import List, Union

# Dated builds (``v2023-01-...`` etc.) predate version numbers and the subcommand.
PRE_VERSIONING_PREFIX = "v2023-0"
VERSION_MARKER = "v0-"
FIRST_SUBCOMMAND_BEFORE_ROOT_MINOR = 7

_MINOR_SPLIT_RE = re.compile(r"[-.]")
_DIGITS_RE = re.compile(r"[0-9]+")


class ArgLayout(enum.Enum):
    # 0.7.0..
    SUBCOMMAND_BEFORE_ROOT = "subcommand-before-root"
    # 0.1.0..0.7.0
    SUBCOMMAND_AFTER_ROOT = "subcommand-after-root"
    # ..0.1.0
    NO_SUBCOMMAND = "no-subcommand"

    def root_args(self, project_root: Union[str, Path]) -> List[str]:
        """Arguments that go between the program and the input/output paths."""
        root = str(project_root)
        if self is ArgLayout.SUBCOMMAND_BEFORE_ROOT:
            return ["compile", "--root", root]
        if self is ArgLayout.SUBCOMMAND_AFTER_ROOT:
            return ["--root", root, "compile"]
        if self is ArgLayout.NO_SUBCOMMAND:
            return ["--root", root]
        raise AssertionError(f"unhandled argument layout: {self!r}")


def resolve_arg_layout(name: str) -> ArgLayout:
    """Map a compiler name to the argument layout it understands."""
    if name.startswith(PRE_VERSIONING_PREFIX):
        return ArgLayout.NO_SUBCOMMAND

    _, marker, version = name.partition(VERSION_MARKER)
    if not marker:
        # Names without a 0.x marker are taken to be newer builds; the modern
        # layout is expected to stay.
        return ArgLayout.SUBCOMMAND_BEFORE_ROOT

    minor = _MINOR_SPLIT_RE.split(version, maxsplit=1)[0]
    if _DIGITS_RE.fullmatch(minor) and int(minor) < FIRST_SUBCOMMAND_BEFORE_ROOT_MINOR:
        return ArgLayout.SUBCOMMAND_AFTER_ROOT
    return ArgLayout.SUBCOMMAND_BEFORE_ROOT
