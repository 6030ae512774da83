"""tools/core_cmd.py

Command-execution helpers shared by the harness.

This module deliberately avoids compiler-specific knowledge. It provides:

* :func:`which_or_raise` - resolve executables reliably across environments.
* :func:`run_cmd` - run subprocesses (no shell=True) and capture output.

Rule
----
Only this module should touch ``subprocess``.
"""

from __future__ import annotations

import os
import shutil
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

# Exit status reported for a command killed by the timeout (same as coreutils `timeout`).
TIMEOUT_EXIT_CODE = 124


@dataclass(frozen=True)
class CmdResult:
    exit_code: int
    elapsed_seconds: float
    command_str: str
    stdout: bytes
    stderr: bytes
    timed_out: bool = False

    @property
    def succeeded(self) -> bool:
        return not self.timed_out and self.exit_code == 0


def which_or_raise(bin_name: str, fallbacks: Optional[List[str]] = None) -> str:
    """Locate an executable and return its absolute path.

    ``fallbacks`` may hold other executable names (looked up on PATH) or
    explicit paths.
    """
    found = shutil.which(bin_name)
    if found:
        return found

    for candidate in fallbacks or []:
        found = shutil.which(candidate)
        if found:
            return found
        p = Path(candidate)
        if p.is_file() and os.access(str(p), os.X_OK):
            return str(p)

    raise FileNotFoundError(
        f"Executable '{bin_name}' not found on PATH.\n"
        f"Install it and ensure it's available to this Python process.\n"
        f"Tried fallbacks: {fallbacks or []}"
    )


def run_cmd(cmd: List[str], *, timeout_seconds: int = 0) -> CmdResult:
    """Run a subprocess and capture stdout/stderr as bytes (no ``shell=True``).

    Never raises on non-zero exit codes or timeouts; only raises ``OSError``
    when the process cannot be launched at all (e.g. binary not found).
    """
    t0 = time.time()

    try:
        proc = subprocess.run(
            cmd,
            capture_output=True,
            timeout=timeout_seconds if timeout_seconds and timeout_seconds > 0 else None,
        )
    except subprocess.TimeoutExpired as e:
        return CmdResult(
            exit_code=TIMEOUT_EXIT_CODE,
            elapsed_seconds=time.time() - t0,
            command_str=" ".join(cmd),
            stdout=e.stdout or b"",
            stderr=e.stderr or b"",
            timed_out=True,
        )

    return CmdResult(
        exit_code=proc.returncode,
        elapsed_seconds=time.time() - t0,
        command_str=" ".join(cmd),
        stdout=proc.stdout or b"",
        stderr=proc.stderr or b"",
    )
