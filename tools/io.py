"""tools/io.py

Single source of truth for tiny filesystem helpers used across the harness.

Why this file exists
--------------------
Reference generation and testing both need to hash documents, and the run
summary needs a stable JSON writer. Keeping one implementation of each here
prevents the two code paths from drifting (different chunk sizes, different
JSON formatting, non-atomic writes...).

Design
------
- This module is intentionally small.
- It contains ONLY filesystem IO (no verdict policy).
"""

from __future__ import annotations

import hashlib
import json
import os
import tempfile
from pathlib import Path
from typing import Any

_CHUNK_SIZE = 1 << 20


def sha256_file(path: Path) -> str:
    """Hex SHA-256 digest of a file's bytes.

    Raises ``OSError`` if the file cannot be read.
    """
    h = hashlib.sha256()
    with Path(path).open("rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            h.update(chunk)
    return h.hexdigest()


def write_json_atomic(path: Path, data: Any, *, indent: int = 2) -> None:
    """Write pretty JSON atomically (temp file + ``os.replace``)."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f"{p.name}.", suffix=".tmp", dir=str(p.parent))
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=indent, ensure_ascii=False)
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, p)
    finally:
        # If os.replace fails, best-effort cleanup of the temp file.
        try:
            if tmp_path.exists():
                tmp_path.unlink()
        except OSError:
            pass
