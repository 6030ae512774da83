"""harness.record

Filesystem receipts for a finished run.

Rule
----
Only this module writes run summaries. Writing is best-effort: a receipt that
cannot be written is logged and never changes the run's exit code.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence

from harness.compilers import Compiler
from harness.models import RunOutcome
from tools.io import write_json_atomic

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


def now_iso() -> str:
    """Return current UTC time as ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


def summary_path(run_dir: Path, outcome: RunOutcome) -> Path:
    return Path(run_dir) / f"{outcome.operation.value}-results.json"


def build_summary(
    outcome: RunOutcome,
    compilers: Sequence[Compiler],
    *,
    versions: Mapping[str, Optional[str]],
    started: str,
    finished: str,
) -> Dict[str, Any]:
    by_name = {c.name: c for c in compilers}

    records = []
    for name, verdict in outcome.verdicts.items():
        compiler = by_name.get(name)
        records.append(
            {
                "name": name,
                "path": str(compiler.path) if compiler else None,
                "arg_layout": compiler.arg_layout.value if compiler else None,
                "reported_version": versions.get(name),
                "status": verdict.status,
                "stage": verdict.stage,
                "ref_digest": verdict.ref_digest,
                "cmp_digest": verdict.cmp_digest,
            }
        )

    return {
        "schema_version": SCHEMA_VERSION,
        "operation": outcome.operation.value,
        "started": started,
        "finished": finished,
        "success": outcome.success,
        "exit_code": outcome.exit_code,
        "cmp_dir": str(outcome.cmp_dir) if outcome.cmp_dir is not None else None,
        "compilers": records,
    }


def write_run_summary(
    run_dir: Path,
    outcome: RunOutcome,
    compilers: Sequence[Compiler],
    *,
    versions: Mapping[str, Optional[str]],
    started: str,
    finished: str,
) -> Optional[Path]:
    """Write ``<run_dir>/<operation>-results.json``; returns the path or ``None``."""
    path = summary_path(run_dir, outcome)
    data = build_summary(
        outcome, compilers, versions=versions, started=started, finished=finished
    )
    try:
        write_json_atomic(path, data)
    except (OSError, ValueError) as e:
        logger.warning("Failed to write the run summary to %s: %s", path, e)
        return None
    logger.debug("Wrote the run summary to %s", path)
    return path
