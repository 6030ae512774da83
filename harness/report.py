"""harness.report

Terminal report for a finished run.

Widths are computed once and passed in explicitly; nothing here reads the
terminal size while formatting.
"""

from __future__ import annotations

import logging
import shutil
from typing import List, Optional

from harness.models import RunOutcome

logger = logging.getLogger(__name__)

# Width of the "[INFO] " prefix the log handler puts in front of each line.
LOG_PREFIX_WIDTH = 7
FALLBACK_SEPARATOR_WIDTH = 80


def detect_separator_width() -> int:
    """Terminal width minus the log prefix, or 80 when there is no terminal."""
    size = shutil.get_terminal_size(fallback=(0, 0))
    if size.columns <= LOG_PREFIX_WIDTH:
        return FALLBACK_SEPARATOR_WIDTH
    return size.columns - LOG_PREFIX_WIDTH


def separator_line(width: int) -> str:
    return "-" * max(width, 1)


def verdict_lines(outcome: RunOutcome, name_width: int) -> List[str]:
    """One ``<name> | <verdict>`` line per compiler, in run order."""
    return [
        f"{name:<{name_width}} | {verdict.describe()}"
        for name, verdict in outcome.verdicts.items()
    ]


def report_lines(outcome: RunOutcome, separator: str, *, name_width: Optional[int] = None) -> List[str]:
    width = outcome.longest_name_len if name_width is None else name_width
    lines = [
        separator,
        "TEST SUCCESS" if outcome.success else "TEST FAILURE",
        separator,
    ]
    lines.extend(verdict_lines(outcome, width))
    if outcome.mismatches and outcome.cmp_dir is not None:
        lines.append(
            f"You can find the compiled documents from the failed tests in {outcome.cmp_dir}."
        )
    return lines


def log_report(outcome: RunOutcome, separator: str) -> None:
    for line in report_lines(outcome, separator):
        logger.info("%s", line)
