"""harness.models

Lightweight data structures used across the harness.

These dataclasses provide a small, explicit vocabulary for:
- which compilers a run targets (CompilersSpec)
- what a run does (Operation, RunRequest)
- how each compiler fared (Verdict) and what the run concluded (RunOutcome)

They carry no side effects so the CLI, orchestrator and tests can build them
freely.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Mapping, Optional, Tuple

from harness.core import COMPILERS_DIRNAME


class Operation(enum.Enum):
    GEN_REFS = "gen-refs"
    TEST = "test"

    @property
    def label(self) -> str:
        if self is Operation.GEN_REFS:
            return "reference generation"
        return "test"


@dataclass(frozen=True)
class CompilersSpec:
    """Either every compiler in the compiler directory, or an explicit list.

    ``names is None`` means "all". The textual form is ``*`` for all, or a
    comma-separated list of compiler names.
    """

    names: Optional[Tuple[str, ...]] = None

    @classmethod
    def all(cls) -> "CompilersSpec":
        return cls(names=None)

    @classmethod
    def specific(cls, names) -> "CompilersSpec":
        return cls(names=tuple(names))

    @classmethod
    def parse(cls, raw: str) -> "CompilersSpec":
        s = (raw or "").strip()
        if s == "*":
            return cls.all()
        names = [x.strip() for x in s.split(",") if x.strip()]
        if not names:
            raise ValueError("expected '*' or a comma-separated list of compiler names")
        return cls.specific(names)

    @property
    def is_all(self) -> bool:
        return self.names is None

    def __str__(self) -> str:
        return "*" if self.names is None else ",".join(self.names)


@dataclass(frozen=True)
class Verdict:
    """Final classified outcome for one compiler in one run."""

    status: Literal["ok", "mismatch", "error"]
    stage: Optional[str] = None
    ref_digest: Optional[str] = None
    cmp_digest: Optional[str] = None

    @classmethod
    def ok(cls) -> "Verdict":
        return cls(status="ok")

    @classmethod
    def mismatch(cls, ref_digest: str, cmp_digest: str) -> "Verdict":
        return cls(status="mismatch", ref_digest=ref_digest, cmp_digest=cmp_digest)

    @classmethod
    def error(cls, stage: str) -> "Verdict":
        return cls(status="error", stage=stage)

    @property
    def succeeded(self) -> bool:
        return self.status == "ok"

    def describe(self) -> str:
        if self.status == "ok":
            return "OK"
        if self.status == "mismatch":
            return "Mismatch"
        return f"Error during {self.stage}"


@dataclass(frozen=True)
class RunRequest:
    """Everything the orchestrator needs for one gen-refs/test run."""

    operation: Operation
    run_dir: Path
    compilers: CompilersSpec
    sample: Path
    ref_dir: Path
    project_root: Path = Path(".")

    # 0 = no per-invocation timeout
    timeout_seconds: int = 0

    # write <run_dir>/<operation>-results.json after reporting
    write_summary: bool = True

    @property
    def compiler_dir(self) -> Path:
        return self.run_dir / COMPILERS_DIRNAME


@dataclass(frozen=True)
class RunOutcome:
    """Aggregate result of a run; everything here derives from ``verdicts``."""

    operation: Operation
    verdicts: Mapping[str, Verdict]
    cmp_dir: Optional[Path] = None

    @property
    def success(self) -> bool:
        return all(v.succeeded for v in self.verdicts.values())

    @property
    def mismatches(self) -> bool:
        return any(v.status == "mismatch" for v in self.verdicts.values())

    @property
    def longest_name_len(self) -> int:
        return max((len(name) for name in self.verdicts), default=0)

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1
