"""harness.errors

Recoverable failure kinds for compiling and testing one compiler.

``CompileError`` and ``TestError`` are returned (not raised) by
:class:`harness.compilers.Compiler`, so the orchestrator can classify every
outcome into a verdict without unwinding the run. A compile failure during a
test is wrapped explicitly via :meth:`TestError.from_compile_error`.

Only :class:`VersionProbeError` and :class:`HarnessSetupError` are real
exceptions: the first is always caught and logged, the second aborts the run
before any compiler is attempted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal, Optional


class VersionProbeError(RuntimeError):
    """The compiler could not report its version (advisory only)."""


class HarnessSetupError(RuntimeError):
    """A run-scoped directory could not be prepared; nothing can be compiled."""


@dataclass(frozen=True)
class CompileError:
    kind: Literal["launch_failed", "unsuccessful_exit", "timed_out"]
    message: str
    exit_code: Optional[int] = None
    stdout: bytes = b""
    stderr: bytes = b""

    @classmethod
    def launch_failed(cls, err: OSError) -> "CompileError":
        return cls(kind="launch_failed", message=f"failed to run the compile command: {err}")

    @classmethod
    def unsuccessful_exit(cls, exit_code: int, stdout: bytes, stderr: bytes) -> "CompileError":
        return cls(
            kind="unsuccessful_exit",
            message=f"the compile command exited unsuccessfully (code: {exit_code})",
            exit_code=exit_code,
            stdout=stdout,
            stderr=stderr,
        )

    @classmethod
    def timed_out(cls, timeout_seconds: int, stdout: bytes, stderr: bytes) -> "CompileError":
        return cls(
            kind="timed_out",
            message=f"the compile command timed out after {timeout_seconds}s",
            stdout=stdout,
            stderr=stderr,
        )

    def stderr_lines(self) -> List[str]:
        return self.stderr.decode("utf-8", errors="replace").splitlines()

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class TestError:
    __test__ = False  # not a pytest test class

    kind: Literal["compile_failed", "ref_read_failed", "cmp_read_failed", "mismatch"]
    message: str
    compile_error: Optional[CompileError] = None
    ref_digest: Optional[str] = None
    cmp_digest: Optional[str] = None

    @classmethod
    def from_compile_error(cls, err: CompileError) -> "TestError":
        return cls(
            kind="compile_failed",
            message=f"failed to compile the compare document: {err}",
            compile_error=err,
        )

    @classmethod
    def ref_read_failed(cls, err: OSError) -> "TestError":
        return cls(kind="ref_read_failed", message=f"failed to read the reference document: {err}")

    @classmethod
    def cmp_read_failed(cls, err: OSError) -> "TestError":
        return cls(kind="cmp_read_failed", message=f"failed to read the compare document: {err}")

    @classmethod
    def mismatch(cls, ref_digest: str, cmp_digest: str) -> "TestError":
        return cls(
            kind="mismatch",
            message=f"the documents don't match: {ref_digest} vs. {cmp_digest}",
            ref_digest=ref_digest,
            cmp_digest=cmp_digest,
        )

    def __str__(self) -> str:
        return self.message
