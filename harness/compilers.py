"""harness.compilers

One named compiler build and the operations the harness performs with it.

Both :meth:`Compiler.gen_ref` and :meth:`Compiler.test` go through the same
:meth:`Compiler.compile` primitive, so a mismatch can only come from the
compiler's output and never from two different ways of invoking it.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from harness.core import ARTIFACT_SUFFIX
from harness.errors import CompileError, TestError, VersionProbeError
from harness.layouts import ArgLayout, resolve_arg_layout
from tools.core_cmd import CmdResult, run_cmd
from tools.io import sha256_file

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

VERSION_FLAG = "--version"
# rwxr-xr-x
EXECUTABLE_MODE = 0o755


@dataclass(frozen=True)
class Compiler:
    name: str
    path: Path
    ref_path: Path
    cmp_path: Optional[Path]
    arg_layout: ArgLayout
    timeout_seconds: int = 0

    @classmethod
    def create(
        cls,
        name: str,
        path: PathLike,
        ref_dir: PathLike,
        cmp_dir: Optional[PathLike] = None,
        *,
        timeout_seconds: int = 0,
    ) -> "Compiler":
        document = f"{name}{ARTIFACT_SUFFIX}"
        return cls(
            name=name,
            path=Path(path),
            ref_path=Path(ref_dir) / document,
            cmp_path=Path(cmp_dir) / document if cmp_dir is not None else None,
            arg_layout=resolve_arg_layout(name),
            timeout_seconds=timeout_seconds,
        )

    def __str__(self) -> str:
        return self.name

    def ensure_executable(self) -> None:
        """Mark the binary as executable where the platform has such a bit.

        Raises ``OSError`` on failure. A missing binary is left alone: its
        absence shows up as a launch failure when compiling.
        """
        if os.name != "posix" or not self.path.exists():
            return
        os.chmod(self.path, EXECUTABLE_MODE)

    def reported_version(self) -> str:
        """Ask the compiler for its version string.

        Builds from before 3/21 cannot answer this, so callers should treat a
        :class:`VersionProbeError` as informational.
        """
        try:
            res = self._run([VERSION_FLAG])
        except OSError as e:
            raise VersionProbeError(f"failed to run the version command: {e}") from e
        if not res.succeeded:
            raise VersionProbeError(
                f"the version command exited unsuccessfully (code: {res.exit_code})"
            )
        try:
            return res.stdout.decode("utf-8").strip()
        except UnicodeDecodeError as e:
            raise VersionProbeError("the version output isn't a valid UTF-8 string") from e

    def gen_ref(self, sample: PathLike, project_root: PathLike) -> Optional[CompileError]:
        """Compile ``sample`` into the reference document. ``None`` means success."""
        return self.compile(sample, self.ref_path, project_root)

    def test(self, sample: PathLike, project_root: PathLike) -> Optional[TestError]:
        """Compile ``sample`` into the compare document and check it against the reference.

        ``None`` means the two documents have the same SHA-256 digest.
        """
        if self.cmp_path is None:
            raise RuntimeError(f"compiler {self.name!r} has no compare path")

        err = self.compile(sample, self.cmp_path, project_root)
        if err is not None:
            return TestError.from_compile_error(err)

        try:
            ref_digest = sha256_file(self.ref_path)
        except OSError as e:
            return TestError.ref_read_failed(e)
        try:
            cmp_digest = sha256_file(self.cmp_path)
        except OSError as e:
            return TestError.cmp_read_failed(e)

        if ref_digest == cmp_digest:
            return None
        return TestError.mismatch(ref_digest, cmp_digest)

    def compile_args(self, input_path: PathLike, output_path: PathLike, project_root: PathLike) -> List[str]:
        return [
            *self.arg_layout.root_args(project_root),
            str(input_path),
            str(output_path),
        ]

    def compile(
        self,
        input_path: PathLike,
        output_path: PathLike,
        project_root: PathLike,
    ) -> Optional[CompileError]:
        try:
            res = self._run(self.compile_args(input_path, output_path, project_root))
        except OSError as e:
            return CompileError.launch_failed(e)

        if res.timed_out:
            return CompileError.timed_out(self.timeout_seconds, res.stdout, res.stderr)
        if res.exit_code != 0:
            return CompileError.unsuccessful_exit(res.exit_code, res.stdout, res.stderr)
        return None

    def _run(self, args: List[str]) -> CmdResult:
        res = run_cmd([str(self.path), *args], timeout_seconds=self.timeout_seconds)
        logger.debug("Ran %s (exit %s, %.2fs)", res.command_str, res.exit_code, res.elapsed_seconds)
        return res
