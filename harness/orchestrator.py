"""harness.orchestrator

High-level orchestration for one gen-refs/test run.

Lifecycle
---------
``Init -> PerCompiler* -> Reported -> Exit``

- Init: create the run-scoped directories and resolve the compiler selection.
  Failing to create a directory is the only fatal error.
- PerCompiler: every selected compiler is attempted in order; a broken build
  only ever produces an error verdict for itself.
- Reported: banner plus one aligned line per compiler.
- Exit: :attr:`harness.models.RunOutcome.exit_code`, derived from all verdicts.

This module is intentionally "boring": it wires together
:mod:`harness.compilers`, :mod:`harness.report` and :mod:`harness.record`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

from harness.compilers import Compiler
from harness.core import CMPS_DIRNAME, COMPILER_NAME_PREFIX
from harness.errors import CompileError, HarnessSetupError, VersionProbeError
from harness.models import Operation, RunOutcome, RunRequest, Verdict
from harness.record import now_iso, write_run_summary
from harness.report import detect_separator_width, log_report, separator_line

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Init
# ---------------------------------------------------------------------------


def _create_dir(path: Path, what: str) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise HarnessSetupError(f"failed to create the {what} directory {path}: {e}") from e


def prepare_dirs(req: RunRequest) -> Optional[Path]:
    """Create the directories this run writes to; returns the compare dir (test only)."""
    _create_dir(req.run_dir, "run")
    if req.operation is Operation.GEN_REFS:
        _create_dir(req.ref_dir, "reference")
        return None

    cmp_dir = req.run_dir / CMPS_DIRNAME
    _create_dir(cmp_dir, "compare")
    return cmp_dir


def _is_utf8_name(name: str) -> bool:
    # Undecodable bytes come back from the filesystem as lone surrogates.
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def discover_compiler_names(compiler_dir: Path) -> List[str]:
    """Names of every entry in ``compiler_dir`` that looks like a compiler build."""
    try:
        entries = list(compiler_dir.iterdir())
    except OSError as e:
        raise HarnessSetupError(f"failed to read the compiler directory {compiler_dir}: {e}") from e
    names = []
    for p in entries:
        if not p.name.startswith(COMPILER_NAME_PREFIX):
            continue
        if not _is_utf8_name(p.name):
            logger.warning("Skipping %r in the compiler directory: its name is not valid UTF-8.", p.name)
            continue
        names.append(p.name)
    return sorted(names)


def collect_compilers(req: RunRequest, cmp_dir: Optional[Path]) -> List[Compiler]:
    if req.compilers.is_all:
        names = discover_compiler_names(req.compiler_dir)
    else:
        names = []
        for name in req.compilers.names or ():
            if name in names:
                logger.warning("Compiler %s was selected more than once; running it once.", name)
                continue
            names.append(name)

    return [
        Compiler.create(
            name,
            req.compiler_dir / name,
            req.ref_dir,
            cmp_dir,
            timeout_seconds=req.timeout_seconds,
        )
        for name in names
    ]


# ---------------------------------------------------------------------------
# PerCompiler
# ---------------------------------------------------------------------------


def log_unsuccessful_exit(err: CompileError) -> None:
    """Echo the compiler's stderr so failures can be diagnosed without rerunning."""
    if err.kind == "launch_failed":
        return
    if err.kind == "unsuccessful_exit":
        logger.error(
            "The compiler exited with a code of %s. It wrote the following to stderr:",
            err.exit_code,
        )
    else:
        logger.error("The compiler was stopped. It wrote the following to stderr:")
    for line in err.stderr_lines():
        logger.error("> %s", line)


def probe_version(compiler: Compiler) -> Optional[str]:
    try:
        version = compiler.reported_version()
    except VersionProbeError as e:
        logger.debug("Version probe failed: %s", e)
        logger.warning(
            "Failed to get the compiler version. "
            "This is probably just an old (pre-3/21) compiler."
        )
        return None
    logger.info('The compiler reports itself as "%s".', version)
    return version


def verdict_for_gen_ref(compiler: Compiler, req: RunRequest) -> Verdict:
    err = compiler.gen_ref(req.sample, req.project_root)
    if err is not None:
        logger.error("Failed to generate the reference document: %s", err)
        log_unsuccessful_exit(err)
        return Verdict.error("reference generation")
    logger.info("Successfully generated the reference document.")
    return Verdict.ok()


def verdict_for_test(compiler: Compiler, req: RunRequest) -> Verdict:
    err = compiler.test(req.sample, req.project_root)
    if err is None:
        logger.info("The test passed.")
        return Verdict.ok()

    if err.kind == "compile_failed" and err.compile_error is not None:
        logger.error("Failed to compile the compare document: %s", err.compile_error)
        log_unsuccessful_exit(err.compile_error)
        return Verdict.error("compare compilation")
    if err.kind == "mismatch" and err.ref_digest and err.cmp_digest:
        logger.error("The test failed.")
        logger.error("Reference digest: %s", err.ref_digest)
        logger.error("Compare digest: %s", err.cmp_digest)
        return Verdict.mismatch(err.ref_digest, err.cmp_digest)

    logger.error("Failed to run the test: %s", err)
    return Verdict.error("test")


def run_one(compiler: Compiler, req: RunRequest, versions: Dict[str, Optional[str]]) -> Verdict:
    logger.info("Running %s for %s.", req.operation.label, compiler)
    try:
        compiler.ensure_executable()
    except OSError as e:
        logger.error("Failed to set the executable's permissions: %s", e)
        return Verdict.error("permission setting")

    versions[compiler.name] = probe_version(compiler)

    if req.operation is Operation.GEN_REFS:
        return verdict_for_gen_ref(compiler, req)
    return verdict_for_test(compiler, req)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def run_compilers(req: RunRequest, *, separator_width: Optional[int] = None) -> RunOutcome:
    """Run ``req.operation`` for every selected compiler and report the result.

    Raises :class:`HarnessSetupError` only during Init, before any compiler runs.
    """
    started = now_iso()
    cmp_dir = prepare_dirs(req)
    compilers = collect_compilers(req, cmp_dir)
    logger.debug("Collected compilers: %s", [c.name for c in compilers])

    width = detect_separator_width() if separator_width is None else separator_width
    separator = separator_line(width)

    verdicts: Dict[str, Verdict] = {}
    versions: Dict[str, Optional[str]] = {}
    for compiler in compilers:
        logger.info("%s", separator)
        verdicts[compiler.name] = run_one(compiler, req, versions)

    outcome = RunOutcome(operation=req.operation, verdicts=verdicts, cmp_dir=cmp_dir)
    log_report(outcome, separator)

    if req.write_summary:
        write_run_summary(
            req.run_dir,
            outcome,
            compilers,
            versions=versions,
            started=started,
            finished=now_iso(),
        )
    return outcome
