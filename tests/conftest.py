from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

import pytest

from harness.core import COMPILERS_DIRNAME, ENV_COMPILE_TIMEOUT, ENV_LOG_LEVEL, ENV_RUN_DIR, ENV_TESTS_DIR
from harness.wiring import PROJECT_LOGGERS

# Behaviour of every fake compiler is driven by files in the control dir, keyed
# by compiler name. They live outside the compiler dir so discovery never sees them.
FAKE_COMPILER_PY = '''\
import json
import sys
import time
from pathlib import Path

control = Path(sys.argv[1])
name = sys.argv[2]
args = sys.argv[3:]


def marker(suffix):
    return control / (name + suffix)


if args == ["--version"]:
    if marker(".noversion").exists():
        sys.exit(2)
    if marker(".badversion").exists():
        sys.stdout.buffer.write(b"fake-compiler \\xff\\xfe\\n")
        sys.exit(0)
    sys.stdout.write("fake-compiler 0.0.0 (" + name + ")\\n")
    sys.exit(0)

marker(".argv.json").write_text(json.dumps(args))

if marker(".sleep").exists():
    time.sleep(float(marker(".sleep").read_text()))

if marker(".fail").exists():
    sys.stderr.write("error: expected expression\\nhint: the sample is broken\\n")
    sys.exit(3)

payload = marker(".payload").read_bytes() if marker(".payload").exists() else b"%PDF-fake\\n"
Path(args[-1]).write_bytes(payload + Path(args[-2]).read_bytes())
'''


class FakeCompilers:
    """Installs small shell-wrapped Python programs that behave like compiler builds."""

    def __init__(self, run_dir: Path, control_dir: Path) -> None:
        self.run_dir = run_dir
        self.compiler_dir = run_dir / COMPILERS_DIRNAME
        self.control_dir = control_dir
        self.compiler_dir.mkdir(parents=True, exist_ok=True)
        self.control_dir.mkdir(parents=True, exist_ok=True)
        self.script = control_dir / "fake_compiler.py"
        self.script.write_text(FAKE_COMPILER_PY, encoding="utf-8")

    def add(
        self,
        name: str,
        *,
        payload: Optional[bytes] = None,
        fail: bool = False,
        no_version: bool = False,
        bad_version: bool = False,
        sleep: Optional[float] = None,
    ) -> Path:
        exe = self.compiler_dir / name
        exe.write_text(
            "#!/bin/sh\n"
            f'exec "{sys.executable}" "{self.script}" "{self.control_dir}" "{name}" "$@"\n',
            encoding="utf-8",
        )
        # Not executable yet: the harness is expected to fix that up.
        os.chmod(exe, 0o644)

        if payload is not None:
            self.set_payload(name, payload)
        if fail:
            self.set_fail(name)
        if no_version:
            (self.control_dir / f"{name}.noversion").write_text("")
        if bad_version:
            (self.control_dir / f"{name}.badversion").write_text("")
        if sleep is not None:
            (self.control_dir / f"{name}.sleep").write_text(str(sleep))
        return exe

    def set_payload(self, name: str, payload: bytes) -> None:
        (self.control_dir / f"{name}.payload").write_bytes(payload)

    def set_fail(self, name: str, fail: bool = True) -> None:
        p = self.control_dir / f"{name}.fail"
        if fail:
            p.write_text("")
        elif p.exists():
            p.unlink()

    def argv(self, name: str) -> List[str]:
        return json.loads((self.control_dir / f"{name}.argv.json").read_text())


@pytest.fixture
def fake_compilers(tmp_path: Path) -> FakeCompilers:
    return FakeCompilers(tmp_path / "run", tmp_path / "control")


@pytest.fixture
def sample(tmp_path: Path) -> Path:
    p = tmp_path / "sample.typ"
    p.write_text("= Heading\n\nHello, world!\n", encoding="utf-8")
    return p


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in (ENV_TESTS_DIR, ENV_RUN_DIR, ENV_COMPILE_TIMEOUT, ENV_LOG_LEVEL):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def _reset_project_loggers():
    yield
    for name in PROJECT_LOGGERS:
        lg = logging.getLogger(name)
        for h in list(lg.handlers):
            lg.removeHandler(h)
        lg.setLevel(logging.NOTSET)
