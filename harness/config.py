"""harness.config

Optional YAML configuration for harness runs.

A config file lets CI jobs pin their inputs without long command lines::

    run_dir: tests/run
    compilers: [v0-6-0, v0-7-0]     # or "*" / "v0-6-0,v0-7-0"
    sample: tests/sample.typ
    ref_dir: tests/refs
    project_root: .
    timeout_seconds: 300
    archive: tests/compilers.7z

Every key is optional. Command-line flags win over the file, and the file wins
over environment defaults (see :mod:`harness.core`).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from harness.models import CompilersSpec

KNOWN_KEYS = (
    "run_dir",
    "compilers",
    "sample",
    "ref_dir",
    "project_root",
    "timeout_seconds",
    "archive",
)


@dataclass(frozen=True)
class HarnessConfig:
    run_dir: Optional[Path] = None
    compilers: Optional[CompilersSpec] = None
    sample: Optional[Path] = None
    ref_dir: Optional[Path] = None
    project_root: Optional[Path] = None
    timeout_seconds: Optional[int] = None
    archive: Optional[Path] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any], *, source: str = "<config>") -> "HarnessConfig":
        unknown = sorted(set(raw) - set(KNOWN_KEYS))
        if unknown:
            raise ValueError(f"{source}: unknown config key(s): {', '.join(unknown)}")

        def _path(key: str) -> Optional[Path]:
            val = raw.get(key)
            if val is None:
                return None
            if not isinstance(val, str) or not val.strip():
                raise ValueError(f"{source}: '{key}' must be a non-empty path string")
            return Path(val).expanduser()

        compilers: Optional[CompilersSpec] = None
        raw_compilers = raw.get("compilers")
        if raw_compilers is not None:
            if isinstance(raw_compilers, str):
                try:
                    compilers = CompilersSpec.parse(raw_compilers)
                except ValueError as e:
                    raise ValueError(f"{source}: 'compilers': {e}") from e
            elif isinstance(raw_compilers, list) and raw_compilers and all(
                isinstance(x, str) and x.strip() for x in raw_compilers
            ):
                compilers = CompilersSpec.specific(x.strip() for x in raw_compilers)
            else:
                raise ValueError(
                    f"{source}: 'compilers' must be '*', a comma-separated string, or a non-empty list of names"
                )

        timeout = raw.get("timeout_seconds")
        if timeout is not None:
            if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout < 0:
                raise ValueError(f"{source}: 'timeout_seconds' must be a non-negative integer")

        return cls(
            run_dir=_path("run_dir"),
            compilers=compilers,
            sample=_path("sample"),
            ref_dir=_path("ref_dir"),
            project_root=_path("project_root"),
            timeout_seconds=timeout,
            archive=_path("archive"),
        )


def load_config_yaml(path: str | Path) -> HarnessConfig:
    """Load a harness config from YAML."""
    import yaml

    p = Path(path).expanduser().resolve()
    if not p.exists():
        raise FileNotFoundError(f"Harness config not found: {p}")
    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Harness config is not valid YAML: {p}: {e}") from e
    if not isinstance(raw, dict):
        raise ValueError(f"Harness config must be a mapping/object at top level: {p}")
    return HarnessConfig.from_dict(raw, source=str(p))
