"""CLI argument builder modules.

The top-level :mod:`backtrack_cli` is intentionally kept thin. Groups of flags
are registered by small "arg builder" functions housed here:

- :func:`cli.args.base.add_base_args`
- :func:`cli.args.compile.add_compile_args`
- :func:`cli.args.extract.add_extract_args`

Defaults that depend on the environment are resolved after ``.env`` has been
loaded, so every flag here defaults to ``None``.
"""

from __future__ import annotations

__all__ = [
    "base",
    "compile",
    "extract",
]
