"""tools/archive.py

Unpack the compiler archive into the run directory.

The archive shipped with the test assets is a 7-Zip file. Python has no
7-Zip support in the standard library, so ``.7z`` archives are handed to the
``7z`` command-line tool; anything ``shutil`` understands (zip, tar.*) is
unpacked in-process.

Requirement: extracting a ``.7z`` archive needs one of ``7z``, ``7za`` or
``7zz`` (p7zip / 7-Zip) on PATH. Without it ``extract_compilers`` raises
``FileNotFoundError``. Repacking the archive as ``.zip`` or ``.tar.gz`` avoids
the external tool.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import List

from tools.core_cmd import run_cmd, which_or_raise

logger = logging.getLogger(__name__)

SEVEN_ZIP_NAMES: List[str] = ["7z", "7za", "7zz"]


def find_7z() -> str:
    return which_or_raise(SEVEN_ZIP_NAMES[0], fallbacks=SEVEN_ZIP_NAMES[1:])


def extract_compilers(archive: Path, dest: Path) -> None:
    """Extract every compiler in ``archive`` into ``dest``.

    Raises ``FileNotFoundError`` if the archive (or the 7-Zip tool) is missing
    and ``RuntimeError`` if the extractor fails.
    """
    archive = Path(archive)
    dest = Path(dest)
    if not archive.is_file():
        raise FileNotFoundError(f"Compiler archive not found: {archive}")
    dest.mkdir(parents=True, exist_ok=True)

    logger.info("Extracting compilers.")
    if archive.suffix.lower() == ".7z":
        seven_zip = find_7z()
        logger.debug("Using %s", seven_zip)
        res = run_cmd([seven_zip, "x", "-y", f"-o{dest}", str(archive)])
        if not res.succeeded:
            stderr = res.stderr.decode("utf-8", errors="replace").strip()
            raise RuntimeError(
                f"failed to decompress the archive (code: {res.exit_code}): {stderr}"
            )
    else:
        try:
            shutil.unpack_archive(str(archive), str(dest))
        except (shutil.ReadError, ValueError) as e:
            raise RuntimeError(f"failed to decompress the archive: {e}") from e
    logger.info("Done! :)")
