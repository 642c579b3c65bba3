"""
Extraction of the runtime's cabinet (.cab) package.

Python has no cabinet reader in its standard library, so extraction is
delegated to an external tool: 7-Zip (``7z``, ``7za`` or ``7zz``) or
``cabextract``.
"""

import logging
import os
import shutil
import subprocess
from typing import List, Optional, Tuple

from .constants import ENV_EXTRACTOR
from .errors import ExtractionFailed

logger = logging.getLogger(__name__)

SEVEN_ZIP_COMMANDS = ("7z", "7za", "7zz")
CABEXTRACT_COMMAND = "cabextract"


def find_extractor() -> Optional[Tuple[str, str]]:
    """
    Find an extraction tool.

    Returns:
        A (kind, path) tuple where kind is "7z" or "cabextract", or None if no
        tool is available
    """
    override = os.environ.get(ENV_EXTRACTOR)
    if override:
        path = shutil.which(override)
        if path:
            return "7z", path
        logger.warning(f"{ENV_EXTRACTOR}='{override}' not found, searching PATH")

    for cmd in SEVEN_ZIP_COMMANDS:
        path = shutil.which(cmd)
        if path:
            return "7z", path

    path = shutil.which(CABEXTRACT_COMMAND)
    if path:
        return "cabextract", path
    return None


def _build_command(kind: str, tool: str, archive: str, destination: str) -> List[str]:
    if kind == "cabextract":
        return [tool, "-q", "-d", destination, archive]
    return [tool, "x", "-y", f"-o{destination}", archive]


def extract_archive(archive: str, destination: str) -> None:
    """
    Unpack a cabinet archive into a directory.

    Args:
        archive: Path to the .cab file
        destination: Directory receiving the archive contents

    Raises:
        ExtractionFailed: If no tool is available or the tool reports an error
    """
    if not os.path.isfile(archive):
        raise ExtractionFailed(f"Archive '{archive}' not found")

    extractor = find_extractor()
    if extractor is None:
        raise ExtractionFailed(
            "No archive extractor found. Install 7-Zip (7z) or cabextract, "
            f"or set {ENV_EXTRACTOR}"
        )
    kind, tool = extractor

    os.makedirs(destination, exist_ok=True)
    cmd = _build_command(kind, tool, archive, destination)
    logger.debug(f"Running {' '.join(cmd)}")
    try:
        result = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
        )
    except OSError as e:
        raise ExtractionFailed(f"Unable to run {tool}: {e}") from e

    if result.returncode != 0:
        output = (result.stderr or result.stdout or "").strip()
        raise ExtractionFailed(
            f"{os.path.basename(tool)} exited with status {result.returncode}: {output}"
        )
