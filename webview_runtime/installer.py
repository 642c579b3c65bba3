"""
Installation of the unpacked runtime into its final directory.
"""

import logging
import os
import shutil

from .errors import PayloadNotFound

logger = logging.getLogger(__name__)


def _remove(path: str) -> None:
    if os.path.isdir(path) and not os.path.islink(path):
        shutil.rmtree(path, ignore_errors=True)
    elif os.path.lexists(path):
        os.unlink(path)


def install_payload(payload_dir: str, destination: str) -> str:
    """
    Move an unpacked runtime directory to its final location.

    Any existing directory at ``destination`` is replaced, never merged. The
    payload is first moved next to the destination and then swapped in, so
    the destination holds either the old or the complete new runtime.

    Args:
        payload_dir: Unpacked runtime directory inside the scratch workspace
        destination: Final installation directory

    Returns:
        The destination path

    Raises:
        PayloadNotFound: If ``payload_dir`` does not exist
    """
    if not os.path.isdir(payload_dir):
        raise PayloadNotFound(f"WebView '{payload_dir}' not found")

    destination = os.path.abspath(destination)
    parent = os.path.dirname(destination)
    name = os.path.basename(destination)
    staging = os.path.join(parent, f".{name}.staging")
    previous = os.path.join(parent, f".{name}.previous")

    # Leftovers from an interrupted run
    for leftover in (staging, previous):
        if os.path.lexists(leftover):
            logger.debug(f"Removing leftover '{leftover}'")
            _remove(leftover)

    os.makedirs(parent, exist_ok=True)
    shutil.move(payload_dir, staging)

    if os.path.lexists(destination):
        logger.debug(f"Replacing existing '{destination}'")
        os.rename(destination, previous)
    try:
        os.rename(staging, destination)
    except OSError:
        if os.path.lexists(previous):
            os.rename(previous, destination)
        raise

    if os.path.lexists(previous):
        _remove(previous)
    return destination
