"""
Four-part version utilities for WebView2 runtime versions.
Provides parsing, validation and ordering of ``N.N.N.N`` version strings.
"""

import re

from .constants import LATEST

_VERSION_PATTERN = re.compile(r"([0-9]+)\.([0-9]+)\.([0-9]+)\.([0-9]+)")


def parse_version(version_str):
    """Parse a version string into a tuple of four integers, or None if invalid."""
    match = _VERSION_PATTERN.fullmatch(version_str)
    if not match:
        return None
    return tuple(int(part) for part in match.groups())


def is_valid(version_str):
    """Check if a string is an exact four-part version."""
    return parse_version(version_str) is not None


def is_valid_selector(selector):
    """Check if a string is a usable version selector ("latest" or N.N.N.N)."""
    return selector == LATEST or is_valid(selector)


def latest(versions):
    """
    Return the highest valid version from an iterable of version strings.

    Strings that are not four-part versions are ignored. Returns None when no
    valid version is present.
    """
    valid = [v for v in versions if is_valid(v)]
    if not valid:
        return None
    return max(valid, key=parse_version)
