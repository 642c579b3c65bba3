#!/usr/bin/env python
"""Setup script for webview-runtime package."""

import os
import re
from setuptools import setup, find_packages


# Read the long description from README.md
def read_long_description():
    """Read the long description from README.md."""
    with open("README.md", "r", encoding="utf-8") as fh:
        return fh.read()


def get_version():
    """Get the package version from version.py."""
    # Read version from version.py, no fallbacks
    try:
        with open(os.path.join("webview_runtime", "version.py"), "r") as f:
            version_content = f.read()
            version_match = re.search(
                r'__version__\s*=\s*["\']([^"\']+)["\']', version_content
            )
            if version_match:
                return version_match.group(1)
            else:
                raise ValueError("Could not find __version__ in version.py")
    except (IOError, FileNotFoundError) as e:
        raise RuntimeError(f"Could not read version from version.py: {e}")


setup(
    name="webview-runtime",
    version=get_version(),
    description="Download and install a fixed-version WebView2 runtime for Tauri bundles",
    long_description=read_long_description(),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    entry_points={
        "console_scripts": [
            "webview-runtime=webview_runtime.cli:main",
        ],
    },
    install_requires=[],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
