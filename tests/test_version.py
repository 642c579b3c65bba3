#!/usr/bin/env python
"""Tests for webview-runtime version handling."""

import re
from unittest.mock import patch

from webview_runtime import cli


def test_version_imports():
    """Test that version attributes are properly imported."""
    from webview_runtime.version import __license__, __runtime_product__, __version__

    assert isinstance(__version__, str)
    assert len(__version__.split(".")) >= 3
    assert __runtime_product__ == "Microsoft.WebView2.FixedVersionRuntime"
    assert __license__ == "MIT"


def test_get_version_info():
    """Test the get_version_info function."""
    import webview_runtime.version as version

    version_info = version.get_version_info()
    assert version_info == {
        "version": version.__version__,
        "runtime_product": version.__runtime_product__,
        "license": version.__license__,
    }


def test_import_version():
    """Test that version is correctly exported from the package."""
    from webview_runtime import __version__

    assert re.fullmatch(r"\d+\.\d+\.\d+", __version__)


def test_product_prefix_matches_constants():
    """The installed directory prefix is the runtime product name."""
    from webview_runtime.constants import WEBVIEW_PRODUCT_PREFIX
    from webview_runtime.version import __runtime_product__

    assert WEBVIEW_PRODUCT_PREFIX == __runtime_product__


def test_wrapper_version_output(capsys):
    """Test that --wrapper-version prints the package version."""
    with patch("webview_runtime.version.__version__", "9.8.7"):
        assert cli.main(["--wrapper-version"]) == 0

    assert capsys.readouterr().out.strip() == "webview-runtime v9.8.7"
