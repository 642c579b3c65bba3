"""
Configuration for webview-runtime tests.
"""

import json
import sys
from pathlib import Path
from unittest import mock

import pytest

# Add the project root to path if running tests directly
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from webview_runtime.constants import TAURI_INSTALL_PATH_KEYS  # noqa: E402
from webview_runtime.metadata import ArchitectureDownload, WebViewMetadataEntry  # noqa: E402


SAMPLE_DATA = [
    {
        "version": "124.0.2478.51",
        "data": [
            {"architecture": "arm64", "url": "https://example.com/124/arm64.cab"},
            {"architecture": "x64", "url": "https://example.com/124/x64.cab"},
            {"architecture": "x86", "url": "https://example.com/124/x86.cab"},
        ],
    },
    {
        "version": "123.0.2420.97",
        "data": [
            {"architecture": "x64", "url": "https://example.com/123/x64.cab"},
            {"architecture": "x86", "url": "https://example.com/123/x86.cab"},
        ],
    },
]


def make_page(script_body, nonce="inline_content", extra_scripts=""):
    """Build a vendor-like page embedding ``script_body`` in an inline script."""
    nonce_attr = f' nonce="{nonce}"' if nonce is not None else ""
    return (
        "<!DOCTYPE html><html><head><title>WebView2</title>"
        '<script src="/static/app.js"></script>'
        f"{extra_scripts}"
        "</head><body><div id=\"content\">Microsoft Edge WebView2</div>"
        f"<script{nonce_attr}>{script_body}</script>"
        "</body></html>"
    )


def make_entries(data=None):
    """Build metadata entries from raw vendor-shaped data."""
    return [
        WebViewMetadataEntry(
            item["version"],
            tuple(
                ArchitectureDownload(pair["architecture"], pair["url"])
                for pair in item["data"]
            ),
        )
        for item in (SAMPLE_DATA if data is None else data)
    ]


def read_install_path(config_file):
    """Return the WebView install path currently set in a Tauri configuration."""
    with open(config_file, "r", encoding="utf-8") as f:
        node = json.load(f)
    for key in TAURI_INSTALL_PATH_KEYS:
        if not isinstance(node, dict) or key not in node:
            return None
        node = node[key]
    return node


def mock_http_response(body=b"", headers=None, charset="utf-8"):
    """Build a context-manager response object as returned by urlopen."""
    response = mock.MagicMock()
    response.__enter__.return_value = response
    response.__exit__.return_value = False
    response.headers.get.side_effect = lambda key, default=None: (headers or {}).get(
        key, default
    )
    response.headers.get_content_charset.return_value = charset

    stream = [body[i : i + 4096] for i in range(0, len(body), 4096)] + [b""]
    response.read.side_effect = lambda *args: stream.pop(0) if args else body
    return response


@pytest.fixture
def sample_page():
    return make_page(f"var webviewVersionData = {json.dumps(SAMPLE_DATA)};")


@pytest.fixture
def sample_entries():
    return make_entries()


@pytest.fixture
def tauri_config(tmp_path):
    """A minimal tauri.conf.json inside a fake src-tauri directory."""
    config_file = tmp_path / "tauri.conf.json"
    config_file.write_text(
        json.dumps(
            {
                "package": {"productName": "demo", "version": "0.1.0"},
                "tauri": {
                    "bundle": {
                        "identifier": "com.example.demo",
                        "windows": {
                            "webviewInstallMode": {
                                "type": "fixedRuntime",
                                "path": "./old/",
                            }
                        },
                    }
                },
            }
        ),
        encoding="utf-8",
    )
    return config_file


def pytest_addoption(parser):
    """Add custom command line options to pytest."""
    parser.addoption(
        "--slow",
        action="store_true",
        default=False,
        help="Run slow tests that download and unpack a full runtime",
    )
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="Run integration tests that perform real downloads and operations",
    )


def pytest_configure(config):
    """Configure pytest based on command line options."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")
    config.addinivalue_line("markers", "integration: mark test as integration test")


def pytest_collection_modifyitems(config, items):
    """Skip slow and integration tests unless respective flags are specified."""
    # Handle slow tests
    if not config.getoption("--slow"):
        skip_slow = pytest.mark.skip(reason="Need --slow option to run")
        for item in items:
            if "slow" in item.keywords:
                item.add_marker(skip_slow)

    # Handle integration tests
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="Need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)
