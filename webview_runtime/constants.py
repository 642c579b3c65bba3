"""
Shared constants for the webview-runtime package.

This module centralizes all constants to avoid duplication across modules.
"""

import os

# Vendor page embedding the fixed-version runtime metadata
WEBVIEW_URL = "https://developer.microsoft.com/it-it/microsoft-edge/webview2"

# Name of the variable declared by the data-carrying inline script
WEBVIEW_DATA_VARIABLE = "webviewVersionData"

# Nonce carried by the vendor's data-carrying inline script
WEBVIEW_SCRIPT_NONCE = "inline_content"

# Prefix of every installed runtime directory
WEBVIEW_PRODUCT_PREFIX = "Microsoft.WebView2.FixedVersionRuntime"

# Extension of the downloaded package
WEBVIEW_ARCHIVE_EXTENSION = ".cab"

# Version selector resolving to the newest published runtime
LATEST = "latest"

# Supported architectures
ARCHITECTURES = ("arm64", "x64", "x86")
DEFAULT_ARCHITECTURE = "x64"

# Default project layout, relative to the working directory
DEFAULT_OUTPUT_DIR = os.path.join(os.getcwd(), "src-tauri")
TAURI_CONFIG_FILENAME = "tauri.conf.json"
DEFAULT_PRETTIER_CONFIG_FILE = os.path.join(os.getcwd(), ".prettierrc")

# Location of the install path inside tauri.conf.json
TAURI_INSTALL_PATH_KEYS = ("tauri", "bundle", "windows", "webviewInstallMode", "path")

# Browser-like user agent, the vendor page rejects bare urllib requests
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)

# Environment overrides
ENV_URL = "WEBVIEW_RUNTIME_URL"
ENV_EXTRACTOR = "WEBVIEW_RUNTIME_EXTRACTOR"
ENV_DEBUG = "WEBVIEW_RUNTIME_DEBUG"


def get_webview_url() -> str:
    """Return the metadata page URL, honouring the environment override."""
    return os.environ.get(ENV_URL) or WEBVIEW_URL
