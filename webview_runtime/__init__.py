"""
webview-runtime - install a fixed-version Microsoft Edge WebView2 runtime for a Tauri bundle.

The package reads the list of published fixed-version runtimes from the
WebView2 developer page, downloads the requested build, unpacks it into the
project and points tauri.conf.json at it, all without running the vendor
installer.
"""

from .version import __version__
from .errors import (
    ArchitectureNotFound,
    ConfigUpdateFailed,
    DownloadFailed,
    EmptyMetadata,
    ExtractionFailed,
    MetadataNotFound,
    PayloadNotFound,
    UnexpectedIOError,
    VersionNotFound,
    WebViewError,
)
from .metadata import WebViewMetadataEntry, fetch_webview_metadata
from .pipeline import PipelineConfig, PipelineResult, PipelineState, WebViewPipeline
from .resolver import ResolvedDownload, resolve_download

__all__ = [
    "__version__",
    "ArchitectureNotFound",
    "ConfigUpdateFailed",
    "DownloadFailed",
    "EmptyMetadata",
    "ExtractionFailed",
    "MetadataNotFound",
    "PayloadNotFound",
    "UnexpectedIOError",
    "VersionNotFound",
    "WebViewError",
    "WebViewMetadataEntry",
    "fetch_webview_metadata",
    "PipelineConfig",
    "PipelineResult",
    "PipelineState",
    "WebViewPipeline",
    "ResolvedDownload",
    "resolve_download",
]
