"""
Errors raised by the WebView runtime pipeline.

Every stage raises a subclass of WebViewError so callers can handle a run
failure with a single except clause.
"""


class WebViewError(Exception):
    """Base class for all pipeline failures."""

    pass


class MetadataNotFound(WebViewError):
    """Raised when the vendor page carries no usable runtime metadata."""

    pass


class EmptyMetadata(WebViewError):
    """Raised when the runtime metadata lists no versions."""

    pass


class VersionNotFound(WebViewError):
    """Raised when no metadata entry matches the requested version."""

    pass


class ArchitectureNotFound(WebViewError):
    """Raised when the resolved version has no download for the architecture."""

    pass


class DownloadFailed(WebViewError):
    """Raised when a remote resource cannot be fetched or saved."""

    pass


class ExtractionFailed(WebViewError):
    """Raised when the downloaded archive cannot be unpacked."""

    pass


class PayloadNotFound(WebViewError):
    """Raised when the unpacked archive lacks the expected runtime directory."""

    pass


class ConfigUpdateFailed(WebViewError):
    """Raised when the Tauri configuration file cannot be rewritten."""

    pass


class UnexpectedIOError(WebViewError):
    """Raised when a stage fails with an unanticipated filesystem error."""

    pass
