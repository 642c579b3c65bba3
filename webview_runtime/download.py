"""
Streaming download of the runtime package.
"""

import http.client
import logging
import os
import urllib.error
import urllib.request

from .constants import USER_AGENT
from .errors import DownloadFailed
from .progress import ProgressBar

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def _content_length(response) -> int:
    """Return the announced body size, or 0 when it is missing or malformed."""
    value = response.headers.get("Content-Length")
    try:
        length = int(value)
    except (TypeError, ValueError):
        if value is not None:
            logger.debug(f"Ignoring malformed Content-Length '{value}'")
        return 0
    return max(length, 0)


def download_file(url: str, file_path: str, show_progress: bool = False) -> str:
    """
    Download a file from a URL.

    The body is streamed to disk in chunks and fully written before returning.
    When the server announces a size, a body of any other size is rejected.

    Args:
        url: URL to download from
        file_path: Path to save the file to
        show_progress: Draw a progress bar on stderr

    Returns:
        The path to the downloaded file

    Raises:
        DownloadFailed: If the download fails due to network issues, arrives
            truncated, or the file cannot be written
    """
    request = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
    try:
        with urllib.request.urlopen(request) as response:
            total = _content_length(response)
            received = 0
            bar = None
            if show_progress:
                bar = ProgressBar(total, desc=f"Downloading {os.path.basename(file_path)}")
            try:
                with open(file_path, "wb") as f:
                    while True:
                        chunk = response.read(CHUNK_SIZE)
                        if not chunk:
                            break
                        f.write(chunk)
                        received += len(chunk)
                        if bar:
                            bar.update(len(chunk))
            finally:
                if bar:
                    bar.close()
    except urllib.error.HTTPError as e:
        # HTTP errors (404, 500, etc.)
        _cleanup_partial_download(file_path)
        raise DownloadFailed(f"HTTP error downloading {url}: {e.code} {e.reason}") from e
    except urllib.error.URLError as e:
        # Network-related errors (DNS, connection refused, timeout, etc.)
        _cleanup_partial_download(file_path)
        raise DownloadFailed(f"Failed to download {url}: {e.reason}") from e
    except http.client.HTTPException as e:
        # Protocol errors (connection cut mid-body, malformed response, etc.)
        _cleanup_partial_download(file_path)
        raise DownloadFailed(f"Failed to download {url}: {e!r}") from e
    except OSError as e:
        # File system errors (permission denied, disk full, etc.)
        _cleanup_partial_download(file_path)
        raise DownloadFailed(f"Failed to save {url} to {file_path}: {e}") from e

    if total and received != total:
        _cleanup_partial_download(file_path)
        raise DownloadFailed(
            f"Incomplete download of {url}: received {received} of {total} bytes"
        )

    logger.debug(f"Saved {received} bytes to {file_path}")
    return file_path


def _cleanup_partial_download(file_path: str) -> None:
    """Remove a partially downloaded file if it exists."""
    try:
        if os.path.exists(file_path):
            os.unlink(file_path)
    except OSError:
        pass  # Best effort cleanup
