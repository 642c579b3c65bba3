"""
Discovery of the published WebView2 fixed-version runtimes.

The vendor's developer page embeds the list of fixed-version runtimes as a
JavaScript literal in an inline script tagged with a known nonce. This module
fetches the page, locates that script and reads the literal back without
executing it.
"""

import http.client
import logging
import urllib.error
import urllib.request
from dataclasses import dataclass
from html.parser import HTMLParser
from typing import List, Optional, Tuple

from .constants import (
    USER_AGENT,
    WEBVIEW_DATA_VARIABLE,
    WEBVIEW_SCRIPT_NONCE,
)
from .errors import DownloadFailed, EmptyMetadata, MetadataNotFound
from .script_literal import ScriptLiteralError, parse_variable_declaration

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArchitectureDownload:
    """Download location of one runtime build for one architecture."""

    architecture: str
    url: str


@dataclass(frozen=True)
class WebViewMetadataEntry:
    """A published runtime version and its per-architecture downloads."""

    version: str
    downloads: Tuple[ArchitectureDownload, ...]

    @property
    def architectures(self) -> List[str]:
        return [download.architecture for download in self.downloads]


class _ScriptCollector(HTMLParser):
    """Collects the attributes and text of every inline script in a page."""

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.scripts: List[Tuple[dict, str]] = []
        self._attrs: Optional[dict] = None
        self._chunks: List[str] = []

    def handle_starttag(self, tag, attrs):
        if tag == "script":
            self._attrs = {name: value for name, value in attrs}
            self._chunks = []

    def handle_endtag(self, tag):
        if tag == "script" and self._attrs is not None:
            self.scripts.append((self._attrs, "".join(self._chunks)))
            self._attrs = None

    def handle_data(self, data):
        if self._attrs is not None:
            self._chunks.append(data)


def find_metadata_script(html: str) -> Optional[str]:
    """
    Return the text of the script carrying the runtime metadata.

    Only inline scripts whose nonce matches the vendor sentinel and whose body
    starts with the metadata variable declaration are considered. The first
    such script wins.
    """
    collector = _ScriptCollector()
    collector.feed(html)
    collector.close()

    prefix = f"var {WEBVIEW_DATA_VARIABLE}"
    candidates = [
        text
        for attrs, text in collector.scripts
        if attrs.get("nonce") == WEBVIEW_SCRIPT_NONCE
        and text.lstrip().startswith(prefix)
    ]
    logger.debug(
        f"Found {len(collector.scripts)} scripts, {len(candidates)} carrying runtime data"
    )
    return candidates[0] if candidates else None


def _build_entries(data) -> List[WebViewMetadataEntry]:
    if not isinstance(data, list):
        raise MetadataNotFound(
            f"WebView version data is a {type(data).__name__}, expected a list"
        )

    entries = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise MetadataNotFound(f"WebView version entry {index} is not an object")
        version = item.get("version")
        pairs = item.get("data")
        if not isinstance(version, str) or not isinstance(pairs, list):
            raise MetadataNotFound(
                f"WebView version entry {index} lacks 'version' or 'data'"
            )

        downloads = []
        for pair in pairs:
            if (
                not isinstance(pair, dict)
                or not isinstance(pair.get("architecture"), str)
                or not isinstance(pair.get("url"), str)
            ):
                raise MetadataNotFound(
                    f"WebView version '{version}' has a malformed download entry"
                )
            downloads.append(ArchitectureDownload(pair["architecture"], pair["url"]))
        entries.append(WebViewMetadataEntry(version, tuple(downloads)))
    return entries


def extract_webview_metadata(html: str) -> List[WebViewMetadataEntry]:
    """
    Extract the runtime metadata embedded in the vendor page.

    Args:
        html: Markup of the vendor page

    Returns:
        The published entries, in page order

    Raises:
        MetadataNotFound: If no script carries the data or it cannot be parsed
        EmptyMetadata: If the data lists no versions
    """
    script = find_metadata_script(html)
    if script is None:
        raise MetadataNotFound("WebView script not found")

    try:
        data = parse_variable_declaration(script, WEBVIEW_DATA_VARIABLE)
    except ScriptLiteralError as e:
        raise MetadataNotFound(f"WebView script could not be parsed: {e}") from e

    entries = _build_entries(data)
    if not entries:
        raise EmptyMetadata("WebView version data not found")
    return entries


def fetch_page(url: str) -> str:
    """
    Fetch a web page as text.

    Raises:
        DownloadFailed: If the page cannot be retrieved
    """
    request = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
    try:
        with urllib.request.urlopen(request) as response:
            charset = response.headers.get_content_charset() or "utf-8"
            body = response.read()
    except urllib.error.HTTPError as e:
        raise DownloadFailed(f"HTTP error fetching {url}: {e.code} {e.reason}") from e
    except urllib.error.URLError as e:
        raise DownloadFailed(f"Failed to fetch {url}: {e.reason}") from e
    except http.client.HTTPException as e:
        raise DownloadFailed(f"Failed to fetch {url}: {e!r}") from e
    except OSError as e:
        raise DownloadFailed(f"Failed to fetch {url}: {e}") from e

    try:
        return body.decode(charset, errors="replace")
    except LookupError:
        logger.debug(f"Unknown charset '{charset}' for {url}, decoding as utf-8")
        return body.decode("utf-8", errors="replace")


def fetch_webview_metadata(url: str) -> List[WebViewMetadataEntry]:
    """Fetch the vendor page at ``url`` and extract its runtime metadata."""
    logger.debug(f"Loading WebView page '{url}'")
    entries = extract_webview_metadata(fetch_page(url))
    logger.debug(f"Found {len(entries)} WebView versions")
    return entries
