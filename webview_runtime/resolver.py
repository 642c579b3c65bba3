"""
Resolution of a version selector against the published runtime metadata.
"""

import logging
from dataclasses import asdict, dataclass
from typing import List, Sequence

from . import version_helper
from .constants import LATEST, WEBVIEW_PRODUCT_PREFIX
from .errors import ArchitectureNotFound, VersionNotFound
from .metadata import WebViewMetadataEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedDownload:
    """The exact runtime build selected for installation."""

    url: str
    version: str
    architecture: str

    @property
    def dirname(self) -> str:
        """Name of the directory the runtime is installed into."""
        return f"{WEBVIEW_PRODUCT_PREFIX}.{self.version}.{self.architecture}"

    def to_dict(self) -> dict:
        return asdict(self)


def _select_entry(
    entries: Sequence[WebViewMetadataEntry], selector: str, sort_by_version: bool
) -> WebViewMetadataEntry:
    if selector == LATEST:
        if not entries:
            raise VersionNotFound(f"Unable to determine WebView data for version '{selector}'")
        if not sort_by_version:
            # Vendor publishes the newest runtime first
            return entries[0]
        newest = version_helper.latest(entry.version for entry in entries)
        if newest is None:
            raise VersionNotFound(
                f"Unable to determine WebView data for version '{selector}': "
                "no entry carries a four-part version"
            )
        selector = newest

    for entry in entries:
        if entry.version == selector:
            return entry
    raise VersionNotFound(f"Unable to determine WebView data for version '{selector}'")


def resolve_download(
    entries: Sequence[WebViewMetadataEntry],
    selector: str,
    architecture: str,
    sort_by_version: bool = False,
) -> ResolvedDownload:
    """
    Pick the download matching a version selector and architecture.

    Args:
        entries: Published metadata entries, in vendor order
        selector: "latest" or an exact four-part version
        architecture: Requested architecture
        sort_by_version: Resolve "latest" to the highest version number instead
            of the first published entry

    Returns:
        The resolved download, always carrying an exact version

    Raises:
        VersionNotFound: If no entry matches the selector
        ArchitectureNotFound: If the matching entry has no download for the
            architecture
    """
    entry = _select_entry(entries, selector, sort_by_version)
    logger.debug(f"Selector '{selector}' resolved to version '{entry.version}'")

    for download in entry.downloads:
        if download.architecture == architecture:
            return ResolvedDownload(
                url=download.url, version=entry.version, architecture=architecture
            )
    raise ArchitectureNotFound(
        f"Unable to determine WebView data for version '{entry.version}' "
        f"and architecture '{architecture}'"
    )


def available_versions(entries: Sequence[WebViewMetadataEntry]) -> List[str]:
    """List the published versions with their architectures, one line each."""
    return [
        f"{entry.version} ({', '.join(entry.architectures) or 'no downloads'})"
        for entry in entries
    ]
