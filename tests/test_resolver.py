"""
Unit tests for the resolver module.

Tests cover selector resolution, architecture lookup and the installation
directory naming scheme.
"""

import pytest

from conftest import make_entries
from webview_runtime.errors import ArchitectureNotFound, VersionNotFound
from webview_runtime.resolver import (
    ResolvedDownload,
    available_versions,
    resolve_download,
)


class TestResolveDownload:
    """Tests for resolve_download."""

    def test_latest_picks_first_entry(self, sample_entries):
        result = resolve_download(sample_entries, "latest", "x64")
        assert result == ResolvedDownload(
            url="https://example.com/124/x64.cab",
            version="124.0.2478.51",
            architecture="x64",
        )

    def test_latest_follows_list_order_not_version_order(self):
        entries = make_entries(
            [
                {"version": "1.0.0.1", "data": [{"architecture": "x64", "url": "http://x/old.cab"}]},
                {"version": "9.0.0.0", "data": [{"architecture": "x64", "url": "http://x/new.cab"}]},
            ]
        )
        result = resolve_download(entries, "latest", "x64")
        assert result.version == "1.0.0.1"
        assert result.url == "http://x/old.cab"

    def test_latest_sorted_by_version(self):
        entries = make_entries(
            [
                {"version": "1.0.0.10", "data": [{"architecture": "x64", "url": "http://x/10.cab"}]},
                {"version": "1.0.0.9", "data": [{"architecture": "x64", "url": "http://x/9.cab"}]},
                {"version": "1.0.0.11", "data": [{"architecture": "x64", "url": "http://x/11.cab"}]},
            ]
        )
        result = resolve_download(entries, "latest", "x64", sort_by_version=True)
        assert result.version == "1.0.0.11"
        assert result.url == "http://x/11.cab"

    def test_latest_sorted_without_valid_versions(self):
        entries = make_entries([{"version": "beta", "data": []}])
        with pytest.raises(VersionNotFound):
            resolve_download(entries, "latest", "x64", sort_by_version=True)

    def test_exact_version(self, sample_entries):
        result = resolve_download(sample_entries, "123.0.2420.97", "x86")
        assert result.version == "123.0.2420.97"
        assert result.url == "https://example.com/123/x86.cab"
        assert result.architecture == "x86"

    def test_exact_version_never_returns_other_version(self, sample_entries):
        for entry in sample_entries:
            result = resolve_download(sample_entries, entry.version, "x64")
            assert result.version == entry.version

    def test_unknown_version(self, sample_entries):
        with pytest.raises(VersionNotFound) as exc_info:
            resolve_download(sample_entries, "9.9.9.9", "x64")
        assert "9.9.9.9" in str(exc_info.value)

    def test_version_match_is_exact(self, sample_entries):
        # No prefix or numeric normalization
        with pytest.raises(VersionNotFound):
            resolve_download(sample_entries, "124.0.2478.051", "x64")

    def test_missing_architecture(self, sample_entries):
        with pytest.raises(ArchitectureNotFound) as exc_info:
            resolve_download(sample_entries, "123.0.2420.97", "arm64")
        assert "123.0.2420.97" in str(exc_info.value)
        assert "arm64" in str(exc_info.value)

    def test_architecture_match_is_case_sensitive(self, sample_entries):
        with pytest.raises(ArchitectureNotFound):
            resolve_download(sample_entries, "latest", "X64")

    def test_every_present_architecture_resolves(self, sample_entries):
        entry = sample_entries[0]
        for download in entry.downloads:
            result = resolve_download(sample_entries, entry.version, download.architecture)
            assert result.url == download.url

    def test_empty_entries(self):
        with pytest.raises(VersionNotFound):
            resolve_download([], "latest", "x64")


class TestResolvedDownload:
    """Tests for the ResolvedDownload value."""

    def test_dirname(self):
        download = ResolvedDownload("http://x/a.cab", "1.0.0.1", "x64")
        assert download.dirname == "Microsoft.WebView2.FixedVersionRuntime.1.0.0.1.x64"

    def test_end_to_end_resolution(self):
        entries = make_entries(
            [{"version": "1.0.0.1", "data": [{"architecture": "x64", "url": "http://x/a.cab"}]}]
        )
        result = resolve_download(entries, "latest", "x64")
        assert result.to_dict() == {
            "url": "http://x/a.cab",
            "version": "1.0.0.1",
            "architecture": "x64",
        }
        assert result.dirname == "Microsoft.WebView2.FixedVersionRuntime.1.0.0.1.x64"

    def test_immutable(self):
        download = ResolvedDownload("http://x/a.cab", "1.0.0.1", "x64")
        with pytest.raises(AttributeError):
            download.version = "2.0.0.0"


def test_available_versions(sample_entries):
    assert available_versions(sample_entries) == [
        "124.0.2478.51 (arm64, x64, x86)",
        "123.0.2420.97 (x64, x86)",
    ]
