"""
Orchestration of the WebView runtime acquisition pipeline.

A run walks through the stages strictly in order::

    IDLE -> METADATA_RESOLVING -> DOWNLOADING -> EXTRACTING -> INSTALLING
         -> (CONFIG_PATCHING) -> DONE

and ends in FAILED if any stage raises. The scratch workspace holding the
downloaded archive and its unpacked contents is removed on every exit path.
"""

import contextlib
import enum
import json
import logging
import os
import shutil
import tempfile
from dataclasses import dataclass, field
from typing import Iterator, Optional

from . import version_helper
from .config_patch import update_tauri_config
from .constants import (
    ARCHITECTURES,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_PRETTIER_CONFIG_FILE,
    TAURI_CONFIG_FILENAME,
    WEBVIEW_ARCHIVE_EXTENSION,
    get_webview_url,
)
from .download import download_file
from .errors import UnexpectedIOError, WebViewError
from .extract import extract_archive
from .installer import install_payload
from .metadata import fetch_webview_metadata
from .resolver import ResolvedDownload, resolve_download

logger = logging.getLogger(__name__)


class PipelineState(enum.Enum):
    IDLE = "idle"
    METADATA_RESOLVING = "metadata resolving"
    DOWNLOADING = "downloading"
    EXTRACTING = "extracting"
    INSTALLING = "installing"
    CONFIG_PATCHING = "config patching"
    DONE = "done"
    FAILED = "failed"


@dataclass
class PipelineConfig:
    """Where a run reads from and writes to."""

    output_dir: str = DEFAULT_OUTPUT_DIR
    config_file: Optional[str] = None
    prettier_config_file: Optional[str] = DEFAULT_PRETTIER_CONFIG_FILE
    update_config: bool = True
    page_url: str = field(default_factory=get_webview_url)
    sort_by_version: bool = False
    show_progress: bool = False
    scratch_root: Optional[str] = None

    def __post_init__(self):
        if self.config_file is None:
            self.config_file = os.path.join(self.output_dir, TAURI_CONFIG_FILENAME)


@dataclass
class PipelineResult:
    download: ResolvedDownload
    installed_path: str
    config_updated: bool


@contextlib.contextmanager
def scratch_workspace(root: Optional[str] = None) -> Iterator[str]:
    """Create a temporary directory and remove it on exit, whatever happens."""
    path = tempfile.mkdtemp(prefix="webview-runtime-", dir=root)
    logger.info(f"Temporary directory is '{path}'")
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)
        logger.debug(f"Removed temporary directory '{path}'")


def validate_request(selector: str, architecture: str) -> None:
    """
    Reject selectors and architectures outside the supported set.

    Raises:
        ValueError: If either value is invalid
    """
    if not version_helper.is_valid_selector(selector):
        raise ValueError(f"Invalid version '{selector}'")
    if architecture not in ARCHITECTURES:
        raise ValueError(
            f"Invalid architecture '{architecture}', expected one of {', '.join(ARCHITECTURES)}"
        )


class WebViewPipeline:
    """Locates, downloads, extracts, installs and registers a WebView2 runtime."""

    def __init__(self, config: PipelineConfig):
        self.config = config
        self.state = PipelineState.IDLE
        self.failed_stage: Optional[PipelineState] = None

    def _enter(self, state: PipelineState) -> None:
        logger.debug(f"Pipeline state: {self.state.value} -> {state.value}")
        self.state = state

    def resolve(self, selector: str, architecture: str) -> ResolvedDownload:
        """Fetch the vendor metadata and resolve the selector against it."""
        self._enter(PipelineState.METADATA_RESOLVING)
        logger.info(
            f"Searching WebView data for version '{selector}' and architecture '{architecture}'"
        )
        entries = fetch_webview_metadata(self.config.page_url)
        download = resolve_download(
            entries, selector, architecture, sort_by_version=self.config.sort_by_version
        )
        logger.info(f"WebView data is '{json.dumps(download.to_dict())}'")
        return download

    def run(self, selector: str, architecture: str) -> PipelineResult:
        """
        Acquire and install the runtime matching ``selector`` and ``architecture``.

        Raises:
            ValueError: If the selector or architecture is invalid
            WebViewError: If any stage fails; the scratch workspace has already
                been removed when this propagates
        """
        validate_request(selector, architecture)
        if self.state is not PipelineState.IDLE:
            raise RuntimeError(f"Pipeline already ran (state: {self.state.value})")

        try:
            return self._run(selector, architecture)
        except WebViewError as e:
            self._fail(e)
            raise
        except OSError as e:
            self._fail(e)
            raise UnexpectedIOError(
                f"Unexpected I/O error while {self.failed_stage.value}: {e}"
            ) from e
        except BaseException as e:
            self._fail(e)
            raise

    def _fail(self, error: BaseException) -> None:
        self.failed_stage = self.state
        self.state = PipelineState.FAILED
        logger.debug(f"Pipeline failed while {self.failed_stage.value}: {error!r}")

    def _run(self, selector: str, architecture: str) -> PipelineResult:
        download = self.resolve(selector, architecture)
        dirname = download.dirname
        output = os.path.abspath(os.path.join(self.config.output_dir, dirname))

        logger.info("Creating temporary directory")
        with scratch_workspace(self.config.scratch_root) as tmp_dir:
            archive = os.path.join(tmp_dir, f"{dirname}{WEBVIEW_ARCHIVE_EXTENSION}")
            webview = os.path.join(tmp_dir, dirname)

            self._enter(PipelineState.DOWNLOADING)
            logger.info(f"Downloading WebView from '{download.url}' to '{archive}'")
            download_file(download.url, archive, show_progress=self.config.show_progress)
            logger.info(f"WebView downloaded to '{archive}'")

            self._enter(PipelineState.EXTRACTING)
            logger.info(f"Extracting '{archive}' to '{tmp_dir}'")
            extract_archive(archive, tmp_dir)
            logger.info(f"WebView extracted to '{tmp_dir}'")

            self._enter(PipelineState.INSTALLING)
            logger.info(f"Moving '{webview}' to '{output}'")
            install_payload(webview, output)
            logger.info(f"WebView moved to '{output}'")

        config_updated = False
        if self.config.update_config:
            self._enter(PipelineState.CONFIG_PATCHING)
            logger.info(f"Updating Tauri configuration file '{self.config.config_file}'")
            update_tauri_config(
                self.config.config_file, dirname, self.config.prettier_config_file
            )
            logger.info(f"Updated Tauri configuration file '{self.config.config_file}'")
            config_updated = True

        self._enter(PipelineState.DONE)
        return PipelineResult(
            download=download, installed_path=output, config_updated=config_updated
        )
