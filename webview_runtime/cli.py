#!/usr/bin/env python
"""
Command-line interface for installing a fixed-version WebView2 runtime.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from . import version, version_helper
from .constants import (
    ARCHITECTURES,
    DEFAULT_ARCHITECTURE,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_PRETTIER_CONFIG_FILE,
    ENV_DEBUG,
    LATEST,
    TAURI_CONFIG_FILENAME,
    get_webview_url,
)
from .errors import WebViewError
from .metadata import fetch_webview_metadata
from .pipeline import PipelineConfig, PipelineState, WebViewPipeline
from .resolver import available_versions

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def version_selector(value: str) -> str:
    """argparse type accepting "latest" or an exact four-part version."""
    if not version_helper.is_valid_selector(value):
        raise argparse.ArgumentTypeError(f"Invalid version '{value}'")
    return value


def existing_directory(value: str) -> str:
    """argparse type accepting an existing directory."""
    if not os.path.isdir(value):
        raise argparse.ArgumentTypeError(f"Invalid output directory '{value}'")
    return os.path.abspath(value)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="webview-runtime",
        description="Download and install a fixed-version WebView2 runtime for a Tauri bundle",
    )
    parser.add_argument(
        "--architecture",
        choices=ARCHITECTURES,
        default=DEFAULT_ARCHITECTURE,
        help="Architecture (default: %(default)s)",
    )
    parser.add_argument(
        "--version",
        type=version_selector,
        default=LATEST,
        help="Version, 'latest' or N.N.N.N (default: %(default)s)",
    )
    parser.add_argument(
        "--output",
        type=existing_directory,
        default=None,
        help=f"Output directory (default: {DEFAULT_OUTPUT_DIR})",
    )
    parser.add_argument(
        "--update",
        action=argparse.BooleanOptionalAction,
        default=True,
        help=f"Overwrite {TAURI_CONFIG_FILENAME} (default: on)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"Tauri configuration file (default: <output>/{TAURI_CONFIG_FILENAME})",
    )
    parser.add_argument(
        "--prettier-config",
        default=DEFAULT_PRETTIER_CONFIG_FILE,
        help="Formatting rules for the configuration file (default: %(default)s)",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Page carrying the WebView version data",
    )
    parser.add_argument(
        "--sort-by-version",
        action="store_true",
        help="Resolve 'latest' to the highest version number instead of the first published one",
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        help="Show a download progress bar",
    )
    parser.add_argument(
        "--list-versions",
        action="store_true",
        help="List the published versions and exit",
    )
    parser.add_argument(
        "--wrapper-version",
        action="store_true",
        help="Print the version of this tool",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show verbose output",
    )
    return parser


def list_versions(url: str) -> int:
    entries = fetch_webview_metadata(url)
    for line in available_versions(entries):
        print(line)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        0 on success, 1 if the run failed
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose or os.environ.get(ENV_DEBUG) == "1":
        logging.getLogger("webview_runtime").setLevel(logging.DEBUG)

    if args.wrapper_version:
        print(f"webview-runtime v{version.__version__}")
        return 0

    url = args.url or get_webview_url()

    if args.list_versions:
        try:
            return list_versions(url)
        except WebViewError as e:
            logger.error(f"Error WebView: {e}")
            return 1

    output = args.output
    if output is None:
        if not os.path.isdir(DEFAULT_OUTPUT_DIR):
            parser.error(f"Invalid output directory '{DEFAULT_OUTPUT_DIR}'")
        output = DEFAULT_OUTPUT_DIR

    config = PipelineConfig(
        output_dir=output,
        config_file=args.config,
        prettier_config_file=args.prettier_config,
        update_config=args.update,
        page_url=url,
        sort_by_version=args.sort_by_version,
        show_progress=args.progress,
    )
    pipeline = WebViewPipeline(config)
    try:
        result = pipeline.run(args.version, args.architecture)
    except WebViewError as e:
        stage = pipeline.failed_stage or PipelineState.IDLE
        logger.error(f"Error WebView while {stage.value}: {e}")
        return 1
    except KeyboardInterrupt:
        logger.error("Interrupted")
        return 130

    print(result.installed_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
