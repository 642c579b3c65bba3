"""
Rewriting of the Tauri configuration to reference the installed runtime.
"""

import json
import logging
import os
from typing import Optional

from .constants import TAURI_INSTALL_PATH_KEYS
from .errors import ConfigUpdateFailed

logger = logging.getLogger(__name__)

DEFAULT_FORMAT_OPTIONS = {"tabWidth": 2, "useTabs": False, "endOfLine": "lf"}

_LINE_ENDINGS = {"lf": "\n", "crlf": "\r\n", "cr": "\r"}


def load_format_options(prettier_config_file: Optional[str]) -> dict:
    """
    Read JSON formatting rules from a Prettier configuration file.

    Only ``tabWidth``, ``useTabs`` and ``endOfLine`` are honoured. The file is
    optional: a missing or unreadable file, or one that is not JSON, yields the
    defaults.
    """
    options = dict(DEFAULT_FORMAT_OPTIONS)
    if not prettier_config_file or not os.path.isfile(prettier_config_file):
        return options

    try:
        with open(prettier_config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(
            f"Ignoring formatting rules in '{prettier_config_file}': {e}"
        )
        return options
    if not isinstance(data, dict):
        return options

    # Per-file overrides for JSON take precedence
    for override in data.get("overrides") or []:
        if not isinstance(override, dict):
            continue
        files = override.get("files")
        files = [files] if isinstance(files, str) else files or []
        if any(pattern.endswith(".json") for pattern in files if isinstance(pattern, str)):
            data = {**data, **(override.get("options") or {})}

    if isinstance(data.get("tabWidth"), int) and data["tabWidth"] >= 0:
        options["tabWidth"] = data["tabWidth"]
    if isinstance(data.get("useTabs"), bool):
        options["useTabs"] = data["useTabs"]
    if data.get("endOfLine") in _LINE_ENDINGS:
        options["endOfLine"] = data["endOfLine"]
    return options


def format_json(document, options: dict) -> str:
    """Serialize a JSON document using the given formatting options."""
    indent = "\t" if options["useTabs"] else " " * options["tabWidth"]
    text = json.dumps(document, indent=indent, ensure_ascii=False) + "\n"
    newline = _LINE_ENDINGS[options["endOfLine"]]
    if newline != "\n":
        text = text.replace("\n", newline)
    return text


def set_install_path(document, install_path: str) -> None:
    """Set the WebView install path inside a parsed Tauri configuration."""
    *sections, field = TAURI_INSTALL_PATH_KEYS
    node = document
    walked = []
    for section in sections:
        walked.append(section)
        if not isinstance(node, dict) or not isinstance(node.get(section), dict):
            raise ConfigUpdateFailed(
                f"Tauri configuration has no '{'.'.join(walked)}' section"
            )
        node = node[section]
    node[field] = install_path


def update_tauri_config(
    config_file: str, dirname: str, prettier_config_file: Optional[str] = None
) -> str:
    """
    Point the Tauri WebView install path at an installed runtime directory.

    The file is overwritten in place; no backup is kept.

    Args:
        config_file: Path to tauri.conf.json
        dirname: Name of the installed runtime directory
        prettier_config_file: Optional formatting rules

    Returns:
        The install path written to the file

    Raises:
        ConfigUpdateFailed: If the file is missing, malformed or unwritable
    """
    install_path = f"./{dirname}/"

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            document = json.load(f)
    except FileNotFoundError as e:
        raise ConfigUpdateFailed(f"Tauri configuration file '{config_file}' not found") from e
    except ValueError as e:
        raise ConfigUpdateFailed(
            f"Tauri configuration file '{config_file}' is not valid JSON: {e}"
        ) from e
    except OSError as e:
        raise ConfigUpdateFailed(
            f"Unable to read Tauri configuration file '{config_file}': {e}"
        ) from e

    set_install_path(document, install_path)
    text = format_json(document, load_format_options(prettier_config_file))

    try:
        with open(config_file, "w", encoding="utf-8", newline="") as f:
            f.write(text)
    except OSError as e:
        raise ConfigUpdateFailed(
            f"Unable to write Tauri configuration file '{config_file}': {e}"
        ) from e

    logger.debug(f"Set WebView install path to '{install_path}'")
    return install_path
