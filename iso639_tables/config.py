"""Configuration management for iso639-tables.

This module centralizes file-system paths, environment variables, and the
JSON configuration loaders used by the scraping and rendering pipeline.

Configuration files
-------------------
* ``config.json``: shared project config (HTTP client, output directory,
  dataset list)
* ``<dataset>/sources.json``: per-dataset source definitions (URLs, table
  selectors, column indices, row parsers, patches, reconciliation and CSV
  columns)

Environment variables
---------------------
``CONFIG_DIR``, ``DATA_DIR`` and ``LOGS_DIR`` override default directories.
The logs directory is created eagerly on import; the data directory is only
created when output files are written.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, cast

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
CONFIG_DIR = Path(os.getenv("CONFIG_DIR", PROJECT_ROOT / "config"))
DATA_DIR = Path(os.getenv("DATA_DIR", PROJECT_ROOT / "data"))
LOGS_DIR = Path(os.getenv("LOGS_DIR", PROJECT_ROOT / "logs"))

LOGS_DIR.mkdir(parents=True, exist_ok=True)

DEFAULT_USER_AGENT = "iso639-tables/0.1.0"
DEFAULT_TIMEOUT = 60.0


def setup_logging(name: str = "iso639_tables") -> logging.Logger:
    """Configure a console+file logger if not already present.

    Parameters
    ----------
    name : str, optional
        Logger namespace; reused to avoid duplicate handlers.

    Returns
    -------
    logging.Logger
        Logger with INFO-level console handler and DEBUG-level file handler
        under ``LOGS_DIR``.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger.setLevel(logging.DEBUG)

        # Console handler
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_format = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
        console_handler.setFormatter(console_format)
        logger.addHandler(console_handler)

        # File handler
        log_filename = f"{datetime.now(UTC).strftime('%Y-%m-%d')}_run.log"
        file_handler = logging.FileHandler(LOGS_DIR / log_filename, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_format = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        file_handler.setFormatter(file_format)
        logger.addHandler(file_handler)

    return logger


def set_console_level(level: int, prefix: str = "iso639_tables") -> None:
    """Change the console handler level of every package logger.

    File handlers keep logging at DEBUG.
    """
    for name, logger in logging.Logger.manager.loggerDict.items():
        if not name.startswith(prefix) or not isinstance(logger, logging.Logger):
            continue
        for handler in logger.handlers:
            if not isinstance(handler, logging.FileHandler):
                handler.setLevel(level)


def _load_json(path: Path, label: str) -> dict[str, Any]:
    """Read a JSON config file, raising a descriptive error when missing."""
    if not path.exists():
        msg = f"{label} not found: {path}"
        raise FileNotFoundError(msg)

    with path.open(encoding="utf-8") as f:
        return json.load(f)  # type: ignore[no-any-return]


def get_config() -> dict[str, Any]:
    """Load the primary project configuration.

    Returns
    -------
    dict[str, Any]
        Parsed contents of ``config/config.json`` including HTTP settings,
        the output directory name, and the list of known datasets.

    Raises
    ------
    FileNotFoundError
        If ``config/config.json`` is missing.
    json.JSONDecodeError
        If the file exists but is not valid JSON.
    """
    return _load_json(CONFIG_DIR / "config.json", "Configuration file")


def get_dataset_config(dataset: str) -> dict[str, Any]:
    """Load the source definitions for one dataset.

    Parameters
    ----------
    dataset : str
        Dataset identifier such as ``"iso_639_1"``.

    Returns
    -------
    dict[str, Any]
        Parsed ``config/<dataset>/sources.json``.

    Raises
    ------
    FileNotFoundError
        If the dataset has no ``sources.json``.
    """
    return _load_json(CONFIG_DIR / dataset / "sources.json", f"Dataset config for '{dataset}'")


def get_dataset_ids(config: dict[str, Any] | None = None) -> list[str]:
    """Return the dataset identifiers declared in ``config.json``."""
    if config is None:
        config = get_config()
    return cast("list[str]", config.get("datasets", []))


def get_http_settings(config: dict[str, Any] | None = None) -> dict[str, Any]:
    """Return HTTP client settings with defaults filled in.

    Parameters
    ----------
    config : dict[str, Any] | None, optional
        Preloaded config; when ``None`` it is fetched via :func:`get_config`.

    Returns
    -------
    dict[str, Any]
        Mapping with ``timeout`` (seconds) and ``user_agent`` keys.
    """
    if config is None:
        config = get_config()

    http = config.get("http", {})
    return {
        "timeout": float(http.get("timeout", DEFAULT_TIMEOUT)),
        "user_agent": http.get("user_agent", DEFAULT_USER_AGENT),
    }


def get_output_dir(override: Path | str | None = None, config: dict[str, Any] | None = None) -> Path:
    """Resolve the directory rendered files are written to.

    An explicit ``override`` wins; otherwise ``output.directory`` from
    ``config.json`` is resolved against ``PROJECT_ROOT`` when relative,
    falling back to ``DATA_DIR`` when unset.
    """
    if override is not None:
        return Path(override)

    if config is None:
        config = get_config()

    directory = config.get("output", {}).get("directory")
    if not directory:
        return DATA_DIR

    path = Path(directory)
    return path if path.is_absolute() else PROJECT_ROOT / path
