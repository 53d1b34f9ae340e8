#!/usr/bin/env python3
"""Dataset generator - fetch sources, parse, reconcile and write output files.

This module orchestrates the complete workflow for each requested dataset:
1. Fetch every source page of the dataset (concurrently)
2. Parse each page's table into keyed records
3. Apply manual patches and reconcile sources
4. Render JSON, minified JSON and CSV in memory
5. Write the files to the output directory

Any fatal error aborts the dataset it occurred in; no files are written for
that dataset, and the remaining datasets still run.

Usage (from project root):
    python -m iso639_tables.main
    python -m iso639_tables.main --dataset iso_639_2
    python -m iso639_tables.main -d iso_639_1 iso_639_2 --output-dir /tmp/iso

CLI Flags:
    --dataset, -d      Dataset(s) to generate (default: all in config.json)
    --output-dir, -o   Directory for output files (default: config output.directory)
    --quiet            Only show warnings and errors on the console
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING, Any

import httpx

from iso639_tables.config import (
    get_config,
    get_dataset_ids,
    get_http_settings,
    get_output_dir,
    set_console_level,
    setup_logging,
)
from iso639_tables.datasets import get_dataset_definition
from iso639_tables.errors import Iso639Error
from iso639_tables.pipeline import run_dataset

if TYPE_CHECKING:
    from pathlib import Path

logger = setup_logging(__name__)


def generate_dataset(
    dataset_id: str,
    output_dir: Path,
    http_settings: dict[str, Any] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[Path] | None:
    """Generate one dataset, reporting failures instead of raising.

    Parameters
    ----------
    dataset_id : str
        Dataset identifier (``"iso_639_1"`` or ``"iso_639_2"``).
    output_dir : Path
        Destination directory, created when missing.
    http_settings : dict[str, Any] | None, optional
        HTTP client settings from ``config.json``.
    transport : httpx.AsyncBaseTransport | None, optional
        Transport override used by tests.

    Returns
    -------
    list[Path] | None
        Written files, or ``None`` when the run failed.
    """
    try:
        definition = get_dataset_definition(dataset_id)
        paths = run_dataset(definition, output_dir, http_settings, transport=transport)
    except Iso639Error as err:
        logger.error("Failed to generate %s: %s", dataset_id, err)
        return None
    except httpx.HTTPError as err:
        logger.error("Failed to fetch a source page for %s: %s", dataset_id, err)
        return None

    logger.info("Rendered %d output files for %s", len(paths), dataset_id)
    return paths


def main(argv: list[str] | None = None) -> int:
    """Parse CLI flags and generate the requested datasets.

    Returns
    -------
    int
        ``0`` when every requested dataset succeeded; ``1`` otherwise.
    """
    config = get_config()
    known_datasets = get_dataset_ids(config)

    parser = argparse.ArgumentParser(
        description="Generate ISO 639 language-code tables as JSON and CSV.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m iso639_tables.main                          # All datasets
  python -m iso639_tables.main --dataset iso_639_2      # Single dataset
  python -m iso639_tables.main -o /tmp/iso              # Custom output directory
        """,
    )
    parser.add_argument(
        "--dataset",
        "-d",
        nargs="+",
        choices=known_datasets,
        default=known_datasets,
        help="Dataset(s) to generate (default: all)",
    )
    parser.add_argument("--output-dir", "-o", help="Directory for output files")
    parser.add_argument("--quiet", action="store_true", help="Only log warnings and errors to the console")

    args = parser.parse_args(argv)

    if args.quiet:
        set_console_level(logging.WARNING)

    output_dir = get_output_dir(args.output_dir, config)
    http_settings = get_http_settings(config)

    failures = 0
    for dataset_id in args.dataset:
        if generate_dataset(dataset_id, output_dir, http_settings) is None:
            failures += 1

    return 0 if failures == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
