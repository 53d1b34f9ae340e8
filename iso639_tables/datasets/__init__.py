"""Dataset modules for iso639-tables.

Each module corresponds to one published dataset and provides the row parsers
its sources reference by name from ``config/<dataset>/sources.json``.

Modules
-------
iso_639_1
    Two-letter codes (Wikipedia).

iso_639_2
    Three-letter codes (Library of Congress, enriched with Wikipedia URLs).

Notes
-----
To add a dataset, create ``config/<dataset>/sources.json``, add a module with
its row parsers, and register them in ``ROW_PARSERS`` below.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from iso639_tables.datasets import iso_639_1, iso_639_2
from iso639_tables.pipeline import DatasetDefinition, load_dataset_definition

if TYPE_CHECKING:
    from collections.abc import Callable

ROW_PARSERS: dict[str, Callable[[dict[str, Any]], dict[str, Any]]] = {
    **iso_639_1.ROW_PARSERS,
    **iso_639_2.ROW_PARSERS,
}


def get_dataset_definition(dataset_id: str, config: dict[str, Any] | None = None) -> DatasetDefinition:
    """Load a dataset definition with every known row parser available."""
    return load_dataset_definition(dataset_id, ROW_PARSERS, config)


__all__ = [
    "ROW_PARSERS",
    "get_dataset_definition",
    "iso_639_1",
    "iso_639_2",
]
