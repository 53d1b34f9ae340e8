"""ISO 639-1 - two-letter language codes from Wikipedia.

The Wikipedia list has one row per language with the 639-1 code, the 639-2/T
code and the 639-2/B code in separate columns. The bibliographic column
repeats the terminological code for most languages; those repeats are dropped.

Configuration file:
- config/iso_639_1/sources.json: URL, table selector, column indices, CSV columns
"""

from __future__ import annotations

from typing import Any

from iso639_tables.transformer.normalizer import (
    drop_absent,
    elide_redundant_bibliographic,
    extract_link_and_text,
)

DATASET_ID = "iso_639_1"

# Columns that may legitimately be empty on the page
OPTIONAL_FIELDS = ("family", "nativeName", "639-2", "639-2/B")


def parse_iso_639_1_wiki_row(data: dict[str, Any]) -> dict[str, Any]:
    """Normalize one row of the Wikipedia ISO 639-1 table.

    Args:
        data: Record with ``name`` still holding its cell node and every other
            field already flattened to text.

    Returns:
        New record with ``name`` as text, ``wikiUrl`` from the name link, and
        ``639-2/B`` only when it differs from ``639-2``.

    """
    record = drop_absent(data, OPTIONAL_FIELDS)
    record = elide_redundant_bibliographic(record)
    return extract_link_and_text(record, "name", "wikiUrl")


ROW_PARSERS = {
    "iso_639_1_wiki": parse_iso_639_1_wiki_row,
}
