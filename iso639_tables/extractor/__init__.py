"""Extractor module for locating HTML tables and mapping their cells to fields.

Key exports:
    build_selector: Table selector from a sources.json ``selector`` block
    extract_rows: Data rows (header rows skipped) of an lxml table
    map_columns: Positional cells to named raw records
    apply_field_parsers: Per-field cell reshaping (text, node, href)
"""

from iso639_tables.extractor.selectors import build_selector, select_by_id, select_first, select_following
from iso639_tables.extractor.table_parser import (
    FIELD_PARSERS,
    apply_field_parsers,
    cell_text,
    clean_text,
    extract_rows,
    first_href,
    keep_node,
    map_columns,
    resolve_field_parsers,
)

__all__ = [
    # Selectors
    "build_selector",
    "select_by_id",
    "select_first",
    "select_following",
    # Table parsing
    "FIELD_PARSERS",
    "apply_field_parsers",
    "cell_text",
    "clean_text",
    "extract_rows",
    "first_href",
    "keep_node",
    "map_columns",
    "resolve_field_parsers",
]
