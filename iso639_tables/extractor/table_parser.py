"""Low-level HTML table parsing helpers.

This module turns an lxml ``<table>`` into raw rows, maps row cells to named
fields by column index, and applies per-field parsers that reshape cell nodes
(flatten to text, keep the node, pull a link) before row-level normalization.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from iso639_tables.config import setup_logging
from iso639_tables.errors import FieldTransformError, MalformedTableError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    from lxml.html import HtmlElement

logger = setup_logging(__name__)

# Public API exports
__all__ = [
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

_WHITESPACE = re.compile(r"\s+")


# =============================================================================
# Cell Helpers
# =============================================================================


def clean_text(text: str) -> str:
    """Collapse runs of whitespace and strip the ends."""
    return _WHITESPACE.sub(" ", text).strip()


def cell_text(value: Any) -> str:
    """Flatten a cell node (or plain value) to its visible text.

    Parameters
    ----------
    value : Any
        lxml element, string, or ``None``.

    Returns
    -------
    str
        Whitespace-collapsed text; ``""`` for ``None``.
    """
    if value is None:
        return ""
    if hasattr(value, "text_content"):
        return clean_text(str(value.text_content()))
    return clean_text(str(value))


def keep_node(value: Any) -> Any:
    """Return the cell unchanged so the row parser can inspect its markup."""
    return value


def first_href(value: Any) -> str | None:
    """Return the target of the first hyperlink inside a cell node."""
    if not hasattr(value, "xpath"):
        return None
    hrefs = value.xpath(".//a/@href")
    return str(hrefs[0]) if hrefs else None


# Named parsers referenced from sources.json ``field_parsers``
FIELD_PARSERS: dict[str, Callable[[Any], Any]] = {
    "text": cell_text,
    "node": keep_node,
    "href": first_href,
}


# =============================================================================
# Table Structure
# =============================================================================


def extract_rows(table: HtmlElement) -> list[list[HtmlElement]]:
    """Return the data rows of a table as lists of cell elements.

    Rows nested in ``thead``/``tbody``/``tfoot`` are included in document
    order. Rows made only of ``th`` cells are header rows and are skipped;
    rows from nested tables are not descended into.

    Parameters
    ----------
    table : HtmlElement
        ``<table>`` element.

    Returns
    -------
    list[list[HtmlElement]]
        One list of ``td``/``th`` elements per data row.
    """
    rows: list[list[HtmlElement]] = []
    for tr in table.xpath("./tr | ./thead/tr | ./tbody/tr | ./tfoot/tr"):
        cells = tr.xpath("./td | ./th")
        if not any(cell.tag == "td" for cell in cells):
            continue
        rows.append(cells)

    logger.debug("Extracted %d data rows from table", len(rows))
    return rows


def map_columns(
    table: Iterable[list[Any]],
    field_spec: Mapping[str, int],
    source_id: str | None = None,
) -> list[dict[str, Any]]:
    """Map positional row cells to named fields.

    Parameters
    ----------
    table : Iterable[list[Any]]
        Rows of cells in document order.
    field_spec : Mapping[str, int]
        Field name to zero-based column index.
    source_id : str | None, optional
        Source label attached to errors.

    Returns
    -------
    list[dict[str, Any]]
        One record per row, in input order, holding exactly the fields of ``field_spec``
        with their raw (uninterpreted) cell values.

    Raises
    ------
    MalformedTableError
        If a row is too short for an index in ``field_spec``.
    """
    records = []
    for row_index, row in enumerate(table):
        record: dict[str, Any] = {}
        for field, column in field_spec.items():
            if column < 0 or column >= len(row):
                msg = f"Row {row_index} has {len(row)} cells; field '{field}' expects column {column}"
                raise MalformedTableError(
                    msg,
                    row_index=row_index,
                    field=field,
                    column=column,
                    width=len(row),
                    source_id=source_id,
                )
            record[field] = row[column]
        records.append(record)
    return records


# =============================================================================
# Field Parsers
# =============================================================================


def resolve_field_parsers(
    field_spec: Mapping[str, int],
    overrides: Mapping[str, str] | None = None,
) -> dict[str, Callable[[Any], Any]]:
    """Build the per-field parser table for a source.

    Every mapped field is flattened to text unless ``overrides`` names another
    registered parser for it.

    Raises
    ------
    KeyError
        If an override names an unknown parser.
    """
    parsers = dict.fromkeys(field_spec, cell_text)
    for field, parser_name in (overrides or {}).items():
        if parser_name not in FIELD_PARSERS:
            msg = f"Unknown field parser '{parser_name}' for field '{field}'"
            raise KeyError(msg)
        parsers[field] = FIELD_PARSERS[parser_name]
    return parsers


def apply_field_parsers(
    record: Mapping[str, Any],
    parsers: Mapping[str, Callable[[Any], Any]],
    source_id: str | None = None,
) -> dict[str, Any]:
    """Apply registered parsers to a record's fields.

    Fields without a parser pass through unchanged. The input record is not
    modified.

    Raises
    ------
    FieldTransformError
        If a parser raises; the original exception is chained.
    """
    result = dict(record)
    for field, parser in parsers.items():
        if field not in result:
            continue
        value = result[field]
        try:
            result[field] = parser(value)
        except Exception as err:
            raise FieldTransformError(field, value, source_id=source_id) from err
    return result
