"""Row normalization helpers for language-code tables.

Each helper is pure: it takes a record (or a raw value) and returns a new one,
so the same raw row can be inspected by several stages without aliasing. The
dataset modules compose these into per-source row parsers.
"""

from __future__ import annotations

import re
from typing import Any

from iso639_tables.errors import InvariantViolationError
from iso639_tables.extractor.table_parser import cell_text, first_href

__all__ = [
    "BIBLIOGRAPHIC_MARKER",
    "drop_absent",
    "elide_redundant_bibliographic",
    "extract_link_and_text",
    "is_absent",
    "parse_inline_codes",
    "split_multi_value",
    "split_terminological_bibliographic",
]

BIBLIOGRAPHIC_MARKER = "*"

# LoC encodes both variants inline, e.g. "tib(B)bod(T)"
_INLINE_CODES = re.compile(r"([a-z]{3})\(B\)([a-z]{3})\(T\)")
_MULTI_VALUE_DELIMITER = re.compile(r";\s*")
_WHITESPACE = re.compile(r"\s+")


def is_absent(value: Any) -> bool:
    """Return ``True`` for ``None`` and blank strings."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def split_terminological_bibliographic(raw: str, field: str | None = None) -> tuple[str, str | None]:
    """Split a ``"T/B*"`` composite into terminological and bibliographic codes.

    Parameters
    ----------
    raw
        Cell text such as ``"bod/tib*"`` or ``"eng"``. The bibliographic
        variant is the one carrying a trailing ``*``.
    field
        Source field name, reported on errors.

    Returns
    -------
    tuple[str, str | None]
        ``(terminological, bibliographic)``; the second item is ``None`` when
        the cell lists no bibliographic variant.

    Raises
    ------
    InvariantViolationError
        If the cell does not hold exactly one terminological code, or holds
        more than one bibliographic code.
    """
    codes = [code.strip() for code in raw.split("/")]
    terminological = [code for code in codes if BIBLIOGRAPHIC_MARKER not in code]
    bibliographic = [code.replace(BIBLIOGRAPHIC_MARKER, "") for code in codes if BIBLIOGRAPHIC_MARKER in code]

    if len(terminological) != 1:
        msg = f"{raw!r} does not have exactly one valid 639-2/T code"
        raise InvariantViolationError(msg, raw_value=raw, field=field)
    if len(bibliographic) > 1:
        msg = f"{raw!r} has more than one 639-2/B code"
        raise InvariantViolationError(msg, raw_value=raw, field=field)

    return terminological[0], (bibliographic[0] if bibliographic else None)


def parse_inline_codes(raw: str) -> tuple[str, str | None]:
    """Parse the inline ``"xxx(B)yyy(T)"`` notation.

    Whitespace is removed first. Values that do not match the notation are a
    bare terminological code.

    Returns
    -------
    tuple[str, str | None]
        ``(terminological, bibliographic)``.
    """
    compact = _WHITESPACE.sub("", raw)
    match = _INLINE_CODES.search(compact)
    if match:
        return match.group(2), match.group(1)
    return compact, None


def elide_redundant_bibliographic(
    record: dict[str, Any],
    terminological_field: str = "639-2",
    bibliographic_field: str = "639-2/B",
) -> dict[str, Any]:
    """Drop the bibliographic code when it repeats the terminological one."""
    result = dict(record)
    if bibliographic_field in result and result.get(bibliographic_field) == result.get(terminological_field):
        del result[bibliographic_field]
    return result


def split_multi_value(value: str | None) -> list[str]:
    """Split a ``;``-delimited synonym list into trimmed, non-empty items.

    Examples
    --------
    >>> split_multi_value("Foo; Bar;Baz")
    ['Foo', 'Bar', 'Baz']
    """
    if value is None:
        return []
    return [item.strip() for item in _MULTI_VALUE_DELIMITER.split(value) if item.strip()]


def extract_link_and_text(
    record: dict[str, Any],
    field: str = "name",
    link_field: str = "wikiUrl",
) -> dict[str, Any]:
    """Replace a cell node with its text and lift its first link into ``link_field``.

    The link field is left out when the cell contains no hyperlink.
    """
    result = dict(record)
    node = result.get(field)
    href = first_href(node)

    result[field] = cell_text(node)
    if href:
        result[link_field] = href
    else:
        result.pop(link_field, None)
    return result


def drop_absent(record: dict[str, Any], fields: list[str] | tuple[str, ...]) -> dict[str, Any]:
    """Remove optional ``fields`` whose value is ``None`` or blank."""
    return {key: value for key, value in record.items() if not (key in fields and is_absent(value))}
