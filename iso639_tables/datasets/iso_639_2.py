"""ISO 639-2 - three-letter language codes, Library of Congress + Wikipedia.

The Library of Congress code list is the primary source: it carries the
English, French and German names. Wikipedia contributes the article URL of
each language. The two pages encode bibliographic variants differently:

- Wikipedia: ``"bod/tib*"`` (``*`` marks the bibliographic code)
- LoC: ``"tib(B)bod(T)"``

Configuration file:
- config/iso_639_2/sources.json: both sources, the LoC patches, the
  reconciliation block (LoC primary, ``wikiUrl`` copied from Wikipedia)
  and CSV columns
"""

from __future__ import annotations

from typing import Any

from iso639_tables.transformer.normalizer import (
    drop_absent,
    extract_link_and_text,
    parse_inline_codes,
    split_multi_value,
    split_terminological_bibliographic,
)

DATASET_ID = "iso_639_2"

# Language-name columns on the LoC page, each a ";"-separated synonym list
NAME_LANGUAGES = ("en", "fr", "de")

WIKI_OPTIONAL_FIELDS = ("639-1", "639-3", "scope", "type")
LOC_OPTIONAL_FIELDS = ("639-1",)


def _with_codes(data: dict[str, Any], source_field: str, terminological: str, bibliographic: str | None) -> dict[str, Any]:
    """Replace ``source_field`` with the ``639-2`` / ``639-2/B`` pair."""
    record = {key: value for key, value in data.items() if key not in {source_field, "639-2/B"}}
    record["639-2"] = terminological
    if bibliographic:
        record["639-2/B"] = bibliographic
    return record


def parse_iso_639_2_wiki_row(data: dict[str, Any]) -> dict[str, Any]:
    """Normalize one row of the Wikipedia ISO 639-2 table.

    ``639-2/TB`` is split into ``639-2`` and (when starred) ``639-2/B``; the
    name cell is reduced to text plus ``wikiUrl``.

    Raises
    ------
    InvariantViolationError
        If ``639-2/TB`` does not hold exactly one terminological code.
    """
    terminological, bibliographic = split_terminological_bibliographic(data["639-2/TB"], field="639-2/TB")
    record = _with_codes(data, "639-2/TB", terminological, bibliographic)
    record = extract_link_and_text(record, "name", "wikiUrl")
    return drop_absent(record, WIKI_OPTIONAL_FIELDS)


def parse_iso_639_2_loc_row(data: dict[str, Any]) -> dict[str, Any]:
    """Normalize one row of the Library of Congress code list.

    The inline ``(B)``/``(T)`` notation becomes ``639-2`` / ``639-2/B``, an
    empty ``639-1`` is dropped, and the name columns become lists.
    """
    terminological, bibliographic = parse_inline_codes(data["639-2"])
    record = _with_codes(data, "639-2", terminological, bibliographic)
    record = drop_absent(record, LOC_OPTIONAL_FIELDS)

    for language in NAME_LANGUAGES:
        if language in record:
            record[language] = split_multi_value(record[language])

    return record


ROW_PARSERS = {
    "iso_639_2_wiki": parse_iso_639_2_wiki_row,
    "iso_639_2_loc": parse_iso_639_2_loc_row,
}
