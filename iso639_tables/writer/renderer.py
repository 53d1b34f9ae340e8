"""Multi-format rendering of a finished dataset.

One logical dataset is rendered into several byte-exact representations:

- ``<prefix>.json``: keys sorted at every level, 2-space indentation
- ``<prefix>.min.json``: same content, no whitespace, keys sorted
- ``<prefix>.csv``: one row per record, explicit column order, multi-value
  fields joined with ``"; "``, absent fields as empty cells

:func:`render` is pure; :func:`write_outputs` persists its result.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import pandas as pd

from iso639_tables.config import setup_logging

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from pathlib import Path

logger = setup_logging(__name__)

MULTI_VALUE_SEPARATOR = "; "


def _identity(data: Any) -> Any:
    return data


@dataclass(frozen=True)
class FormatSpec:
    """One output representation.

    Attributes
    ----------
    extension : str
        Suffix appended to the file prefix (e.g. ``".min.json"``).
    serializer : Callable[[Any], bytes]
        Turns the transformed dataset into file content.
    transform : Callable[[Any], Any]
        Reshapes the dataset before serialization (identity by default).
    """

    extension: str
    serializer: Callable[[Any], bytes]
    transform: Callable[[Any], Any] = field(default=_identity)


# =============================================================================
# Value Shaping
# =============================================================================


def prune_absent(data: Any) -> Any:
    """Return a copy of ``data`` without ``None`` values in any mapping."""
    if isinstance(data, dict):
        return {key: prune_absent(value) for key, value in data.items() if value is not None}
    if isinstance(data, list):
        return [prune_absent(item) for item in data]
    return data


def _iter_records(data: Any) -> list[dict[str, Any]]:
    """Records in output order: sorted by key for keyed datasets, as-is for lists."""
    if isinstance(data, dict):
        return [data[key] for key in sorted(data)]
    return list(data)


def flatten_records(data: Any) -> list[dict[str, Any]]:
    """Flatten records into CSV-ready rows.

    List values are joined with ``"; "``; ``None`` values are dropped so the
    cell renders empty.
    """
    rows = []
    for record in _iter_records(data):
        row = {}
        for key, value in record.items():
            if value is None:
                continue
            row[key] = MULTI_VALUE_SEPARATOR.join(value) if isinstance(value, list) else value
        rows.append(row)
    return rows


# =============================================================================
# Serializers
# =============================================================================


def serialize_json_pretty(data: Any) -> bytes:
    """Sorted, 2-space indented JSON."""
    return json.dumps(prune_absent(data), sort_keys=True, indent=2, ensure_ascii=False).encode("utf-8")


def serialize_json_min(data: Any) -> bytes:
    """Sorted JSON without insignificant whitespace."""
    return json.dumps(prune_absent(data), sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def csv_serializer(fields: Sequence[str]) -> Callable[[list[dict[str, Any]]], bytes]:
    """Build a CSV serializer with a fixed column order.

    Columns not present on a row render as empty cells; keys outside
    ``fields`` are ignored.
    """
    columns = list(fields)

    def serialize(rows: list[dict[str, Any]]) -> bytes:
        frame = pd.DataFrame([[row.get(column) for column in columns] for row in rows], columns=columns, dtype=object)
        text = frame.to_csv(index=False, na_rep="", lineterminator="\n")
        return text.encode("utf-8")

    return serialize


def default_formats(csv_fields: Sequence[str]) -> list[FormatSpec]:
    """Return the standard JSON, minified JSON and CSV format specs."""
    return [
        FormatSpec(".json", serialize_json_pretty),
        FormatSpec(".min.json", serialize_json_min),
        FormatSpec(".csv", csv_serializer(csv_fields), flatten_records),
    ]


# =============================================================================
# Rendering and Persistence
# =============================================================================


def render(data: Any, format_specs: Sequence[FormatSpec], prefix: str) -> list[tuple[str, bytes]]:
    """Render a dataset into every requested format.

    Parameters
    ----------
    data
        Keyed dataset (``dict`` of records) or ordered list of records.
    format_specs
        Output formats to produce.
    prefix
        File name stem, e.g. ``"iso_639-2"``.

    Returns
    -------
    list[tuple[str, bytes]]
        ``(filename, content)`` pairs in ``format_specs`` order.
    """
    return [(f"{prefix}{spec.extension}", spec.serializer(spec.transform(data))) for spec in format_specs]


def write_outputs(rendered: Sequence[tuple[str, bytes]], output_dir: Path) -> list[Path]:
    """Write rendered files, creating ``output_dir`` if needed.

    Parameters
    ----------
    rendered
        Pairs returned by :func:`render`.
    output_dir
        Destination directory.

    Returns
    -------
    list[Path]
        Paths of the written files.
    """
    output_dir.mkdir(parents=True, exist_ok=True)

    paths = []
    for filename, content in rendered:
        filepath = output_dir / filename
        filepath.write_bytes(content)
        logger.info("Saved %s (%d bytes)", filepath, len(content))
        paths.append(filepath)

    return paths
