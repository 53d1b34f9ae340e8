"""Writer module for JSON and CSV output.

Output naming convention: ``<prefix>.json``, ``<prefix>.min.json`` and
``<prefix>.csv`` (e.g. ``iso_639-2.min.json``).
"""

from iso639_tables.writer.renderer import (
    FormatSpec,
    csv_serializer,
    default_formats,
    flatten_records,
    prune_absent,
    render,
    serialize_json_min,
    serialize_json_pretty,
    write_outputs,
)

__all__ = [
    # Formats
    "FormatSpec",
    "csv_serializer",
    "default_formats",
    "flatten_records",
    "prune_absent",
    "serialize_json_min",
    "serialize_json_pretty",
    # Rendering and persistence
    "render",
    "write_outputs",
]
