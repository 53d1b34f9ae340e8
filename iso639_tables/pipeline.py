"""High-level orchestration for dataset generation.

Functions here wire together page fetching, table extraction, row
normalization, keying, patches, cross-source reconciliation and rendering.
The entrypoint :func:`run_dataset` fetches every source of a dataset
concurrently, parses them one after another, and only writes files once the
whole dataset has been built.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from iso639_tables.config import get_dataset_config, setup_logging
from iso639_tables.errors import ConfigError, Iso639Error
from iso639_tables.extractor.selectors import build_selector
from iso639_tables.extractor.table_parser import (
    apply_field_parsers,
    extract_rows,
    map_columns,
    resolve_field_parsers,
)
from iso639_tables.scraper.downloader import fetch_documents
from iso639_tables.transformer.reconciler import apply_patches, key_by, reconcile
from iso639_tables.writer.renderer import default_formats, render, write_outputs

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from pathlib import Path

    import httpx
    from lxml.html import HtmlElement

logger = setup_logging(__name__)

# Public API exports
__all__ = [
    "DatasetDefinition",
    "SourceConfig",
    "SourceDataset",
    "build_dataset",
    "load_dataset_definition",
    "parse_source",
    "run_dataset",
    "run_sources",
]


# =============================================================================
# Configuration Objects
# =============================================================================


@dataclass
class SourceConfig:
    """Everything needed to turn one web page into a dataset.

    Attributes
    ----------
    id : str
        Short source label (``"wiki"``, ``"loc"``).
    name : str
        Human-readable name for logs.
    url : str
        Page URL.
    parser_id : str
        Identifier of the table parsed from the page (``"iso_639_2"``).
    selector : Callable[[HtmlElement], HtmlElement]
        Locates the target table in the document.
    field_spec : dict[str, int]
        Field name to column index.
    row_parser : Callable[[dict[str, Any]], dict[str, Any]]
        Dataset-specific normalizer applied to every record.
    field_parsers : dict[str, Callable[[Any], Any]]
        Per-field cell parsers (defaults to text for every mapped field).
    key : str | None
        Key field; ``None`` keeps the records as an ordered list.
    encoding : str | None
        Page encoding override.
    absolutify_urls : bool
        Rewrite relative links before parsing.
    patches : dict[str, dict[str, Any]]
        Manual corrections keyed by record key.
    """

    id: str
    name: str
    url: str
    parser_id: str
    selector: Callable[[HtmlElement], HtmlElement]
    field_spec: dict[str, int]
    row_parser: Callable[[dict[str, Any]], dict[str, Any]]
    field_parsers: dict[str, Callable[[Any], Any]] = field(default_factory=dict)
    key: str | None = None
    encoding: str | None = None
    absolutify_urls: bool = False
    patches: dict[str, dict[str, Any]] = field(default_factory=dict)

    @classmethod
    def from_dict(
        cls,
        spec: Mapping[str, Any],
        row_parsers: Mapping[str, Callable[[dict[str, Any]], dict[str, Any]]],
    ) -> SourceConfig:
        """Build a source from its ``sources.json`` entry.

        Parameters
        ----------
        spec
            One element of the ``sources`` list.
        row_parsers
            Registry resolving the ``row_parser`` name.

        Raises
        ------
        KeyError
            If a required key is missing or a named parser is unknown.
        """
        row_parser_name = spec["row_parser"]
        if row_parser_name not in row_parsers:
            msg = f"Unknown row parser '{row_parser_name}' for source '{spec['id']}'"
            raise KeyError(msg)

        field_spec = {name: int(index) for name, index in spec["parse_indices"].items()}
        return cls(
            id=spec["id"],
            name=spec.get("name", spec["id"]),
            url=spec["url"],
            parser_id=spec.get("parser_id", spec["id"]),
            selector=build_selector(spec["selector"]),
            field_spec=field_spec,
            row_parser=row_parsers[row_parser_name],
            field_parsers=resolve_field_parsers(field_spec, spec.get("field_parsers")),
            key=spec.get("key"),
            encoding=spec.get("encoding"),
            absolutify_urls=bool(spec.get("absolutify_urls", False)),
            patches=dict(spec.get("patches", {})),
        )


@dataclass(frozen=True)
class SourceDataset:
    """Parsed output of one source, immutable once built."""

    source_id: str
    parser_id: str
    records: dict[str, dict[str, Any]] | list[dict[str, Any]]


@dataclass
class DatasetDefinition:
    """A published dataset: its sources, how they merge, and how it is written."""

    dataset_id: str
    file_prefix: str
    csv_fields: list[str]
    sources: list[SourceConfig]
    reconcile: dict[str, Any] | None = None


def load_dataset_definition(
    dataset_id: str,
    row_parsers: Mapping[str, Callable[[dict[str, Any]], dict[str, Any]]],
    config: dict[str, Any] | None = None,
) -> DatasetDefinition:
    """Load ``config/<dataset_id>/sources.json`` into a :class:`DatasetDefinition`.

    Parameters
    ----------
    dataset_id
        Dataset identifier, e.g. ``"iso_639_2"``.
    row_parsers
        Registry of named row parsers referenced by the sources.
    config
        Preloaded dataset config; read from disk when ``None``.

    Raises
    ------
    ConfigError
        If the file is missing or invalid JSON, a required key is missing, or
        a selector, field parser or row parser cannot be resolved.
    """
    try:
        if config is None:
            config = get_dataset_config(dataset_id)

        sources = [SourceConfig.from_dict(spec, row_parsers) for spec in config["sources"]]
        return DatasetDefinition(
            dataset_id=dataset_id,
            file_prefix=config.get("file_prefix", dataset_id),
            csv_fields=list(config["csv_fields"]),
            sources=sources,
            reconcile=config.get("reconcile"),
        )
    except (FileNotFoundError, KeyError, ValueError) as err:
        msg = f"Invalid configuration for dataset '{dataset_id}': {err}"
        raise ConfigError(msg, dataset_id=dataset_id) from err


# =============================================================================
# Source Parsing
# =============================================================================


def parse_source(source: SourceConfig, document: HtmlElement) -> SourceDataset:
    """Parse one fetched document into a :class:`SourceDataset`.

    Runs selector → rows → column mapping → field parsers → row parser →
    keying → patches, in document order.

    Raises
    ------
    Iso639Error
        Any pipeline error, stamped with ``source.id``.
    """
    try:
        table = source.selector(document)
        rows = extract_rows(table)
        raw_records = map_columns(rows, source.field_spec, source_id=source.id)

        records = []
        for raw in raw_records:
            parsed = apply_field_parsers(raw, source.field_parsers, source_id=source.id)
            records.append(source.row_parser(parsed))

        dataset = key_by(records, source.key, source_id=source.id)

        if source.patches:
            if not isinstance(dataset, dict):
                msg = f"Source '{source.id}' defines patches but has no key field"
                raise ConfigError(msg, source_id=source.id)
            dataset = apply_patches(dataset, source.patches, source_id=source.id)
    except Iso639Error as err:
        if err.source_id is None:
            err.source_id = source.id
        raise

    logger.info("Parsed %d rows from %s (%s)", len(records), source.name, source.parser_id)
    return SourceDataset(source_id=source.id, parser_id=source.parser_id, records=dataset)


def run_sources(
    sources: list[SourceConfig],
    http_settings: dict[str, Any] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[str, SourceDataset]:
    """Fetch all sources concurrently, then parse them sequentially.

    Returns
    -------
    dict[str, SourceDataset]
        Parsed datasets keyed by source id.
    """
    documents = asyncio.run(fetch_documents(sources, http_settings, transport=transport))
    return {source.id: parse_source(source, documents[source.id]) for source in sources}


# =============================================================================
# Dataset Assembly
# =============================================================================


def build_dataset(
    definition: DatasetDefinition,
    parsed: Mapping[str, SourceDataset],
) -> dict[str, dict[str, Any]] | list[dict[str, Any]]:
    """Combine parsed sources into the dataset that gets rendered.

    Single-source datasets are returned as parsed. Multi-source datasets need
    a ``reconcile`` block naming the primary and secondary sources and the
    fields copied between them.

    Raises
    ------
    ConfigError
        If several sources are configured without a reconcile block, or the
        block names sources that are not configured.
    """
    if definition.reconcile is None:
        if len(parsed) != 1:
            msg = f"Dataset '{definition.dataset_id}' has {len(parsed)} sources but no reconcile block"
            raise ConfigError(msg, dataset_id=definition.dataset_id)
        return next(iter(parsed.values())).records

    primary_id = definition.reconcile.get("primary")
    secondary_id = definition.reconcile.get("secondary")
    if primary_id not in parsed or secondary_id not in parsed:
        msg = f"Dataset '{definition.dataset_id}' reconciles unknown sources: {primary_id!r}, {secondary_id!r}"
        raise ConfigError(msg, dataset_id=definition.dataset_id)

    primary = parsed[primary_id].records
    secondary = parsed[secondary_id].records
    if not isinstance(primary, dict) or not isinstance(secondary, dict):
        msg = f"Dataset '{definition.dataset_id}' reconciles sources without key fields"
        raise ConfigError(msg, dataset_id=definition.dataset_id)

    return reconcile(
        primary,
        secondary,
        definition.reconcile.get("copy_fields", []),
        primary_id=primary_id,
        secondary_id=secondary_id,
    )


def run_dataset(
    definition: DatasetDefinition,
    output_dir: Path,
    http_settings: dict[str, Any] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[Path]:
    """Run the end-to-end workflow for one dataset.

    Every format is rendered in memory before anything is written, so a
    failing run leaves no files behind for this dataset.

    Returns
    -------
    list[Path]
        Paths of the written files.
    """
    logger.info("Generating %s from %d source(s)", definition.dataset_id, len(definition.sources))

    parsed = run_sources(definition.sources, http_settings, transport=transport)
    data = build_dataset(definition, parsed)
    rendered = render(data, default_formats(definition.csv_fields), definition.file_prefix)

    return write_outputs(rendered, output_dir)
