"""iso639-tables: ISO 639-1 and 639-2 language-code tables from public HTML sources.

The package fetches the published code lists, maps table cells to named
fields, normalizes each row (terminological vs. bibliographic codes,
multi-language name lists, article links), reconciles sources by code, and
writes deterministic JSON and CSV files.

Architecture
------------
* ``scraper``: httpx fetching and lxml document construction.
* ``extractor``: Table selectors, row extraction, column mapping, field parsers.
* ``transformer``: Row normalization helpers, keying, patches, reconciliation.
* ``datasets``: Dataset-specific row parsers (``iso_639_1``, ``iso_639_2``).
* ``writer``: Sorted JSON, minified JSON and CSV rendering plus persistence.

Configuration
-------------
Source definitions live in ``config/<dataset>/sources.json``; shared settings
in ``config/config.json``. ``CONFIG_DIR``, ``DATA_DIR`` and ``LOGS_DIR``
override default directories.

Examples
--------
Generate every dataset into ``data/``:

    >>> python -m iso639_tables.main

Generate ISO 639-2 only:

    >>> python -m iso639_tables.main --dataset iso_639_2
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
