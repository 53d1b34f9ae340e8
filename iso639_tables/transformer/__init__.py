"""Transformer module for row normalization, keying and reconciliation.

Submodules
----------
normalizer
    Pure helpers that disambiguate composite codes, split multi-value cells,
    lift links out of cell markup and drop empty optional fields.
reconciler
    Key-based indexing with duplicate detection, manual patches, and
    cross-source field copying.
"""

from iso639_tables.transformer.normalizer import (
    drop_absent,
    elide_redundant_bibliographic,
    extract_link_and_text,
    is_absent,
    parse_inline_codes,
    split_multi_value,
    split_terminological_bibliographic,
)
from iso639_tables.transformer.reconciler import apply_patches, key_by, reconcile

__all__ = [
    # Keying and reconciliation
    "apply_patches",
    "key_by",
    "reconcile",
    # Row normalization helpers
    "drop_absent",
    "elide_redundant_bibliographic",
    "extract_link_and_text",
    "is_absent",
    "parse_inline_codes",
    "split_multi_value",
    "split_terminological_bibliographic",
]
