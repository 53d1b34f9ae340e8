"""Keying, patching and cross-source reconciliation.

Functions
---------
key_by
    Index normalized records by a key field, rejecting duplicates.
apply_patches
    Apply hand-authored per-key corrections to one source's dataset.
reconcile
    Copy selected fields from a secondary source into the primary records.

Notes
-----
None of these functions mutate their inputs. Reconciliation assumes a closed
world: every primary key must exist in the secondary source.
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any

from iso639_tables.config import setup_logging
from iso639_tables.errors import DuplicateKeyError, MissingKeyError, PatchError, ReconciliationError
from iso639_tables.transformer.normalizer import is_absent

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

logger = setup_logging(__name__)

Record = dict[str, Any]
KeyedDataset = dict[str, Record]


def key_by(
    records: list[Record],
    key_field: str | None,
    source_id: str | None = None,
) -> KeyedDataset | list[Record]:
    """Index records by ``key_field``.

    Parameters
    ----------
    records : list[Record]
        Normalized records in document order.
    key_field : str | None
        Field whose value becomes the key. ``None`` keeps list mode and
        returns ``records`` unchanged.
    source_id : str | None, optional
        Source label attached to errors.

    Returns
    -------
    KeyedDataset | list[Record]
        Mapping key → record (insertion follows document order), or the
        original list in list mode.

    Raises
    ------
    MissingKeyError
        If a record has no value for ``key_field``.
    DuplicateKeyError
        If two records share a key.
    """
    if key_field is None:
        return records

    keyed: KeyedDataset = {}
    for position, record in enumerate(records):
        key = record.get(key_field)
        if is_absent(key):
            raise MissingKeyError(key_field, record, position=position, source_id=source_id)
        if key in keyed:
            raise DuplicateKeyError(key, keyed[key], record, source_id=source_id)
        keyed[key] = record

    logger.debug("Keyed %d records by '%s'", len(keyed), key_field)
    return keyed


def apply_patches(
    dataset: KeyedDataset,
    patches: Mapping[str, Mapping[str, Any]] | None,
    source_id: str | None = None,
) -> KeyedDataset:
    """Apply manual field corrections to a keyed dataset.

    Parameters
    ----------
    dataset : KeyedDataset
        Dataset produced by :func:`key_by`.
    patches : Mapping[str, Mapping[str, Any]] | None
        ``{key: {field: value}}``. Values are assigned, so applying the same
        patches twice yields the same dataset.
    source_id : str | None, optional
        Source label attached to errors.

    Returns
    -------
    KeyedDataset
        New dataset with patched records.

    Raises
    ------
    PatchError
        If a patch names a key the dataset does not contain.
    """
    if not patches:
        return dataset

    patched = dict(dataset)
    for key, fields in patches.items():
        if key not in patched:
            raise PatchError(key, source_id=source_id)
        record = dict(patched[key])
        record.update(copy.deepcopy(dict(fields)))
        patched[key] = record
        logger.info("Patched '%s' (%s): %s", key, source_id or "dataset", ", ".join(fields))

    return patched


def reconcile(
    primary: KeyedDataset,
    secondary: KeyedDataset,
    copy_fields: Iterable[str],
    primary_id: str | None = None,
    secondary_id: str | None = None,
) -> KeyedDataset:
    """Merge selected fields from ``secondary`` into ``primary`` records.

    Parameters
    ----------
    primary : KeyedDataset
        Records that define the output key space.
    secondary : KeyedDataset
        Records supplying ``copy_fields``.
    copy_fields : Iterable[str]
        Fields copied from the secondary record, overwriting primary values.
        A field absent on the secondary record is left as the primary has it.
    primary_id, secondary_id : str | None, optional
        Source labels used in error messages.

    Returns
    -------
    KeyedDataset
        New dataset in primary key order; inputs are left untouched.

    Raises
    ------
    ReconciliationError
        If a primary key is missing from ``secondary``.
    """
    fields = list(copy_fields)
    merged: KeyedDataset = {}

    for key, record in primary.items():
        counterpart = secondary.get(key)
        if counterpart is None:
            raise ReconciliationError(key, primary_id=primary_id, secondary_id=secondary_id)

        merged_record = copy.deepcopy(record)
        for field in fields:
            value = counterpart.get(field)
            if not is_absent(value):
                merged_record[field] = copy.deepcopy(value)
        merged[key] = merged_record

    logger.info(
        "Reconciled %d records (%s <- %s: %s)",
        len(merged),
        primary_id or "primary",
        secondary_id or "secondary",
        ", ".join(fields),
    )
    return merged
