"""Error taxonomy for the extraction pipeline.

Every error is fatal for the dataset run that raised it. Each one carries the
``source_id`` of the page being processed (stamped by the source parser when
the raising helper does not know it) and enough context (key, field, raw value)
to fix the source configuration instead of the code.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "ConfigError",
    "DuplicateKeyError",
    "FieldTransformError",
    "InvariantViolationError",
    "Iso639Error",
    "MalformedTableError",
    "MissingKeyError",
    "PatchError",
    "ReconciliationError",
]


class Iso639Error(Exception):
    """Base class for all pipeline errors."""

    def __init__(self, message: str, *, source_id: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.source_id = source_id

    def __str__(self) -> str:
        if self.source_id:
            return f"[{self.source_id}] {self.message}"
        return self.message


class MalformedTableError(Iso639Error):
    """The table is missing, or a row is too short for its column mapping."""

    def __init__(
        self,
        message: str,
        *,
        row_index: int | None = None,
        field: str | None = None,
        column: int | None = None,
        width: int | None = None,
        source_id: str | None = None,
    ) -> None:
        super().__init__(message, source_id=source_id)
        self.row_index = row_index
        self.field = field
        self.column = column
        self.width = width


class FieldTransformError(Iso639Error):
    """A per-field transformer raised while reshaping a cell value."""

    def __init__(self, field: str, value: Any, *, source_id: str | None = None) -> None:
        super().__init__(f"Transformer for field '{field}' failed on value {value!r}", source_id=source_id)
        self.field = field
        self.value = value


class InvariantViolationError(Iso639Error):
    """A row normalizer found input it cannot interpret unambiguously."""

    def __init__(
        self,
        message: str,
        *,
        raw_value: Any = None,
        field: str | None = None,
        source_id: str | None = None,
    ) -> None:
        super().__init__(message, source_id=source_id)
        self.raw_value = raw_value
        self.field = field


class MissingKeyError(Iso639Error):
    """A record lacks the field used to key the dataset."""

    def __init__(
        self,
        key_field: str,
        record: dict[str, Any],
        *,
        position: int | None = None,
        source_id: str | None = None,
    ) -> None:
        where = f" (row {position})" if position is not None else ""
        super().__init__(f"Record{where} has no value for key field '{key_field}': {record!r}", source_id=source_id)
        self.key_field = key_field
        self.record = record
        self.position = position


class DuplicateKeyError(Iso639Error):
    """Two records share the same key value."""

    def __init__(
        self,
        key: str,
        existing: dict[str, Any],
        duplicate: dict[str, Any],
        *,
        source_id: str | None = None,
    ) -> None:
        super().__init__(f"Duplicate key '{key}': {existing!r} conflicts with {duplicate!r}", source_id=source_id)
        self.key = key
        self.existing = existing
        self.duplicate = duplicate


class ReconciliationError(Iso639Error):
    """A primary key has no counterpart in the secondary source."""

    def __init__(
        self,
        key: str,
        *,
        primary_id: str | None = None,
        secondary_id: str | None = None,
    ) -> None:
        super().__init__(
            f"Key '{key}' from '{primary_id or 'primary'}' is missing in '{secondary_id or 'secondary'}'",
            source_id=primary_id,
        )
        self.key = key
        self.primary_id = primary_id
        self.secondary_id = secondary_id


class PatchError(Iso639Error):
    """A hand-authored patch targets a key the dataset does not contain."""

    def __init__(self, key: str, *, source_id: str | None = None) -> None:
        super().__init__(f"Patch targets unknown key '{key}'", source_id=source_id)
        self.key = key


class ConfigError(Iso639Error):
    """A dataset configuration cannot be loaded or is inconsistent."""

    def __init__(self, message: str, *, dataset_id: str | None = None, source_id: str | None = None) -> None:
        super().__init__(message, source_id=source_id)
        self.dataset_id = dataset_id
