"""Declarative column adapters.

An adapter is a table of canonical fields, each with the ordered list of
header labels a platform has used for it. Resolving an adapter against a
sheet's headers picks, per field, the first synonym that is present
(compared after ``normalize_header``). Extracting a row then runs each
field's cell through the normalizer for its kind; a field with no matching
column yields that kind's default.

Adding a header variant a platform has started to emit is a one-line
change to the synonym tuple, never a parser change.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping

from marketplace_core.etl.cleaning_utils import (
    ZERO,
    clean_text,
    normalize_header,
    to_amount,
    to_calendar_date,
    to_quantity,
)
from marketplace_core.platforms import Platform

logger = logging.getLogger(__name__)

TEXT = "text"
AMOUNT = "amount"
QUANTITY = "quantity"
DATE = "date"

_NORMALIZERS: dict[str, Callable[[Any], Any]] = {
    TEXT: clean_text,
    AMOUNT: to_amount,
    QUANTITY: to_quantity,
    DATE: to_calendar_date,
}

_DEFAULTS: dict[str, Any] = {
    TEXT: "",
    AMOUNT: ZERO,
    QUANTITY: 0,
    DATE: None,
}


@dataclass(frozen=True)
class FieldSpec:
    """One canonical field and the header labels it may appear under.

    Attributes:
        key: Canonical field name used by parsers.
        synonyms: Header labels, most preferred first.
        kind: One of "text", "amount", "quantity", "date".
        required: Whether a missing column is reported.
        role: Free-form tag parsers use to group fields (e.g. "fee").
    """

    key: str
    synonyms: tuple[str, ...]
    kind: str = TEXT
    required: bool = False
    role: str | None = None

    def __post_init__(self) -> None:
        if self.kind not in _NORMALIZERS:
            raise ValueError(f"Unknown field kind {self.kind!r} for {self.key}")

    @property
    def default(self) -> Any:
        return _DEFAULTS[self.kind]

    def normalize(self, value: Any) -> Any:
        return _NORMALIZERS[self.kind](value)


def amount(label: str, *aliases: str, role: str | None = None, required: bool = False) -> FieldSpec:
    """Amount field keyed by its primary column label."""
    return FieldSpec(label, (label, *aliases), kind=AMOUNT, role=role, required=required)


@dataclass
class ResolvedColumns:
    """Result of matching an adapter against one sheet's headers.

    Attributes:
        columns: Canonical field key -> actual header found in the sheet.
        missing_required: Required field keys with no matching header.
    """

    columns: dict[str, str] = field(default_factory=dict)
    missing_required: list[str] = field(default_factory=list)

    def has(self, key: str) -> bool:
        return key in self.columns

    @property
    def recognized(self) -> int:
        return len(self.columns)


@dataclass(frozen=True)
class ColumnAdapter:
    """Field table for one platform and one export schema.

    Examples:
        >>> adapter = ColumnAdapter(
        ...     Platform.TIKTOK,
        ...     "demo",
        ...     (FieldSpec("order_id", ("Order ID", "OrderID"), required=True),),
        ... )
        >>> resolved = adapter.resolve(["orderid", "Qty"])
        >>> resolved.columns
        {'order_id': 'orderid'}
    """

    platform: Platform
    schema: str
    fields: tuple[FieldSpec, ...]

    def spec_for(self, key: str) -> FieldSpec:
        for spec in self.fields:
            if spec.key == key:
                return spec
        raise KeyError(key)

    def keys(self, role: str | None = None) -> list[str]:
        """Field keys in declaration order, optionally filtered by role."""
        return [spec.key for spec in self.fields if role is None or spec.role == role]

    def resolve(self, headers: Iterable[Any]) -> ResolvedColumns:
        """Pick, for each field, the first synonym present in ``headers``.

        When a sheet carries two headers that normalize alike, the leftmost
        one is used.
        """
        by_normalized: dict[str, str] = {}
        for header in headers:
            by_normalized.setdefault(normalize_header(header), header)

        resolved = ResolvedColumns()
        for spec in self.fields:
            for synonym in spec.synonyms:
                actual = by_normalized.get(normalize_header(synonym))
                if actual is not None:
                    resolved.columns[spec.key] = actual
                    break
            else:
                if spec.required:
                    resolved.missing_required.append(spec.key)

        logger.debug(
            "%s %s adapter resolved %d/%d fields",
            self.platform,
            self.schema,
            resolved.recognized,
            len(self.fields),
        )
        return resolved

    def extract(self, row: Mapping[str, Any], resolved: ResolvedColumns) -> dict[str, Any]:
        """Normalize one row into a dict keyed by canonical field."""
        values: dict[str, Any] = {}
        for spec in self.fields:
            column = resolved.columns.get(spec.key)
            values[spec.key] = spec.normalize(row.get(column)) if column is not None else spec.default
        return values

    def describe_missing(self, resolved: ResolvedColumns) -> str:
        """Human-readable list of the missing required columns."""
        return ", ".join(self.spec_for(key).synonyms[0] for key in resolved.missing_required)
