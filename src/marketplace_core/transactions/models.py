"""Records produced by the transaction parser."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Iterable

import pandas as pd

from marketplace_core.etl.cleaning_utils import ZERO
from marketplace_core.metrics.aggregate import DailyMetric
from marketplace_core.platforms import Platform


@dataclass(frozen=True)
class Transaction:
    """One financial event (order, refund, adjustment) from a statement row.

    Attributes:
        platform: Source marketplace.
        external_id: Platform order/adjustment id, or a synthesized
            ``LAZADA-<type>-ROW<n>`` id for Lazada lines without one.
        sku: Seller SKU, may be empty.
        record_type: Statement type, e.g. "Order" or "Adjustment".
        order_date: Calendar day the order was created.
        payment_date: Calendar day the platform settled it.
        revenue: Revenue components, platform sign convention.
        fees: Fee components, negative when charged.
        adjustments: Adjustment components.
        settlement: ``revenue + fees + adjustments``.
        raw_row: Source cells, kept for audit.
        row_number: 1-based sheet row the transaction came from.
    """

    platform: Platform
    external_id: str
    sku: str = ""
    record_type: str = ""
    order_date: date | None = None
    payment_date: date | None = None
    revenue: Decimal = ZERO
    fees: Decimal = ZERO
    adjustments: Decimal = ZERO
    settlement: Decimal = ZERO
    raw_row: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)
    row_number: int = 0


@dataclass
class BreakdownItem:
    label: str
    value: Decimal = ZERO
    children: list[BreakdownItem] = field(default_factory=list)


@dataclass
class BreakdownGroup:
    title: str
    items: list[BreakdownItem] = field(default_factory=list)

    @property
    def total(self) -> Decimal:
        return sum((item.value for item in self.items), ZERO)


@dataclass
class PlatformMetrics:
    """Summary of one parsed statement, ready for a dashboard.

    ``trend`` is daily settlement for the trailing window and
    ``trend_dates`` the matching days. ``breakdown`` flattens every fee
    group item to ``label -> value``.
    """

    platform: Platform
    revenue: Decimal = ZERO
    fees: Decimal = ZERO
    adjustments: Decimal = ZERO
    settlement: Decimal = ZERO
    trend: list[Decimal] = field(default_factory=list)
    trend_dates: list[str] = field(default_factory=list)
    per_day: list[DailyMetric] = field(default_factory=list)
    breakdown: dict[str, Decimal] = field(default_factory=dict)
    fee_groups: list[BreakdownGroup] = field(default_factory=list)
    revenue_groups: list[BreakdownGroup] = field(default_factory=list)
    rows: int = 0


@dataclass
class TransactionParseResult:
    platform: Platform
    transactions: list[Transaction] = field(default_factory=list)
    metrics: PlatformMetrics | None = None
    warnings: list[str] = field(default_factory=list)


TRANSACTION_COLUMNS = [
    "platform",
    "external_id",
    "sku",
    "record_type",
    "order_date",
    "payment_date",
    "revenue",
    "fees",
    "adjustments",
    "settlement",
    "row_number",
]


def transactions_to_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """Transactions as a DataFrame, without the raw source cells."""
    rows = []
    for txn in transactions:
        row = asdict(txn)
        row.pop("raw_row")
        row["platform"] = txn.platform.value
        rows.append(row)
    return pd.DataFrame(rows, columns=TRANSACTION_COLUMNS)
