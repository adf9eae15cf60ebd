"""Daily and per-province aggregation of parsed records.

Aggregation works on any record exposing the expected attribute names,
either as attributes (Transaction, ProductSaleLine) or as mapping keys
(records read back from a store). Amounts go through ``to_amount`` and
dates through ``to_iso_date``, so persisted strings and floats fold the
same way freshly parsed Decimals and dates do.

Grain:
    - per_day: one entry per calendar day (ISO string), ascending
    - trend: the last ``trend_window`` per-day entries
    - sales_by_province: one entry per resolved province, plus one bucket
      for unresolved sales
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Mapping

import pandas as pd

from marketplace_core.config import DEFAULT_SETTINGS
from marketplace_core.etl.cleaning_utils import ZERO, to_amount, to_iso_date, to_quantity
from marketplace_core.exceptions import ConfigError
from marketplace_core.provinces.standard import TOTAL_PROVINCES, UNKNOWN_PROVINCE

logger = logging.getLogger(__name__)

TOP_PROVINCES = 5


def _get(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _trend_window(value: int | None) -> int:
    if value is None:
        return DEFAULT_SETTINGS.trend_window
    if value < 1:
        raise ConfigError(f"trend_window must be >= 1, got {value}")
    return value


def _record_day(record: Any, date_field: str, fallback_field: str | None) -> str | None:
    day = to_iso_date(_get(record, date_field))
    if day is None and fallback_field:
        day = to_iso_date(_get(record, fallback_field))
    return day


@dataclass(frozen=True)
class DailyMetric:
    """Money for one calendar day."""

    date: str
    revenue: Decimal = ZERO
    fees: Decimal = ZERO
    adjustments: Decimal = ZERO

    @property
    def settlement(self) -> Decimal:
        return self.revenue + self.fees + self.adjustments


@dataclass
class AggregatedMetrics:
    """Totals, per-day buckets and trend for a set of transactions.

    Attributes:
        total_revenue: Revenue over every record, dated or not.
        total_fees: Fees over every record.
        total_adjustments: Adjustments over every record.
        per_day: Dated buckets, ascending by ISO date.
        trend: Daily settlement for the last ``trend_window`` buckets.
        trend_dates: Dates matching ``trend``, same order.
        total_transactions: Records folded in, dated or not.
    """

    total_revenue: Decimal = ZERO
    total_fees: Decimal = ZERO
    total_adjustments: Decimal = ZERO
    per_day: list[DailyMetric] = field(default_factory=list)
    trend: list[Decimal] = field(default_factory=list)
    trend_dates: list[str] = field(default_factory=list)
    total_transactions: int = 0

    @property
    def settlement(self) -> Decimal:
        return self.total_revenue + self.total_fees + self.total_adjustments

    def per_day_frame(self) -> pd.DataFrame:
        """Per-day buckets as a DataFrame (one row per date)."""
        columns = ["date", "revenue", "fees", "adjustments", "settlement"]
        rows = [{**asdict(day), "settlement": day.settlement} for day in self.per_day]
        return pd.DataFrame(rows, columns=columns)


def aggregate_transactions(
    transactions: Iterable[Any],
    date_field: str = "order_date",
    fallback_field: str | None = None,
    trend_window: int | None = None,
) -> AggregatedMetrics:
    """Fold transactions into totals, per-day buckets and a trend series.

    Totals cover every transaction. A transaction whose date field (and
    fallback field, when given) is blank or unparseable still counts
    towards the totals but lands in no per-day bucket.

    Args:
        transactions: Transaction objects or mappings with revenue, fees,
            adjustments and the date fields.
        date_field: Field the per-day bucketing uses, e.g. "order_date" or
            "payment_date".
        fallback_field: Field tried when ``date_field`` is empty.
        trend_window: Trailing days in the trend; defaults to the settings
            value (7).

    Returns:
        AggregatedMetrics.

    Raises:
        ConfigError: If ``trend_window`` is below 1.

    Examples:
        >>> from decimal import Decimal
        >>> rows = [
        ...     {"order_date": "2024-01-02", "revenue": "10", "fees": "-2", "adjustments": 0},
        ...     {"order_date": None, "revenue": "5", "fees": "0", "adjustments": 0},
        ... ]
        >>> m = aggregate_transactions(rows)
        >>> m.total_revenue, [d.date for d in m.per_day]
        (Decimal('15'), ['2024-01-02'])
    """
    window = _trend_window(trend_window)
    totals = {"revenue": ZERO, "fees": ZERO, "adjustments": ZERO}
    buckets: dict[str, dict[str, Decimal]] = {}
    undated = 0
    count = 0

    for record in transactions:
        count += 1
        amounts = {name: to_amount(_get(record, name)) for name in totals}
        for name, value in amounts.items():
            totals[name] += value

        day = _record_day(record, date_field, fallback_field)
        if day is None:
            undated += 1
            continue
        bucket = buckets.setdefault(day, {"revenue": ZERO, "fees": ZERO, "adjustments": ZERO})
        for name, value in amounts.items():
            bucket[name] += value

    if undated:
        logger.debug("%d record(s) without %s left out of per-day buckets", undated, date_field)

    per_day = [DailyMetric(date=day, **buckets[day]) for day in sorted(buckets)]
    tail = per_day[-window:]
    return AggregatedMetrics(
        total_revenue=totals["revenue"],
        total_fees=totals["fees"],
        total_adjustments=totals["adjustments"],
        per_day=per_day,
        trend=[day.settlement for day in tail],
        trend_dates=[day.date for day in tail],
        total_transactions=count,
    )


@dataclass(frozen=True)
class DailySales:
    """Units and revenue for one calendar day."""

    date: str
    qty_confirmed: int = 0
    qty_returned: int = 0
    revenue: Decimal = ZERO


@dataclass
class ProductSalesMetrics:
    total_lines: int = 0
    total_qty: int = 0
    total_returned: int = 0
    total_revenue: Decimal = ZERO
    per_day: list[DailySales] = field(default_factory=list)
    trend: list[Decimal] = field(default_factory=list)
    trend_dates: list[str] = field(default_factory=list)

    def per_day_frame(self) -> pd.DataFrame:
        columns = ["date", "qty_confirmed", "qty_returned", "revenue"]
        return pd.DataFrame([asdict(day) for day in self.per_day], columns=columns)


def aggregate_product_sales(
    lines: Iterable[Any],
    date_field: str = "order_date",
    fallback_field: str | None = None,
    trend_window: int | None = None,
) -> ProductSalesMetrics:
    """Fold product-sale lines into totals and per-day buckets.

    Same dating rules as aggregate_transactions; the trend carries daily
    confirmed revenue.
    """
    window = _trend_window(trend_window)
    result = ProductSalesMetrics()
    buckets: dict[str, list] = {}

    for line in lines:
        qty = to_quantity(_get(line, "qty_confirmed"))
        returned = to_quantity(_get(line, "qty_returned"))
        revenue = to_amount(_get(line, "revenue_confirmed"))
        result.total_lines += 1
        result.total_qty += qty
        result.total_returned += returned
        result.total_revenue += revenue

        day = _record_day(line, date_field, fallback_field)
        if day is None:
            continue
        bucket = buckets.setdefault(day, [0, 0, ZERO])
        bucket[0] += qty
        bucket[1] += returned
        bucket[2] += revenue

    result.per_day = [DailySales(day, *buckets[day]) for day in sorted(buckets)]
    tail = result.per_day[-window:]
    result.trend = [day.revenue for day in tail]
    result.trend_dates = [day.date for day in tail]
    return result


@dataclass
class ProductTotal:
    name: str
    sku: str
    qty: int = 0
    revenue: Decimal = ZERO


@dataclass
class ProvinceSales:
    """Sales for one province (or the unresolved bucket)."""

    name: str
    total_qty: int = 0
    total_revenue: Decimal = ZERO
    products: list[ProductTotal] = field(default_factory=list)

    @property
    def product_count(self) -> int:
        return len(self.products)


@dataclass
class ProvinceSalesReport:
    """Sales by province, sorted by revenue descending.

    Attributes:
        provinces: Every province with sales, including the unresolved bucket.
        top_provinces: First five resolved provinces by revenue.
        total_provinces: Number of resolved provinces with sales.
        coverage: ``total_provinces / 77 * 100``, 2 decimals.
    """

    provinces: list[ProvinceSales] = field(default_factory=list)
    top_provinces: list[ProvinceSales] = field(default_factory=list)
    total_provinces: int = 0
    coverage: float = 0.0
    max_provinces: int = TOTAL_PROVINCES

    def to_frame(self) -> pd.DataFrame:
        """One row per province with totals and product count."""
        rows = [
            {
                "province": p.name,
                "total_qty": p.total_qty,
                "total_revenue": p.total_revenue,
                "product_count": p.product_count,
            }
            for p in self.provinces
        ]
        return pd.DataFrame(rows, columns=["province", "total_qty", "total_revenue", "product_count"])


def sales_by_province(lines: Iterable[Any]) -> ProvinceSalesReport:
    """Roll confirmed product sales up by resolved province.

    Lines without a resolved province go to the ``ไม่ระบุจังหวัด`` bucket,
    which is listed with the others but excluded from coverage and from
    the top provinces. Products within a province are grouped by product
    name and sorted by revenue descending.
    """
    by_province: dict[str, dict[str, ProductTotal]] = {}

    for line in lines:
        province = _get(line, "province_normalized") or UNKNOWN_PROVINCE
        name = _get(line, "product_name") or _get(line, "variant_code") or ""
        products = by_province.setdefault(province, {})
        product = products.get(name)
        if product is None:
            product = products[name] = ProductTotal(name=name, sku=_get(line, "variant_code") or "")
        product.qty += to_quantity(_get(line, "qty_confirmed"))
        product.revenue += to_amount(_get(line, "revenue_confirmed"))

    provinces = []
    for province, products in by_province.items():
        ranked = sorted(products.values(), key=lambda p: p.revenue, reverse=True)
        provinces.append(
            ProvinceSales(
                name=province,
                total_qty=sum(p.qty for p in ranked),
                total_revenue=sum((p.revenue for p in ranked), ZERO),
                products=ranked,
            )
        )
    provinces.sort(key=lambda p: p.total_revenue, reverse=True)

    resolved = [p for p in provinces if p.name != UNKNOWN_PROVINCE]
    coverage = (Decimal(len(resolved)) / TOTAL_PROVINCES * 100).quantize(
        Decimal("0.01"), rounding=ROUND_HALF_UP
    )
    logger.info("Sales by province: %d resolved province(s), coverage %s%%", len(resolved), coverage)
    return ProvinceSalesReport(
        provinces=provinces,
        top_provinces=resolved[:TOP_PROVINCES],
        total_provinces=len(resolved),
        coverage=float(coverage),
    )
