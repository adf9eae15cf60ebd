"""Records produced by the product-sales parser."""

from __future__ import annotations

from collections import Counter
from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable

import pandas as pd

from marketplace_core.etl.cleaning_utils import ZERO
from marketplace_core.platforms import Platform


@dataclass
class ProductSaleLine:
    """Quantity and revenue of one variant within one order.

    A return row has ``qty_confirmed == 0`` and ``revenue_confirmed == 0``
    with the returned units in ``qty_returned``.

    Attributes:
        platform: Source marketplace.
        order_id: Platform order (or order item) id, may be empty.
        variant_code: Platform SKU/variant code.
        product_name: Name from the code map, else the row's own label.
        variant_name: Variation label, else the product name.
        qty_confirmed: Units sold, >= 0.
        qty_returned: Units returned, >= 0.
        revenue_confirmed: Net revenue of the confirmed units.
        province_raw: Province as written in the export.
        province_normalized: Standard province name, or None.
        order_date: Calendar day of the order, when the export has one.
        row_number: 1-based source sheet row.
        raw_row: Source cells, kept for audit.
        upload_id: Caller-supplied id of the upload the line came from.
        created_at: Caller-supplied ingestion timestamp.
    """

    platform: Platform
    order_id: str
    variant_code: str
    product_name: str
    variant_name: str = ""
    qty_confirmed: int = 0
    qty_returned: int = 0
    revenue_confirmed: Decimal = ZERO
    province_raw: str = ""
    province_normalized: str | None = None
    order_date: date | None = None
    row_number: int = 0
    raw_row: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)
    upload_id: str | None = None
    created_at: datetime | None = None


@dataclass
class ProductSalesSummary:
    total_rows: int = 0
    total_products: int = 0
    total_variants: int = 0
    total_qty: int = 0
    total_revenue: Decimal = ZERO
    total_returned: int = 0
    skipped_rows: int = 0
    warnings: list[str] = field(default_factory=list)
    unmapped_provinces: dict[str, int] = field(default_factory=dict)


def summarize(
    lines: Iterable[ProductSaleLine],
    warnings: list[str] | None = None,
    skipped_rows: int = 0,
) -> ProductSalesSummary:
    """Totals over a set of lines.

    ``unmapped_provinces`` counts lines per raw province string that did
    not resolve; blank provinces are not counted.
    """
    summary = ProductSalesSummary(warnings=list(warnings or []), skipped_rows=skipped_rows)
    products: set[str] = set()
    variants: set[str] = set()
    unmapped: Counter[str] = Counter()

    for line in lines:
        summary.total_rows += 1
        summary.total_qty += line.qty_confirmed
        summary.total_returned += line.qty_returned
        summary.total_revenue += line.revenue_confirmed
        products.add(line.product_name)
        variants.add(line.variant_code)
        if line.province_raw and line.province_normalized is None:
            unmapped[line.province_raw] += 1

    summary.total_products = len(products)
    summary.total_variants = len(variants)
    summary.unmapped_provinces = dict(unmapped)
    return summary


@dataclass
class ProductSalesParseResult:
    """Output of one product-sales parse.

    Attributes:
        platform: Source marketplace.
        rows: Lines in sheet order, before any merge.
        summary: Totals and warnings.
        missing_codes: Distinct variant codes the code map could not name,
            in order of first appearance.
    """

    platform: Platform
    rows: list[ProductSaleLine] = field(default_factory=list)
    summary: ProductSalesSummary = field(default_factory=ProductSalesSummary)
    missing_codes: list[str] = field(default_factory=list)

    @property
    def warnings(self) -> list[str]:
        return self.summary.warnings

    @property
    def unmapped_provinces(self) -> list[str]:
        """Distinct raw province strings that did not resolve."""
        return list(self.summary.unmapped_provinces)


LINE_COLUMNS = [
    "platform",
    "order_id",
    "variant_code",
    "product_name",
    "variant_name",
    "qty_confirmed",
    "qty_returned",
    "revenue_confirmed",
    "province_raw",
    "province_normalized",
    "order_date",
    "row_number",
    "upload_id",
    "created_at",
]


def lines_to_frame(lines: Iterable[ProductSaleLine]) -> pd.DataFrame:
    """Lines as a DataFrame, without the raw source cells."""
    rows = []
    for line in lines:
        row = asdict(line)
        row.pop("raw_row")
        row["platform"] = line.platform.value
        rows.append(row)
    return pd.DataFrame(rows, columns=LINE_COLUMNS)
