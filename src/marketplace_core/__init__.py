"""Marketplace Core ETL - TikTok Shop, Shopee and Lazada export normalization.

This package turns the spreadsheets sellers download from each marketplace
into a single canonical model, and folds that model into reporting shapes:

- **Transactions**: one financial event per statement row, with revenue,
  fees, adjustments and settlement under each platform's sign convention
- **Product sales**: one variant within one order, with confirmed and
  returned quantities, revenue and buyer province
- **Metrics**: totals, per-day buckets, trailing trend and sales by province

Module Structure:
    marketplace_core.etl: cell normalizers and workbook reading
    marketplace_core.adapters: per-platform header synonym tables
    marketplace_core.transactions: financial statement parsing
    marketplace_core.product_sales: order-line parsing, code map, merge
    marketplace_core.provinces: 77 standard provinces and exact alias lookup
    marketplace_core.metrics: aggregation

Quick Start:
    >>> from marketplace_core import parse_product_sales, parse_transactions
    >>> from marketplace_core.metrics import aggregate_transactions, sales_by_province
    >>> from marketplace_core.product_sales import merge_lines
    >>> from marketplace_core.provinces import DEFAULT_PROVINCE_ALIASES
    >>>
    >>> statement = parse_transactions("TikTok", income_bytes)
    >>> statement.metrics.settlement, statement.warnings
    >>>
    >>> by_payment_day = aggregate_transactions(statement.transactions, date_field="payment_date")
    >>>
    >>> sales = parse_product_sales("Shopee", orders_bytes, province_aliases=DEFAULT_PROVINCE_ALIASES)
    >>> report = sales_by_province(merge_lines(sales.rows))
    >>> report.coverage
"""

__version__ = "0.1.0"

from marketplace_core.config import DEFAULT_SETTINGS, ParserSettings
from marketplace_core.exceptions import (
    ConfigError,
    DataQualityError,
    EmptyWorkbookError,
    ETLError,
    MarketplaceError,
    WorkbookReadError,
)
from marketplace_core.platforms import Platform
from marketplace_core.product_sales import merge_lines, parse_product_sales
from marketplace_core.transactions import parse_transactions

__all__ = [
    "ConfigError",
    "DEFAULT_SETTINGS",
    "DataQualityError",
    "ETLError",
    "EmptyWorkbookError",
    "MarketplaceError",
    "ParserSettings",
    "Platform",
    "WorkbookReadError",
    "__version__",
    "merge_lines",
    "parse_product_sales",
    "parse_transactions",
]
