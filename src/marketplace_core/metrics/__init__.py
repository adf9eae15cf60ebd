"""Metrics domain module.

Folds parsed (or persisted) records into reporting shapes:

- **aggregate_transactions**: totals, per-day buckets and the trailing
  trend for financial transactions, dated by order or payment date.
- **aggregate_product_sales**: the same for product-sale lines.
- **sales_by_province**: confirmed sales per resolved province with
  coverage over the 77 provinces.

Example:
    >>> from marketplace_core.metrics import aggregate_transactions
    >>> metrics = aggregate_transactions(result.transactions, date_field="payment_date")
    >>> metrics.per_day_frame().tail()
"""

from marketplace_core.metrics.aggregate import (
    AggregatedMetrics,
    DailyMetric,
    DailySales,
    ProductSalesMetrics,
    ProductTotal,
    ProvinceSales,
    ProvinceSalesReport,
    aggregate_product_sales,
    aggregate_transactions,
    sales_by_province,
)

__all__ = [
    "AggregatedMetrics",
    "DailyMetric",
    "DailySales",
    "ProductSalesMetrics",
    "ProductTotal",
    "ProvinceSales",
    "ProvinceSalesReport",
    "aggregate_product_sales",
    "aggregate_transactions",
    "sales_by_province",
]
