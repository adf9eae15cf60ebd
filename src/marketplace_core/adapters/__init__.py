"""Column adapters: per-platform header synonym tables.

Two schemas per platform:

- **financial**: settlement/income statements, parsed into Transactions
- **product_sales**: order-line exports, parsed into ProductSaleLines

Example:
    >>> from marketplace_core.adapters import FINANCIAL_ADAPTERS
    >>> from marketplace_core.platforms import Platform
    >>> adapter = FINANCIAL_ADAPTERS[Platform.TIKTOK]
    >>> adapter.resolve(["Order/adjustment ID", "Seller SKU"]).columns["external_id"]
    'Order/adjustment ID'
"""

from marketplace_core.adapters.base import ColumnAdapter, FieldSpec, ResolvedColumns
from marketplace_core.adapters.financial import (
    FINANCIAL_ADAPTERS,
    FinancialAdapter,
    GroupLayout,
    ItemLayout,
    LedgerAdapter,
    LineAmounts,
)
from marketplace_core.adapters.product_sales import PRODUCT_SALES_ADAPTERS

__all__ = [
    "ColumnAdapter",
    "FINANCIAL_ADAPTERS",
    "FieldSpec",
    "FinancialAdapter",
    "GroupLayout",
    "ItemLayout",
    "LedgerAdapter",
    "LineAmounts",
    "PRODUCT_SALES_ADAPTERS",
    "ResolvedColumns",
]
