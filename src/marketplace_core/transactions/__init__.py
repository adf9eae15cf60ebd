"""Transactions domain module.

Financial statements (TikTok income, Shopee income, Lazada transaction
ledger) parsed into one canonical Transaction per row, with totals,
per-day buckets and fee/revenue breakdown trees.

Example:
    >>> from marketplace_core.transactions import parse_transactions, transactions_to_frame
    >>>
    >>> result = parse_transactions("Shopee", file_bytes)
    >>> result.metrics.settlement
    >>> result.warnings
    >>> df = transactions_to_frame(result.transactions)
"""

from marketplace_core.transactions.models import (
    BreakdownGroup,
    BreakdownItem,
    PlatformMetrics,
    Transaction,
    TransactionParseResult,
    transactions_to_frame,
)
from marketplace_core.transactions.parser import parse_transactions

__all__ = [
    "BreakdownGroup",
    "BreakdownItem",
    "PlatformMetrics",
    "Transaction",
    "TransactionParseResult",
    "parse_transactions",
    "transactions_to_frame",
]
