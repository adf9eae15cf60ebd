"""Merge product-sale lines that share a composite key.

The key is ``(platform, order_id or "NO_ORDER", variant_code or "NO_CODE")``.
Lines with the same key are one sale reported more than once (Lazada emits
one row per unit; exports overlap when re-downloaded), so quantities and
revenue are summed while the row metadata follows the freshest line.

The merge applies within one upload. Against data already persisted, the
store's policy is insert-or-ignore on the same key, which
``filter_new_lines`` reproduces.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable

from marketplace_core.product_sales.models import ProductSaleLine

logger = logging.getLogger(__name__)

NO_ORDER = "NO_ORDER"
NO_CODE = "NO_CODE"

LineKey = tuple[str, str, str]


def line_key(line: ProductSaleLine) -> LineKey:
    return (str(line.platform), line.order_id or NO_ORDER, line.variant_code or NO_CODE)


def _is_fresher(incoming: ProductSaleLine, current: ProductSaleLine) -> bool:
    if incoming.created_at is None:
        return False
    return current.created_at is None or incoming.created_at > current.created_at


def merge_lines(lines: Iterable[ProductSaleLine]) -> list[ProductSaleLine]:
    """Collapse lines sharing a key into one.

    For each key the first line seen is copied; later lines add their
    ``qty_confirmed``, ``qty_returned`` and ``revenue_confirmed``. When a
    later line has a strictly later ``created_at`` its ``created_at``,
    ``row_number``, ``upload_id`` and ``raw_row`` replace the kept ones.
    Input lines are not modified; output keeps first-seen key order.

    Args:
        lines: Lines from one or more parses.

    Returns:
        One line per distinct key.

    Examples:
        >>> merged = merge_lines(result.rows)
        >>> sum(l.qty_confirmed for l in merged) == result.summary.total_qty
        True
    """
    merged: dict[LineKey, ProductSaleLine] = {}
    seen = 0
    for line in lines:
        seen += 1
        key = line_key(line)
        current = merged.get(key)
        if current is None:
            merged[key] = replace(line, raw_row=dict(line.raw_row))
            continue

        current.qty_confirmed += line.qty_confirmed
        current.qty_returned += line.qty_returned
        current.revenue_confirmed += line.revenue_confirmed
        if current.product_name != line.product_name:
            logger.debug(
                "Key %s seen with product names %r and %r; keeping %r",
                key,
                current.product_name,
                line.product_name,
                current.product_name,
            )
        if _is_fresher(line, current):
            current.created_at = line.created_at
            current.row_number = line.row_number
            current.upload_id = line.upload_id
            current.raw_row = dict(line.raw_row)

    logger.info("Merged %d product sale line(s) into %d", seen, len(merged))
    return list(merged.values())


def filter_new_lines(
    existing_keys: Iterable[LineKey],
    lines: Iterable[ProductSaleLine],
) -> list[ProductSaleLine]:
    """Lines whose key is not already persisted (insert-or-ignore).

    Args:
        existing_keys: Keys already in the store, as built by ``line_key``.
        lines: Candidate lines, normally already merged.

    Returns:
        Lines to insert, in input order; duplicate keys within ``lines``
        keep only their first line.
    """
    taken = set(existing_keys)
    fresh = []
    for line in lines:
        key = line_key(line)
        if key in taken:
            continue
        taken.add(key)
        fresh.append(line)
    return fresh
