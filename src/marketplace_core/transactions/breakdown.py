"""Build fee and revenue breakdown trees from per-column totals."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Mapping

from marketplace_core.adapters.financial import GroupLayout
from marketplace_core.etl.cleaning_utils import ZERO
from marketplace_core.transactions.models import BreakdownGroup, BreakdownItem


def build_groups(
    layouts: Iterable[GroupLayout],
    totals: Mapping[str, Decimal],
) -> list[BreakdownGroup]:
    """Materialize group layouts against accumulated column totals.

    An item bound to a column takes that column's total; an item without
    one is the sum of its children. Columns absent from the sheet count
    as zero.

    Examples:
        >>> from marketplace_core.adapters.financial import ItemLayout
        >>> layout = GroupLayout("Fees", (ItemLayout("Net", children=("a", "b")),))
        >>> build_groups([layout], {"a": Decimal("-3"), "b": Decimal("1")})[0].items[0].value
        Decimal('-2')
    """
    groups = []
    for layout in layouts:
        items = []
        for item in layout.items:
            children = [BreakdownItem(child, totals.get(child, ZERO)) for child in item.children]
            if item.key is not None:
                value = totals.get(item.key, ZERO)
            else:
                value = sum((child.value for child in children), ZERO)
            items.append(BreakdownItem(item.label, value, children))
        groups.append(BreakdownGroup(layout.title, items))
    return groups


def flatten(groups: Iterable[BreakdownGroup]) -> dict[str, Decimal]:
    """Top-level items of every group as ``label -> value``."""
    flat: dict[str, Decimal] = {}
    for group in groups:
        for item in group.items:
            flat[item.label] = flat.get(item.label, ZERO) + item.value
    return flat
