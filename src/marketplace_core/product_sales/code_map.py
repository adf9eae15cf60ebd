"""Variant code to product name lookup.

Sellers maintain one product master across platforms, and a single master
entry can cover several platform codes written in one cell
(``"KL0-4010, 4008"``). Lookups therefore try, in order:

1. the code exactly as written;
2. both sides normalized as a code set (split on commas/newlines, bare
   numbers re-prefixed with the first code's prefix, sorted);
3. the code as one member of a multi-code master entry (first entry that
   lists it wins).
"""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable, Mapping

from marketplace_core.etl.cleaning_utils import clean_text
from marketplace_core.platforms import PRODUCT_CODE_FIELDS, Platform

logger = logging.getLogger(__name__)

_SPLIT_RE = re.compile(r"[,\n\r]+")
_PREFIX_RE = re.compile(r"^([A-Z]+\d*-)")


def split_codes(code: str) -> list[str]:
    return [part.strip() for part in _SPLIT_RE.split(code or "") if part.strip()]


def normalize_variant_code(code: str) -> str:
    """Canonical form of a (possibly multi-) variant code.

    Examples:
        >>> normalize_variant_code("KL0-4010, 4008")
        'KL0-4008,KL0-4010'
        >>> normalize_variant_code("KL0-4010,\\nKL0-4008")
        'KL0-4008,KL0-4010'
        >>> normalize_variant_code(" A1 ")
        'A1'
    """
    parts = split_codes(code)
    if not parts:
        return ""
    if len(parts) == 1:
        return parts[0]

    match = _PREFIX_RE.match(parts[0])
    prefix = match.group(1) if match else ""
    normalized = [
        prefix + part if prefix and part[0].isdigit() and "-" not in part else part for part in parts
    ]
    return ",".join(sorted(normalized))


class CodeNameLookup:
    """Product-name lookup over a caller-supplied code map.

    Examples:
        >>> lookup = CodeNameLookup({"KL0-4008,KL0-4010": "Kettle", "A1": "Apron"})
        >>> lookup.find("KL0-4010, 4008")
        'Kettle'
        >>> lookup.find("KL0-4010")
        'Kettle'
        >>> lookup.find("Z9") is None
        True
    """

    def __init__(self, code_name_map: Mapping[str, str] | None = None) -> None:
        self._exact: dict[str, str] = {}
        self._normalized: dict[str, str] = {}
        self._individual: dict[str, str] = {}

        for code, name in (code_name_map or {}).items():
            self._exact[code] = name
            normalized = normalize_variant_code(code)
            if normalized:
                self._normalized[normalized] = name
            parts = split_codes(code)
            if len(parts) > 1:
                for part in parts:
                    self._individual.setdefault(part, name)

    def find(self, code: str) -> str | None:
        if code in self._exact:
            return self._exact[code]
        normalized = normalize_variant_code(code)
        if normalized and normalized in self._normalized:
            return self._normalized[normalized]
        return self._individual.get(code)

    def __len__(self) -> int:
        return len(self._exact)


def code_name_map_from_records(
    platform: Platform | str,
    records: Iterable[Mapping[str, Any]],
    name_field: str = "name",
    active_field: str | None = "is_active",
) -> dict[str, str]:
    """Build a code map from product-master records for one platform.

    Records without a code for the platform are skipped, as are records
    whose ``active_field`` is present and falsy.

    Examples:
        >>> code_name_map_from_records(
        ...     "Shopee",
        ...     [{"shopee_code": "S-1", "name": "Mug", "is_active": True}],
        ... )
        {'S-1': 'Mug'}
    """
    platform = Platform.parse(platform)
    code_field = PRODUCT_CODE_FIELDS[platform]
    mapping: dict[str, str] = {}
    for record in records:
        if active_field and active_field in record and not record[active_field]:
            continue
        code = clean_text(record.get(code_field))
        name = clean_text(record.get(name_field))
        if code and name:
            mapping[code] = name
    logger.debug("Built %s code map with %d entries", platform, len(mapping))
    return mapping
