"""Province domain module.

Resolution of free-text buyer provinces to the 77 standard Thai province
names, using an exact-match alias table supplied by the caller.

Example:
    >>> from marketplace_core.provinces import DEFAULT_PROVINCE_ALIASES, resolve_province
    >>> resolve_province("Phuket", DEFAULT_PROVINCE_ALIASES)
    'ภูเก็ต'
"""

from marketplace_core.provinces.resolver import (
    ProvinceAliasMap,
    ProvinceResolver,
    build_alias_index,
    clean_province_text,
    resolve_province,
)
from marketplace_core.provinces.standard import (
    DEFAULT_PROVINCE_ALIASES,
    STANDARD_PROVINCES,
    TOTAL_PROVINCES,
    UNKNOWN_PROVINCE,
)

__all__ = [
    "DEFAULT_PROVINCE_ALIASES",
    "ProvinceAliasMap",
    "ProvinceResolver",
    "STANDARD_PROVINCES",
    "TOTAL_PROVINCES",
    "UNKNOWN_PROVINCE",
    "build_alias_index",
    "clean_province_text",
    "resolve_province",
]
