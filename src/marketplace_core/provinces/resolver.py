"""Exact-match province resolution.

Free-text province strings from buyer addresses are resolved against an
alias table supplied per call. Matching is exact after a light cleanup
(lowercase, trimmed, inner whitespace collapsed, an administrative
``จังหวัด`` prefix or a trailing ``province`` word removed). There is no
substring or fuzzy matching: ``"เชียง"`` resolves to nothing rather than
to whichever of Chiang Mai or Chiang Rai happens to be checked first.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Mapping

from marketplace_core.etl.cleaning_utils import strip_invisibles
from marketplace_core.provinces.standard import STANDARD_PROVINCES

logger = logging.getLogger(__name__)

ProvinceAliasMap = Mapping[str, Iterable[str]]

_PREFIX_RE = re.compile(r"^จังหวัด\s*")
_SUFFIX_RE = re.compile(r"\s*province$")


def clean_province_text(raw: object) -> str:
    """Normalize a province string for lookup.

    Examples:
        >>> clean_province_text("  Chiang   Mai Province ")
        'chiang mai'
        >>> clean_province_text("จังหวัดภูเก็ต")
        'ภูเก็ต'
    """
    s = (strip_invisibles(raw) or "").lower()
    s = _PREFIX_RE.sub("", s)
    s = _SUFFIX_RE.sub("", s)
    return s.strip()


def build_alias_index(alias_map: ProvinceAliasMap | None) -> dict[str, str]:
    """Flatten an alias table into ``cleaned alias -> standard name``.

    Every standard name resolves to itself. When one alias is listed under
    two provinces the later entry wins and a warning is logged; keys that
    are not standard province names are ignored with a warning.

    Args:
        alias_map: Mapping of standard province name to its aliases.

    Returns:
        Lookup dict keyed by cleaned alias text.
    """
    index = {clean_province_text(name): name for name in STANDARD_PROVINCES}
    standard = set(STANDARD_PROVINCES)

    for province, aliases in (alias_map or {}).items():
        if province not in standard:
            logger.warning("Ignoring aliases for unknown province %r", province)
            continue
        for alias in aliases or ():
            key = clean_province_text(alias)
            if not key:
                continue
            previous = index.get(key)
            if previous is not None and previous != province:
                logger.warning(
                    "Province alias %r maps to both %s and %s; using %s",
                    alias,
                    previous,
                    province,
                    province,
                )
            index[key] = province
    return index


class ProvinceResolver:
    """Resolve raw province strings against one alias table.

    Build one per parse call so the alias index is flattened once.

    Examples:
        >>> resolver = ProvinceResolver({"กรุงเทพมหานคร": ["bkk", "กทม"]})
        >>> resolver.resolve(" BKK ")
        'กรุงเทพมหานคร'
        >>> resolver.resolve("somewhere") is None
        True
    """

    def __init__(self, alias_map: ProvinceAliasMap | None = None) -> None:
        self._index = build_alias_index(alias_map)

    def resolve(self, raw: object) -> str | None:
        key = clean_province_text(raw)
        if not key:
            return None
        return self._index.get(key)

    def __len__(self) -> int:
        return len(self._index)


def resolve_province(raw: object, alias_map: ProvinceAliasMap | None = None) -> str | None:
    """Resolve one raw province string; see ProvinceResolver for repeated use."""
    return ProvinceResolver(alias_map).resolve(raw)
