"""Platform registry.

The engine knows exactly three marketplaces. Every parse call is tagged
with one of them, and each one stores its product code in a different
column of the caller's product master.
"""

from __future__ import annotations

from enum import Enum

from marketplace_core.exceptions import ConfigError


class Platform(str, Enum):
    """Supported marketplace platforms."""

    TIKTOK = "TikTok"
    SHOPEE = "Shopee"
    LAZADA = "Lazada"

    @classmethod
    def parse(cls, value: str | Platform) -> Platform:
        """Resolve a platform selector, case-insensitively.

        Args:
            value: A Platform member or its name/value in any case.

        Returns:
            The matching Platform.

        Raises:
            ConfigError: If the value names no supported platform.

        Examples:
            >>> Platform.parse("shopee")
            <Platform.SHOPEE: 'Shopee'>
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for member in cls:
            if key in (member.value.lower(), member.name.lower()):
                return member
        raise ConfigError(f"Unknown platform: {value!r}")

    def __str__(self) -> str:
        return self.value


# Product-master column that holds each platform's variant code.
PRODUCT_CODE_FIELDS: dict[Platform, str] = {
    Platform.SHOPEE: "shopee_code",
    Platform.TIKTOK: "product_id",
    Platform.LAZADA: "lazada_code",
}
