"""Tests for settings and the platform registry."""

import pytest

from marketplace_core.config import DEFAULT_SETTINGS, ParserSettings
from marketplace_core.exceptions import ConfigError, MarketplaceError
from marketplace_core.platforms import PRODUCT_CODE_FIELDS, Platform


class TestPlatform:
    @pytest.mark.parametrize("raw", ["TikTok", "tiktok", " TIKTOK ", Platform.TIKTOK])
    def test_parse(self, raw) -> None:
        assert Platform.parse(raw) is Platform.TIKTOK

    def test_unknown_platform_is_config_error(self) -> None:
        with pytest.raises(ConfigError):
            Platform.parse("Amazon")

    def test_str_is_display_name(self) -> None:
        assert str(Platform.SHOPEE) == "Shopee"

    def test_each_platform_has_product_code_column(self) -> None:
        assert set(PRODUCT_CODE_FIELDS) == set(Platform)
        assert PRODUCT_CODE_FIELDS[Platform.TIKTOK] == "product_id"


class TestParserSettings:
    def test_defaults(self) -> None:
        assert DEFAULT_SETTINGS.trend_window == 7
        assert DEFAULT_SETTINGS.text_encodings[0] == "utf-8-sig"
        assert DEFAULT_SETTINGS.strict_columns is False

    @pytest.mark.parametrize(
        "kwargs",
        [{"trend_window": 0}, {"text_encodings": ()}, {"csv_delimiters": ""}],
    )
    def test_invalid_values(self, kwargs) -> None:
        with pytest.raises(ConfigError):
            ParserSettings(**kwargs)

    def test_config_error_is_marketplace_error(self) -> None:
        assert issubclass(ConfigError, MarketplaceError)
