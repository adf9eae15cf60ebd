"""Tests for variant code normalization and product-name lookup."""

import pytest

from marketplace_core.exceptions import ConfigError
from marketplace_core.product_sales import CodeNameLookup, code_name_map_from_records, normalize_variant_code


class TestNormalizeVariantCode:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("KL0-4010, 4008", "KL0-4008,KL0-4010"),
            ("KL0-4010,\nKL0-4008", "KL0-4008,KL0-4010"),
            ("KL0-4008,KL0-4010", "KL0-4008,KL0-4010"),
            (" A1 ", "A1"),
            ("", ""),
            ("abc-1, 2", "2,abc-1"),
        ],
    )
    def test_normalize(self, raw: str, expected: str) -> None:
        assert normalize_variant_code(raw) == expected


class TestCodeNameLookup:
    @pytest.fixture
    def lookup(self) -> CodeNameLookup:
        return CodeNameLookup(
            {
                "KL0-4008,KL0-4010": "Kettle Set",
                "KL0-4010": "Kettle",
                "MG-1,MG-2": "Mug Pair",
            }
        )

    def test_exact_match_first(self, lookup: CodeNameLookup) -> None:
        assert lookup.find("KL0-4010") == "Kettle"

    def test_normalized_match(self, lookup: CodeNameLookup) -> None:
        assert lookup.find("KL0-4010, 4008") == "Kettle Set"

    def test_individual_part_match(self, lookup: CodeNameLookup) -> None:
        assert lookup.find("MG-2") == "Mug Pair"

    def test_no_match(self, lookup: CodeNameLookup) -> None:
        assert lookup.find("MG-3") is None
        assert CodeNameLookup(None).find("A1") is None


class TestCodeNameMapFromRecords:
    def test_uses_platform_code_column(self) -> None:
        records = [
            {"shopee_code": "S-1", "product_id": "T-1", "lazada_code": "L-1", "name": "Mug", "is_active": True},
            {"shopee_code": "S-2", "product_id": None, "name": "Bowl", "is_active": False},
            {"shopee_code": None, "product_id": "T-3", "name": "Plate"},
        ]

        assert code_name_map_from_records("Shopee", records) == {"S-1": "Mug"}
        assert code_name_map_from_records("TikTok", records) == {"T-1": "Mug", "T-3": "Plate"}
        assert code_name_map_from_records("Lazada", records) == {"L-1": "Mug"}

    def test_unknown_platform(self) -> None:
        with pytest.raises(ConfigError):
            code_name_map_from_records("eBay", [])
