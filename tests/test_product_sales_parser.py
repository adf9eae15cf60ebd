"""Tests for order-line (product sales) parsing."""

from datetime import datetime
from decimal import Decimal

import pytest

from marketplace_core.platforms import Platform
from marketplace_core.product_sales import lines_to_frame, merge_lines, parse_product_sales
from marketplace_core.provinces import DEFAULT_PROVINCE_ALIASES
from tests.test_utils import xlsx_bytes

CODE_MAP = {
    "KL0-4008,KL0-4010": "Kettle Set",
    "A1": "Apron",
}


def shopee_row(order_id, sku, **overrides) -> dict:
    row = {
        "หมายเลขคำสั่งซื้อ": order_id,
        "สถานะการสั่งซื้อ": "สำเร็จแล้ว",
        "เลขอ้างอิง SKU (SKU Reference No.)": sku,
        "ชื่อสินค้า": "Shopee listing title",
        "จำนวน": 1,
        "ราคาขายสุทธิ": 100,
        "โค้ดส่วนลดชำระโดยผู้ขาย": 0,
        "สถานะการคืนเงินหรือคืนสินค้า": None,
        "จำนวนที่ส่งคืน": 0,
        "จังหวัด": "กรุงเทพมหานคร",
    }
    row.update(overrides)
    return row


class TestShopeeProductSales:
    """Tests for the Shopee order export."""

    @pytest.fixture
    def export(self) -> bytes:
        return xlsx_bytes(
            [
                shopee_row("S1", "KL0-4010, 4008", **{"จำนวน": 2, "ราคาขายสุทธิ": "300", "โค้ดส่วนลดชำระโดยผู้ขาย": 20}),
                shopee_row(
                    "S2",
                    "A1",
                    **{"สถานะการคืนเงินหรือคืนสินค้า": "คำขอได้รับการยอมรับแล้ว", "จำนวนที่ส่งคืน": 1, "จังหวัด": "bkk"},
                ),
                shopee_row("S3", "A1", **{"สถานะการสั่งซื้อ": "อยู่ระหว่างการจัดส่ง"}),
                shopee_row("S4", "A1", **{"สถานะการสั่งซื้อ": "ยกเลิกแล้ว"}),
                shopee_row("S5", None),
                shopee_row("S6", "ZZ-1", **{"จังหวัด": "Atlantis"}),
                shopee_row("S7", "ZZ-1", **{"จังหวัด": "Atlantis"}),
            ]
        )

    @pytest.fixture
    def result(self, export: bytes):
        return parse_product_sales(
            Platform.SHOPEE,
            export,
            code_name_map=CODE_MAP,
            province_aliases=DEFAULT_PROVINCE_ALIASES,
        )

    def test_sale_line(self, result) -> None:
        sale = result.rows[0]
        assert sale.order_id == "S1"
        assert sale.product_name == "Kettle Set", "multi-code entry should match reordered codes"
        assert sale.qty_confirmed == 2
        assert sale.qty_returned == 0
        assert sale.revenue_confirmed == Decimal("280")
        assert sale.province_normalized == "กรุงเทพมหานคร"
        assert sale.row_number == 2

    def test_return_line(self, result) -> None:
        returned = result.rows[1]
        assert (returned.qty_confirmed, returned.qty_returned, returned.revenue_confirmed) == (0, 1, Decimal("0"))
        assert returned.province_normalized == "กรุงเทพมหานคร"

    def test_shipping_cancelled_and_codeless_rows_skipped(self, result) -> None:
        assert [line.order_id for line in result.rows] == ["S1", "S2", "S6", "S7"]
        assert result.summary.skipped_rows == 3
        assert any("Row 6" in w and "variant code" in w for w in result.warnings), result.warnings

    def test_unmapped_code_falls_back_to_label(self, result) -> None:
        assert result.missing_codes == ["ZZ-1"]
        assert result.rows[2].product_name == "Shopee listing title"

    def test_unmapped_province_listed_once(self, result) -> None:
        assert result.unmapped_provinces == ["Atlantis"]
        assert result.summary.unmapped_provinces == {"Atlantis": 2}
        assert result.rows[2].province_normalized is None

    def test_summary(self, result) -> None:
        summary = result.summary
        assert summary.total_rows == 4
        assert summary.total_qty == 4
        assert summary.total_returned == 1
        assert summary.total_revenue == Decimal("480")
        assert summary.total_products == 3
        assert summary.total_variants == 3

    def test_strict_mapping_skips_unmapped(self, export: bytes) -> None:
        result = parse_product_sales(Platform.SHOPEE, export, CODE_MAP, strict_mapping=True)

        assert [line.order_id for line in result.rows] == ["S1", "S2"]
        assert result.missing_codes == ["ZZ-1"]
        assert sum("no product mapping" in w for w in result.warnings) == 2

    def test_metadata_stamped(self, export: bytes) -> None:
        stamp = datetime(2024, 2, 1, 9, 30)

        result = parse_product_sales(Platform.SHOPEE, export, upload_id="up-1", created_at=stamp)

        assert {(line.upload_id, line.created_at) for line in result.rows} == {("up-1", stamp)}


class TestTikTokProductSales:
    @pytest.fixture
    def export(self) -> bytes:
        base = {
            "Order ID": "T1",
            "Order Status": "เสร็จสมบูรณ์",
            "Order Substatus": "เสร็จสมบูรณ์",
            "Cancelation/Return Type": None,
            "SKU ID": "A1",
            "Qty": 3,
            "Sku Quantity of return": 0,
            "SKU Subtotal Before Discount (THB)": "1,500",
            "SKU Seller Discount": 150,
            "Province": "Phuket",
        }
        return xlsx_bytes(
            [
                base,
                {**base, "Order ID": "T2", "Cancelation/Return Type": "Return/Refund", "Sku Quantity of return": 2},
                {**base, "Order ID": "T3", "Cancelation/Return Type": "Cancel"},
                {**base, "Order ID": "T4", "Order Substatus": "รอจัดส่ง"},
            ]
        )

    def test_completed_sale_and_return(self, export: bytes) -> None:
        result = parse_product_sales(Platform.TIKTOK, export, CODE_MAP, DEFAULT_PROVINCE_ALIASES)

        sale, returned = result.rows
        assert (sale.order_id, sale.qty_confirmed, sale.revenue_confirmed) == ("T1", 3, Decimal("1350"))
        assert (returned.order_id, returned.qty_confirmed, returned.qty_returned) == ("T2", 0, 2)
        assert returned.revenue_confirmed == Decimal("0")
        assert sale.province_normalized == "ภูเก็ต"
        assert sale.product_name == "Apron"
        assert result.summary.skipped_rows == 2

    def test_header_synonyms(self, export: bytes) -> None:
        result = parse_product_sales(Platform.TIKTOK, export)
        assert result.warnings == [], "Qty / (THB) subtotal headers should resolve without warnings"


class TestLazadaProductSales:
    @pytest.fixture
    def export(self) -> bytes:
        def row(item_id, status, price=250):
            return {"orderItemId": item_id, "status": status, "sellerSku": "KL0-4008", "unitPrice": price}

        return xlsx_bytes(
            [
                row("L1", "confirmed"),
                row("L1", "Confirmed"),
                row("L2", "returned"),
                row("L3", "pending"),
            ]
        )

    def test_one_unit_per_row(self, export: bytes) -> None:
        result = parse_product_sales(Platform.LAZADA, export, CODE_MAP)

        assert len(result.rows) == 3
        assert result.summary.skipped_rows == 1
        assert all(line.product_name == "Kettle Set" for line in result.rows)
        assert all(line.province_normalized is None for line in result.rows)

    def test_order_items_collapse_on_merge(self, export: bytes) -> None:
        merged = merge_lines(parse_product_sales(Platform.LAZADA, export).rows)

        by_order = {line.order_id: line for line in merged}
        assert by_order["L1"].qty_confirmed == 2
        assert by_order["L1"].revenue_confirmed == Decimal("500")
        assert by_order["L1"].row_number == 2, "earliest row kept when no line is fresher"
        assert (by_order["L2"].qty_confirmed, by_order["L2"].qty_returned) == (0, 1)

    def test_rows_without_order_item_id_skipped(self) -> None:
        data = xlsx_bytes(
            [
                {"orderItemId": "", "status": "confirmed", "sellerSku": "KL0-4008", "unitPrice": 250},
                {"orderItemId": None, "status": "confirmed", "sellerSku": "KL0-4008", "unitPrice": 250},
                {"orderItemId": "L9", "status": "confirmed", "sellerSku": "KL0-4008", "unitPrice": 250},
            ]
        )

        result = parse_product_sales(Platform.LAZADA, data)

        assert [line.order_id for line in result.rows] == ["L9"]
        assert result.summary.skipped_rows == 2
        assert any("Row 2" in w and "order item id" in w for w in result.warnings), result.warnings
        assert any("Row 3" in w and "order item id" in w for w in result.warnings), result.warnings

    def test_missing_columns_warn(self) -> None:
        result = parse_product_sales(Platform.LAZADA, xlsx_bytes([{"orderItemId": "L1", "status": "confirmed"}]))

        assert result.rows == []
        assert any("sellerSku" in w for w in result.warnings), result.warnings


def test_lines_to_frame() -> None:
    data = xlsx_bytes([shopee_row("S1", "A1")])

    df = lines_to_frame(parse_product_sales(Platform.SHOPEE, data, CODE_MAP).rows)

    assert df.loc[0, "product_name"] == "Apron"
    assert df.loc[0, "platform"] == "Shopee"
