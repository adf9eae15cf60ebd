"""Tests for financial statement parsing.

Each platform test builds a small statement in memory with the headers the
platform's export uses, then checks the canonical transactions and the
statement metrics derived from them.
"""

from datetime import date
from decimal import Decimal

import pytest

from marketplace_core.config import ParserSettings
from marketplace_core.exceptions import ConfigError, DataQualityError, WorkbookReadError
from marketplace_core.platforms import Platform
from marketplace_core.transactions import parse_transactions, transactions_to_frame
from tests.test_utils import csv_bytes, xlsx_bytes


def tiktok_row(order_id: str, created: str, **amounts) -> dict:
    row = {
        "Order/adjustment ID": order_id,
        "Seller SKU": "KL0-4010",
        "Statement Type": "Order",
        "Order created time": created,
        "Order settled time": "2024-01-20",
        "Subtotal before discounts": 0,
        "Seller discounts": 0,
        "Refund subtotal after seller discounts": 0,
        "Transaction fee": 0,
        "Ajustment amount": 0,
    }
    row.update(amounts)
    return row


class TestTikTokStatement:
    """Tests for the TikTok income statement."""

    @pytest.fixture
    def single_order(self) -> bytes:
        return xlsx_bytes(
            [
                tiktok_row(
                    "576001",
                    "2024-01-02 10:00:00",
                    **{
                        "Subtotal before discounts": "1,000",
                        "Seller discounts": -100,
                        "Transaction fee": -10,
                    },
                )
            ]
        )

    def test_revenue_fees_and_settlement(self, single_order: bytes) -> None:
        result = parse_transactions(Platform.TIKTOK, single_order)

        assert len(result.transactions) == 1
        txn = result.transactions[0]
        assert txn.revenue == Decimal("900"), f"Expected revenue 900, got {txn.revenue}"
        assert txn.fees == Decimal("-10")
        assert txn.adjustments == Decimal("0")
        assert txn.settlement == Decimal("890")
        assert result.metrics.settlement == Decimal("890")

    def test_transaction_fields(self, single_order: bytes) -> None:
        txn = parse_transactions("tiktok", single_order).transactions[0]

        assert txn.platform is Platform.TIKTOK
        assert txn.external_id == "576001"
        assert txn.sku == "KL0-4010"
        assert txn.record_type == "Order"
        assert txn.order_date == date(2024, 1, 2)
        assert txn.payment_date == date(2024, 1, 20)
        assert txn.row_number == 2
        assert txn.raw_row["Seller discounts"] == -100

    def test_breakdown_trees(self, single_order: bytes) -> None:
        metrics = parse_transactions(Platform.TIKTOK, single_order).metrics

        assert metrics.breakdown["Transaction fee"] == Decimal("-10")
        fee_items = metrics.fee_groups[0].items
        assert len(fee_items) == 20
        shipping = next(item for item in fee_items if item.label == "Seller shipping fee")
        assert len(shipping.children) == 6

        subtotal_after = metrics.revenue_groups[0].items[0]
        assert subtotal_after.label == "Subtotal after seller discounts"
        assert subtotal_after.value == Decimal("900")
        assert [child.value for child in subtotal_after.children] == [Decimal("1000"), Decimal("-100")]

    def test_adjustment_row(self) -> None:
        data = xlsx_bytes(
            [
                tiktok_row("ADJ-1", "2024-01-03", **{"Statement Type": "Adjustment", "Ajustment amount": "-25.50"}),
            ]
        )

        txn = parse_transactions(Platform.TIKTOK, data).transactions[0]

        assert txn.record_type == "Adjustment"
        assert txn.adjustments == Decimal("-25.50")
        assert txn.settlement == Decimal("-25.50")

    def test_blank_statement_type_defaults_to_order(self) -> None:
        data = xlsx_bytes([tiktok_row("576002", "2024-01-02", **{"Statement Type": None})])
        assert parse_transactions(Platform.TIKTOK, data).transactions[0].record_type == "Order"

    def test_row_without_id_is_skipped_with_warning(self) -> None:
        data = xlsx_bytes(
            [
                tiktok_row("576001", "2024-01-02", **{"Subtotal before discounts": 100}),
                tiktok_row(None, "2024-01-02", **{"Subtotal before discounts": 999}),
            ]
        )

        result = parse_transactions(Platform.TIKTOK, data)

        assert [t.external_id for t in result.transactions] == ["576001"]
        assert result.metrics.revenue == Decimal("100")
        assert any("Row 3" in w for w in result.warnings), result.warnings

    def test_garbage_amount_becomes_zero(self) -> None:
        data = xlsx_bytes([tiktok_row("576001", "2024-01-02", **{"Subtotal before discounts": "n/a"})])
        assert parse_transactions(Platform.TIKTOK, data).transactions[0].revenue == Decimal("0")

    def test_trend_covers_last_seven_days(self) -> None:
        rows = [
            tiktok_row(f"O{day}", f"2024-01-{day:02d}", **{"Subtotal before discounts": day})
            for day in range(1, 11)
        ]

        metrics = parse_transactions(Platform.TIKTOK, xlsx_bytes(rows)).metrics

        assert len(metrics.per_day) == 10
        assert metrics.trend_dates == [f"2024-01-{day:02d}" for day in range(4, 11)]
        assert metrics.trend == [Decimal(day) for day in range(4, 11)]

    def test_csv_upload(self) -> None:
        data = csv_bytes([tiktok_row("576001", "02/01/2024 10:00:00", **{"Subtotal before discounts": "1,000"})])

        txn = parse_transactions(Platform.TIKTOK, data).transactions[0]

        assert txn.revenue == Decimal("1000")
        assert txn.order_date == date(2024, 1, 2)


class TestDegradedInput:
    def test_missing_columns_warn(self) -> None:
        data = xlsx_bytes([{"Order/adjustment ID": "1", "Subtotal before discounts": 5}])

        result = parse_transactions(Platform.TIKTOK, data)

        assert len(result.transactions) == 1
        assert result.transactions[0].order_date is None
        assert any("Order created time" in w for w in result.warnings), result.warnings

    def test_missing_columns_raise_when_strict(self) -> None:
        data = xlsx_bytes([{"Order/adjustment ID": "1"}])
        with pytest.raises(DataQualityError):
            parse_transactions(Platform.TIKTOK, data, ParserSettings(strict_columns=True))

    def test_unrecognized_sheet_returns_empty_result(self) -> None:
        data = xlsx_bytes([{"Foo": 1, "Bar": 2}])

        result = parse_transactions(Platform.SHOPEE, data)

        assert result.transactions == []
        assert result.metrics.settlement == Decimal("0")
        assert any("No recognized" in w for w in result.warnings)

    def test_header_only_sheet(self) -> None:
        data = xlsx_bytes([], columns=["Order/adjustment ID", "Order created time"])

        result = parse_transactions(Platform.TIKTOK, data)

        assert result.transactions == []
        assert "Sheet has no data rows" in result.warnings

    def test_unknown_platform(self) -> None:
        with pytest.raises(ConfigError):
            parse_transactions("Amazon", xlsx_bytes([{"A": 1}]))

    def test_unreadable_bytes(self) -> None:
        with pytest.raises(WorkbookReadError):
            parse_transactions(Platform.TIKTOK, b"PK\x03\x04broken")


class TestShopeeStatement:
    @pytest.fixture
    def statement(self) -> bytes:
        return xlsx_bytes(
            [
                {
                    "หมายเลขคำสั่งซื้อ": "2401020001",
                    "SKU ร้านค้า": "KL0-4010",
                    "วันที่ทำการสั่งซื้อ": "2024-01-02",
                    "วันที่โอนชำระเงินสำเร็จ": "2024-01-09",
                    "สินค้าราคาปกติ": 500,
                    "ส่วนลดสินค้าจากผู้ขาย": -50,
                    "จำนวนเงินที่ทำการคืนให้ผู้ซื้อ": 0,
                    "โค้ดส่วนลดที่ออกโดยผู้ขาย": -20,
                    "ค่าจัดส่งที่ชำระโดยผู้ซื้อ": 40,
                    "ค่าจัดส่งที่ Shopee ชำระโดยชื่อของคุณ": -40,
                    "ค่าคอมมิชชั่น": -25,
                    "ค่าบริการ": -15,
                    "ค่าธุรกรรมการชำระเงิน": "-9.63",
                },
                {
                    "หมายเลขคำสั่งซื้อ": "2401030002",
                    "SKU ร้านค้า": "A1",
                    "วันที่ทำการสั่งซื้อ": "2024-01-03",
                    "วันที่โอนชำระเงินสำเร็จ": None,
                    "สินค้าราคาปกติ": 100,
                    "ค่าคอมมิชชั่น": -5,
                },
            ]
        )

    def test_amount_groups(self, statement: bytes) -> None:
        result = parse_transactions(Platform.SHOPEE, statement)

        first = result.transactions[0]
        assert first.revenue == Decimal("430")
        assert first.fees == Decimal("-49.63")
        assert first.adjustments == Decimal("0")
        assert first.settlement == Decimal("380.37")
        assert result.metrics.revenue == Decimal("530")

    def test_dates(self, statement: bytes) -> None:
        second = parse_transactions(Platform.SHOPEE, statement).transactions[1]
        assert second.order_date == date(2024, 1, 3)
        assert second.payment_date is None
        assert second.record_type == "", "Shopee statements carry no record type"

    def test_fee_groups(self, statement: bytes) -> None:
        metrics = parse_transactions(Platform.SHOPEE, statement).metrics

        titles = [group.title for group in metrics.fee_groups]
        assert titles == ["Shipping", "Fees", "Value-added services"]
        assert metrics.fee_groups[0].total == Decimal("0")
        assert metrics.fee_groups[1].total == Decimal("-54.63")
        assert metrics.revenue_groups[0].items[0].value == Decimal("550")


class TestLazadaLedger:
    @pytest.fixture
    def ledger(self) -> bytes:
        return xlsx_bytes(
            [
                {
                    "หมายเลขคำสั่งซื้อ": "LZ100",
                    "SKU ร้านค้า": "KL0-4010",
                    "วันที่สร้างคำสั่งซื้อ": "2024-01-05",
                    "วันที่ทำรายการ": "2024-01-07",
                    "ชื่อรายการธุรกรรม": "ยอดรวมค่าสินค้า",
                    "จำนวนเงิน(รวมภาษี)": "500.00",
                },
                {
                    "หมายเลขคำสั่งซื้อ": "LZ100",
                    "SKU ร้านค้า": "KL0-4010",
                    "วันที่สร้างคำสั่งซื้อ": None,
                    "วันที่ทำรายการ": "2024-01-07",
                    "ชื่อรายการธุรกรรม": "หักค่าธรรมเนียมการขายสินค้า",
                    "จำนวนเงิน(รวมภาษี)": "-30.00",
                },
                {
                    "หมายเลขคำสั่งซื้อ": None,
                    "SKU ร้านค้า": None,
                    "วันที่สร้างคำสั่งซื้อ": None,
                    "วันที่ทำรายการ": "2024-01-08",
                    "ชื่อรายการธุรกรรม": "Storage Fee",
                    "จำนวนเงิน(รวมภาษี)": "-99",
                },
            ]
        )

    def test_ledger_lines_classified(self, ledger: bytes) -> None:
        result = parse_transactions(Platform.LAZADA, ledger)

        revenue_line, fee_line, other_line = result.transactions
        assert revenue_line.revenue == Decimal("500.00")
        assert fee_line.fees == Decimal("-30.00")
        assert other_line.settlement == Decimal("0")
        assert result.metrics.settlement == Decimal("470.00")

    def test_order_date_falls_back_to_transaction_date(self, ledger: bytes) -> None:
        _, fee_line, _ = parse_transactions(Platform.LAZADA, ledger).transactions
        assert fee_line.order_date == date(2024, 1, 7)
        assert fee_line.payment_date == fee_line.order_date

    def test_missing_order_id_synthesized(self, ledger: bytes) -> None:
        result = parse_transactions(Platform.LAZADA, ledger)

        synthetic = result.transactions[2].external_id
        assert synthetic == "LAZADA-Storage-Fee-ROW4"
        assert any(synthetic in w for w in result.warnings)

    def test_breakdown_by_transaction_name(self, ledger: bytes) -> None:
        metrics = parse_transactions(Platform.LAZADA, ledger).metrics

        assert metrics.breakdown == {
            "ยอดรวมค่าสินค้า": Decimal("500.00"),
            "หักค่าธรรมเนียมการขายสินค้า": Decimal("-30.00"),
        }
        assert metrics.revenue_groups[0].items[0].value == Decimal("500.00")


def test_transactions_to_frame() -> None:
    data = xlsx_bytes([tiktok_row("576001", "2024-01-02", **{"Subtotal before discounts": 10})])

    df = transactions_to_frame(parse_transactions(Platform.TIKTOK, data).transactions)

    assert list(df["external_id"]) == ["576001"]
    assert df.loc[0, "platform"] == "TikTok"
    assert "raw_row" not in df.columns
