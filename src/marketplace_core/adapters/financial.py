"""Financial-statement adapters.

One adapter per platform for the settlement/income report a seller
downloads from each marketplace. Besides the header synonyms, a financial
adapter knows how to split one normalized row into revenue, fees and
adjustments, and how the per-column totals are laid out as fee and revenue
breakdown trees.

Sign convention is the platform's own: fees arrive negative, and settlement
is always ``revenue + fees + adjustments``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Mapping

from marketplace_core.adapters.base import (
    AMOUNT,
    DATE,
    ColumnAdapter,
    FieldSpec,
    amount,
)
from marketplace_core.etl.cleaning_utils import ZERO
from marketplace_core.platforms import Platform

logger = logging.getLogger(__name__)

REVENUE = "revenue"
FEE = "fee"
ADJUSTMENT = "adjustment"
DETAIL = "detail"

# Canonical keys shared by every financial adapter
EXTERNAL_ID = "external_id"
SKU = "sku"
RECORD_TYPE = "record_type"
ORDER_DATE = "order_date"
PAYMENT_DATE = "payment_date"


@dataclass(frozen=True)
class ItemLayout:
    """One line of a breakdown tree.

    The item's value is the total of ``key`` when set, otherwise the sum of
    its children.
    """

    label: str
    key: str | None = None
    children: tuple[str, ...] = ()


@dataclass(frozen=True)
class GroupLayout:
    title: str
    items: tuple[ItemLayout, ...]


@dataclass
class LineAmounts:
    """Money extracted from one statement row."""

    revenue: Decimal = ZERO
    fees: Decimal = ZERO
    adjustments: Decimal = ZERO
    detail: dict[str, Decimal] = field(default_factory=dict)

    @property
    def settlement(self) -> Decimal:
        return self.revenue + self.fees + self.adjustments


@dataclass(frozen=True)
class FinancialAdapter(ColumnAdapter):
    """Column adapter for a column-per-component statement layout.

    Revenue, fee and adjustment totals are the sums of the fields tagged
    with those roles. Every amount field, including ``detail`` ones that
    feed only the breakdown, is reported in ``LineAmounts.detail``.
    """

    fee_layout: tuple[GroupLayout, ...] = ()
    revenue_layout: tuple[GroupLayout, ...] = ()
    default_record_type: str = ""
    # Field holding the date used when the order date cell is blank
    order_date_fallback: str | None = None
    payment_date_is_order_date: bool = False

    def amounts(self, values: Mapping[str, Any]) -> LineAmounts:
        line = LineAmounts()
        for spec in self.fields:
            if spec.kind != AMOUNT:
                continue
            value = values[spec.key]
            line.detail[spec.key] = value
            if spec.role == REVENUE:
                line.revenue += value
            elif spec.role == FEE:
                line.fees += value
            elif spec.role == ADJUSTMENT:
                line.adjustments += value
        return line

    def layouts(
        self, totals: Mapping[str, Decimal]
    ) -> tuple[tuple[GroupLayout, ...], tuple[GroupLayout, ...]]:
        """Fee and revenue layouts for a given set of column totals."""
        return self.fee_layout, self.revenue_layout

    def synthesize_id(self, values: Mapping[str, Any], row_number: int) -> str:
        """Id for a row with a blank order id; empty means skip the row."""
        return ""


@dataclass(frozen=True)
class LedgerAdapter(FinancialAdapter):
    """Adapter for a one-ledger-line-per-row statement.

    Each row names a transaction type and carries a single amount. The
    type decides whether the amount is revenue or a fee; types in neither
    set contribute nothing.
    """

    revenue_names: frozenset[str] = frozenset()
    fee_names: frozenset[str] = frozenset()
    revenue_title: str = "Total revenue"
    fee_title: str = "Fees"

    def amounts(self, values: Mapping[str, Any]) -> LineAmounts:
        name = values[RECORD_TYPE]
        value = values["amount"]
        if name in self.revenue_names:
            return LineAmounts(revenue=value, detail={name: value})
        if name in self.fee_names:
            return LineAmounts(fees=value, detail={name: value})
        logger.debug("Ignoring %s ledger line %r", self.platform, name)
        return LineAmounts()

    def layouts(
        self, totals: Mapping[str, Decimal]
    ) -> tuple[tuple[GroupLayout, ...], tuple[GroupLayout, ...]]:
        fee_items = tuple(ItemLayout(name, key=name) for name in totals)
        revenue_children = tuple(name for name in totals if name in self.revenue_names)
        return (
            (GroupLayout(self.fee_title, fee_items),),
            (GroupLayout(self.revenue_title, (ItemLayout(self.revenue_title, children=revenue_children),)),),
        )

    def synthesize_id(self, values: Mapping[str, Any], row_number: int) -> str:
        slug = re.sub(r"[^A-Za-z0-9]", "-", values[RECORD_TYPE] or "UNKNOWN")
        return f"{self.platform.name}-{slug}-ROW{row_number}"


# TikTok Shop: "Income" statement, one row per order or adjustment

_TIKTOK_FEES = (
    "Transaction fee",
    "TikTok Shop commission fee",
    "Credit card installment - Interest rate cost",
    "Seller shipping fee",
    "Affiliate Commission",
    "Affiliate partner commission",
    "Affiliate Shop Ads commission",
    "Affiliate commission deposit",
    "Affiliate commission refund",
    "Affiliate Partner shop ads commission",
    "SFP service fee",
    "Bonus cashback service fee",
    "LIVE Specials service fee",
    "Voucher Xtra service fee",
    "EAMS Program service fee",
    "Brands Crazy Deals/Flash Sale service fee",
    "TikTok PayLater program fee",
    "Commerce growth fee",
    "Infrastructure fee",
    "Campaign resource fee",
)
_TIKTOK_SHIPPING_PARTS = (
    "Actual shipping fee",
    "Platform shipping fee discount",
    "Customer shipping fee",
    "Actual return shipping fee",
    "Refunded customer shipping fee",
    "Shipping subsidy",
)
_TIKTOK_AFFILIATE_PARTS = (
    "Affiliate commission before PIT (personal income tax)",
    "Personal income tax withheld from affiliate commission",
)
_TIKTOK_SHOP_ADS_PARTS = (
    "Affiliate Shop Ads commission before PIT",
    "Personal income tax withheld from affiliate Shop Ads commission",
)
_TIKTOK_FEE_CHILDREN = {
    "Seller shipping fee": _TIKTOK_SHIPPING_PARTS,
    "Affiliate Commission": _TIKTOK_AFFILIATE_PARTS,
    "Affiliate Shop Ads commission": _TIKTOK_SHOP_ADS_PARTS,
}

TIKTOK_FINANCIAL = FinancialAdapter(
    platform=Platform.TIKTOK,
    schema="financial",
    fields=(
        FieldSpec(EXTERNAL_ID, ("Order/adjustment ID", "Order ID"), required=True),
        FieldSpec(SKU, ("Seller SKU", "SKU")),
        FieldSpec(RECORD_TYPE, ("Statement Type", "Type")),
        FieldSpec(ORDER_DATE, ("Order created time", "Created time"), kind=DATE, required=True),
        FieldSpec(PAYMENT_DATE, ("Order settled time", "Settlement time"), kind=DATE),
        amount("Subtotal before discounts", role=REVENUE),
        amount("Seller discounts", role=REVENUE),
        amount("Refund subtotal after seller discounts", role=REVENUE),
        amount("Refund subtotal before seller discounts", role=DETAIL),
        amount("Refund of seller discounts", role=DETAIL),
        *(amount(label, role=FEE) for label in _TIKTOK_FEES),
        *(amount(label, role=DETAIL) for label in _TIKTOK_SHIPPING_PARTS),
        *(amount(label, role=DETAIL) for label in _TIKTOK_AFFILIATE_PARTS),
        *(amount(label, role=DETAIL) for label in _TIKTOK_SHOP_ADS_PARTS),
        # The export really spells it "Ajustment"
        amount("Ajustment amount", "Adjustment amount", role=ADJUSTMENT),
    ),
    fee_layout=(
        GroupLayout(
            "Fees (TikTok)",
            tuple(
                ItemLayout(label, key=label, children=_TIKTOK_FEE_CHILDREN.get(label, ()))
                for label in _TIKTOK_FEES
            ),
        ),
    ),
    revenue_layout=(
        GroupLayout(
            "Revenue (TikTok)",
            (
                ItemLayout(
                    "Subtotal after seller discounts",
                    children=("Subtotal before discounts", "Seller discounts"),
                ),
                ItemLayout(
                    "Refund subtotal after seller discounts",
                    children=("Refund subtotal before seller discounts", "Refund of seller discounts"),
                ),
            ),
        ),
    ),
    default_record_type="Order",
)


# Shopee: "Income" report, one row per order

_SHOPEE_SALES = ("สินค้าราคาปกติ", "ส่วนลดสินค้าจากผู้ขาย", "จำนวนเงินที่ทำการคืนให้ผู้ซื้อ")
_SHOPEE_DISCOUNTS = (
    "ส่วนลดสินค้าที่ออกโดย Shopee",
    "โค้ดส่วนลดที่ออกโดยผู้ขาย",
    "Coins Cashback ที่สนับสนุนโดยผู้ขาย",
)
_SHOPEE_SHIPPING = (
    "ค่าจัดส่งที่ชำระโดยผู้ซื้อ",
    "ค่าจัดส่งสินค้าที่ออกโดย Shopee",
    "ค่าจัดส่งที่ Shopee ชำระโดยชื่อของคุณ",
    "ค่าจัดส่งสินค้าคืน",
    "โปรแกรมประหยัดค่าจัดส่งคืนสินค้า",
    "ค่าจัดส่งสินค้าคืนผู้ขาย",
)
_SHOPEE_FEES = (
    "ค่าคอมมิชชั่น AMS",
    "ค่าคอมมิชชั่น",
    "ค่าบริการ",
    "ค่าธรรมเนียมโครงสร้างพื้นฐานแพลตฟอร์ม",
    "ค่าธรรมเนียม ของโปรแกรมประหยัดค่าจัดส่ง",
    "ค่าธุรกรรมการชำระเงิน",
)
_SHOPEE_SERVICES = (
    "ค่าบริการติดตั้งที่ชำระโดยผู้ซื้อ",
    "ค่าบริการติดตั้งจริงจากผู้ให้บริการ",
    "โบนัสส่วนลดเครื่องเก่าแลกใหม่จากผู้ขาย",
)
# English-language exports of the same report
_SHOPEE_ENGLISH = {
    "สินค้าราคาปกติ": ("Original Price",),
    "จำนวนเงินที่ทำการคืนให้ผู้ซื้อ": ("Refund Amount",),
    "ค่าจัดส่งที่ชำระโดยผู้ซื้อ": ("Buyer Paid Shipping Fee",),
    "ค่าคอมมิชชั่น": ("Commission Fee",),
    "ค่าบริการ": ("Service Fee",),
    "ค่าธุรกรรมการชำระเงิน": ("Transaction Fee",),
}


def _shopee_amount(label: str, role: str) -> FieldSpec:
    return amount(label, *_SHOPEE_ENGLISH.get(label, ()), role=role)


SHOPEE_FINANCIAL = FinancialAdapter(
    platform=Platform.SHOPEE,
    schema="financial",
    fields=(
        FieldSpec(EXTERNAL_ID, ("หมายเลขคำสั่งซื้อ", "Order ID", "Order SN"), required=True),
        FieldSpec(SKU, ("SKU ร้านค้า", "Seller SKU")),
        FieldSpec(ORDER_DATE, ("วันที่ทำการสั่งซื้อ", "Order Creation Date"), kind=DATE, required=True),
        FieldSpec(PAYMENT_DATE, ("วันที่โอนชำระเงินสำเร็จ", "Payout Completed Date"), kind=DATE),
        *(_shopee_amount(label, REVENUE) for label in _SHOPEE_SALES + _SHOPEE_DISCOUNTS),
        *(_shopee_amount(label, FEE) for label in _SHOPEE_SHIPPING + _SHOPEE_FEES + _SHOPEE_SERVICES),
    ),
    fee_layout=(
        GroupLayout("Shipping", tuple(ItemLayout(label, key=label) for label in _SHOPEE_SHIPPING)),
        GroupLayout("Fees", tuple(ItemLayout(label, key=label) for label in _SHOPEE_FEES)),
        GroupLayout("Value-added services", tuple(ItemLayout(label, key=label) for label in _SHOPEE_SERVICES)),
    ),
    revenue_layout=(
        GroupLayout(
            "Revenue (Shopee)",
            (
                ItemLayout("ยอดขายสินค้า", children=_SHOPEE_SALES),
                ItemLayout("ส่วนลดและโค้ดของผู้ขาย", children=_SHOPEE_DISCOUNTS),
            ),
        ),
    ),
)


# Lazada: transaction ledger, one row per fee or credit line

LAZADA_REVENUE_NAMES = frozenset({"ยอดรวมค่าสินค้า", "คืนส่วนลดค่าธรรมเนียมการขายสินค้า"})
LAZADA_FEE_NAMES = frozenset(
    {
        "หักค่าธรรมเนียมการขายสินค้า",
        "ค่าธรรมเนียมการชำระเงิน",
        "ส่วนลดค่าขนส่ง จ่ายโดยร้านค้า",
        "ส่วนต่างค่าจัดส่ง",
    }
)

LAZADA_FINANCIAL = LedgerAdapter(
    platform=Platform.LAZADA,
    schema="financial",
    fields=(
        FieldSpec(EXTERNAL_ID, ("หมายเลขคำสั่งซื้อ", "Order No.", "Order Number")),
        FieldSpec(SKU, ("SKU ร้านค้า", "Seller SKU")),
        FieldSpec(RECORD_TYPE, ("ชื่อรายการธุรกรรม", "Fee Name", "Transaction Type"), required=True),
        FieldSpec(ORDER_DATE, ("วันที่สร้างคำสั่งซื้อ", "Order Creation Date"), kind=DATE),
        FieldSpec("transaction_date", ("วันที่ทำรายการ", "Transaction Date"), kind=DATE),
        FieldSpec(
            "amount",
            ("จำนวนเงิน(รวมภาษี)", "จำนวนเงิน (รวมภาษี)", "Amount(Include Tax)", "Amount"),
            kind=AMOUNT,
            required=True,
        ),
    ),
    order_date_fallback="transaction_date",
    payment_date_is_order_date=True,
    revenue_names=LAZADA_REVENUE_NAMES,
    fee_names=LAZADA_FEE_NAMES,
)


FINANCIAL_ADAPTERS: dict[Platform, FinancialAdapter] = {
    Platform.TIKTOK: TIKTOK_FINANCIAL,
    Platform.SHOPEE: SHOPEE_FINANCIAL,
    Platform.LAZADA: LAZADA_FINANCIAL,
}
