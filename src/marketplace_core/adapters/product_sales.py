"""Product-sales (order line) adapters.

These describe the per-order-line exports used for quantity and revenue by
product and province. Header sets drift between export versions and
languages, so most fields carry several synonyms; the first one present in
a sheet wins.
"""

from __future__ import annotations

from marketplace_core.adapters.base import AMOUNT, DATE, QUANTITY, ColumnAdapter, FieldSpec
from marketplace_core.platforms import Platform

# Canonical keys shared by every product-sales adapter
ORDER_ID = "order_id"
STATUS = "status"
VARIANT_CODE = "variant_code"
PRODUCT_LABEL = "product_label"
VARIANT_LABEL = "variant_label"
PROVINCE = "province"
ORDER_DATE = "order_date"

SHOPEE_PRODUCT_SALES = ColumnAdapter(
    platform=Platform.SHOPEE,
    schema="product_sales",
    fields=(
        FieldSpec(ORDER_ID, ("หมายเลขคำสั่งซื้อ", "Order Number", "Order ID", "เลขที่คำสั่งซื้อ")),
        FieldSpec(STATUS, ("สถานะการสั่งซื้อ", "Order Status"), required=True),
        FieldSpec(
            VARIANT_CODE,
            ("เลขอ้างอิง SKU (SKU Reference No.)", "SKU Reference No.", "SKU Reference"),
            required=True,
        ),
        FieldSpec("quantity", ("จำนวน", "จำนวนที่ขายได้ (ยืนยันแล้ว)", "Quantity"), kind=QUANTITY, required=True),
        FieldSpec(
            "net_price",
            ("ราคาขายสุทธิ", "Net Price", "ยอดขาย (ยืนยันแล้ว) (THB)"),
            kind=AMOUNT,
            required=True,
        ),
        FieldSpec(
            "seller_discount",
            ("โค้ดส่วนลดชำระโดยผู้ขาย", "Seller Voucher", "Seller Discount"),
            kind=AMOUNT,
            required=True,
        ),
        FieldSpec("refund_status", ("สถานะการคืนเงินหรือคืนสินค้า", "Refund/Return Status"), required=True),
        FieldSpec(
            "returned_quantity",
            ("จำนวนที่ส่งคืน", "Return Quantity", "Quantity Returned"),
            kind=QUANTITY,
            required=True,
        ),
        FieldSpec(PROVINCE, ("จังหวัด", "Province", "จังหวัดผู้ซื้อ", "Buyer Province")),
        FieldSpec(ORDER_DATE, ("วันที่ทำการสั่งซื้อ", "Order Creation Date"), kind=DATE),
        FieldSpec(PRODUCT_LABEL, ("ชื่อสินค้า", "Product Name")),
        FieldSpec(VARIANT_LABEL, ("ชื่อตัวเลือก", "Variation Name")),
    ),
)

TIKTOK_PRODUCT_SALES = ColumnAdapter(
    platform=Platform.TIKTOK,
    schema="product_sales",
    fields=(
        FieldSpec(ORDER_ID, ("Order ID", "OrderID")),
        FieldSpec(STATUS, ("Order Status",), required=True),
        FieldSpec("substatus", ("Order Substatus",), required=True),
        FieldSpec(
            "cancel_type",
            ("Cancelation/Return Type", "Cancellation/Return Type", "Cancellation / Return Type"),
            required=True,
        ),
        FieldSpec(VARIANT_CODE, ("SKU ID", "SkuID"), required=True),
        FieldSpec("quantity", ("Quantity", "Qty"), kind=QUANTITY, required=True),
        FieldSpec(
            "returned_quantity",
            ("Sku Quantity of return", "Quantity of return", "Return Quantity"),
            kind=QUANTITY,
            required=True,
        ),
        FieldSpec(
            "subtotal",
            (
                "SKU Subtotal Before Discount",
                "SKU Subtotal Before Discount (THB)",
                "SKU Subtotal",
                "Subtotal",
            ),
            kind=AMOUNT,
            required=True,
        ),
        FieldSpec("seller_discount", ("SKU Seller Discount", "Seller Discount"), kind=AMOUNT, required=True),
        FieldSpec(PROVINCE, ("Province", "จังหวัด", "Buyer Province", "Delivery Province")),
        FieldSpec(ORDER_DATE, ("Created Time", "Order Created Time"), kind=DATE),
        FieldSpec(PRODUCT_LABEL, ("Product Name",)),
        FieldSpec(VARIANT_LABEL, ("Variation",)),
    ),
)

LAZADA_PRODUCT_SALES = ColumnAdapter(
    platform=Platform.LAZADA,
    schema="product_sales",
    fields=(
        FieldSpec(ORDER_ID, ("orderItemId", "Order Item Id", "Order Item ID"), required=True),
        FieldSpec(STATUS, ("status",), required=True),
        FieldSpec(VARIANT_CODE, ("sellerSku", "Seller SKU", "seller_sku"), required=True),
        FieldSpec("unit_price", ("unitPrice", "Unit Price"), kind=AMOUNT, required=True),
        FieldSpec(PROVINCE, ("shippingProvince", "Shipping Province", "Province", "จังหวัด")),
        FieldSpec(ORDER_DATE, ("createTime", "Create Time", "Order Creation Date"), kind=DATE),
        FieldSpec(PRODUCT_LABEL, ("itemName", "Item Name")),
        FieldSpec(VARIANT_LABEL, ("variation", "Variation")),
    ),
)

PRODUCT_SALES_ADAPTERS: dict[Platform, ColumnAdapter] = {
    Platform.SHOPEE: SHOPEE_PRODUCT_SALES,
    Platform.TIKTOK: TIKTOK_PRODUCT_SALES,
    Platform.LAZADA: LAZADA_PRODUCT_SALES,
}
