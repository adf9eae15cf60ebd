"""Parse a platform order-line export into ProductSaleLines.

Each platform marks completed sales, returns and everything else
differently:

- **Shopee**: rows still shipping or cancelled are skipped; an accepted
  refund request is a return, otherwise revenue is net price less the
  seller-funded voucher.
- **TikTok**: only rows whose status and substatus are both completed
  count; an empty cancellation type is a sale, ``Return/Refund`` a return,
  any other cancellation type is skipped. Revenue is the SKU subtotal less
  the SKU seller discount.
- **Lazada**: one row per unit. ``confirmed`` rows are one unit sold at
  the unit price, ``returned`` rows one unit returned; other statuses are
  skipped, as are rows without an order item id. Rows of the same order
  item collapse in ``merge_lines``.

Product names come from the caller's code map (see ``code_map``); the
province from the caller's alias table (see ``marketplace_core.provinces``).
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Mapping

from marketplace_core.adapters.product_sales import (
    ORDER_DATE,
    ORDER_ID,
    PRODUCT_LABEL,
    PRODUCT_SALES_ADAPTERS,
    PROVINCE,
    STATUS,
    VARIANT_CODE,
    VARIANT_LABEL,
)
from marketplace_core.config import DEFAULT_SETTINGS, ParserSettings
from marketplace_core.etl.cleaning_utils import ZERO, is_missing
from marketplace_core.etl.workbook import read_first_sheet
from marketplace_core.exceptions import DataQualityError
from marketplace_core.platforms import Platform
from marketplace_core.product_sales.code_map import CodeNameLookup
from marketplace_core.product_sales.models import (
    ProductSaleLine,
    ProductSalesParseResult,
    summarize,
)
from marketplace_core.provinces.resolver import ProvinceAliasMap, ProvinceResolver

logger = logging.getLogger(__name__)

# (qty_confirmed, qty_returned, revenue_confirmed), or None to skip the row
LineQuantities = tuple[int, int, Decimal]

SHOPEE_SKIP_STATUS_MARKERS = ("การจัดส่ง", "ยกเลิกแล้ว", "Cancelled")
SHOPEE_RETURN_ACCEPTED = frozenset({"คำขอได้รับการยอมรับแล้ว", "Request Approved"})

TIKTOK_COMPLETED = frozenset({"เสร็จสมบูรณ์", "Completed"})
TIKTOK_RETURN_TYPE = "Return/Refund"

LAZADA_CONFIRMED = "confirmed"
LAZADA_RETURNED = "returned"


def _shopee_quantities(values: Mapping[str, Any]) -> LineQuantities | None:
    status = values[STATUS]
    if any(marker in status for marker in SHOPEE_SKIP_STATUS_MARKERS):
        return None
    if values["refund_status"] in SHOPEE_RETURN_ACCEPTED:
        return 0, values["returned_quantity"], ZERO
    return values["quantity"], 0, values["net_price"] - values["seller_discount"]


def _tiktok_quantities(values: Mapping[str, Any]) -> LineQuantities | None:
    if values[STATUS] not in TIKTOK_COMPLETED or values["substatus"] not in TIKTOK_COMPLETED:
        return None
    cancel_type = values["cancel_type"]
    if not cancel_type:
        return values["quantity"], 0, values["subtotal"] - values["seller_discount"]
    if cancel_type == TIKTOK_RETURN_TYPE:
        return 0, values["returned_quantity"], ZERO
    return None


def _lazada_quantities(values: Mapping[str, Any]) -> LineQuantities | None:
    status = values[STATUS].lower()
    if status == LAZADA_CONFIRMED:
        return 1, 0, values["unit_price"]
    if status == LAZADA_RETURNED:
        return 0, 1, ZERO
    return None


_QUANTITY_RULES: dict[Platform, Callable[[Mapping[str, Any]], LineQuantities | None]] = {
    Platform.SHOPEE: _shopee_quantities,
    Platform.TIKTOK: _tiktok_quantities,
    Platform.LAZADA: _lazada_quantities,
}


def parse_product_sales(
    platform: Platform | str,
    file_bytes: bytes,
    code_name_map: Mapping[str, str] | None = None,
    province_aliases: ProvinceAliasMap | None = None,
    *,
    strict_mapping: bool = False,
    upload_id: str | None = None,
    created_at: datetime | None = None,
    settings: ParserSettings | None = None,
) -> ProductSalesParseResult:
    """Parse one uploaded order-line export.

    Args:
        platform: Platform the file was exported from.
        file_bytes: Raw upload (xlsx, xls or delimited text).
        code_name_map: Variant code -> product name for this platform.
        province_aliases: Standard province -> aliases, used as an exact
            lookup table.
        strict_mapping: Skip rows whose code has no product name instead of
            falling back to the row's own label.
        upload_id: Stamped on every line, for the caller's bookkeeping.
        created_at: Stamped on every line; drives metadata freshness when
            lines from different uploads are merged.
        settings: Parser settings; defaults to DEFAULT_SETTINGS.

    Returns:
        ProductSalesParseResult with lines in sheet order (not merged),
        summary, and the variant codes missing from the code map.

    Raises:
        ConfigError: If ``platform`` is not a supported platform.
        WorkbookReadError: If the bytes cannot be read as a spreadsheet.
        DataQualityError: If required columns are missing and
            ``settings.strict_columns`` is set.

    Examples:
        >>> result = parse_product_sales(
        ...     "Shopee",
        ...     file_bytes,
        ...     code_name_map={"KL0-4008": "Kettle"},
        ...     province_aliases=DEFAULT_PROVINCE_ALIASES,
        ... )
        >>> result.summary.total_qty, result.missing_codes, result.unmapped_provinces
    """
    platform = Platform.parse(platform)
    settings = settings or DEFAULT_SETTINGS
    adapter = PRODUCT_SALES_ADAPTERS[platform]
    quantities_for = _QUANTITY_RULES[platform]
    lookup = CodeNameLookup(code_name_map)
    provinces = ProvinceResolver(province_aliases)

    df = read_first_sheet(file_bytes, settings)
    resolved = adapter.resolve(df.columns)
    warnings: list[str] = []

    if resolved.recognized == 0:
        warnings.append(f"No recognized {platform} product sales columns found")
    elif resolved.missing_required:
        message = f"Missing {platform} column(s): {adapter.describe_missing(resolved)}"
        if settings.strict_columns:
            raise DataQualityError(message)
        warnings.append(message)
    if df.empty:
        warnings.append("Sheet has no data rows")

    lines: list[ProductSaleLine] = []
    missing_codes: dict[str, None] = {}
    skipped = 0

    for row_number, record in zip(df.index, df.to_dict(orient="records")):
        values = adapter.extract(record, resolved)

        quantities = quantities_for(values)
        if quantities is None:
            skipped += 1
            logger.debug("Row %s skipped by %s status rules", row_number, platform)
            continue

        code = values[VARIANT_CODE]
        if not code:
            skipped += 1
            warnings.append(f"Row {row_number}: missing variant code, row skipped")
            continue

        # Lazada lines are keyed by order item id
        if platform is Platform.LAZADA and not values.get(ORDER_ID):
            skipped += 1
            warnings.append(f"Row {row_number}: missing order item id, row skipped")
            continue

        mapped_name = lookup.find(code)
        if mapped_name is None:
            missing_codes.setdefault(code, None)
            if strict_mapping:
                skipped += 1
                warnings.append(f"Row {row_number}: no product mapping for {code}, row skipped")
                continue
        product_name = mapped_name or values.get(PRODUCT_LABEL) or code

        province_raw = values.get(PROVINCE, "")
        qty_confirmed, qty_returned, revenue = quantities
        lines.append(
            ProductSaleLine(
                platform=platform,
                order_id=values.get(ORDER_ID, ""),
                variant_code=code,
                product_name=product_name,
                variant_name=values.get(VARIANT_LABEL) or product_name,
                qty_confirmed=qty_confirmed,
                qty_returned=qty_returned,
                revenue_confirmed=revenue,
                province_raw=province_raw,
                province_normalized=provinces.resolve(province_raw),
                order_date=values.get(ORDER_DATE),
                row_number=int(row_number),
                raw_row={k: (None if is_missing(v) else v) for k, v in record.items()},
                upload_id=upload_id,
                created_at=created_at,
            )
        )

    summary = summarize(lines, warnings=warnings, skipped_rows=skipped)
    if summary.unmapped_provinces:
        logger.warning(
            "%d %s province value(s) did not resolve: %s",
            len(summary.unmapped_provinces),
            platform,
            ", ".join(sorted(summary.unmapped_provinces)),
        )
    logger.info(
        "Parsed %d %s product sale line(s), %d skipped, %d unmapped code(s)",
        len(lines),
        platform,
        skipped,
        len(missing_codes),
    )
    return ProductSalesParseResult(
        platform=platform,
        rows=lines,
        summary=summary,
        missing_codes=list(missing_codes),
    )
