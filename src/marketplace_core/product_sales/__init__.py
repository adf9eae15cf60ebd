"""Product sales domain module.

Order-line exports parsed into ProductSaleLines (one variant within one
order), named through a flexible code map and placed through an exact
province alias table, then merged on ``(platform, order_id, variant_code)``.

Example:
    >>> from marketplace_core.product_sales import merge_lines, parse_product_sales
    >>>
    >>> result = parse_product_sales("TikTok", file_bytes, code_name_map=codes)
    >>> lines = merge_lines(result.rows)
    >>> result.missing_codes
"""

from marketplace_core.product_sales.code_map import (
    CodeNameLookup,
    code_name_map_from_records,
    normalize_variant_code,
)
from marketplace_core.product_sales.dedup import (
    NO_CODE,
    NO_ORDER,
    filter_new_lines,
    line_key,
    merge_lines,
)
from marketplace_core.product_sales.models import (
    ProductSaleLine,
    ProductSalesParseResult,
    ProductSalesSummary,
    lines_to_frame,
    summarize,
)
from marketplace_core.product_sales.parser import parse_product_sales

__all__ = [
    "CodeNameLookup",
    "NO_CODE",
    "NO_ORDER",
    "ProductSaleLine",
    "ProductSalesParseResult",
    "ProductSalesSummary",
    "code_name_map_from_records",
    "filter_new_lines",
    "line_key",
    "lines_to_frame",
    "merge_lines",
    "normalize_variant_code",
    "parse_product_sales",
    "summarize",
]
