"""Example: Product sales by province

This example parses an order-line export, merges repeated lines and rolls
confirmed sales up by province:
1. Parse order lines with a product code map and the default province aliases
2. Merge lines sharing (platform, order, variant code)
3. Report sales per province and list codes with no product mapping

Prerequisites:
- A TikTok, Shopee or Lazada order export saved locally
- A product master CSV with shopee_code / product_id / lazada_code and name columns
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

import pandas as pd

from marketplace_core.metrics import sales_by_province
from marketplace_core.product_sales import code_name_map_from_records, merge_lines, parse_product_sales
from marketplace_core.provinces import DEFAULT_PROVINCE_ALIASES

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

platform = sys.argv[1] if len(sys.argv) > 1 else "Shopee"  # MODIFY AS NEEDED
export_path = Path(sys.argv[2] if len(sys.argv) > 2 else "data/orders.xlsx")  # MODIFY AS NEEDED
master_path = Path("data/product_master.csv")  # MODIFY AS NEEDED

master = pd.read_csv(master_path, dtype=object).to_dict(orient="records")
code_map = code_name_map_from_records(platform, master)

result = parse_product_sales(
    platform,
    export_path.read_bytes(),
    code_name_map=code_map,
    province_aliases=DEFAULT_PROVINCE_ALIASES,
    upload_id=export_path.name,
    created_at=datetime.now(),
)
lines = merge_lines(result.rows)

summary = result.summary
print(f"{summary.total_rows} lines parsed ({summary.skipped_rows} skipped), {len(lines)} after merge")
print(f"Units sold: {summary.total_qty}, returned: {summary.total_returned}")
print(f"Revenue: {summary.total_revenue:,.2f}")

if result.missing_codes:
    print(f"\nCodes without a product mapping: {', '.join(result.missing_codes)}")
if result.unmapped_provinces:
    print(f"Provinces that did not resolve: {', '.join(result.unmapped_provinces)}")

report = sales_by_province(lines)
print(f"\nProvinces with sales: {report.total_provinces}/{report.max_provinces} ({report.coverage}%)")
print(report.to_frame().head(10))
