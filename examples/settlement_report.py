"""Example: Settlement report from a marketplace income statement

This example parses one platform's settlement/income export and prints
the headline numbers, the fee breakdown and the per-day settlement:
1. Read the first sheet of the upload (xlsx, xls or CSV)
2. Normalize every row into a Transaction
3. Aggregate totals, per-day buckets and the 7-day trend

Prerequisites:
- A TikTok, Shopee or Lazada income export saved locally
"""

import logging
import sys
from pathlib import Path

from marketplace_core import parse_transactions
from marketplace_core.transactions import transactions_to_frame

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

platform = sys.argv[1] if len(sys.argv) > 1 else "TikTok"  # MODIFY AS NEEDED
export_path = Path(sys.argv[2] if len(sys.argv) > 2 else "data/income_statement.xlsx")  # MODIFY AS NEEDED

print(f"Parsing {platform} statement {export_path}...")
result = parse_transactions(platform, export_path.read_bytes())

for warning in result.warnings:
    print(f"  warning: {warning}")

metrics = result.metrics
print(f"\n{len(result.transactions)} transactions")
print(f"Revenue:     {metrics.revenue:>14,.2f}")
print(f"Fees:        {metrics.fees:>14,.2f}")
print(f"Adjustments: {metrics.adjustments:>14,.2f}")
print(f"Settlement:  {metrics.settlement:>14,.2f}")

print("\nFee breakdown:")
for group in metrics.fee_groups:
    print(f"  {group.title}: {group.total:,.2f}")
    for item in group.items:
        print(f"    {item.label}: {item.value:,.2f}")

print("\nLast days:")
for day, value in zip(metrics.trend_dates, metrics.trend):
    print(f"  {day}  {value:,.2f}")

df = transactions_to_frame(result.transactions)
print(f"\nTransactions frame: {len(df)} rows")
print(df.head())
