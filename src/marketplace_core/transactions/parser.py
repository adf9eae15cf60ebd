"""Parse a platform financial statement into canonical Transactions.

One spreadsheet row becomes at most one Transaction. The platform's column
adapter decides which headers feed which field and how a row's amounts
split into revenue, fees and adjustments; this module owns the row loop,
the warnings, and the summary metrics.

Degraded input never raises here. Missing columns, rows without an order
id and empty sheets all come back as warnings on the result, alongside
whatever could be parsed. Only bytes that cannot be read as a spreadsheet
at all raise (see ``marketplace_core.etl.workbook``).
"""

from __future__ import annotations

import logging
from decimal import Decimal

from marketplace_core.adapters.financial import (
    EXTERNAL_ID,
    FINANCIAL_ADAPTERS,
    ORDER_DATE,
    PAYMENT_DATE,
    RECORD_TYPE,
    SKU,
)
from marketplace_core.config import DEFAULT_SETTINGS, ParserSettings
from marketplace_core.etl.cleaning_utils import ZERO, is_missing
from marketplace_core.etl.workbook import read_first_sheet
from marketplace_core.exceptions import DataQualityError
from marketplace_core.metrics.aggregate import aggregate_transactions
from marketplace_core.platforms import Platform
from marketplace_core.transactions.breakdown import build_groups, flatten
from marketplace_core.transactions.models import (
    PlatformMetrics,
    Transaction,
    TransactionParseResult,
)

logger = logging.getLogger(__name__)


def parse_transactions(
    platform: Platform | str,
    file_bytes: bytes,
    settings: ParserSettings | None = None,
) -> TransactionParseResult:
    """Parse one uploaded statement.

    Args:
        platform: Platform the file was exported from.
        file_bytes: Raw upload (xlsx, xls or delimited text).
        settings: Parser settings; defaults to DEFAULT_SETTINGS.

    Returns:
        TransactionParseResult with transactions in sheet order, the
        statement metrics, and any warnings.

    Raises:
        ConfigError: If ``platform`` is not a supported platform.
        WorkbookReadError: If the bytes cannot be read as a spreadsheet.
        DataQualityError: If required columns are missing and
            ``settings.strict_columns`` is set.

    Examples:
        >>> result = parse_transactions("TikTok", open("income.xlsx", "rb").read())
        >>> result.metrics.settlement
        Decimal('890')
    """
    platform = Platform.parse(platform)
    settings = settings or DEFAULT_SETTINGS
    adapter = FINANCIAL_ADAPTERS[platform]

    df = read_first_sheet(file_bytes, settings)
    resolved = adapter.resolve(df.columns)
    warnings: list[str] = []

    if resolved.recognized == 0:
        warnings.append(f"No recognized {platform} statement columns found")
    elif resolved.missing_required:
        message = f"Missing {platform} column(s): {adapter.describe_missing(resolved)}"
        if settings.strict_columns:
            raise DataQualityError(message)
        warnings.append(message)
    if df.empty:
        warnings.append("Sheet has no data rows")

    transactions: list[Transaction] = []
    totals: dict[str, Decimal] = {}

    for row_number, record in zip(df.index, df.to_dict(orient="records")):
        values = adapter.extract(record, resolved)

        external_id = values[EXTERNAL_ID]
        if not external_id:
            external_id = adapter.synthesize_id(values, row_number)
            if not external_id:
                warnings.append(f"Row {row_number}: missing order id, row skipped")
                continue
            warnings.append(f"Row {row_number}: missing order id, using {external_id}")

        order_date = values.get(ORDER_DATE)
        if order_date is None and adapter.order_date_fallback:
            order_date = values.get(adapter.order_date_fallback)
        payment_date = order_date if adapter.payment_date_is_order_date else values.get(PAYMENT_DATE)

        line = adapter.amounts(values)
        for key, value in line.detail.items():
            totals[key] = totals.get(key, ZERO) + value

        transactions.append(
            Transaction(
                platform=platform,
                external_id=external_id,
                sku=values.get(SKU, ""),
                record_type=values.get(RECORD_TYPE) or adapter.default_record_type,
                order_date=order_date,
                payment_date=payment_date,
                revenue=line.revenue,
                fees=line.fees,
                adjustments=line.adjustments,
                settlement=line.settlement,
                raw_row={k: (None if is_missing(v) else v) for k, v in record.items()},
                row_number=int(row_number),
            )
        )

    aggregated = aggregate_transactions(
        transactions,
        date_field="order_date",
        trend_window=settings.trend_window,
    )
    fee_layout, revenue_layout = adapter.layouts(totals)
    fee_groups = build_groups(fee_layout, totals)
    metrics = PlatformMetrics(
        platform=platform,
        revenue=aggregated.total_revenue,
        fees=aggregated.total_fees,
        adjustments=aggregated.total_adjustments,
        settlement=aggregated.settlement,
        trend=aggregated.trend,
        trend_dates=aggregated.trend_dates,
        per_day=aggregated.per_day,
        breakdown=flatten(fee_groups),
        fee_groups=fee_groups,
        revenue_groups=build_groups(revenue_layout, totals),
        rows=len(transactions),
    )

    logger.info(
        "Parsed %d %s transaction(s) from %d row(s) with %d warning(s)",
        len(transactions),
        platform,
        len(df),
        len(warnings),
    )
    return TransactionParseResult(
        platform=platform,
        transactions=transactions,
        metrics=metrics,
        warnings=warnings,
    )
