"""Shared utilities for cleaning marketplace export cells.

Every cell that leaves a parsed sheet goes through one of these functions.
They are pure and never raise: a value that cannot be interpreted turns into
a neutral default (``Decimal(0)``, ``None``, ``""``) so that one bad cell
never sinks a whole upload.

Key utilities:
- Text normalization: strip invisible characters, normalize header labels
- Amount parsing: currency symbols and thousands separators, exact Decimal
- Date parsing: calendar day as written, without timezone shifting

Examples:
    >>> from marketplace_core.etl.cleaning_utils import to_amount, to_calendar_date
    >>> to_amount("฿1,234.50")
    Decimal('1234.50')
    >>> to_calendar_date("2024-01-15 23:30:00")
    datetime.date(2024, 1, 15)
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any

import numpy as np
import pandas as pd

# Unicode characters that should be stripped from text
NBSP = "\u00a0"  # Non-breaking space
NNBSP = "\u202f"  # Narrow non-breaking space
ZW = "".join(chr(c) for c in (0x200B, 0x200C, 0x200D, 0xFEFF))  # Zero-width characters

# Thousands separators, currency symbols and quoting left behind by exports
_AMOUNT_NOISE_RE = re.compile(r"[,\s฿$€£¥\"'`’]")

ZERO = Decimal("0")

# Excel serial day 0
_EXCEL_EPOCH = date(1899, 12, 30)
_MAX_EXCEL_SERIAL = 2958465  # 9999-12-31

# Day-first: Thai marketplace exports write dd/mm/yyyy.
_DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
    "%d/%m/%Y",
    "%d/%m/%Y %H:%M:%S",
    "%d/%m/%Y %H:%M",
    "%d-%m-%Y",
    "%d-%m-%Y %H:%M:%S",
    "%d %b %Y",
    "%d %b %Y %H:%M",
    "%d %b %Y %H:%M:%S",
)


def is_missing(x: Any) -> bool:
    """True for None, NaN, NaT and pandas NA."""
    if x is None:
        return True
    try:
        return bool(pd.isna(x))
    except (TypeError, ValueError):
        # list-likes are never a single missing cell
        return False


def strip_invisibles(x: Any) -> str | None:
    """Remove invisible and problematic whitespace characters from text.

    Strips:
    - Carriage returns (\\r)
    - Tabs (converted to spaces)
    - Non-breaking spaces (NBSP, NNBSP)
    - Zero-width characters (ZWSP, ZWNJ, ZWJ, BOM)
    - Collapses multiple spaces to single space

    Args:
        x: Value to clean (string, number, or None).

    Returns:
        Cleaned string or None if input is None/NaN.

    Examples:
        >>> strip_invisibles("  Seller\u00a0SKU  ")
        'Seller SKU'
        >>> strip_invisibles(None)
    """
    if is_missing(x):
        return None
    s = str(x)
    s = s.replace("\r", "").replace("\t", " ").replace(NBSP, " ").replace(NNBSP, " ")
    s = re.sub(r"[%s]" % re.escape(ZW), "", s)  # zero-width
    s = re.sub(r"\s+", " ", s).strip()
    return s


def normalize_header(label: Any) -> str:
    """Normalize a column label for synonym matching.

    Lowercases, strips invisibles and collapses inner whitespace, so
    ``" Order  ID"`` and ``"order id"`` compare equal.

    Examples:
        >>> normalize_header("  SKU   Reference No. ")
        'sku reference no.'
    """
    return (strip_invisibles(label) or "").lower()


def clean_text(x: Any) -> str:
    """Coerce a cell to trimmed text; missing values become ``""``.

    Integral floats lose their ``.0`` so numeric order ids read from a
    workbook keep the form they had in the sheet.

    Examples:
        >>> clean_text(None)
        ''
        >>> clean_text(576012345.0)
        '576012345'
        >>> clean_text("  A-01 ")
        'A-01'
    """
    if is_missing(x):
        return ""
    if isinstance(x, (bool, np.bool_)):
        return str(bool(x))
    if isinstance(x, (float, np.floating)) and math.isfinite(x) and float(x).is_integer():
        return str(int(x))
    return strip_invisibles(x) or ""


def to_amount(x: Any) -> Decimal:
    """Parse a monetary cell into an exact Decimal.

    Handles the formats seen in marketplace exports:
    - Numbers already typed by the workbook: ``1234.5``
    - Thousands separators: ``'1,234.50'``
    - Currency symbols and stray quotes: ``'฿ 1,234.50'``, ``'"-45"'``
    - Negative in parentheses: ``'(1,234.50)'``

    Anything that still does not parse, as well as blanks, NaN and
    infinities, yields ``Decimal(0)``.

    Args:
        x: Raw cell value.

    Returns:
        Parsed amount, or Decimal("0").

    Examples:
        >>> to_amount("1,000")
        Decimal('1000')
        >>> to_amount("(25.5)")
        Decimal('-25.5')
        >>> to_amount("n/a")
        Decimal('0')
    """
    if is_missing(x) or isinstance(x, (bool, np.bool_)):
        return ZERO
    if isinstance(x, Decimal):
        return x if x.is_finite() else ZERO
    if isinstance(x, (int, np.integer)):
        return Decimal(int(x))
    if isinstance(x, (float, np.floating)):
        if not math.isfinite(x):
            return ZERO
        # str() gives the shortest round-tripping repr, so 0.1 stays 0.1
        return Decimal(str(float(x)))

    s = strip_invisibles(x) or ""
    neg = False
    if s.startswith("(") and s.endswith(")"):
        neg, s = True, s[1:-1]
    s = _AMOUNT_NOISE_RE.sub("", s)
    if not s:
        return ZERO
    try:
        value = Decimal(s)
    except InvalidOperation:
        return ZERO
    if not value.is_finite():
        return ZERO
    return -value if neg else value


def to_quantity(x: Any) -> int:
    """Parse a quantity cell as a non-negative whole number.

    Examples:
        >>> to_quantity("3")
        3
        >>> to_quantity(None)
        0
    """
    value = to_amount(x)
    if value <= 0:
        return 0
    return int(value)


def _from_excel_serial(serial: float) -> date | None:
    if not 1 <= serial <= _MAX_EXCEL_SERIAL:
        return None
    return _EXCEL_EPOCH + timedelta(days=int(serial))


def to_calendar_date(x: Any) -> date | None:
    """Extract the calendar day a cell was written for.

    The wall-clock day is taken as-is: a timestamp with an offset keeps the
    day of its own offset and nothing is converted through UTC, so a sale
    recorded at 23:30 stays on that day regardless of the host timezone.

    Accepts date/datetime objects, pandas Timestamps, numpy datetime64,
    Excel serial day numbers, and text in the common export formats
    (ISO, ``dd/mm/yyyy``, ``dd Mon yyyy``), with or without a time part.

    Args:
        x: Raw cell value.

    Returns:
        The calendar date, or None if the value is blank or unparseable.

    Examples:
        >>> to_calendar_date("15/01/2024 10:20")
        datetime.date(2024, 1, 15)
        >>> to_calendar_date("2024-01-15T23:30:00+07:00")
        datetime.date(2024, 1, 15)
        >>> to_calendar_date("not a date")
    """
    if is_missing(x) or isinstance(x, (bool, np.bool_)):
        return None
    # Timestamp subclasses datetime, which subclasses date
    if isinstance(x, datetime):
        return x.date()
    if isinstance(x, date):
        return x
    if isinstance(x, np.datetime64):
        ts = pd.Timestamp(x)
        return None if pd.isna(ts) else ts.date()
    if isinstance(x, (int, float, np.integer, np.floating)):
        if not math.isfinite(x):
            return None
        return _from_excel_serial(float(x))

    s = strip_invisibles(x)
    if not s:
        return None
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            pass
    try:
        ts = pd.to_datetime(s, errors="coerce")
    except (TypeError, ValueError, OverflowError):
        return None
    if pd.isna(ts):
        return None
    return ts.date()


def to_iso_date(x: Any) -> str | None:
    """Calendar day of a cell as ``YYYY-MM-DD``, or None."""
    day = to_calendar_date(x)
    return day.isoformat() if day is not None else None
