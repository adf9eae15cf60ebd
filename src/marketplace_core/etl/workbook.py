"""Read the first sheet of an uploaded export into a DataFrame.

Marketplace seller centres hand out ``.xlsx`` workbooks, occasionally legacy
``.xls`` files, and CSV exports in whatever encoding the seller's tooling
produced. This module turns any of those byte payloads into a single
``pandas.DataFrame``:

- The container is detected from the leading bytes, not from a filename.
- Cells are read with ``dtype=object`` so amounts and ids arrive untouched.
- Header labels are trimmed of whitespace and invisible characters.
- Fully empty rows and empty ``Unnamed:`` columns are dropped.
- The index holds the 1-based source row number (header is row 1).
"""

from __future__ import annotations

import csv
import io
import logging

import pandas as pd

from marketplace_core.config import DEFAULT_SETTINGS, ParserSettings
from marketplace_core.etl.cleaning_utils import strip_invisibles
from marketplace_core.exceptions import EmptyWorkbookError, WorkbookReadError

logger = logging.getLogger(__name__)

XLSX_MAGIC = b"PK\x03\x04"
XLS_MAGIC = b"\xd0\xcf\x11\xe0"

# First data row sits under a single header row.
FIRST_DATA_ROW = 2


def detect_format(file_bytes: bytes) -> str:
    """Classify a payload as ``"xlsx"``, ``"xls"`` or ``"text"``."""
    if file_bytes.startswith(XLSX_MAGIC):
        return "xlsx"
    if file_bytes.startswith(XLS_MAGIC):
        return "xls"
    return "text"


def decode_text(file_bytes: bytes, encodings: tuple[str, ...]) -> tuple[str, str]:
    """Decode delimited text trying each encoding in order.

    Args:
        file_bytes: Raw upload.
        encodings: Codec names, most likely first.

    Returns:
        Tuple of (decoded text, encoding used).

    Raises:
        WorkbookReadError: If no encoding decodes the payload.
    """
    for encoding in encodings:
        try:
            return file_bytes.decode(encoding), encoding
        except (UnicodeDecodeError, LookupError):
            logger.debug("Could not decode upload as %s", encoding)
    raise WorkbookReadError(f"Could not decode text upload with any of: {', '.join(encodings)}")


def _sniff_delimiter(text: str, candidates: str) -> str:
    sample = "\n".join(text.splitlines()[:20])
    try:
        return csv.Sniffer().sniff(sample, delimiters=candidates).delimiter
    except csv.Error:
        return ","


def _read_text(file_bytes: bytes, settings: ParserSettings) -> pd.DataFrame:
    text, encoding = decode_text(file_bytes, settings.text_encodings)
    if not text.strip():
        raise EmptyWorkbookError("Upload contains no text")
    delimiter = _sniff_delimiter(text, settings.csv_delimiters)
    logger.debug("Reading delimited text (encoding=%s, delimiter=%r)", encoding, delimiter)
    try:
        return pd.read_csv(
            io.StringIO(text),
            sep=delimiter,
            dtype=object,
            keep_default_na=False,
            na_values=[""],
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError as exc:
        raise EmptyWorkbookError("Upload has no header row") from exc
    except (pd.errors.ParserError, ValueError) as exc:
        raise WorkbookReadError(f"Could not parse delimited text: {exc}") from exc


def _read_workbook(file_bytes: bytes, engine: str) -> pd.DataFrame:
    try:
        xls = pd.ExcelFile(io.BytesIO(file_bytes), engine=engine)
    except ImportError as exc:
        raise WorkbookReadError(f"Reader engine {engine!r} is not installed") from exc
    except Exception as exc:
        raise WorkbookReadError(f"Could not open workbook: {exc}") from exc

    with xls:
        if not xls.sheet_names:
            raise EmptyWorkbookError("Workbook has no sheets")
        first = xls.sheet_names[0]
        try:
            return pd.read_excel(xls, sheet_name=first, dtype=object)
        except pd.errors.EmptyDataError as exc:
            raise EmptyWorkbookError(f"Sheet {first!r} is empty") from exc
        except Exception as exc:
            raise WorkbookReadError(f"Could not read sheet {first!r}: {exc}") from exc


def tidy_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Trim headers, drop blank rows/columns, index rows by source row number."""
    df = df.copy()
    df.columns = [strip_invisibles(c) or "" for c in df.columns]
    df.index = pd.RangeIndex(FIRST_DATA_ROW, FIRST_DATA_ROW + len(df))

    keep = [
        pos
        for pos, name in enumerate(df.columns)
        if (name and not name.startswith("Unnamed:")) or df.iloc[:, pos].notna().any()
    ]
    if len(keep) < len(df.columns):
        df = df.iloc[:, keep]

    return df.dropna(how="all")


def read_first_sheet(
    file_bytes: bytes,
    settings: ParserSettings | None = None,
) -> pd.DataFrame:
    """Load the first sheet of an upload.

    Args:
        file_bytes: Raw uploaded bytes (xlsx, xls or delimited text).
        settings: Parser settings; defaults to DEFAULT_SETTINGS.

    Returns:
        DataFrame with trimmed string headers and the source row number as
        index. May have zero rows when the sheet only holds a header.

    Raises:
        EmptyWorkbookError: If there are no bytes, sheets or header row.
        WorkbookReadError: If the bytes cannot be read as a spreadsheet.

    Examples:
        >>> df = read_first_sheet(b"Order ID,Amount\\n1001,250\\n")
        >>> df.loc[2, "Amount"]
        '250'
    """
    settings = settings or DEFAULT_SETTINGS
    if not file_bytes:
        raise EmptyWorkbookError("Upload is empty")

    kind = detect_format(file_bytes)
    if kind == "xlsx":
        raw = _read_workbook(file_bytes, engine="openpyxl")
    elif kind == "xls":
        raw = _read_workbook(file_bytes, engine="xlrd")
    else:
        raw = _read_text(file_bytes, settings)

    if len(raw.columns) == 0:
        raise EmptyWorkbookError("Sheet has no header row")

    df = tidy_frame(raw)
    logger.debug("Read %s upload: %d rows x %d columns", kind, len(df), len(df.columns))
    return df
