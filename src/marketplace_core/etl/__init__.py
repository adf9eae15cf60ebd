"""ETL helpers shared by every platform parser.

- cleaning_utils: cell-level normalizers (amounts, dates, text)
- workbook: reading the first sheet of an uploaded export
"""
