"""Domain-specific exceptions for Marketplace Core ETL.

This module defines custom exceptions that are part of the public API.
All exceptions inherit from MarketplaceError for easy catching.

Per-row defects in an export (a blank cell, an unparseable amount, an
unknown province) never raise; they degrade to defaults and, where useful,
to a warning string on the parse result. Only input that cannot be read at
all ends up here.
"""


class MarketplaceError(Exception):
    """Base exception for all Marketplace Core ETL errors.

    Users can catch this exception to handle any Marketplace Core ETL error.
    """

    pass


class ConfigError(MarketplaceError):
    """Raised when there is a configuration error.

    This exception is raised when:
    - An unknown platform selector is passed
    - Invalid settings values are provided
    """

    pass


class DataQualityError(MarketplaceError):
    """Raised when required columns are missing and strict checking is on.

    Only raised when ``ParserSettings.strict_columns`` is True; by default
    missing columns are reported as warnings instead.
    """

    pass


class ETLError(MarketplaceError):
    """Raised when an ETL pipeline stage fails."""

    pass


class WorkbookReadError(ETLError):
    """Raised when uploaded bytes cannot be read as a spreadsheet.

    This exception is raised when:
    - The workbook container is corrupt
    - Delimited text cannot be decoded with any configured encoding
    - The reader engine for a legacy format is not installed
    """

    pass


class EmptyWorkbookError(WorkbookReadError):
    """Raised when the input has no bytes, no sheets, or no header row."""

    pass
