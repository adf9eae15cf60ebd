"""Unified configuration for Marketplace Core ETL.

This module provides the single settings object accepted by every parse and
aggregate entry point. The engine has no filesystem, network or environment
configuration; everything a call needs arrives as arguments.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from marketplace_core.exceptions import ConfigError

# Thai exports are usually UTF-8, but older desktop tools still write
# Windows-874. TIS-620 is the ISO subset of the same code page.
DEFAULT_TEXT_ENCODINGS = ("utf-8-sig", "cp874", "tis-620")


@dataclass(frozen=True)
class ParserSettings:
    """Tunables shared by the parsers and the metrics aggregator.

    Attributes:
        trend_window: Number of trailing days exposed as the trend series.
        text_encodings: Encodings tried, in order, for delimited text uploads.
        csv_delimiters: Candidate delimiters for delimited text sniffing.
        strict_columns: Raise DataQualityError instead of warning when a
            platform's required columns are missing.

    Examples:
        >>> settings = ParserSettings(trend_window=14)
        >>> settings.trend_window
        14
    """

    trend_window: int = 7
    text_encodings: tuple[str, ...] = field(default=DEFAULT_TEXT_ENCODINGS)
    csv_delimiters: str = ",;\t|"
    strict_columns: bool = False

    def __post_init__(self) -> None:
        if self.trend_window < 1:
            raise ConfigError(f"trend_window must be >= 1, got {self.trend_window}")
        if not self.text_encodings:
            raise ConfigError("text_encodings must list at least one encoding")
        if not self.csv_delimiters:
            raise ConfigError("csv_delimiters must not be empty")


DEFAULT_SETTINGS = ParserSettings()
