"""Shared configuration for textanchor."""

import logging

# Name of the package logger (see textanchor.logging_config)
LOGGER_NAME = "textanchor"

DEFAULT_LOG_LEVEL = logging.INFO

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# Selector tags understood by textanchor.segmented.matcher.create_matcher
SUPPORTED_SELECTOR_TYPES = (
    "TextQuoteSelector",
    "TextPositionSelector",
    "RangeSelector",
)

# UTF-16 surrogate ranges (inclusive)
HIGH_SURROGATE_START = 0xD800
HIGH_SURROGATE_END = 0xDBFF
LOW_SURROGATE_START = 0xDC00
LOW_SURROGATE_END = 0xDFFF


def validate_offsets(start: int, end: int) -> None:
    """Validate a pair of text offsets.

    Args:
        start: Offset where the span begins
        end: Offset where the span ends (exclusive)

    Raises:
        ValueError: If an offset is negative or end precedes start
    """
    if start < 0 or end < 0:
        raise ValueError(
            f"Invalid offsets: ({start}, {end}). Offsets must be non-negative"
        )
    if end < start:
        raise ValueError(
            f"Invalid offsets: ({start}, {end}). Expected start <= end (e.g., (3, 7))"
        )


def validate_log_level(level: str) -> int:
    """Validate a log level name and return its numeric value.

    Args:
        level: Level name, case-insensitive (e.g., "debug")

    Raises:
        ValueError: If the level name is unknown
    """
    name = level.upper()
    if name not in LOG_LEVELS:
        raise ValueError(
            f"Invalid log level: '{level}'. Expected one of {', '.join(LOG_LEVELS)}"
        )
    return getattr(logging, name)
