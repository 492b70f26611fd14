"""Error message templates for the AlgoSeek futures reader.

Messages include a clear problem description, the observed input, and fuzzy
"Did you mean...?" suggestions for misspelled header columns.
"""

from __future__ import annotations

from difflib import get_close_matches


def missing_header_error() -> str:
    """Error message when a file has no header line."""
    return (
        "AlgoSeek futures file has no header line.\n"
        "\n"
        "The first line must name the columns, for example:\n"
        "  Timestamp,Ticker,Type,Side,SecurityID,Quantity,Price\n"
        "\n"
        "Pass require_header=False to read the file permissively."
    )


def missing_columns_error(missing: list[str], header: list[str]) -> str:
    """Error message when required columns are absent from the header.

    Includes fuzzy matching suggestions for each missing column.

    Args:
        missing: Required column names not found in the header
        header: Column names observed in the header line

    Returns:
        Formatted error message with suggestions
    """
    msg = f"AlgoSeek futures header is missing required columns: {missing}\n"

    for name in missing:
        suggestions = get_close_matches(name, header, n=3, cutoff=0.6)
        if suggestions:
            msg += f"\nDid you mean one of these for '{name}'?\n"
            for suggestion in suggestions:
                msg += f"  - {suggestion}\n"

    msg += "\nObserved header columns:\n"
    for column in header[:20]:
        msg += f"  - {column}\n"

    if len(header) > 20:
        msg += f"  ... and {len(header) - 20} more\n"

    msg += "\nColumn names are matched case-sensitively."

    return msg


def empty_archive_error(path: str, supported: list[str]) -> str:
    """Error message when an archive holds no readable member."""
    return (
        f"No readable member found in archive: {path}\n"
        "\n"
        f"Supported compressed extensions: {', '.join(sorted(supported))}"
    )


def invalid_multiplier_error(symbol: str, value: str) -> str:
    """Error message when a price multiplier cannot be parsed."""
    return (
        f"Invalid price multiplier {value!r} for symbol '{symbol}'.\n"
        "\n"
        "Multiplier files are two-column CSVs:\n"
        "  symbol,multiplier\n"
        "  ES,1\n"
        "  VX,1000"
    )


__all__ = [
    "missing_header_error",
    "missing_columns_error",
    "empty_archive_error",
    "invalid_multiplier_error",
]
