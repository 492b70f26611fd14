"""Header column resolution for AlgoSeek futures files.

AlgoSeek does not fix the column order; each file declares it in its first line.
"""

from __future__ import annotations

from dataclasses import dataclass

from algoseek_futures._error_messages import missing_columns_error, missing_header_error

COLUMN_TIMESTAMP = "Timestamp"
COLUMN_TICKER = "Ticker"
COLUMN_TYPE = "Type"
COLUMN_SIDE = "Side"
COLUMN_SECURITY_ID = "SecurityID"
COLUMN_QUANTITY = "Quantity"
COLUMN_PRICE = "Price"

REQUIRED_COLUMNS: tuple[str, ...] = (
    COLUMN_TIMESTAMP,
    COLUMN_TICKER,
    COLUMN_TYPE,
    COLUMN_SIDE,
    COLUMN_SECURITY_ID,
    COLUMN_QUANTITY,
    COLUMN_PRICE,
)

MISSING = -1


class HeaderError(ValueError):
    """Raised when a header is absent or incomplete and strict mode is on."""


def split_fields(line: str) -> list[str]:
    """Tokenize one feed line. AlgoSeek never quotes embedded commas."""
    return line.rstrip("\r\n").split(",")


@dataclass(frozen=True)
class HeaderColumns:
    """Resolved column positions; ``MISSING`` (-1) marks an absent column."""

    timestamp: int = MISSING
    ticker: int = MISSING
    type: int = MISSING
    side: int = MISSING
    security_id: int = MISSING
    quantity: int = MISSING
    price: int = MISSING
    columns_required: int = MISSING

    @property
    def is_resolved(self) -> bool:
        return self.columns_required != MISSING

    def as_dict(self) -> dict[str, int]:
        return {
            COLUMN_TIMESTAMP: self.timestamp,
            COLUMN_TICKER: self.ticker,
            COLUMN_TYPE: self.type,
            COLUMN_SIDE: self.side,
            COLUMN_SECURITY_ID: self.security_id,
            COLUMN_QUANTITY: self.quantity,
            COLUMN_PRICE: self.price,
        }

    def missing(self) -> list[str]:
        return [name for name, index in self.as_dict().items() if index == MISSING]


def _find(header: list[str], name: str) -> int:
    try:
        return header.index(name)
    except ValueError:
        return MISSING


def resolve_header(line: str | None, *, strict: bool = False) -> HeaderColumns:
    """Locate the known columns in a header line.

    Args:
        line: First line of the file, or None when the file is empty.
        strict: Raise ``HeaderError`` when the header is empty or any
            required column is absent.

    Returns:
        HeaderColumns with ``columns_required`` set to the highest index. An
        empty header yields all-``MISSING`` positions, which disables the
        short-row check.
    """
    if not line or not line.rstrip("\r\n"):
        if strict:
            raise HeaderError(missing_header_error())
        return HeaderColumns()

    header = split_fields(line)
    indices = {name: _find(header, name) for name in REQUIRED_COLUMNS}

    if strict:
        missing = [name for name, index in indices.items() if index == MISSING]
        if missing:
            raise HeaderError(missing_columns_error(missing, header))

    return HeaderColumns(
        timestamp=indices[COLUMN_TIMESTAMP],
        ticker=indices[COLUMN_TICKER],
        type=indices[COLUMN_TYPE],
        side=indices[COLUMN_SIDE],
        security_id=indices[COLUMN_SECURITY_ID],
        quantity=indices[COLUMN_QUANTITY],
        price=indices[COLUMN_PRICE],
        columns_required=max(indices.values()),
    )


def field_at(fields: list[str], index: int, *, column: str) -> str:
    """Return ``fields[index]``, refusing unresolved (negative) positions."""
    if index < 0:
        raise IndexError(f"Column '{column}' was not found in the header")
    return fields[index]
