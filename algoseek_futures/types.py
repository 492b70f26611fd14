"""Canonical tick and instrument types produced by the AlgoSeek futures reader."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum


class TickType(Enum):
    """Kind of market event carried by a tick."""

    TRADE = "trade"
    QUOTE = "quote"
    OPEN_INTEREST = "open_interest"


@dataclass(frozen=True)
class FutureSymbol:
    """Canonical identity of a futures contract.

    Attributes:
        root: Underlying root ticker (e.g. "ES"). This is the key used for price
            multipliers and symbol filters.
        market: Listing market (e.g. "cme", "cfe").
        contract_date: First day of the contract month, or the explicit expiry day
            when the vendor ticker carries one.
    """

    root: str
    market: str
    contract_date: date

    @property
    def value(self) -> str:
        """Human-readable contract code such as ``ES 2023-09``."""
        return f"{self.root} {self.contract_date:%Y-%m}"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Tick:
    """A single normalized market event.

    Field population depends on ``tick_type``:
      - TRADE: ``value`` is the price, ``quantity`` is set.
      - QUOTE: ``value`` is the price, exactly one of the bid or ask pair is set.
      - OPEN_INTEREST: ``value`` is the open interest, ``exchange`` is the market.

    ``time`` is feed-local and naive; no timezone conversion is applied.
    """

    symbol: FutureSymbol
    time: datetime
    tick_type: TickType
    value: Decimal
    quantity: int | None = None
    bid_price: Decimal | None = None
    bid_size: int | None = None
    ask_price: Decimal | None = None
    ask_size: int | None = None
    exchange: str | None = None

    @property
    def is_ask(self) -> bool:
        return self.ask_price is not None
