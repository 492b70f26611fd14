"""Futures ticker parsing and resolution into canonical ``FutureSymbol`` values.

Vendor tickers follow the exchange convention ``<root>[<day>]<month code><year>``:
``ESU3``, ``ESU23``, ``CLZ24``, ``ZN15H4`` (expiry day 15). Option and spread
tickers contain spaces or dashes and are filtered before they reach this module.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol

from algoseek_futures.types import FutureSymbol

logger = logging.getLogger(__name__)

FUTURES_MONTH_CODES: dict[str, int] = {
    "F": 1,
    "G": 2,
    "H": 3,
    "J": 4,
    "K": 5,
    "M": 6,
    "N": 7,
    "Q": 8,
    "U": 9,
    "V": 10,
    "X": 11,
    "Z": 12,
}


@dataclass(frozen=True)
class ParsedFutureTicker:
    root: str
    month: int
    year_short: int
    year_digits: int
    day: int = 1


class MarketLookup(Protocol):
    def market_for(self, root: str) -> str | None: ...


def parse_future_ticker(ticker: str) -> ParsedFutureTicker | None:
    """Split a futures ticker into root, optional day, month code and year.

    Returns None when the ticker does not follow the convention.

    Examples:
        >>> parse_future_ticker("ESU3")
        ParsedFutureTicker(root='ES', month=9, year_short=3, year_digits=1, day=1)
        >>> parse_future_ticker("ESU23").year_short
        23
    """
    ticker = ticker.strip().upper()
    if len(ticker) < 3:
        return None

    year_digits = 2 if ticker[-2].isdigit() else 1
    if not ticker[-year_digits:].isdigit():
        return None

    month_code = ticker[-year_digits - 1]
    month = FUTURES_MONTH_CODES.get(month_code)
    if month is None:
        return None

    rest = ticker[: -year_digits - 1]
    day = 1
    if len(rest) > 2 and rest[-2:].isdigit():
        day = int(rest[-2:])
        rest = rest[:-2]
        if not 1 <= day <= 31:
            return None

    if not rest:
        return None

    return ParsedFutureTicker(
        root=rest,
        month=month,
        year_short=int(ticker[-year_digits:]),
        year_digits=year_digits,
        day=day,
    )


def expiration_year(parsed: ParsedFutureTicker, *, reference_year: int) -> int:
    """Expand a one or two digit year.

    Two-digit years map into the 2000s. A single digit is placed in the decade
    of ``reference_year``.
    """
    if parsed.year_digits > 1:
        return 2000 + parsed.year_short
    return (reference_year // 10) * 10 + parsed.year_short


class SymbolResolver:
    """Resolve vendor tickers into ``FutureSymbol`` values.

    Args:
        markets: Lookup answering the listing market of a root. Roots without a
            market do not resolve.
        reference_year: Year used to expand single-digit contract years.
            Defaults to the current year.
    """

    def __init__(self, markets: MarketLookup, *, reference_year: int | None = None):
        self._markets = markets
        self._reference_year = reference_year if reference_year is not None else date.today().year

    @property
    def reference_year(self) -> int:
        return self._reference_year

    def resolve(self, ticker: str) -> FutureSymbol | None:
        parsed = parse_future_ticker(ticker)
        if parsed is None:
            return None

        market = self._markets.market_for(parsed.root)
        if market is None:
            logger.debug("No market known for futures root %s (ticker %s)", parsed.root, ticker)
            return None

        year = expiration_year(parsed, reference_year=self._reference_year)
        try:
            contract_date = date(year, parsed.month, parsed.day)
        except ValueError:
            return None

        return FutureSymbol(root=parsed.root, market=market, contract_date=contract_date)

    __call__ = resolve
