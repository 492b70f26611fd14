"""Tick assembly: price descaling and per-kind field population."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from algoseek_futures.types import FutureSymbol, Tick, TickType
from algoseek_futures.vendors.algoseek.messages import (
    Message,
    OpenInterestMessage,
    QuoteMessage,
    TradeMessage,
)

# All futures but VIX are delivered as integers with 10 implied decimals.
PRICE_SCALE = Decimal(10_000_000_000)
UNSCALED_ROOTS: frozenset[str] = frozenset({"VX"})


def scale_factor(root: str) -> Decimal:
    return Decimal(1) if root in UNSCALED_ROOTS else PRICE_SCALE


def parse_decimal_field(raw: str) -> Decimal:
    """Parse a numeric text field; AlgoSeek leaves unused fields blank, which reads as 0."""
    text = raw.strip()
    if not text:
        return Decimal(0)
    value = Decimal(text)
    if not value.is_finite():
        raise ValueError(f"Non-finite numeric field: {text!r}")
    return value


def parse_int_field(raw: str) -> int:
    text = raw.strip()
    return int(text) if text else 0


def descale_price(raw_price: str, *, root: str, multiplier: Decimal) -> Decimal:
    """Convert a raw ``Price`` field into a multiplier-adjusted decimal price."""
    price = parse_decimal_field(raw_price) / scale_factor(root)
    return price * multiplier


def build_tick(
    message: Message,
    *,
    symbol: FutureSymbol,
    time: datetime,
    price: Decimal,
    quantity: int,
) -> Tick:
    """Build the canonical tick for a decoded message."""
    if isinstance(message, TradeMessage):
        return Tick(
            symbol=symbol,
            time=time,
            tick_type=TickType.TRADE,
            value=price,
            quantity=quantity,
        )

    if isinstance(message, QuoteMessage):
        if message.is_ask:
            return Tick(
                symbol=symbol,
                time=time,
                tick_type=TickType.QUOTE,
                value=price,
                ask_price=price,
                ask_size=quantity,
            )
        return Tick(
            symbol=symbol,
            time=time,
            tick_type=TickType.QUOTE,
            value=price,
            bid_price=price,
            bid_size=quantity,
        )

    if isinstance(message, OpenInterestMessage):
        return Tick(
            symbol=symbol,
            time=time,
            tick_type=TickType.OPEN_INTEREST,
            value=Decimal(quantity),
            exchange=symbol.market,
        )

    raise TypeError(f"Unsupported message variant: {message!r}")
