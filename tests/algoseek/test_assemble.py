from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from algoseek_futures.types import FutureSymbol, TickType
from algoseek_futures.vendors.algoseek import (
    OpenInterestMessage,
    QuoteMessage,
    TradeMessage,
    build_tick,
    descale_price,
    scale_factor,
)

ES = FutureSymbol(root="ES", market="cme", contract_date=date(2023, 9, 1))
TIME = datetime(2023, 6, 15, 9, 30, 12, 123000)


def test_scale_factor_exempts_vix_only() -> None:
    assert scale_factor("VX") == 1
    assert scale_factor("ES") == Decimal(10_000_000_000)
    assert scale_factor("VXM") == Decimal(10_000_000_000)


def test_descale_price_divides_then_multiplies() -> None:
    assert descale_price("450000000000", root="ES", multiplier=Decimal(1)) == Decimal(45)
    assert descale_price("123450000000000", root="ES", multiplier=Decimal(2)) == Decimal("24690")
    assert descale_price("18.55", root="VX", multiplier=Decimal(1000)) == Decimal("18550")


def test_descale_price_reads_blank_as_zero() -> None:
    assert descale_price("", root="ES", multiplier=Decimal(1)) == 0


def test_descale_price_rejects_garbage() -> None:
    with pytest.raises(ArithmeticError):
        descale_price("12a", root="ES", multiplier=Decimal(1))


def test_build_trade_tick() -> None:
    tick = build_tick(TradeMessage(), symbol=ES, time=TIME, price=Decimal(45), quantity=5)

    assert tick.tick_type is TickType.TRADE
    assert tick.value == Decimal(45)
    assert tick.quantity == 5
    assert tick.bid_price is None and tick.ask_price is None
    assert tick.exchange is None


def test_build_quote_tick_sets_exactly_one_side() -> None:
    bid = build_tick(QuoteMessage(is_ask=False), symbol=ES, time=TIME, price=Decimal(10), quantity=3)
    ask = build_tick(QuoteMessage(is_ask=True), symbol=ES, time=TIME, price=Decimal(11), quantity=4)

    assert bid.tick_type is TickType.QUOTE
    assert (bid.bid_price, bid.bid_size) == (Decimal(10), 3)
    assert (bid.ask_price, bid.ask_size) == (None, None)
    assert not bid.is_ask

    assert (ask.ask_price, ask.ask_size) == (Decimal(11), 4)
    assert (ask.bid_price, ask.bid_size) == (None, None)
    assert ask.is_ask
    assert ask.value == Decimal(11)
    assert ask.quantity is None


def test_build_open_interest_tick_uses_quantity_and_market() -> None:
    tick = build_tick(OpenInterestMessage(), symbol=ES, time=TIME, price=Decimal(0), quantity=250_000)

    assert tick.tick_type is TickType.OPEN_INTEREST
    assert tick.value == Decimal(250_000)
    assert tick.exchange == "cme"
    assert tick.quantity is None


def test_build_tick_rejects_unknown_variant() -> None:
    with pytest.raises(TypeError):
        build_tick(object(), symbol=ES, time=TIME, price=Decimal(1), quantity=1)  # type: ignore[arg-type]


@pytest.mark.parametrize("raw", ["NaN", "Infinity", "-inf", "sNaN"])
def test_descale_price_rejects_non_finite(raw: str) -> None:
    with pytest.raises(ValueError, match="Non-finite"):
        descale_price(raw, root="ES", multiplier=Decimal(1))
