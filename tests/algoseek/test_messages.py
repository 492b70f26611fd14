from __future__ import annotations

from datetime import datetime

import pytest

from algoseek_futures.vendors.algoseek import (
    OpenInterestMessage,
    QuoteMessage,
    TradeMessage,
    classify_message,
    parse_algoseek_timestamp,
)


def test_classify_trade_open_interest_and_quotes() -> None:
    assert classify_message(2) == TradeMessage()
    assert classify_message(11) == OpenInterestMessage()
    assert classify_message(1, "B") == QuoteMessage(is_ask=False)
    assert classify_message(1, "S") == QuoteMessage(is_ask=True)


def test_classify_uses_low_four_bits_only() -> None:
    assert classify_message(0b1_0010) == TradeMessage()
    assert classify_message(0b1010_1011) == OpenInterestMessage()
    assert classify_message(0b0111_0001, "S") == QuoteMessage(is_ask=True)


@pytest.mark.parametrize("code", [0, 3, 4, 5, 7, 8, 10, 12, 15, 16])
def test_classify_rejects_other_codes(code: int) -> None:
    assert classify_message(code, "B") is None


@pytest.mark.parametrize("side", [None, "", "b", "A", "BS", " B"])
def test_classify_rejects_unknown_quote_side(side: str | None) -> None:
    assert classify_message(1, side) is None


def test_classify_ignores_side_for_trades() -> None:
    assert classify_message(2, "X") == TradeMessage()


def test_parse_algoseek_timestamp_keeps_local_time() -> None:
    ts = parse_algoseek_timestamp("20230615093012123")
    assert ts == datetime(2023, 6, 15, 9, 30, 12, 123000)
    assert ts.tzinfo is None


@pytest.mark.parametrize(
    "value",
    ["2023061509301212", "202306150930121234", "2023-06-15 09:30", "2023061509301212x", ""],
)
def test_parse_algoseek_timestamp_rejects_invalid_shape(value: str) -> None:
    with pytest.raises(ValueError, match="yyyyMMddHHmmssfff"):
        parse_algoseek_timestamp(value)


def test_parse_algoseek_timestamp_rejects_impossible_date() -> None:
    with pytest.raises(ValueError):
        parse_algoseek_timestamp("20230231093012123")
