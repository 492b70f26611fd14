"""Message decoding for AlgoSeek futures rows.

The ``Type`` column packs the message kind into its low four bits. Only three
codes become ticks; administrative and other message kinds are dropped.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

MESSAGE_TYPE_MASK = 0b1111
QUOTE_CODE = 0b0001
TRADE_CODE = 0b0010
OPEN_INTEREST_CODE = 0b1011

SIDE_BID = "B"
SIDE_ASK = "S"


@dataclass(frozen=True)
class TradeMessage:
    pass


@dataclass(frozen=True)
class QuoteMessage:
    is_ask: bool


@dataclass(frozen=True)
class OpenInterestMessage:
    pass


Message = TradeMessage | QuoteMessage | OpenInterestMessage


def classify_message(type_code: int, side: str | None = None) -> Message | None:
    """Map a raw ``Type`` value (and quote side) to a message variant.

    Returns None for unrecognized type codes and for quotes whose side is
    neither ``"B"`` nor ``"S"``. ``side`` is only consulted for quotes.
    """
    code = type_code & MESSAGE_TYPE_MASK
    if code == TRADE_CODE:
        return TradeMessage()
    if code == OPEN_INTEREST_CODE:
        return OpenInterestMessage()
    if code == QUOTE_CODE:
        if side == SIDE_BID:
            return QuoteMessage(is_ask=False)
        if side == SIDE_ASK:
            return QuoteMessage(is_ask=True)
        return None
    return None


def parse_algoseek_timestamp(timestamp_str: str) -> datetime:
    """Parse an AlgoSeek timestamp into a naive feed-local datetime.

    AlgoSeek format: yyyyMMddHHmmssfff (17 digits, millisecond precision).
    No timezone is attached or converted.

    Example: 20230615093012123 -> 2023-06-15 09:30:12.123

    Raises:
        ValueError: If the value is not exactly 17 digits or is not a valid date
    """
    ts_str = timestamp_str.strip()

    if len(ts_str) != 17 or not ts_str.isdigit():
        raise ValueError(
            f"Invalid AlgoSeek timestamp format: {ts_str!r}. Expected yyyyMMddHHmmssfff (17 digits)"
        )

    return datetime(
        int(ts_str[0:4]),
        int(ts_str[4:6]),
        int(ts_str[6:8]),
        int(ts_str[8:10]),
        int(ts_str[10:12]),
        int(ts_str[12:14]),
        int(ts_str[14:17]) * 1000,
    )
