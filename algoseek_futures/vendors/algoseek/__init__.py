"""AlgoSeek futures parsing: header resolution, message decoding, tick assembly."""

from algoseek_futures.vendors.algoseek.assemble import build_tick, descale_price, scale_factor
from algoseek_futures.vendors.algoseek.header import (
    REQUIRED_COLUMNS,
    HeaderColumns,
    HeaderError,
    resolve_header,
)
from algoseek_futures.vendors.algoseek.messages import (
    OpenInterestMessage,
    QuoteMessage,
    TradeMessage,
    classify_message,
    parse_algoseek_timestamp,
)
from algoseek_futures.vendors.algoseek.reader import (
    AlgoSeekFuturesReader,
    ReaderStats,
    open_reader,
    read_ticks,
)

__all__ = [
    "AlgoSeekFuturesReader",
    "HeaderColumns",
    "HeaderError",
    "OpenInterestMessage",
    "QuoteMessage",
    "REQUIRED_COLUMNS",
    "ReaderStats",
    "TradeMessage",
    "build_tick",
    "classify_message",
    "descale_price",
    "open_reader",
    "parse_algoseek_timestamp",
    "read_ticks",
    "resolve_header",
    "scale_factor",
]
