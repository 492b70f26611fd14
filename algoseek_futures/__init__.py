"""AlgoSeek futures tick reader."""

from __future__ import annotations

from algoseek_futures.types import FutureSymbol, Tick, TickType
from algoseek_futures.vendors.algoseek import (
    AlgoSeekFuturesReader,
    HeaderError,
    ReaderStats,
    open_reader,
    read_ticks,
)

__all__ = [
    "AlgoSeekFuturesReader",
    "FutureSymbol",
    "HeaderError",
    "ReaderStats",
    "Tick",
    "TickType",
    "open_reader",
    "read_ticks",
]
