"""Pull-based reader turning AlgoSeek futures files into canonical ticks.

The reader consumes one line at a time from a byte stream. Lines that are
short, out of scope (options, spreads), for unknown or filtered instruments,
or of unsupported message kinds are skipped. Undecodable bytes are replaced,
so a malformed line is logged and skipped; it never stops iteration. Only
failures of the stream itself propagate.

Example:
    from decimal import Decimal
    from algoseek_futures.vendors.algoseek import open_reader

    with open_reader("ES_20230615.csv.bz2", {"ES": Decimal(1)}) as reader:
        for tick in reader:
            print(tick.symbol, tick.time, tick.value)
"""

from __future__ import annotations

import io
import logging
from collections import Counter
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from types import MappingProxyType
from typing import BinaryIO

from algoseek_futures.io.streams import open_stream
from algoseek_futures.properties import SymbolProperties, parse_multipliers
from algoseek_futures.symbols import SymbolResolver
from algoseek_futures.types import FutureSymbol, Tick
from algoseek_futures.vendors.algoseek.assemble import build_tick, descale_price, parse_int_field
from algoseek_futures.vendors.algoseek.header import (
    COLUMN_PRICE,
    COLUMN_QUANTITY,
    COLUMN_TICKER,
    COLUMN_TIMESTAMP,
    COLUMN_TYPE,
    HeaderColumns,
    field_at,
    resolve_header,
    split_fields,
)
from algoseek_futures.vendors.algoseek.messages import (
    MESSAGE_TYPE_MASK,
    QUOTE_CODE,
    classify_message,
    parse_algoseek_timestamp,
)

logger = logging.getLogger(__name__)

Resolver = Callable[[str], FutureSymbol | None]

REJECT_SHORT_ROW = "short_row"
REJECT_OPTION_OR_SPREAD = "option_or_spread"
REJECT_EMPTY_TICKER = "empty_ticker"
REJECT_UNKNOWN_SYMBOL = "unknown_symbol"
REJECT_NO_MULTIPLIER = "no_multiplier"
REJECT_FILTERED = "filtered"
REJECT_UNSUPPORTED_TYPE = "unsupported_type"
REJECT_UNKNOWN_SIDE = "unknown_side"
REJECT_ERROR = "error"

_OUT_OF_SCOPE_TICKER_CHARS = (" ", "-")


@dataclass
class ReaderStats:
    """Line accounting for one reader."""

    lines_read: int = 0
    ticks_emitted: int = 0
    rejected: Counter[str] = field(default_factory=Counter)

    @property
    def rejected_total(self) -> int:
        return sum(self.rejected.values())

    def reject(self, reason: str) -> None:
        self.rejected[reason] += 1

    def as_dict(self) -> dict[str, int]:
        return {
            "lines_read": self.lines_read,
            "ticks_emitted": self.ticks_emitted,
            "rejected": self.rejected_total,
            **{f"rejected_{reason}": count for reason, count in sorted(self.rejected.items())},
        }


class AlgoSeekFuturesReader:
    """Forward-only tick reader over one AlgoSeek futures file.

    Construction reads the header and primes ``current`` with the first valid
    tick. ``move_next()`` advances; iterating the reader yields ``current`` and
    advances on the following call, so every tick parsed before a stream
    failure is delivered. There is no reset: build a new reader to restart.

    The reader owns ``stream`` and closes it in ``close()``, which is safe to
    call more than once. Use the reader as a context manager to guarantee
    release.

    Args:
        stream: Readable byte stream positioned at the header line.
        symbol_multipliers: Root -> price multiplier. Roots without an entry
            produce no ticks.
        symbol_filter: Optional roots to keep (case-insensitive). ``None`` keeps
            every root with a multiplier. A single string is one root.
        resolver: Maps a vendor ticker to a ``FutureSymbol`` or None. Defaults
            to a ``SymbolResolver`` over ``SymbolProperties.default()``.
        require_header: Raise ``HeaderError`` when the header is missing or
            incomplete instead of reading permissively.
        source: Label used in log messages (usually the file path).
    """

    def __init__(
        self,
        stream: BinaryIO,
        symbol_multipliers: Mapping[str, Decimal | float | str],
        symbol_filter: Iterable[str] | None = None,
        *,
        resolver: Resolver | None = None,
        require_header: bool = False,
        source: str | None = None,
    ):
        self._stream = stream
        self._closed = False
        self._current: Tick | None = None
        self._advance_pending = False
        self._source = source or getattr(stream, "name", "<stream>")
        self.stats = ReaderStats()

        try:
            self._multipliers = MappingProxyType(parse_multipliers(symbol_multipliers))
            if isinstance(symbol_filter, str):
                symbol_filter = [symbol_filter]
            self._symbol_filter = (
                frozenset(symbol.strip().upper() for symbol in symbol_filter)
                if symbol_filter is not None
                else None
            )
            self._resolver = resolver or SymbolResolver(SymbolProperties.default())
            self._text = io.TextIOWrapper(stream, encoding="utf-8-sig", errors="replace")

            # detecting column order in the file
            header_line = self._text.readline()
            self._columns = resolve_header(header_line, strict=require_header)
            if not self._columns.is_resolved:
                logger.warning(
                    "No usable header in %s; row length checks are disabled", self._source
                )

            # prime the pump
            self.move_next()
        except BaseException:
            self.close()
            raise

    @property
    def columns(self) -> HeaderColumns:
        return self._columns

    @property
    def current(self) -> Tick | None:
        """Tick at the head of the reader, or None once exhausted."""
        return self._current

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def multipliers(self) -> Mapping[str, Decimal]:
        return self._multipliers

    @property
    def symbol_filter(self) -> frozenset[str] | None:
        return self._symbol_filter

    def move_next(self) -> bool:
        """Advance to the next valid tick. Returns False at end of input."""
        self._advance_pending = False
        tick = None
        while tick is None:
            line = self._read_line()
            if line is None:
                break
            tick = self._parse(line)

        self._current = tick
        return tick is not None

    def __iter__(self) -> Iterator[Tick]:
        return self

    def __next__(self) -> Tick:
        # advance on the following call, never after handing out a tick
        if self._advance_pending:
            self.move_next()
        tick = self._current
        if tick is None:
            raise StopIteration
        self._advance_pending = True
        self.stats.ticks_emitted += 1
        return tick

    def reset(self) -> None:
        raise NotImplementedError("AlgoSeekFuturesReader cannot be reset; open a new reader")

    def close(self) -> None:
        """Release the text wrapper and the underlying stream. Idempotent."""
        if self._closed:
            return
        self._closed = True
        self._current = None
        text = getattr(self, "_text", None)
        try:
            if text is not None:
                text.close()
        finally:
            self._stream.close()
        logger.debug("Closed %s: %s", self._source, self.stats.as_dict())

    def __enter__(self) -> AlgoSeekFuturesReader:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _read_line(self) -> str | None:
        if self._closed:
            return None
        line = self._text.readline()
        if not line:
            return None
        self.stats.lines_read += 1
        return line

    def _parse(self, line: str) -> Tick | None:
        """Parse one data line into a tick, or None when the line is skipped."""
        columns = self._columns
        try:
            fields = split_fields(line)
            if len(fields) - 1 < columns.columns_required:
                return self._reject(REJECT_SHORT_ROW)

            ticker = field_at(fields, columns.ticker, column=COLUMN_TICKER)

            # options and spreads are out of scope
            if any(char in ticker for char in _OUT_OF_SCOPE_TICKER_CHARS):
                return self._reject(REJECT_OPTION_OR_SPREAD)

            ticker = ticker.strip('"')
            if not ticker:
                return self._reject(REJECT_EMPTY_TICKER)

            symbol = self._resolver(ticker)
            if symbol is None:
                return self._reject(REJECT_UNKNOWN_SYMBOL)

            multiplier = self._multipliers.get(symbol.root.upper())
            if multiplier is None:
                return self._reject(REJECT_NO_MULTIPLIER)

            if self._symbol_filter is not None and symbol.root.upper() not in self._symbol_filter:
                return self._reject(REJECT_FILTERED)

            # feed-local time, no timezone conversion
            time = parse_algoseek_timestamp(field_at(fields, columns.timestamp, column=COLUMN_TIMESTAMP))

            type_code = int(field_at(fields, columns.type, column=COLUMN_TYPE).strip())
            side = fields[columns.side] if 0 <= columns.side < len(fields) else None
            message = classify_message(type_code, side)
            if message is None:
                if type_code & MESSAGE_TYPE_MASK == QUOTE_CODE:
                    return self._reject(REJECT_UNKNOWN_SIDE)
                return self._reject(REJECT_UNSUPPORTED_TYPE)

            price = descale_price(
                field_at(fields, columns.price, column=COLUMN_PRICE),
                root=symbol.root,
                multiplier=multiplier,
            )
            quantity = parse_int_field(field_at(fields, columns.quantity, column=COLUMN_QUANTITY))

            return build_tick(message, symbol=symbol, time=time, price=price, quantity=quantity)
        except Exception:
            logger.error("Failed to parse line from %s: %r", self._source, line, exc_info=True)
            return self._reject(REJECT_ERROR)

    def _reject(self, reason: str) -> None:
        self.stats.reject(reason)
        return None


def open_reader(
    path: str | Path,
    symbol_multipliers: Mapping[str, Decimal | float | str],
    symbol_filter: Iterable[str] | None = None,
    **kwargs,
) -> AlgoSeekFuturesReader:
    """Open ``path`` (decompressing by extension) and wrap it in a reader.

    I/O failures such as a missing file or a corrupt archive propagate.
    """
    stream = open_stream(path)
    return AlgoSeekFuturesReader(
        stream,
        symbol_multipliers,
        symbol_filter,
        source=str(path),
        **kwargs,
    )


def read_ticks(
    path: str | Path,
    symbol_multipliers: Mapping[str, Decimal | float | str],
    symbol_filter: Iterable[str] | None = None,
    **kwargs,
) -> Iterator[Tick]:
    """Yield ticks from ``path``; the file is closed when the generator finishes or is closed."""
    with open_reader(path, symbol_multipliers, symbol_filter, **kwargs) as reader:
        yield from reader
