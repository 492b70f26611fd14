"""Tick table schema and conversion from ``Tick`` objects to Polars frames.

Example:
    from algoseek_futures import read_ticks
    from algoseek_futures.tables.ticks import ticks_to_frame

    df = ticks_to_frame(read_ticks("ES_20230615.csv.bz2", {"ES": 1}))
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

import polars as pl

from algoseek_futures.types import Tick

# Prices are stored as Float64 for analysis; the reader keeps exact Decimals.
TICKS_SCHEMA: dict[str, pl.DataType] = {
    "time": pl.Datetime("ms"),  # feed-local, naive
    "root": pl.Utf8,
    "market": pl.Utf8,
    "contract_date": pl.Date,
    "tick_type": pl.Utf8,  # "trade", "quote" or "open_interest"
    "value": pl.Float64,
    "quantity": pl.Int64,
    "bid_price": pl.Float64,
    "bid_size": pl.Int64,
    "ask_price": pl.Float64,
    "ask_size": pl.Int64,
    "exchange": pl.Utf8,
}


def _as_float(value: Decimal | None) -> float | None:
    return float(value) if value is not None else None


def tick_to_row(tick: Tick) -> dict[str, object]:
    return {
        "time": tick.time,
        "root": tick.symbol.root,
        "market": tick.symbol.market,
        "contract_date": tick.symbol.contract_date,
        "tick_type": tick.tick_type.value,
        "value": _as_float(tick.value),
        "quantity": tick.quantity,
        "bid_price": _as_float(tick.bid_price),
        "bid_size": tick.bid_size,
        "ask_price": _as_float(tick.ask_price),
        "ask_size": tick.ask_size,
        "exchange": tick.exchange,
    }


def ticks_to_frame(ticks: Iterable[Tick]) -> pl.DataFrame:
    """Collect ticks into a DataFrame conforming to ``TICKS_SCHEMA``."""
    rows = [tick_to_row(tick) for tick in ticks]
    if not rows:
        return pl.DataFrame(schema=TICKS_SCHEMA)
    return normalize_ticks_schema(pl.DataFrame(rows, infer_schema_length=None))


def normalize_ticks_schema(df: pl.DataFrame) -> pl.DataFrame:
    """Cast to the canonical ticks schema and select only schema columns.

    Optional per-kind columns are filled with null when missing.
    """
    required = ("time", "root", "tick_type", "value")
    missing_required = [col for col in required if col not in df.columns]
    if missing_required:
        raise ValueError(f"ticks missing required columns: {missing_required}")

    for col, dtype in TICKS_SCHEMA.items():
        if col not in df.columns:
            df = df.with_columns(pl.lit(None, dtype=dtype).alias(col))

    return df.with_columns(
        [pl.col(col).cast(dtype) for col, dtype in TICKS_SCHEMA.items()]
    ).select(list(TICKS_SCHEMA.keys()))
