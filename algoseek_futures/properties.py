"""Reference data for futures roots: listing market and contract properties.

Two inputs feed the reader:

- Symbol properties: one row per futures root with its market, contract
  multiplier and minimum price variation. Loaded from a LEAN-style
  ``symbol-properties-database.csv`` or taken from ``DEFAULT_FUTURE_MARKETS``.
- Price multipliers: ``symbol,multiplier`` pairs applied to descaled AlgoSeek
  prices. These come from the caller and are kept separate from contract
  multipliers because AlgoSeek quotes some roots in different units.

Example:
    from algoseek_futures.properties import SymbolProperties, load_price_multipliers

    properties = SymbolProperties.from_csv("symbol-properties-database.csv")
    multipliers = load_price_multipliers("AlgoSeek.US.Futures.PriceMultipliers.csv")
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path

import polars as pl

from algoseek_futures._error_messages import invalid_multiplier_error

logger = logging.getLogger(__name__)

# Listing market per root for the contracts AlgoSeek distributes.
DEFAULT_FUTURE_MARKETS: dict[str, str] = {
    # CME equity index
    "ES": "cme",
    "NQ": "cme",
    "RTY": "cme",
    "EMD": "cme",
    "MES": "cme",
    "MNQ": "cme",
    # CME FX
    "6A": "cme",
    "6B": "cme",
    "6C": "cme",
    "6E": "cme",
    "6J": "cme",
    "6M": "cme",
    "6N": "cme",
    "6S": "cme",
    # CME rates and livestock
    "GE": "cme",
    "SR3": "cme",
    "LE": "cme",
    "HE": "cme",
    "GF": "cme",
    # CBOT
    "YM": "cbot",
    "MYM": "cbot",
    "ZB": "cbot",
    "ZN": "cbot",
    "ZF": "cbot",
    "ZT": "cbot",
    "UB": "cbot",
    "ZC": "cbot",
    "ZS": "cbot",
    "ZW": "cbot",
    "ZM": "cbot",
    "ZL": "cbot",
    "ZO": "cbot",
    # NYMEX
    "CL": "nymex",
    "NG": "nymex",
    "HO": "nymex",
    "RB": "nymex",
    "PA": "nymex",
    "PL": "nymex",
    # COMEX
    "GC": "comex",
    "SI": "comex",
    "HG": "comex",
    # CFE
    "VX": "cfe",
}

PROPERTIES_COLUMNS: dict[str, pl.DataType] = {
    "market": pl.Utf8,
    "symbol": pl.Utf8,
    "type": pl.Utf8,
    "description": pl.Utf8,
    "contract_multiplier": pl.Float64,
    "minimum_price_variation": pl.Float64,
}


@dataclass(frozen=True)
class SymbolProperty:
    root: str
    market: str
    description: str | None = None
    contract_multiplier: float | None = None
    minimum_price_variation: float | None = None


class SymbolProperties:
    """Read-only lookup of futures root properties."""

    def __init__(self, entries: Mapping[str, SymbolProperty]):
        self._entries = {root.upper(): entry for root, entry in entries.items()}

    @classmethod
    def default(cls) -> SymbolProperties:
        return cls.from_markets(DEFAULT_FUTURE_MARKETS)

    @classmethod
    def from_markets(cls, markets: Mapping[str, str]) -> SymbolProperties:
        return cls({root: SymbolProperty(root=root, market=market) for root, market in markets.items()})

    @classmethod
    def from_frame(cls, df: pl.DataFrame) -> SymbolProperties:
        """Build from a frame with at least ``market``, ``symbol`` and ``type``.

        Only ``future`` rows are kept. When a root is listed on several markets
        the first row wins.
        """
        missing = [col for col in ("market", "symbol", "type") if col not in df.columns]
        if missing:
            raise ValueError(f"symbol properties: missing required columns: {missing}")

        for col, dtype in PROPERTIES_COLUMNS.items():
            if col not in df.columns:
                df = df.with_columns(pl.lit(None, dtype=dtype).alias(col))

        futures = (
            df.with_columns(
                [pl.col(col).cast(dtype, strict=False) for col, dtype in PROPERTIES_COLUMNS.items()]
            )
            .with_columns(
                pl.col("type").str.strip_chars().str.to_lowercase(),
                pl.col("symbol").str.strip_chars().str.to_uppercase(),
                pl.col("market").str.strip_chars().str.to_lowercase(),
            )
            .filter(pl.col("type") == "future")
            .unique(subset=["symbol"], keep="first", maintain_order=True)
        )

        entries = {
            row["symbol"]: SymbolProperty(
                root=row["symbol"],
                market=row["market"],
                description=row["description"],
                contract_multiplier=row["contract_multiplier"],
                minimum_price_variation=row["minimum_price_variation"],
            )
            for row in futures.iter_rows(named=True)
        }
        logger.debug("Loaded %d futures symbol properties", len(entries))
        return cls(entries)

    @classmethod
    def from_csv(cls, path: str | Path) -> SymbolProperties:
        """Load a LEAN-style ``symbol-properties-database.csv`` (``#`` comments allowed)."""
        df = pl.read_csv(
            Path(path),
            comment_prefix="#",
            infer_schema_length=0,
            truncate_ragged_lines=True,
        )
        return cls.from_frame(df)

    def get(self, root: str) -> SymbolProperty | None:
        return self._entries.get(root.upper())

    def market_for(self, root: str) -> str | None:
        entry = self.get(root)
        return entry.market if entry is not None else None

    def roots(self) -> list[str]:
        return sorted(self._entries)

    def __contains__(self, root: object) -> bool:
        return isinstance(root, str) and root.upper() in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def parse_multipliers(rows: Mapping[str, object]) -> dict[str, Decimal]:
    """Coerce a ``root -> multiplier`` mapping into Decimals keyed by upper-case root."""
    out: dict[str, Decimal] = {}
    for symbol, value in rows.items():
        text = str(value).strip()
        try:
            multiplier = Decimal(text)
        except InvalidOperation as exc:
            raise ValueError(invalid_multiplier_error(symbol, text)) from exc
        if not multiplier.is_finite():
            raise ValueError(invalid_multiplier_error(symbol, text))
        out[symbol.strip().upper()] = multiplier
    return out


def load_price_multipliers(path: str | Path) -> dict[str, Decimal]:
    """Read a two-column ``symbol,multiplier`` CSV into Decimal multipliers.

    The first two columns are used regardless of their header names. Values are
    read as text so no precision is lost to float parsing.
    """
    df = pl.read_csv(Path(path), comment_prefix="#", infer_schema_length=0)
    if df.width < 2:
        raise ValueError(f"price multipliers: expected 2 columns in {path}, found {df.width}")

    symbol_col, multiplier_col = df.columns[:2]
    df = df.select(
        pl.col(symbol_col).str.strip_chars().alias("symbol"),
        pl.col(multiplier_col).str.strip_chars().alias("multiplier"),
    ).drop_nulls()

    return parse_multipliers(dict(zip(df["symbol"].to_list(), df["multiplier"].to_list())))
