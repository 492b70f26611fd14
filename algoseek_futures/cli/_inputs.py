"""Shared argument handling: build reader inputs from CLI flags and config."""

from __future__ import annotations

import argparse
import logging
from decimal import Decimal

from algoseek_futures.config import ReaderSettings, resolve_settings
from algoseek_futures.properties import SymbolProperties, load_price_multipliers
from algoseek_futures.symbols import SymbolResolver

logger = logging.getLogger(__name__)


def add_reader_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("file", help="AlgoSeek futures file (.csv, .gz, .bz2, .zip, .7z)")
    parser.add_argument(
        "--multipliers",
        default=None,
        help="Price multiplier CSV (symbol,multiplier). Env: ALGOSEEK_MULTIPLIERS",
    )
    parser.add_argument(
        "--symbol-properties",
        default=None,
        help="LEAN symbol-properties-database.csv. Env: ALGOSEEK_SYMBOL_PROPERTIES",
    )
    parser.add_argument(
        "--symbols",
        default=None,
        help="Comma-separated roots to keep (e.g. ES,NQ); case-insensitive",
    )
    parser.add_argument(
        "--require-header",
        action="store_true",
        default=None,
        help="Fail when the header is missing or lacks a required column",
    )
    parser.add_argument(
        "--reference-year",
        type=int,
        default=None,
        help="Year used to expand single-digit contract years (default: current year)",
    )


def settings_from_args(args: argparse.Namespace) -> ReaderSettings:
    return resolve_settings(
        multipliers_path=args.multipliers,
        symbol_properties_path=args.symbol_properties,
        symbols=args.symbols,
        require_header=args.require_header,
    )


def build_reader_inputs(
    args: argparse.Namespace,
) -> tuple[dict[str, Decimal], tuple[str, ...] | None, dict]:
    """Return ``(multipliers, symbol_filter, reader_kwargs)`` for ``open_reader``."""
    settings = settings_from_args(args)

    if settings.symbol_properties_path is not None:
        properties = SymbolProperties.from_csv(settings.symbol_properties_path)
    else:
        properties = SymbolProperties.default()

    if settings.multipliers_path is not None:
        multipliers = load_price_multipliers(settings.multipliers_path)
    else:
        logger.warning("No price multiplier file given; using 1 for every known root")
        multipliers = {root: Decimal(1) for root in properties.roots()}

    resolver = SymbolResolver(properties, reference_year=args.reference_year)
    kwargs = {"resolver": resolver, "require_header": settings.require_header}
    return multipliers, settings.symbols, kwargs
