"""Polars table schemas for reader output."""

from algoseek_futures.tables.ticks import TICKS_SCHEMA, normalize_ticks_schema, ticks_to_frame

__all__ = ["TICKS_SCHEMA", "normalize_ticks_schema", "ticks_to_frame"]
