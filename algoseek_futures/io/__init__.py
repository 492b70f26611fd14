"""Byte-stream access to vendor files."""

from algoseek_futures.io.streams import SUPPORTED_EXTENSIONS, open_stream

__all__ = ["SUPPORTED_EXTENSIONS", "open_stream"]
