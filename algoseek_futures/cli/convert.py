"""``algoseek-futures convert``: read a file and write its ticks."""

from __future__ import annotations

import argparse
import logging

from algoseek_futures.cli._inputs import add_reader_arguments

logger = logging.getLogger(__name__)


def register(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser("convert", help="Convert an AlgoSeek futures file to ticks")
    add_reader_arguments(p)
    p.add_argument(
        "--format",
        choices=["table", "csv", "json", "parquet"],
        default="table",
        help="Output format (default: table)",
    )
    p.add_argument("--output", default=None, help="Output file (default: stdout)")
    p.add_argument("--limit", type=int, default=None, help="Stop after N ticks")
    p.set_defaults(handler=_handle)


def _handle(args: argparse.Namespace) -> int:
    from itertools import islice

    from algoseek_futures.cli._inputs import build_reader_inputs
    from algoseek_futures.cli._output import write_output
    from algoseek_futures.tables.ticks import ticks_to_frame
    from algoseek_futures.vendors.algoseek import HeaderError, open_reader

    if args.format == "parquet" and args.output is None:
        print("error: --output required for parquet format")
        return 1

    try:
        multipliers, symbols, kwargs = build_reader_inputs(args)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}")
        return 1

    try:
        with open_reader(args.file, multipliers, symbols, **kwargs) as reader:
            df = ticks_to_frame(islice(reader, args.limit))
            stats = reader.stats
    except FileNotFoundError as exc:
        print(f"error: {exc}")
        return 1
    except HeaderError as exc:
        print(f"error: {exc}")
        return 2

    logger.info(
        "Read %d lines from %s: %d ticks, %d rejected",
        stats.lines_read,
        args.file,
        df.height,
        stats.rejected_total,
    )
    write_output(df, fmt=args.format, output=args.output)
    return 0
