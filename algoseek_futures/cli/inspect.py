"""``algoseek-futures inspect``: show the header map and line accounting."""

from __future__ import annotations

import argparse
import json

from algoseek_futures.cli._inputs import add_reader_arguments


def register(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "inspect", help="Show resolved header columns and rejection counts for a file"
    )
    add_reader_arguments(p)
    p.add_argument(
        "--format",
        choices=["table", "json"],
        default="table",
        help="Output format (default: table)",
    )
    p.set_defaults(handler=_handle)


def _handle(args: argparse.Namespace) -> int:
    from algoseek_futures.cli._inputs import build_reader_inputs
    from algoseek_futures.cli._output import print_table
    from algoseek_futures.vendors.algoseek import HeaderError, open_reader

    try:
        multipliers, symbols, kwargs = build_reader_inputs(args)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}")
        return 1

    try:
        with open_reader(args.file, multipliers, symbols, **kwargs) as reader:
            for _ in reader:
                pass
            columns = reader.columns
            stats = reader.stats
    except FileNotFoundError as exc:
        print(f"error: {exc}")
        return 1
    except HeaderError as exc:
        print(f"error: {exc}")
        return 2

    if args.format == "json":
        data = {
            "file": args.file,
            "columns": columns.as_dict(),
            "columns_required": columns.columns_required,
            "stats": stats.as_dict(),
        }
        print(json.dumps(data, indent=2))
        return 0

    print(f"File: {args.file}")
    print()
    print_table([{"column": name, "index": index} for name, index in columns.as_dict().items()])
    print()
    print_table([{"metric": key, "count": value} for key, value in stats.as_dict().items()])
    return 0
