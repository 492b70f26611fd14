"""Configuration management for the AlgoSeek futures reader.

Resolution order for every setting: explicit argument (CLI flag) > environment
variable > config file > default.

Config file (TOML), located by ``ALGOSEEK_FUTURES_CONFIG``::

    multipliers_path = "~/data/algoseek/AlgoSeek.US.Futures.PriceMultipliers.csv"
    symbol_properties_path = "~/data/lean/symbol-properties-database.csv"
    symbols = ["ES", "NQ"]
    require_header = true
"""

from __future__ import annotations

import os
import warnings
from dataclasses import dataclass
from pathlib import Path

try:
    import tomllib
except ModuleNotFoundError:  # Python < 3.11
    import tomli as tomllib

CONFIG_PATH = Path(
    os.getenv(
        "ALGOSEEK_FUTURES_CONFIG",
        str(Path.home() / ".config" / "algoseek-futures" / "config.toml"),
    )
).expanduser()

ENV_MULTIPLIERS = "ALGOSEEK_MULTIPLIERS"
ENV_SYMBOL_PROPERTIES = "ALGOSEEK_SYMBOL_PROPERTIES"


def _read_config_file(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except Exception as exc:
        warnings.warn(f"Failed to parse algoseek-futures config at {path}: {exc}", stacklevel=2)
        return {}


def load_config(path: Path | None = None) -> dict:
    """Return parsed config content from ``path`` (default CONFIG_PATH)."""
    return _read_config_file(path or CONFIG_PATH)


def _resolve_path(arg_value: str | Path | None, env_name: str, config_value: object) -> Path | None:
    if arg_value is not None:
        return Path(arg_value).expanduser()
    env_value = os.getenv(env_name)
    if env_value:
        return Path(env_value).expanduser()
    if isinstance(config_value, str) and config_value.strip():
        return Path(config_value).expanduser()
    return None


def _parse_symbols(value: object) -> list[str] | None:
    if value is None:
        return None
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = [str(item) for item in value]
    else:
        raise ValueError(f"symbols must be a list or comma-separated string, got {value!r}")
    symbols = [item.strip().upper() for item in items if item.strip()]
    return symbols or None


@dataclass(frozen=True)
class ReaderSettings:
    """Resolved settings for building a reader."""

    multipliers_path: Path | None = None
    symbol_properties_path: Path | None = None
    symbols: tuple[str, ...] | None = None
    require_header: bool = False


def resolve_settings(
    *,
    multipliers_path: str | Path | None = None,
    symbol_properties_path: str | Path | None = None,
    symbols: str | list[str] | None = None,
    require_header: bool | None = None,
    config_path: Path | None = None,
) -> ReaderSettings:
    """Merge explicit arguments with environment variables and the config file."""
    config = load_config(config_path)

    parsed_symbols = _parse_symbols(symbols if symbols is not None else config.get("symbols"))

    if require_header is None:
        config_require = config.get("require_header", False)
        if not isinstance(config_require, bool):
            raise ValueError(f"require_header must be a boolean, got {config_require!r}")
        require_header = config_require

    return ReaderSettings(
        multipliers_path=_resolve_path(
            multipliers_path, ENV_MULTIPLIERS, config.get("multipliers_path")
        ),
        symbol_properties_path=_resolve_path(
            symbol_properties_path, ENV_SYMBOL_PROPERTIES, config.get("symbol_properties_path")
        ),
        symbols=tuple(parsed_symbols) if parsed_symbols is not None else None,
        require_header=require_header,
    )
