from __future__ import annotations

from pathlib import Path

import pytest

from algoseek_futures import config


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    monkeypatch.delenv(config.ENV_MULTIPLIERS, raising=False)
    monkeypatch.delenv(config.ENV_SYMBOL_PROPERTIES, raising=False)
    monkeypatch.setattr(config, "CONFIG_PATH", tmp_path / "missing.toml")


def _write_config(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "config.toml"
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_without_config() -> None:
    settings = config.resolve_settings()

    assert settings == config.ReaderSettings()


def test_config_file_values(tmp_path) -> None:
    path = _write_config(
        tmp_path,
        'multipliers_path = "~/mult.csv"\n'
        'symbol_properties_path = "/data/props.csv"\n'
        'symbols = ["es", " nq "]\n'
        "require_header = true\n",
    )

    settings = config.resolve_settings(config_path=path)

    assert settings.multipliers_path == Path("~/mult.csv").expanduser()
    assert settings.symbol_properties_path == Path("/data/props.csv")
    assert settings.symbols == ("ES", "NQ")
    assert settings.require_header is True


def test_env_overrides_config(monkeypatch, tmp_path) -> None:
    path = _write_config(tmp_path, 'multipliers_path = "/from/config.csv"\n')
    monkeypatch.setenv(config.ENV_MULTIPLIERS, "/from/env.csv")

    settings = config.resolve_settings(config_path=path)

    assert settings.multipliers_path == Path("/from/env.csv")


def test_explicit_argument_overrides_env(monkeypatch) -> None:
    monkeypatch.setenv(config.ENV_MULTIPLIERS, "/from/env.csv")

    settings = config.resolve_settings(multipliers_path="/from/arg.csv")

    assert settings.multipliers_path == Path("/from/arg.csv")


def test_symbols_from_comma_string() -> None:
    settings = config.resolve_settings(symbols="es, NQ,,")

    assert settings.symbols == ("ES", "NQ")


def test_empty_symbols_means_no_filter() -> None:
    assert config.resolve_settings(symbols=" , ").symbols is None


def test_invalid_symbols_type_raises(tmp_path) -> None:
    path = _write_config(tmp_path, "symbols = 5\n")

    with pytest.raises(ValueError, match="symbols must be a list"):
        config.resolve_settings(config_path=path)


def test_require_header_must_be_boolean(tmp_path) -> None:
    path = _write_config(tmp_path, 'require_header = "yes"\n')

    with pytest.raises(ValueError, match="require_header must be a boolean"):
        config.resolve_settings(config_path=path)


def test_explicit_require_header_skips_config(tmp_path) -> None:
    path = _write_config(tmp_path, "require_header = true\n")

    assert config.resolve_settings(require_header=False, config_path=path).require_header is False


def test_malformed_config_warns_and_is_ignored(tmp_path) -> None:
    path = _write_config(tmp_path, "this is = = not toml")

    with pytest.warns(UserWarning, match="Failed to parse algoseek-futures config"):
        data = config.load_config(path)

    assert data == {}
