from __future__ import annotations

import json
import logging

import pytest

from algoseek_futures import config
from algoseek_futures.cli import main

HEADER = "Timestamp,Ticker,Type,Side,SecurityID,Quantity,Price"
ROWS = [
    "20230615093012123,ESU3,2,,123,5,450000000000",
    "20230615093012124,ESU3,1,B,123,10,449750000000",
    "20230615093012125,ES U3,2,,123,1,450000000000",
    "20230615093012126,NQU3,2,,456,2,1500000000000",
]


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    monkeypatch.delenv(config.ENV_MULTIPLIERS, raising=False)
    monkeypatch.delenv(config.ENV_SYMBOL_PROPERTIES, raising=False)
    monkeypatch.setattr(config, "CONFIG_PATH", tmp_path / "missing.toml")


@pytest.fixture
def data_file(tmp_path):
    path = tmp_path / "ES_20230615.csv"
    path.write_text("\n".join([HEADER, *ROWS]) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def multipliers_file(tmp_path):
    path = tmp_path / "multipliers.csv"
    path.write_text("symbol,multiplier\nES,1\n", encoding="utf-8")
    return path


def test_no_command_prints_help(capsys) -> None:
    assert main([]) == 1
    assert "algoseek-futures" in capsys.readouterr().out


def test_convert_json(data_file, multipliers_file, capsys) -> None:
    exit_code = main(
        [
            "convert",
            str(data_file),
            "--multipliers",
            str(multipliers_file),
            "--reference-year",
            "2023",
            "--format",
            "json",
        ]
    )
    assert exit_code == 0

    rows = json.loads(capsys.readouterr().out)
    assert [row["tick_type"] for row in rows] == ["trade", "quote"]
    assert rows[0]["root"] == "ES"
    assert rows[0]["market"] == "cme"
    assert rows[0]["value"] == 45.0
    assert rows[0]["quantity"] == 5
    assert rows[1]["bid_price"] == 44.975
    assert rows[1]["bid_size"] == 10


def test_convert_csv_with_symbol_filter_and_limit(data_file, capsys) -> None:
    exit_code = main(
        ["convert", str(data_file), "--symbols", "nq", "--format", "csv", "--limit", "5"]
    )
    assert exit_code == 0

    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[0].startswith("time,root,market,contract_date,tick_type,value")
    assert len(lines) == 2
    assert ",NQ,cme," in lines[1]


def test_convert_without_multipliers_warns(data_file, caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="algoseek_futures.cli._inputs"):
        assert main(["convert", str(data_file), "--format", "csv"]) == 0

    assert "No price multiplier file given" in caplog.text


def test_convert_writes_output_file(data_file, multipliers_file, tmp_path) -> None:
    out = tmp_path / "ticks.csv"
    exit_code = main(
        [
            "convert",
            str(data_file),
            "--multipliers",
            str(multipliers_file),
            "--format",
            "csv",
            "--output",
            str(out),
        ]
    )

    assert exit_code == 0
    assert out.read_text(encoding="utf-8").count("\n") == 3


def test_convert_missing_file(tmp_path, capsys) -> None:
    exit_code = main(["convert", str(tmp_path / "missing.csv")])

    assert exit_code == 1
    assert "error:" in capsys.readouterr().out


def test_convert_bad_multiplier_file(data_file, tmp_path, capsys) -> None:
    bad = tmp_path / "bad.csv"
    bad.write_text("symbol,multiplier\nES,abc\n", encoding="utf-8")

    exit_code = main(["convert", str(data_file), "--multipliers", str(bad)])

    assert exit_code == 1
    assert "Invalid price multiplier" in capsys.readouterr().out


def test_require_header_fails_on_headerless_file(tmp_path, capsys) -> None:
    path = tmp_path / "headerless.csv"
    path.write_text("\n".join(ROWS) + "\n", encoding="utf-8")

    exit_code = main(["convert", str(path), "--require-header"])

    assert exit_code == 2
    assert "missing required columns" in capsys.readouterr().out


def test_inspect_json(data_file, multipliers_file, capsys) -> None:
    exit_code = main(
        ["inspect", str(data_file), "--multipliers", str(multipliers_file), "--format", "json"]
    )
    assert exit_code == 0

    data = json.loads(capsys.readouterr().out)
    assert data["columns"]["Ticker"] == 1
    assert data["columns_required"] == 6
    assert data["stats"]["lines_read"] == 4
    assert data["stats"]["ticks_emitted"] == 2
    assert data["stats"]["rejected_option_or_spread"] == 1
    assert data["stats"]["rejected_no_multiplier"] == 1


def test_inspect_table(data_file, multipliers_file, capsys) -> None:
    assert main(["inspect", str(data_file), "--multipliers", str(multipliers_file)]) == 0

    out = capsys.readouterr().out
    assert f"File: {data_file}" in out
    assert "ticks_emitted" in out


def test_convert_parquet_requires_output(data_file, capsys) -> None:
    exit_code = main(["convert", str(data_file), "--format", "parquet"])

    assert exit_code == 1
    assert "--output required for parquet format" in capsys.readouterr().out


def test_convert_parquet_to_file(data_file, multipliers_file, tmp_path) -> None:
    import polars as pl

    out = tmp_path / "ticks.parquet"
    exit_code = main(
        [
            "convert",
            str(data_file),
            "--multipliers",
            str(multipliers_file),
            "--format",
            "parquet",
            "--output",
            str(out),
        ]
    )

    assert exit_code == 0
    assert pl.read_parquet(out).height == 2
