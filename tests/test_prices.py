import json
from datetime import date

import pytest

from riskdca.config import BacktestConfig, InvestMode
from riskdca.errors import PriceDataError
from riskdca.prices import load_price_series
from riskdca.report import build_report
from riskdca.risk import timestamp_for
from riskdca.simulator import run_backtest


def test_load_dated_closes(tmp_path):
    path = tmp_path / "prices.csv"
    path.write_text(
        "Date,Close\n"
        "2024-01-03,102.5\n"
        "2024-01-01,100\n"
        "2024-01-02,0\n"
        "2024-01-04,\n"
        "2024-01-05,nan\n"
        "2024-01-01,101\n",
        encoding="utf-8",
    )

    series = load_price_series(path)

    assert [point.day for point in series] == [date(2024, 1, 1), date(2024, 1, 3)]
    assert series[0].price == 101.0
    assert series[1].price == 102.5


def test_load_epoch_timestamps(tmp_path):
    path = tmp_path / "prices.csv"
    first = timestamp_for(date(2024, 3, 1))
    path.write_text(f"timestamp,price\n{first},10\n{first + 86_400_000},11\n", encoding="utf-8")

    series = load_price_series(path)

    assert [point.timestamp for point in series] == [first, first + 86_400_000]


def test_missing_columns_rejected(tmp_path):
    path = tmp_path / "prices.csv"
    path.write_text("when,value\n2024-01-01,1\n", encoding="utf-8")

    with pytest.raises(PriceDataError) as excinfo:
        load_price_series(path)
    assert excinfo.value.path == str(path)


def test_missing_file_rejected(tmp_path):
    with pytest.raises(PriceDataError):
        load_price_series(tmp_path / "nope.csv")


def test_report_is_json_ready(tmp_path):
    path = tmp_path / "prices.csv"
    rows = "\n".join(f"2024-01-{day:02d},{100 + day}" for day in range(1, 29))
    path.write_text("date,close\n" + rows + "\n", encoding="utf-8")
    config = BacktestConfig(mode=InvestMode.EQUAL_AMOUNT, anchor_day_of_month=5)

    result = run_backtest(load_price_series(path), config)
    report = build_report(result, config, source=str(path))
    decoded = json.loads(json.dumps(report))

    assert decoded["summary"]["buy_count"] == 1
    assert decoded["ledger"][0]["day"] == "2024-01-05"
    assert decoded["ledger"][0]["action"] == "buy"
    assert decoded["config"]["mode"] == "equal"
    assert len(decoded["risk_series"]) == 28
