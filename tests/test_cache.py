from datetime import date, timedelta

import pytest

from riskdca.config import BacktestConfig, InvestMode
from riskdca.risk import PricePoint, timestamp_for
from riskdca.simulator import SimulationCache, compute_series_hash, run_backtest


def _prices(count, price=100.0):
    start = date(2023, 1, 1)
    return [
        PricePoint(timestamp=timestamp_for(start + timedelta(days=offset)), price=price)
        for offset in range(count)
    ]


def test_same_inputs_hit_cache():
    cache = SimulationCache()
    prices = _prices(60)
    config = BacktestConfig(mode=InvestMode.EQUAL_AMOUNT)

    first = run_backtest(prices, config, cache=cache)
    second = run_backtest(list(prices), config, cache=cache)

    assert second is first
    assert (cache.hits, cache.misses) == (1, 1)


def test_changed_inputs_miss_cache():
    cache = SimulationCache()
    prices = _prices(60)

    run_backtest(prices, BacktestConfig(), cache=cache)
    run_backtest(prices, BacktestConfig(base_amount=250.0), cache=cache)
    run_backtest(_prices(60, price=101.0), BacktestConfig(), cache=cache)

    assert cache.misses == 3
    assert len(cache) == 3


def test_least_recently_used_entry_evicted():
    computed = []

    def compute(prices, config):
        computed.append(config.base_amount)
        return run_backtest(prices, config)

    cache = SimulationCache(max_entries=2)
    prices = _prices(10)
    first, second, third = (BacktestConfig(base_amount=amount) for amount in (1.0, 2.0, 3.0))

    cache.get_or_compute(prices, first, compute)
    cache.get_or_compute(prices, second, compute)
    cache.get_or_compute(prices, first, compute)
    cache.get_or_compute(prices, third, compute)
    cache.get_or_compute(prices, second, compute)

    assert computed == [1.0, 2.0, 3.0, 2.0]
    assert len(cache) == 2


def test_series_hash_sensitive_to_prices():
    assert compute_series_hash(_prices(5)) == compute_series_hash(_prices(5))
    assert compute_series_hash(_prices(5)) != compute_series_hash(_prices(5, price=100.5))


def test_cache_size_must_be_positive():
    with pytest.raises(ValueError):
        SimulationCache(max_entries=0)


def test_cached_result_cannot_be_mutated():
    cache = SimulationCache()
    prices = _prices(30)
    config = BacktestConfig(mode=InvestMode.EQUAL_AMOUNT, anchor_day_of_month=1)

    first = run_backtest(prices, config, cache=cache)
    with pytest.raises(AttributeError):
        first.ledger.append(first.ledger[0])

    again = run_backtest(prices, config, cache=cache)
    assert isinstance(again.ledger, tuple)
    assert isinstance(again.equity_curve, tuple)
    assert isinstance(again.risk_series, tuple)
    assert len(again.ledger) == len(first.ledger)
