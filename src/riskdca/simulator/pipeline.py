"""End-to-end backtest: score, select, schedule, simulate."""

from __future__ import annotations

from typing import Optional, Sequence

from riskdca.config.models import BacktestConfig
from riskdca.logging import get_logger
from riskdca.risk.metric import apply_risk_offset, score_prices, select_range
from riskdca.risk.models import PricePoint, ScoredPricePoint
from riskdca.simulator.cache import SimulationCache
from riskdca.simulator.engine import SimulationEngine
from riskdca.simulator.models import SimulationResult
from riskdca.simulator.schedule import scheduled_days

logger = get_logger(__name__)


def prepare_series(prices: Sequence[PricePoint], config: BacktestConfig) -> list[ScoredPricePoint]:
    """Score the full history, then cut to the configured range and apply the offset.

    Scoring happens before the range cut so the moving average still sees the
    history preceding the start date.
    """
    scored = score_prices(prices)
    selected = select_range(scored, config.start_date, config.end_date)
    return apply_risk_offset(selected, config.risk_offset)


def _simulate(prices: Sequence[PricePoint], config: BacktestConfig) -> SimulationResult:
    series = prepare_series(prices, config)
    scheduled = scheduled_days(series, config.cadence, config.anchor_day_of_month)
    logger.info(
        "backtest_started",
        name=config.name,
        mode=config.mode.value,
        points=len(series),
        scheduled=len(scheduled),
    )
    return SimulationEngine(config).run(series, scheduled)


def run_backtest(
    prices: Sequence[PricePoint],
    config: BacktestConfig,
    cache: Optional[SimulationCache] = None,
) -> SimulationResult:
    if cache is None:
        return _simulate(prices, config)
    return cache.get_or_compute(prices, config, _simulate)
