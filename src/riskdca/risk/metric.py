"""Trend-relative risk score.

The trend is a trailing geometric mean over up to 500 daily observations. The
window is long enough that the score stays elevated through short
drawdowns.
"""

from __future__ import annotations

import math
from datetime import date
from typing import Optional, Sequence

from riskdca.risk.models import PricePoint, ScoredPricePoint

MA_WINDOW = 500
RISK_INTERCEPT = 0.4647
RISK_SCALE = 1.0013
NEUTRAL_RISK = 0.5
RISK_DECIMALS = 4


def clamp01(value: float) -> float:
    return min(1.0, max(0.0, value))


def calc_risk(price: float, moving_average: Optional[float]) -> float:
    if not moving_average or moving_average <= 0:
        return NEUTRAL_RISK
    log_ratio = math.log10(price / moving_average)
    return clamp01((log_ratio + RISK_INTERCEPT) / RISK_SCALE)


def score_prices(prices: Sequence[PricePoint]) -> list[ScoredPricePoint]:
    """Attach the rolling geometric mean and risk score to every point."""
    scored: list[ScoredPricePoint] = []
    log_sum = 0.0
    for index, point in enumerate(prices):
        log_sum += math.log10(max(point.price, 1.0))
        if index >= MA_WINDOW:
            log_sum -= math.log10(max(prices[index - MA_WINDOW].price, 1.0))
        moving_average = 10 ** (log_sum / min(index + 1, MA_WINDOW))
        scored.append(
            ScoredPricePoint(
                timestamp=point.timestamp,
                price=point.price,
                moving_average=moving_average,
                risk=round(calc_risk(point.price, moving_average), RISK_DECIMALS),
            )
        )
    return scored


def apply_risk_offset(series: Sequence[ScoredPricePoint], offset: float) -> list[ScoredPricePoint]:
    """Shift every risk value by ``offset`` and re-clamp; returns new points."""
    if offset == 0:
        return list(series)
    return [
        ScoredPricePoint(
            timestamp=point.timestamp,
            price=point.price,
            moving_average=point.moving_average,
            risk=round(clamp01(point.risk + offset), RISK_DECIMALS),
        )
        for point in series
    ]


def select_range(
    series: Sequence[ScoredPricePoint],
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> list[ScoredPricePoint]:
    """Inclusive calendar-date filter; ``None`` leaves that side open."""
    selected = []
    for point in series:
        day = point.day
        if start is not None and day < start:
            continue
        if end is not None and day > end:
            continue
        selected.append(point)
    return selected
