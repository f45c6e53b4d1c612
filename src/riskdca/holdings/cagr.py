"""Heuristic forward CAGR projection.

Trailing CAGRs over several horizons are averaged, haircut and clamped to give
a five-year estimate, and longer horizons are blended toward a long-run
constant. This is a rule of thumb, not a statistical forecast; it is
deterministic for a given price history.
"""

from __future__ import annotations

from typing import Optional, Sequence

from riskdca.holdings.models import CagrProjection
from riskdca.risk.models import PricePoint

HISTORY_HORIZONS_YEARS = (1, 3, 5, 10)
MIN_ACTUAL_YEARS = 0.5
HAIRCUT = 0.75
FIVE_YEAR_FLOOR = -5.0
FIVE_YEAR_CAP = 35.0
LONG_RUN_CAGR = 7.0
REVERSION_WEIGHTS = {10: 0.20, 20: 0.45, 30: 0.65}
MS_PER_YEAR = 365.25 * 24 * 60 * 60 * 1000


def _nearest_point(history: Sequence[PricePoint], target_timestamp: int) -> PricePoint:
    return min(history, key=lambda point: abs(point.timestamp - target_timestamp))


def trailing_cagrs(history: Sequence[PricePoint]) -> dict[int, float]:
    """Trailing CAGR in percent for every horizon with enough data."""
    if len(history) < 2:
        return {}
    last = history[-1]
    cagrs: dict[int, float] = {}
    for years in HISTORY_HORIZONS_YEARS:
        start = _nearest_point(history, last.timestamp - int(years * MS_PER_YEAR))
        actual_years = (last.timestamp - start.timestamp) / MS_PER_YEAR
        if actual_years < MIN_ACTUAL_YEARS or start.price <= 0:
            continue
        cagrs[years] = ((last.price / start.price) ** (1 / actual_years) - 1) * 100
    return cagrs


def blend_toward_long_run(five_year: float, weight: float) -> float:
    return five_year * (1 - weight) + LONG_RUN_CAGR * weight


def project_cagr(history: Sequence[PricePoint]) -> Optional[CagrProjection]:
    historical = trailing_cagrs(history)
    if not historical:
        return None
    average = sum(historical.values()) / len(historical)
    five_year = min(FIVE_YEAR_CAP, max(FIVE_YEAR_FLOOR, average * HAIRCUT))
    return CagrProjection(
        historical=historical,
        five_year=five_year,
        ten_year=blend_toward_long_run(five_year, REVERSION_WEIGHTS[10]),
        twenty_year=blend_toward_long_run(five_year, REVERSION_WEIGHTS[20]),
        thirty_year=blend_toward_long_run(five_year, REVERSION_WEIGHTS[30]),
    )
