"""Scheduled trading-day selection."""

from __future__ import annotations

from typing import Sequence

from riskdca.config.models import Cadence
from riskdca.risk.models import ScoredPricePoint

MONDAY = 0


def scheduled_days(
    series: Sequence[ScoredPricePoint],
    cadence: Cadence,
    anchor_day_of_month: int = 1,
) -> frozenset[int]:
    """Indices of the days on which a periodic purchase fires.

    Monthly cadence fires on the first available day at or after the anchor in
    each calendar month; a month without such a day is skipped. Weekly cadence
    fires on Mondays only, with no holiday roll-forward.
    """
    if cadence == Cadence.DAILY:
        return frozenset(range(len(series)))

    fired: set[int] = set()
    if cadence == Cadence.WEEKLY:
        for index, point in enumerate(series):
            if point.day.weekday() == MONDAY:
                fired.add(index)
        return frozenset(fired)

    months_seen: set[tuple[int, int]] = set()
    for index, point in enumerate(series):
        day = point.day
        key = (day.year, day.month)
        if key in months_seen or day.day < anchor_day_of_month:
            continue
        months_seen.add(key)
        fired.add(index)
    return frozenset(fired)
