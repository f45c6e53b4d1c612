from datetime import date, timedelta

from riskdca.config import Cadence
from riskdca.risk import ScoredPricePoint, timestamp_for
from riskdca.simulator import scheduled_days


def _trading_days(start, end, skip_weekends=True):
    days = []
    current = start
    while current <= end:
        if not skip_weekends or current.weekday() < 5:
            days.append(current)
        current += timedelta(days=1)
    return days


def _series(days):
    return [
        ScoredPricePoint(timestamp=timestamp_for(day), price=100.0, moving_average=100.0, risk=0.4)
        for day in days
    ]


def test_daily_schedules_every_index():
    series = _series(_trading_days(date(2024, 1, 1), date(2024, 1, 31)))
    assert scheduled_days(series, Cadence.DAILY) == frozenset(range(len(series)))


def test_weekly_schedules_mondays_only():
    days = _trading_days(date(2024, 1, 1), date(2024, 2, 29), skip_weekends=False)
    scheduled = scheduled_days(_series(days), Cadence.WEEKLY)

    assert scheduled
    assert all(days[index].weekday() == 0 for index in scheduled)
    assert len(scheduled) == sum(1 for day in days if day.weekday() == 0)


def test_weekly_has_no_holiday_roll_forward():
    days = [day for day in _trading_days(date(2024, 1, 1), date(2024, 1, 14)) if day != date(2024, 1, 8)]
    scheduled = scheduled_days(_series(days), Cadence.WEEKLY)

    assert [days[index] for index in sorted(scheduled)] == [date(2024, 1, 1)]


def test_monthly_slides_to_next_trading_day():
    days = _trading_days(date(2024, 1, 1), date(2024, 3, 31))
    scheduled = scheduled_days(_series(days), Cadence.MONTHLY, anchor_day_of_month=13)
    fired = [days[index] for index in sorted(scheduled)]

    # Jan 13 2024 is a Saturday
    assert fired == [date(2024, 1, 15), date(2024, 2, 13), date(2024, 3, 13)]


def test_monthly_fires_once_per_month_at_earliest_index():
    days = _trading_days(date(2023, 1, 1), date(2024, 12, 31))
    scheduled = scheduled_days(_series(days), Cadence.MONTHLY, anchor_day_of_month=7)

    by_month = {}
    for index in scheduled:
        key = (days[index].year, days[index].month)
        assert key not in by_month
        by_month[key] = index
    assert len(by_month) == 24
    for (year, month), index in by_month.items():
        earliest = next(
            i for i, day in enumerate(days) if (day.year, day.month) == (year, month) and day.day >= 7
        )
        assert index == earliest


def test_month_without_qualifying_day_is_skipped():
    days = _trading_days(date(2024, 1, 20), date(2024, 3, 10))
    scheduled = scheduled_days(_series(days), Cadence.MONTHLY, anchor_day_of_month=25)
    fired = [days[index] for index in sorted(scheduled)]

    assert fired == [date(2024, 1, 25), date(2024, 2, 26)]


def test_empty_series_schedules_nothing():
    assert scheduled_days([], Cadence.MONTHLY, 1) == frozenset()
