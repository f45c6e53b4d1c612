import math
from datetime import date, timedelta

import pytest

from riskdca.risk import (
    PricePoint,
    apply_risk_offset,
    calc_risk,
    score_prices,
    select_range,
    timestamp_for,
)


def _prices(values, start=date(2020, 1, 1)):
    return [
        PricePoint(timestamp=timestamp_for(start + timedelta(days=offset)), price=float(value))
        for offset, value in enumerate(values)
    ]


def test_empty_series_scores_to_empty():
    assert score_prices([]) == []


def test_constant_price_scores_at_trend():
    scored = score_prices(_prices([100.0] * 600))
    expected = round(0.4647 / 1.0013, 4)

    assert len(scored) == 600
    for point in scored[500:]:
        assert point.moving_average == pytest.approx(100.0)
        assert point.risk == expected
    assert expected == 0.4641


def test_risk_is_always_clamped():
    values = [100.0 * (1.5 ** (offset % 20)) if offset % 37 else 0.5 for offset in range(300)]
    scored = score_prices(_prices(values))

    assert all(0.0 <= point.risk <= 1.0 for point in scored)
    assert max(point.risk for point in scored) == 1.0


def test_window_drops_observations_older_than_500_days():
    scored = score_prices(_prices([10.0] * 500 + [100.0] * 500))

    assert scored[499].moving_average == pytest.approx(10.0)
    assert scored[999].moving_average == pytest.approx(100.0)
    assert 10.0 < scored[750].moving_average < 100.0


def test_shrinking_window_for_first_days():
    scored = score_prices(_prices([100.0, 400.0]))

    assert scored[0].moving_average == pytest.approx(100.0)
    assert scored[1].moving_average == pytest.approx(200.0)
    expected = (math.log10(400.0 / 200.0) + 0.4647) / 1.0013
    assert scored[1].risk == round(expected, 4)


def test_prices_below_one_use_floor_in_average():
    scored = score_prices(_prices([0.5, 0.5]))

    assert scored[1].moving_average == pytest.approx(1.0)
    assert scored[1].risk == round((math.log10(0.5) + 0.4647) / 1.0013, 4)


def test_undefined_trend_is_neutral():
    assert calc_risk(100.0, 0.0) == 0.5
    assert calc_risk(100.0, None) == 0.5
    assert calc_risk(100.0, -5.0) == 0.5


def test_scoring_does_not_mutate_input():
    prices = _prices([100.0, 120.0, 90.0])
    snapshot = list(prices)
    score_prices(prices)
    assert prices == snapshot


def test_risk_offset_reclamps():
    scored = score_prices(_prices([100.0] * 10))
    shifted = apply_risk_offset(scored, 0.6)
    lowered = apply_risk_offset(scored, -0.6)

    assert all(point.risk == 1.0 for point in shifted)
    assert all(point.risk == 0.0 for point in lowered)
    assert scored[0].risk == 0.4641


def test_select_range_is_inclusive():
    scored = score_prices(_prices([100.0] * 10, start=date(2024, 3, 1)))
    selected = select_range(scored, date(2024, 3, 3), date(2024, 3, 5))

    assert [point.day for point in selected] == [date(2024, 3, 3), date(2024, 3, 4), date(2024, 3, 5)]
    assert len(select_range(scored, None, None)) == 10
