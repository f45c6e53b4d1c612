from riskdca.risk import RISK_BANDS, RiskBand
from riskdca.strategy import SizingStrategy, Tier, TierStrategy, build_tiers, multiplier_for


def test_exponential_tiers_double_downward():
    band = RISK_BANDS[3]
    tiers = build_tiers(band, SizingStrategy.EXPONENTIAL)

    assert tiers == [
        Tier(0.3, 0.4, 1),
        Tier(0.2, 0.3, 2),
        Tier(0.1, 0.2, 4),
        Tier(0.0, 0.1, 8),
    ]
    assert multiplier_for(0.05, band, tiers) == 8
    assert multiplier_for(0.35, band, tiers) == 1
    assert multiplier_for(0.45, band, tiers) == 0


def test_linear_tiers_increment_downward():
    band = RISK_BANDS[4]
    tiers = build_tiers(band, SizingStrategy.LINEAR)

    assert [tier.multiplier for tier in tiers] == [1, 2, 3, 4, 5]
    assert tiers[-1].lower == 0.0
    assert multiplier_for(0.25, band, tiers) == 3


def test_lowest_band_is_single_tier():
    tiers = build_tiers(RISK_BANDS[0], SizingStrategy.EXPONENTIAL)
    assert tiers == [Tier(0.0, 0.1, 1)]


def test_zero_at_or_above_band_ceiling():
    for band in RISK_BANDS:
        tiers = build_tiers(band, SizingStrategy.LINEAR)
        assert multiplier_for(band.max, band, tiers) == 0
        assert multiplier_for(0.95, band, tiers) == 0


def test_multiplier_non_increasing_in_risk():
    for mode in SizingStrategy:
        for band in RISK_BANDS:
            strategy = TierStrategy(band, mode)
            previous = None
            for step in range(0, 100):
                risk = step / 100
                multiplier = strategy.multiplier(risk)
                if previous is not None:
                    assert multiplier <= previous
                previous = multiplier


def test_unmatched_risk_yields_zero():
    band = RiskBand("custom", 0.4, 0.5)
    assert multiplier_for(0.1, band, [Tier(0.4, 0.5, 1)]) == 0
    assert multiplier_for(0.1, band, []) == 0


def test_action_labels():
    strategy = TierStrategy(RISK_BANDS[5], SizingStrategy.LINEAR)

    assert strategy.action_label(0.95) == "Sell 10%"
    assert strategy.action_label(0.75) == "Hold"
    assert strategy.action_label(0.55) == "Buy 1x"
    assert strategy.action_label(0.41) == "Buy 2x"
