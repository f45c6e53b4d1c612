"""Risk-tiered purchase multipliers.

The selected band is the top tier at 1x. Each 0.1-wide step below it buys more
(+1x per step for linear, x2 per step for exponential); at or above the band's
ceiling nothing is bought.
"""

from __future__ import annotations

from typing import Sequence

from riskdca.risk.models import RiskBand
from riskdca.strategy.models import SizingStrategy, Tier

TIER_STEP = 0.1
_BOUND_DECIMALS = 3


def build_tiers(band: RiskBand, mode: SizingStrategy) -> list[Tier]:
    top = round(band.max, _BOUND_DECIMALS)
    bottom = round(band.min, _BOUND_DECIMALS)
    multiplier = 1
    tiers = [Tier(lower=bottom, upper=top, multiplier=multiplier)]
    while bottom > 0.001:
        new_bottom = round(max(0.0, bottom - TIER_STEP), _BOUND_DECIMALS)
        multiplier = mode.next_multiplier(multiplier)
        tiers.append(Tier(lower=new_bottom, upper=bottom, multiplier=multiplier))
        bottom = new_bottom
    return tiers


def multiplier_for(risk: float, band: RiskBand, tiers: Sequence[Tier]) -> int:
    if risk >= band.max:
        return 0
    for tier in tiers:
        if tier.contains(risk):
            return tier.multiplier
    return 0


class TierStrategy:
    def __init__(self, band: RiskBand, mode: SizingStrategy) -> None:
        self.band = band
        self.mode = mode
        self.tiers = build_tiers(band, mode)

    def multiplier(self, risk: float) -> int:
        return multiplier_for(risk, self.band, self.tiers)

    def action_label(self, risk: float, sell_threshold: float = 0.90) -> str:
        if risk >= sell_threshold:
            return "Sell 10%"
        multiplier = self.multiplier(risk)
        if risk >= self.band.max or multiplier == 0:
            return "Hold"
        return f"Buy {multiplier}x"
