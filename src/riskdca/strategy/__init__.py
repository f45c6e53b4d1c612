"""Tiered sizing strategies."""

from riskdca.strategy.models import SizingStrategy, Tier
from riskdca.strategy.tiers import TierStrategy, build_tiers, multiplier_for

__all__ = [
    "SizingStrategy",
    "Tier",
    "TierStrategy",
    "build_tiers",
    "multiplier_for",
]
