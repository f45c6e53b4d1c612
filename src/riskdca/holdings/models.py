"""Holdings tracker models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from riskdca.risk.models import AssetClass


@dataclass(frozen=True)
class Holding:
    ticker: str
    shares: float
    entry_price: float
    asset_class: AssetClass = AssetClass.STOCK

    @property
    def cost_basis(self) -> float:
        return self.shares * self.entry_price


@dataclass(frozen=True)
class PlannedHolding(Holding):
    """A position the user intends to open; reported but not weighted."""


@dataclass(frozen=True)
class CagrProjection:
    historical: dict[int, float]
    five_year: float
    ten_year: float
    twenty_year: float
    thirty_year: float


@dataclass(frozen=True)
class HoldingReport:
    ticker: str
    shares: float
    entry_price: float
    current_price: float
    risk: float
    action: str
    market_value: float
    cost_basis: float
    gain: float
    gain_pct: float
    weight_pct: float
    planned: bool
    projection: Optional[CagrProjection]


@dataclass(frozen=True)
class PortfolioSummary:
    holdings: list[HoldingReport]
    planned: list[HoldingReport]
    total_market_value: float
    total_cost_basis: float
    total_gain: float
    total_gain_pct: float
