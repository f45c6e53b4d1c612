"""Configuration models for reproducible backtests."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from riskdca.risk.models import RiskBand, band_for_index
from riskdca.strategy.models import SizingStrategy


class InvestMode(str, Enum):
    EQUAL_AMOUNT = "equal"
    LUMP_SUM = "lump"
    TIERED = "tiered"


class Cadence(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


@dataclass(frozen=True)
class SellConfig:
    enabled: bool = False
    threshold_risk: float = 0.90
    fraction: float = 0.10


@dataclass(frozen=True)
class InitialPositionConfig:
    enabled: bool = False
    purchase_date: Optional[date] = None
    shares: float = 0.0
    avg_price: float = 0.0

    def is_active(self) -> bool:
        return self.enabled and self.purchase_date is not None and self.shares > 0 and self.avg_price > 0

    @property
    def cost(self) -> float:
        return self.shares * self.avg_price


@dataclass(frozen=True)
class LeapConfig:
    enabled: bool = False
    low_risk_zone_enabled: bool = True
    cost_pct: float = 0.35
    delta: float = 0.75
    zone_max_risk: float = 0.10
    strike_pct: float = 0.92
    term_months: int = 18


@dataclass(frozen=True)
class CoveredCallConfig:
    enabled: bool = False
    monthly_premium_pct: float = 0.5
    threshold_risk: float = 0.90


@dataclass(frozen=True)
class BacktestConfig:
    mode: InvestMode = InvestMode.TIERED
    base_amount: float = 1000.0
    cadence: Cadence = Cadence.MONTHLY
    anchor_day_of_month: int = 13
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    risk_band_index: int = 5
    sizing_strategy: SizingStrategy = SizingStrategy.LINEAR
    risk_offset: float = -0.05
    sell: SellConfig = SellConfig()
    initial_position: InitialPositionConfig = InitialPositionConfig()
    leap: LeapConfig = LeapConfig()
    covered_call: CoveredCallConfig = CoveredCallConfig()
    name: str = "backtest"

    @property
    def risk_band(self) -> RiskBand:
        return band_for_index(self.risk_band_index)
