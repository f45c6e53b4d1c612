"""Price series and risk band models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum


def day_for(timestamp: int) -> date:
    """UTC calendar date of an epoch-millisecond timestamp."""
    return datetime.fromtimestamp(timestamp / 1000, tz=timezone.utc).date()


def timestamp_for(day: date) -> int:
    """Epoch milliseconds of UTC midnight on ``day``."""
    midnight = datetime(day.year, day.month, day.day, tzinfo=timezone.utc)
    return int(midnight.timestamp() * 1000)


class AssetClass(str, Enum):
    CRYPTO = "crypto"
    STOCK = "stock"
    ETF = "etf"


@dataclass(frozen=True)
class PricePoint:
    timestamp: int
    price: float

    @property
    def day(self) -> date:
        return day_for(self.timestamp)


@dataclass(frozen=True)
class ScoredPricePoint:
    timestamp: int
    price: float
    moving_average: float
    risk: float

    @property
    def day(self) -> date:
        return day_for(self.timestamp)


@dataclass(frozen=True)
class RiskBand:
    label: str
    min: float
    max: float


RISK_BANDS: tuple[RiskBand, ...] = (
    RiskBand("0.0 - 0.099", 0.0, 0.1),
    RiskBand("0.1 - 0.199", 0.1, 0.2),
    RiskBand("0.2 - 0.299", 0.2, 0.3),
    RiskBand("0.3 - 0.399", 0.3, 0.4),
    RiskBand("0.4 - 0.499", 0.4, 0.5),
    RiskBand("0.5 - 0.599", 0.5, 0.6),
    RiskBand("0.6 - 0.699", 0.6, 0.7),
)


def band_for_index(index: int) -> RiskBand:
    if not 0 <= index < len(RISK_BANDS):
        raise IndexError(f"Risk band index out of range: {index}")
    return RISK_BANDS[index]


def default_risk_offset(asset_class: AssetClass) -> float:
    if asset_class == AssetClass.CRYPTO:
        return -0.02
    return -0.05


def default_band_index(asset_class: AssetClass) -> int:
    if asset_class == AssetClass.CRYPTO:
        return 4
    return 5
