"""Risk scoring for daily price series."""

from riskdca.risk.metric import (
    MA_WINDOW,
    apply_risk_offset,
    calc_risk,
    clamp01,
    score_prices,
    select_range,
)
from riskdca.risk.models import (
    RISK_BANDS,
    AssetClass,
    PricePoint,
    RiskBand,
    ScoredPricePoint,
    band_for_index,
    day_for,
    default_band_index,
    default_risk_offset,
    timestamp_for,
)

__all__ = [
    "MA_WINDOW",
    "RISK_BANDS",
    "AssetClass",
    "PricePoint",
    "RiskBand",
    "ScoredPricePoint",
    "apply_risk_offset",
    "band_for_index",
    "calc_risk",
    "clamp01",
    "day_for",
    "default_band_index",
    "default_risk_offset",
    "score_prices",
    "select_range",
    "timestamp_for",
]
