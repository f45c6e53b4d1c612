"""Holdings tracker built on the risk score and tier sizing."""

from riskdca.holdings.aggregator import HoldingsAggregator
from riskdca.holdings.cagr import project_cagr, trailing_cagrs
from riskdca.holdings.models import (
    CagrProjection,
    Holding,
    HoldingReport,
    PlannedHolding,
    PortfolioSummary,
)

__all__ = [
    "CagrProjection",
    "Holding",
    "HoldingReport",
    "HoldingsAggregator",
    "PlannedHolding",
    "PortfolioSummary",
    "project_cagr",
    "trailing_cagrs",
]
