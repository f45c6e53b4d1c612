"""Holdings tracker: live value, risk-based action and forward CAGR per ticker."""

from __future__ import annotations

from typing import Mapping, Optional, Sequence

from riskdca.holdings.cagr import project_cagr
from riskdca.holdings.models import Holding, HoldingReport, PlannedHolding, PortfolioSummary
from riskdca.logging import get_logger
from riskdca.risk.metric import RISK_DECIMALS, clamp01, score_prices
from riskdca.risk.models import PricePoint, band_for_index, default_band_index, default_risk_offset
from riskdca.strategy.models import SizingStrategy
from riskdca.strategy.tiers import TierStrategy

logger = get_logger(__name__)


class HoldingsAggregator:
    def __init__(
        self,
        sizing_strategy: SizingStrategy = SizingStrategy.LINEAR,
        band_overrides: Optional[Mapping[str, int]] = None,
    ) -> None:
        self.sizing_strategy = sizing_strategy
        self.band_overrides = dict(band_overrides or {})

    def current_risk(self, holding: Holding, history: Sequence[PricePoint]) -> float:
        if not history:
            return 0.5
        scored = score_prices(history)
        offset = default_risk_offset(holding.asset_class)
        return round(clamp01(scored[-1].risk + offset), RISK_DECIMALS)

    def strategy_for(self, holding: Holding) -> TierStrategy:
        band_index = self.band_overrides.get(holding.ticker, default_band_index(holding.asset_class))
        return TierStrategy(band_for_index(band_index), self.sizing_strategy)

    def aggregate(
        self,
        holdings: Sequence[Holding],
        histories: Mapping[str, Sequence[PricePoint]],
        planned: Sequence[PlannedHolding] = (),
    ) -> PortfolioSummary:
        held_prices = [self._current_price(holding, histories) for holding in holdings]
        total_value = sum(holding.shares * price for holding, price in zip(holdings, held_prices))

        held_reports = [
            self._report(holding, histories, price, total_value, planned=False)
            for holding, price in zip(holdings, held_prices)
        ]
        planned_reports = [
            self._report(holding, histories, self._current_price(holding, histories), 0.0, planned=True)
            for holding in planned
        ]

        total_cost = sum(report.cost_basis for report in held_reports)
        total_gain = total_value - total_cost
        total_gain_pct = total_gain / total_cost * 100 if total_cost > 0 else 0.0
        logger.info(
            "holdings_aggregated",
            holdings=len(held_reports),
            planned=len(planned_reports),
            market_value=round(total_value, 2),
        )
        return PortfolioSummary(
            holdings=held_reports,
            planned=planned_reports,
            total_market_value=total_value,
            total_cost_basis=total_cost,
            total_gain=total_gain,
            total_gain_pct=total_gain_pct,
        )

    def _current_price(self, holding: Holding, histories: Mapping[str, Sequence[PricePoint]]) -> float:
        history = histories.get(holding.ticker) or ()
        if not history:
            logger.warning("holding_without_prices", ticker=holding.ticker)
            return 0.0
        return history[-1].price

    def _report(
        self,
        holding: Holding,
        histories: Mapping[str, Sequence[PricePoint]],
        price: float,
        total_value: float,
        planned: bool,
    ) -> HoldingReport:
        history = histories.get(holding.ticker) or ()
        risk = self.current_risk(holding, history)
        market_value = holding.shares * price
        cost_basis = holding.cost_basis
        gain = market_value - cost_basis
        return HoldingReport(
            ticker=holding.ticker,
            shares=holding.shares,
            entry_price=holding.entry_price,
            current_price=price,
            risk=risk,
            action=self.strategy_for(holding).action_label(risk),
            market_value=market_value,
            cost_basis=cost_basis,
            gain=gain,
            gain_pct=gain / cost_basis * 100 if cost_basis > 0 else 0.0,
            weight_pct=market_value / total_value * 100 if total_value > 0 and not planned else 0.0,
            planned=planned,
            projection=project_cagr(history),
        )
