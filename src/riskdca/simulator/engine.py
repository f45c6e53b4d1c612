"""Day-by-day dollar-cost-averaging simulation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence

from riskdca.config.models import BacktestConfig, InvestMode
from riskdca.logging import get_logger
from riskdca.risk.models import ScoredPricePoint
from riskdca.simulator import leaps
from riskdca.simulator.models import (
    ActionKind,
    EquityPoint,
    LeapPosition,
    LedgerEntry,
    RiskPoint,
    SimulationResult,
    SimulationState,
    SummaryStats,
)
from riskdca.strategy.tiers import TierStrategy

logger = get_logger(__name__)

SAMPLE_EVERY_DAYS = 3
DAYS_PER_PERIOD = 30
COVERED_CALL_LOT = 100


@dataclass
class _DayActivity:
    purchase: float = 0.0
    multiplier: int = 0
    leap: Optional[LeapPosition] = None
    shares_sold: float = 0.0
    sell_proceeds: float = 0.0
    premium_income: float = 0.0
    covered_call_shares: float = 0.0

    @property
    def is_sell_day(self) -> bool:
        return self.shares_sold > 0

    @property
    def is_covered_call_day(self) -> bool:
        return self.premium_income > 0


class SimulationEngine:
    def __init__(self, config: BacktestConfig) -> None:
        self.config = config
        self.tiers = TierStrategy(config.risk_band, config.sizing_strategy)

    def lump_sum_amount(self, days: int) -> float:
        if self.config.mode == InvestMode.LUMP_SUM:
            return self.config.base_amount
        return self.config.base_amount * max(days / DAYS_PER_PERIOD, 1.0)

    def run(self, series: Sequence[ScoredPricePoint], scheduled: frozenset[int]) -> SimulationResult:
        """Simulate one pass over ``series``, buying on the ``scheduled`` indices.

        A ledger entry is written on scheduled, sell, covered-call and final days,
        and also on day 0 in lump-sum mode even when day 0 is not scheduled.
        """
        if not series:
            logger.info("simulation_skipped", reason="empty_series")
            return SimulationResult.empty()

        state = SimulationState()
        ledger: list[LedgerEntry] = []
        equity_curve: list[EquityPoint] = []
        risk_series: list[RiskPoint] = []

        lump_amount = self.lump_sum_amount(len(series))
        lump_shares = lump_amount / series[0].price

        initial = self.config.initial_position
        if initial.is_active() and initial.purchase_date < series[0].day:
            self._inject_initial(state, ledger, series[0], in_range=False)

        last_index = len(series) - 1
        for index, point in enumerate(series):
            is_last = index == last_index
            is_scheduled = index in scheduled

            if initial.is_active() and not state.initial_injected and point.day >= initial.purchase_date:
                self._inject_initial(state, ledger, point, in_range=True)

            self._settle_expired(state, ledger, point)

            activity = _DayActivity()
            self._size_purchase(state, activity, index, point, is_scheduled, is_last, lump_amount)
            self._substitute_leap(state, activity, point, is_scheduled, is_last)
            self._apply_sell(state, activity, point, is_scheduled, is_last)
            self._apply_covered_call(state, activity, point, is_scheduled, is_last)
            self._commit_purchase(state, activity, point)

            lump_day = self.config.mode == InvestMode.LUMP_SUM and index == 0
            if is_scheduled or is_last or lump_day or activity.is_sell_day or activity.is_covered_call_day:
                ledger.append(self._ledger_entry(state, activity, point, is_last))

            if index % SAMPLE_EVERY_DAYS == 0 or is_last:
                equity_curve.append(self._equity_point(state, point, lump_shares))
            risk_series.append(RiskPoint(day=point.day, risk=point.risk))

        stats = self._summarize(state, series, scheduled)
        logger.info(
            "simulation_complete",
            days=len(series),
            ledger_entries=len(ledger),
            total_invested=round(stats.total_invested, 2),
            portfolio_value=round(stats.current_portfolio_value, 2),
            open_leaps=stats.open_leap_count,
        )
        return SimulationResult(
            ledger=tuple(ledger),
            equity_curve=tuple(equity_curve),
            risk_series=tuple(risk_series),
            stats=stats,
        )

    def _inject_initial(
        self,
        state: SimulationState,
        ledger: list[LedgerEntry],
        point: ScoredPricePoint,
        in_range: bool,
    ) -> None:
        initial = self.config.initial_position
        state.initial_injected = True
        state.total_shares_held += initial.shares
        state.total_shares_held_ignoring_sells += initial.shares
        state.total_invested += initial.cost
        ledger.append(
            LedgerEntry(
                day=initial.purchase_date,
                action=ActionKind.INITIAL,
                label="Initial Position",
                risk=point.risk if in_range else None,
                price=initial.avg_price,
                purchase_amount=initial.cost,
                shares_held=state.total_shares_held,
                invested=state.total_invested,
                portfolio_value=state.total_shares_held * point.price,
            )
        )

    def _settle_expired(self, state: SimulationState, ledger: list[LedgerEntry], point: ScoredPricePoint) -> None:
        still_open: list[LeapPosition] = []
        for position in state.open_leaps:
            if point.timestamp < position.expiry_timestamp:
                still_open.append(position)
                continue
            closed = leaps.settle(position, point.price)
            state.closed_leaps.append(closed)
            state.realized_leap_pnl += closed.pnl
            logger.debug(
                "leap_settled",
                day=point.day.isoformat(),
                contracts=position.contracts,
                strike=round(position.strike, 4),
                pnl=round(closed.pnl, 2),
            )
            ledger.append(
                LedgerEntry(
                    day=point.day,
                    action=ActionKind.LEAP_EXPIRED,
                    label="LEAP Expired (gain)" if closed.pnl >= 0 else "LEAP Expired (loss)",
                    risk=point.risk,
                    price=point.price,
                    sell_proceeds=closed.intrinsic_at_expiry if closed.intrinsic_at_expiry > 0 else None,
                    leap_contracts=position.contracts,
                    leap_notional=position.notional_shares,
                    leap_pnl=closed.pnl,
                    shares_held=state.total_shares_held,
                    invested=state.total_invested,
                    portfolio_value=state.total_shares_held * point.price,
                )
            )
        state.open_leaps = still_open

    def _size_purchase(
        self,
        state: SimulationState,
        activity: _DayActivity,
        index: int,
        point: ScoredPricePoint,
        is_scheduled: bool,
        is_last: bool,
        lump_amount: float,
    ) -> None:
        mode = self.config.mode
        if mode == InvestMode.LUMP_SUM:
            if index == 0:
                activity.purchase = lump_amount
        elif is_scheduled and not is_last:
            if mode == InvestMode.EQUAL_AMOUNT:
                activity.multiplier = 1
            else:
                activity.multiplier = self.tiers.multiplier(point.risk)
            activity.purchase = self.config.base_amount * activity.multiplier
        if activity.purchase > 0:
            state.buy_count += 1

    def _substitute_leap(
        self,
        state: SimulationState,
        activity: _DayActivity,
        point: ScoredPricePoint,
        is_scheduled: bool,
        is_last: bool,
    ) -> None:
        leap = self.config.leap
        if not (leap.enabled and leap.low_risk_zone_enabled and is_scheduled and not is_last):
            return
        if activity.purchase <= 0 or point.risk >= leap.zone_max_risk:
            return

        contracts, cost_per_contract = leaps.contracts_affordable(activity.purchase, point.price, leap.cost_pct)
        if contracts == 0:
            return

        position = leaps.open_leap(
            contracts=contracts,
            cost_per_contract=cost_per_contract,
            price=point.price,
            timestamp=point.timestamp,
            delta=leap.delta,
            strike_pct=leap.strike_pct,
            term_months=leap.term_months,
        )
        state.open_leaps.append(position)
        state.total_leap_invested += position.cost
        state.total_invested += position.cost
        state.leap_count += 1
        logger.debug(
            "leap_opened",
            day=point.day.isoformat(),
            contracts=contracts,
            cost=round(position.cost, 2),
            strike=round(position.strike, 4),
        )

        leftover = activity.purchase - position.cost
        if leftover > 0:
            state.buy_shares(leftover, point.price)
            state.buy_count += 1
        activity.leap = position
        activity.purchase = 0.0

    def _apply_sell(
        self,
        state: SimulationState,
        activity: _DayActivity,
        point: ScoredPricePoint,
        is_scheduled: bool,
        is_last: bool,
    ) -> None:
        sell = self.config.sell
        if not (sell.enabled and is_scheduled and not is_last):
            return
        if state.total_shares_held <= 0 or point.risk < sell.threshold_risk:
            return

        shares_sold = min(state.total_shares_held, state.total_shares_held * sell.fraction)
        cost_basis = shares_sold * state.average_cost()
        proceeds = shares_sold * point.price

        state.total_shares_held = max(0.0, state.total_shares_held - shares_sold)
        state.total_invested = max(0.0, state.total_invested - cost_basis)
        state.realized_sell_cost_basis += cost_basis
        state.realized_sell_proceeds += proceeds
        state.total_shares_sold += shares_sold
        state.sell_count += 1

        activity.shares_sold = shares_sold
        activity.sell_proceeds = proceeds

    def _apply_covered_call(
        self,
        state: SimulationState,
        activity: _DayActivity,
        point: ScoredPricePoint,
        is_scheduled: bool,
        is_last: bool,
    ) -> None:
        covered_call = self.config.covered_call
        if not (covered_call.enabled and is_scheduled and not is_last):
            return
        if state.total_shares_held <= 0 or point.risk < covered_call.threshold_risk:
            return

        # whole contracts against at most half the position
        lots = math.floor(state.total_shares_held / 2 / COVERED_CALL_LOT) * COVERED_CALL_LOT
        if lots < COVERED_CALL_LOT:
            return
        premium = lots * point.price * (covered_call.monthly_premium_pct / 100)
        state.total_premium_income += premium
        state.covered_call_count += 1
        activity.covered_call_shares = lots
        activity.premium_income = premium

    def _commit_purchase(self, state: SimulationState, activity: _DayActivity, point: ScoredPricePoint) -> None:
        if activity.purchase <= 0:
            return
        shares = activity.purchase / point.price
        # A buy that lands on a sell day is sized but not committed.
        if not activity.is_sell_day:
            state.total_invested += activity.purchase
            state.total_shares_held += shares
        state.total_shares_held_ignoring_sells += shares

    def _ledger_entry(
        self,
        state: SimulationState,
        activity: _DayActivity,
        point: ScoredPricePoint,
        is_last: bool,
    ) -> LedgerEntry:
        action, label = self._classify(activity, is_last)
        if activity.leap is not None:
            purchase_amount: Optional[float] = activity.leap.cost
        else:
            purchase_amount = activity.purchase if activity.purchase > 0 else None
        return LedgerEntry(
            day=point.day,
            action=action,
            label=label,
            risk=point.risk,
            price=point.price,
            purchase_amount=purchase_amount,
            sell_proceeds=activity.sell_proceeds if activity.is_sell_day else None,
            premium_income=activity.premium_income if activity.is_covered_call_day else None,
            covered_call_shares=activity.covered_call_shares if activity.is_covered_call_day else None,
            leap_contracts=activity.leap.contracts if activity.leap else None,
            leap_notional=activity.leap.notional_shares if activity.leap else None,
            shares_held=state.total_shares_held,
            invested=state.total_invested,
            portfolio_value=state.total_shares_held * point.price,
        )

    def _classify(self, activity: _DayActivity, is_last: bool) -> tuple[ActionKind, str]:
        if activity.is_covered_call_day and not activity.is_sell_day:
            return ActionKind.COVERED_CALL, "Covered Call"
        if activity.is_sell_day:
            return ActionKind.SELL, f"Sell {self.config.sell.fraction * 100:.0f}%"
        if activity.leap is not None:
            return ActionKind.LEAP_OPEN, f"LEAP {activity.leap.delta:.2f} delta"
        if activity.purchase > 0 and (not is_last or self.config.mode == InvestMode.LUMP_SUM):
            if self.config.mode == InvestMode.LUMP_SUM:
                return ActionKind.LUMP_SUM, "Lump Sum"
            return ActionKind.BUY, f"Buy {activity.multiplier}x"
        return ActionKind.NONE, "None"

    def _equity_point(self, state: SimulationState, point: ScoredPricePoint, lump_shares: float) -> EquityPoint:
        leap_value = leaps.open_value(state.open_leaps, point.price, point.timestamp)
        leap_value += max(0.0, state.realized_leap_pnl)
        return EquityPoint(
            day=point.day,
            price=point.price,
            portfolio_value=state.total_shares_held * point.price + leap_value,
            invested=state.total_invested,
            lump_sum_baseline=lump_shares * point.price,
        )

    def _summarize(
        self,
        state: SimulationState,
        series: Sequence[ScoredPricePoint],
        scheduled: frozenset[int],
    ) -> SummaryStats:
        last = series[-1]
        current_value = state.total_shares_held * last.price
        invested = state.total_invested
        gain = current_value - invested
        gain_pct = (current_value / invested - 1) * 100 if invested > 0 else 0.0

        contributed = invested + state.realized_sell_cost_basis
        realized_and_held = current_value + state.realized_sell_proceeds
        sell_pnl_pct = (realized_and_held / contributed - 1) * 100 if contributed > 0 else 0.0

        every_leap = list(state.open_leaps) + [closed.position for closed in state.closed_leaps]
        average_leap_entry = leaps.cost_weighted_entry(every_leap) or 0.0

        return SummaryStats(
            total_invested=invested,
            total_shares_held=state.total_shares_held,
            average_cost=state.average_cost(),
            last_price=last.price,
            current_portfolio_value=current_value,
            unrealized_gain=gain,
            unrealized_gain_pct=gain_pct,
            total_periods=sum(1 for index in scheduled if 0 <= index < len(series)),
            total_months=round(len(series) / DAYS_PER_PERIOD),
            buy_count=state.buy_count,
            sell_count=state.sell_count,
            total_sell_proceeds=state.realized_sell_proceeds,
            total_shares_sold=state.total_shares_sold,
            total_sell_cost_basis=state.realized_sell_cost_basis,
            leap_count=state.leap_count,
            total_leap_invested=state.total_leap_invested,
            open_leap_count=len(state.open_leaps),
            closed_leap_count=len(state.closed_leaps),
            leap_realized_pnl=state.realized_leap_pnl,
            leap_portfolio_value=leaps.open_value(state.open_leaps, last.price, last.timestamp)
            + state.realized_leap_pnl,
            leap_expiry_value=leaps.expiry_value(state.open_leaps, last.price),
            average_leap_entry=average_leap_entry,
            covered_call_count=state.covered_call_count,
            total_premium_income=state.total_premium_income,
            sell_pnl=realized_and_held - contributed,
            sell_pnl_pct=sell_pnl_pct,
            no_sell_portfolio_value=state.total_shares_held_ignoring_sells * last.price,
        )
