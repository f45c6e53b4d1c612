"""Simulation data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional


class ActionKind(str, Enum):
    INITIAL = "initial"
    BUY = "buy"
    LUMP_SUM = "lump_sum"
    LEAP_OPEN = "leap_open"
    LEAP_EXPIRED = "leap_expired"
    SELL = "sell"
    COVERED_CALL = "covered_call"
    NONE = "none"


@dataclass(frozen=True)
class LeapPosition:
    entry_price: float
    notional_shares: int
    contracts: int
    cost: float
    delta: float
    entry_timestamp: int
    term_months: int
    expiry_timestamp: int
    strike: float


@dataclass(frozen=True)
class ClosedLeap:
    position: LeapPosition
    expiry_price: float
    intrinsic_at_expiry: float
    pnl: float


@dataclass(frozen=True)
class LedgerEntry:
    day: date
    action: ActionKind
    label: str
    risk: Optional[float]
    price: float
    shares_held: float
    invested: float
    portfolio_value: float
    purchase_amount: Optional[float] = None
    sell_proceeds: Optional[float] = None
    premium_income: Optional[float] = None
    covered_call_shares: Optional[float] = None
    leap_contracts: Optional[int] = None
    leap_notional: Optional[int] = None
    leap_pnl: Optional[float] = None


@dataclass(frozen=True)
class EquityPoint:
    day: date
    price: float
    portfolio_value: float
    invested: float
    lump_sum_baseline: float


@dataclass(frozen=True)
class RiskPoint:
    day: date
    risk: float


@dataclass
class SimulationState:
    """Running totals for one simulation run; never reused across runs."""

    total_invested: float = 0.0
    total_shares_held: float = 0.0
    total_shares_held_ignoring_sells: float = 0.0
    realized_sell_proceeds: float = 0.0
    realized_sell_cost_basis: float = 0.0
    total_shares_sold: float = 0.0
    realized_leap_pnl: float = 0.0
    total_leap_invested: float = 0.0
    total_premium_income: float = 0.0
    buy_count: int = 0
    sell_count: int = 0
    leap_count: int = 0
    covered_call_count: int = 0
    initial_injected: bool = False
    open_leaps: list[LeapPosition] = field(default_factory=list)
    closed_leaps: list[ClosedLeap] = field(default_factory=list)

    def average_cost(self) -> float:
        if self.total_shares_held <= 0:
            return 0.0
        return self.total_invested / self.total_shares_held

    def buy_shares(self, amount: float, price: float) -> None:
        shares = amount / price
        self.total_invested += amount
        self.total_shares_held += shares
        self.total_shares_held_ignoring_sells += shares


@dataclass(frozen=True)
class SummaryStats:
    total_invested: float
    total_shares_held: float
    average_cost: float
    last_price: float
    current_portfolio_value: float
    unrealized_gain: float
    unrealized_gain_pct: float
    total_periods: int
    total_months: int
    buy_count: int
    sell_count: int
    total_sell_proceeds: float
    total_shares_sold: float
    total_sell_cost_basis: float
    leap_count: int
    total_leap_invested: float
    open_leap_count: int
    closed_leap_count: int
    leap_realized_pnl: float
    leap_portfolio_value: float
    leap_expiry_value: float
    average_leap_entry: float
    covered_call_count: int
    total_premium_income: float
    sell_pnl: float
    sell_pnl_pct: float
    no_sell_portfolio_value: float


@dataclass(frozen=True)
class SimulationResult:
    """Immutable run output; safe to share between cache hits."""

    ledger: tuple[LedgerEntry, ...]
    equity_curve: tuple[EquityPoint, ...]
    risk_series: tuple[RiskPoint, ...]
    stats: Optional[SummaryStats]

    @classmethod
    def empty(cls) -> "SimulationResult":
        return cls(ledger=(), equity_curve=(), risk_series=(), stats=None)
