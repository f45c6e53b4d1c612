"""Simplified long-dated call option accounting.

Positions are struck at a fixed discount to the entry price. Value is the
intrinsic value plus whatever extrinsic value was paid at entry, decayed
linearly to zero over the term. This is an approximation, not a pricing model.
"""

from __future__ import annotations

import math
from typing import Iterable, Optional

from riskdca.simulator.models import ClosedLeap, LeapPosition

CONTRACT_SIZE = 100
DAYS_PER_MONTH = 30.44
MS_PER_MONTH = DAYS_PER_MONTH * 24 * 60 * 60 * 1000


def contracts_affordable(budget: float, price: float, cost_pct: float) -> tuple[int, float]:
    """Whole contracts ``budget`` buys, and the cost of one contract."""
    cost_per_contract = price * cost_pct * CONTRACT_SIZE
    if cost_per_contract <= 0:
        return 0, cost_per_contract
    return math.floor(budget / cost_per_contract), cost_per_contract


def open_leap(
    contracts: int,
    cost_per_contract: float,
    price: float,
    timestamp: int,
    delta: float,
    strike_pct: float,
    term_months: int,
) -> LeapPosition:
    return LeapPosition(
        entry_price=price,
        notional_shares=contracts * CONTRACT_SIZE,
        contracts=contracts,
        cost=contracts * cost_per_contract,
        delta=delta,
        entry_timestamp=timestamp,
        term_months=term_months,
        expiry_timestamp=timestamp + int(round(term_months * MS_PER_MONTH)),
        strike=price * strike_pct,
    )


def intrinsic_value(position: LeapPosition, price: float) -> float:
    return max(0.0, price - position.strike) * position.notional_shares


def mark_to_market(position: LeapPosition, price: float, timestamp: int) -> float:
    intrinsic_at_entry = intrinsic_value(position, position.entry_price)
    extrinsic_at_entry = max(0.0, position.cost - intrinsic_at_entry)
    months_held = (timestamp - position.entry_timestamp) / MS_PER_MONTH
    extrinsic_left = extrinsic_at_entry * max(0.0, 1.0 - months_held / position.term_months)
    return intrinsic_value(position, price) + extrinsic_left


def settle(position: LeapPosition, price: float) -> ClosedLeap:
    intrinsic = intrinsic_value(position, price)
    return ClosedLeap(
        position=position,
        expiry_price=price,
        intrinsic_at_expiry=intrinsic,
        pnl=intrinsic - position.cost,
    )


def open_value(positions: Iterable[LeapPosition], price: float, timestamp: int) -> float:
    return sum(mark_to_market(position, price, timestamp) for position in positions)


def expiry_value(positions: Iterable[LeapPosition], price: float) -> float:
    return sum(intrinsic_value(position, price) for position in positions)


def cost_weighted_entry(positions: Iterable[LeapPosition]) -> Optional[float]:
    total_cost = 0.0
    weighted = 0.0
    for position in positions:
        total_cost += position.cost
        weighted += position.entry_price * position.cost
    if total_cost <= 0:
        return None
    return weighted / total_cost
