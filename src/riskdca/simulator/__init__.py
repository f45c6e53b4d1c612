"""Backtest simulation."""

from riskdca.simulator.cache import SimulationCache, compute_series_hash
from riskdca.simulator.engine import SimulationEngine
from riskdca.simulator.models import (
    ActionKind,
    ClosedLeap,
    EquityPoint,
    LeapPosition,
    LedgerEntry,
    RiskPoint,
    SimulationResult,
    SimulationState,
    SummaryStats,
)
from riskdca.simulator.pipeline import prepare_series, run_backtest
from riskdca.simulator.schedule import scheduled_days

__all__ = [
    "ActionKind",
    "ClosedLeap",
    "EquityPoint",
    "LeapPosition",
    "LedgerEntry",
    "RiskPoint",
    "SimulationCache",
    "SimulationEngine",
    "SimulationResult",
    "SimulationState",
    "SummaryStats",
    "compute_series_hash",
    "prepare_series",
    "run_backtest",
    "scheduled_days",
]
