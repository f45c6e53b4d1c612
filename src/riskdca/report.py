"""JSON-ready backtest reports."""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any, Optional

from riskdca.config.loader import compute_config_hash, serialize_config
from riskdca.config.models import BacktestConfig
from riskdca.simulator.models import LedgerEntry, SimulationResult


def _serialize_entry(entry: LedgerEntry) -> dict[str, Any]:
    payload = asdict(entry)
    payload["day"] = entry.day.isoformat()
    payload["action"] = entry.action.value
    return payload


def build_report(
    result: SimulationResult,
    config: BacktestConfig,
    source: Optional[str] = None,
) -> dict[str, Any]:
    return {
        "generated_at_utc": datetime.now(timezone.utc).isoformat(),
        "source": source,
        "config": serialize_config(config),
        "config_hash": compute_config_hash(config),
        "summary": asdict(result.stats) if result.stats is not None else None,
        "ledger": [_serialize_entry(entry) for entry in result.ledger],
        "equity_curve": [
            {
                "day": point.day.isoformat(),
                "price": point.price,
                "portfolio_value": point.portfolio_value,
                "invested": point.invested,
                "lump_sum_baseline": point.lump_sum_baseline,
            }
            for point in result.equity_curve
        ],
        "risk_series": [{"day": point.day.isoformat(), "risk": point.risk} for point in result.risk_series],
    }
