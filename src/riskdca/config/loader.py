"""Load, validate and fingerprint backtest configuration files."""

from __future__ import annotations

import hashlib
import json
from dataclasses import asdict
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Any, Optional

import yaml

from riskdca.config.models import (
    BacktestConfig,
    Cadence,
    CoveredCallConfig,
    InitialPositionConfig,
    InvestMode,
    LeapConfig,
    SellConfig,
)
from riskdca.errors import ConfigError
from riskdca.logging import get_logger
from riskdca.risk.models import RISK_BANDS
from riskdca.strategy.models import SizingStrategy

logger = get_logger(__name__)

# Long-form mode names accepted in config files
_MODE_ALIASES = {"equal-amount": InvestMode.EQUAL_AMOUNT, "lump-sum": InvestMode.LUMP_SUM}


def load_config(path: str | Path) -> BacktestConfig:
    path = Path(path)
    data = _load_yaml(path)
    config = parse_config(data)
    logger.info("config_loaded", path=str(path), name=config.name, mode=config.mode.value)
    return config


def parse_config(data: dict[str, Any]) -> BacktestConfig:
    defaults = BacktestConfig()
    config = BacktestConfig(
        name=str(data.get("name", defaults.name)),
        mode=_parse_enum(InvestMode, data.get("mode", defaults.mode.value), "mode", aliases=_MODE_ALIASES),
        base_amount=_number(data, "base_amount", defaults.base_amount),
        cadence=_parse_enum(Cadence, data.get("cadence", defaults.cadence.value), "cadence"),
        anchor_day_of_month=_number(data, "anchor_day_of_month", defaults.anchor_day_of_month, cast=int),
        start_date=_optional_date(data.get("start_date"), "start_date"),
        end_date=_optional_date(data.get("end_date"), "end_date"),
        risk_band_index=_number(data, "risk_band_index", defaults.risk_band_index, cast=int),
        sizing_strategy=_parse_enum(
            SizingStrategy,
            data.get("sizing_strategy", defaults.sizing_strategy.value),
            "sizing_strategy",
        ),
        risk_offset=_number(data, "risk_offset", defaults.risk_offset),
        sell=_parse_sell(_section(data, "sell")),
        initial_position=_parse_initial_position(_section(data, "initial_position")),
        leap=_parse_leap(_section(data, "leap")),
        covered_call=_parse_covered_call(_section(data, "covered_call")),
    )
    validate_config(config)
    return config


def validate_config(config: BacktestConfig) -> None:
    _check_range("base_amount", config.base_amount, 0.0, None)
    _check_range("anchor_day_of_month", config.anchor_day_of_month, 1, 28)
    _check_range("risk_band_index", config.risk_band_index, 0, len(RISK_BANDS) - 1)
    _check_range("risk_offset", config.risk_offset, -0.20, 0.20)
    _check_range("sell.threshold_risk", config.sell.threshold_risk, 0.0, 1.0)
    _check_range("sell.fraction", config.sell.fraction, 0.0, 1.0)
    if config.sell.fraction <= 0:
        raise ConfigError(f"sell.fraction must be > 0, got {config.sell.fraction}", key="sell.fraction")
    _check_range("leap.cost_pct", config.leap.cost_pct, 0.20, 0.60)
    _check_range("leap.delta", config.leap.delta, 0.60, 0.90)
    _check_range("covered_call.monthly_premium_pct", config.covered_call.monthly_premium_pct, 0.10, 2.00)
    if config.start_date and config.end_date and config.start_date > config.end_date:
        raise ConfigError("start_date must not be after end_date", key="start_date")
    position = config.initial_position
    if position.enabled and position.purchase_date is None:
        raise ConfigError("initial_position.date is required when enabled", key="initial_position.date")


def compute_config_hash(config: BacktestConfig) -> str:
    canonical = json.dumps(serialize_config(config), sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def serialize_config(config: BacktestConfig) -> dict[str, Any]:
    return _to_plain(asdict(config))


def _to_plain(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _to_plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_plain(item) for item in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    return value


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ConfigError("Config must be a mapping")
    return data


def _require(data: dict[str, Any], key: str) -> Any:
    if key not in data:
        raise ConfigError(f"Missing required config key: {key}", key=key)
    return data[key]


def _parse_enum(enum_cls, value: Any, key: str, aliases: Optional[dict[str, Any]] = None):
    normalized = str(value).strip().lower()
    if aliases and normalized in aliases:
        return aliases[normalized]
    try:
        return enum_cls(normalized)
    except ValueError as exc:
        raise ConfigError(f"Invalid {key}: {value}", key=key) from exc


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    section = data.get(key)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(f"Config section {key} must be a mapping", key=key)
    return section


def _number(data: dict[str, Any], key: str, default: Any, cast=float, prefix: str = "") -> Any:
    value = data.get(key)
    if value is None:
        return default
    try:
        return cast(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {prefix}{key}: {value!r}", key=f"{prefix}{key}") from exc


def _optional_date(value: Any, key: str) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError as exc:
        raise ConfigError(f"Invalid {key}: {value}", key=key) from exc


def _check_range(key: str, value: float, low: Optional[float], high: Optional[float]) -> None:
    if low is not None and value < low:
        raise ConfigError(f"{key} must be >= {low}, got {value}", key=key)
    if high is not None and value > high:
        raise ConfigError(f"{key} must be <= {high}, got {value}", key=key)


def _parse_sell(data: dict[str, Any]) -> SellConfig:
    defaults = SellConfig()
    return SellConfig(
        enabled=bool(data.get("enabled", defaults.enabled)),
        threshold_risk=_number(data, "threshold_risk", defaults.threshold_risk, prefix="sell."),
        fraction=_number(data, "fraction", defaults.fraction, prefix="sell."),
    )


def _parse_initial_position(data: dict[str, Any]) -> InitialPositionConfig:
    if not data.get("enabled", False):
        return InitialPositionConfig()
    for key in ("date", "shares", "avg_price"):
        _require(data, key)
    return InitialPositionConfig(
        enabled=True,
        purchase_date=_optional_date(data["date"], "initial_position.date"),
        shares=_number(data, "shares", 0.0, prefix="initial_position."),
        avg_price=_number(data, "avg_price", 0.0, prefix="initial_position."),
    )


def _parse_leap(data: dict[str, Any]) -> LeapConfig:
    defaults = LeapConfig()
    return LeapConfig(
        enabled=bool(data.get("enabled", defaults.enabled)),
        low_risk_zone_enabled=bool(data.get("low_risk_zone_enabled", defaults.low_risk_zone_enabled)),
        cost_pct=_number(data, "cost_pct", defaults.cost_pct, prefix="leap."),
        delta=_number(data, "delta", defaults.delta, prefix="leap."),
    )


def _parse_covered_call(data: dict[str, Any]) -> CoveredCallConfig:
    defaults = CoveredCallConfig()
    return CoveredCallConfig(
        enabled=bool(data.get("enabled", defaults.enabled)),
        monthly_premium_pct=_number(
            data,
            "monthly_premium_pct",
            defaults.monthly_premium_pct,
            prefix="covered_call.",
        ),
    )
