"""Config loading and fingerprinting."""

from riskdca.config.loader import (
    compute_config_hash,
    load_config,
    parse_config,
    serialize_config,
    validate_config,
)
from riskdca.config.models import (
    BacktestConfig,
    Cadence,
    CoveredCallConfig,
    InitialPositionConfig,
    InvestMode,
    LeapConfig,
    SellConfig,
)

__all__ = [
    "BacktestConfig",
    "Cadence",
    "CoveredCallConfig",
    "InitialPositionConfig",
    "InvestMode",
    "LeapConfig",
    "SellConfig",
    "compute_config_hash",
    "load_config",
    "parse_config",
    "serialize_config",
    "validate_config",
]
