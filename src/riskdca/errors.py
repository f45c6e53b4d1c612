"""Exception types raised at the edges of the package.

The simulation core never raises for data-quality problems; these are used by
the configuration and price-file loaders only.
"""

from __future__ import annotations

from typing import Any, Optional


class RiskDcaError(Exception):
    """Base class carrying optional structured context for logging."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.context = context or {}


class ConfigError(RiskDcaError, ValueError):
    """Configuration is missing a key or holds an out-of-range value."""

    def __init__(self, message: str, key: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.key = key


class PriceDataError(RiskDcaError):
    """A price file could not be read into a usable series."""

    def __init__(self, message: str, path: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.path = path
