"""Memoised backtest results keyed by input fingerprints."""

from __future__ import annotations

import hashlib
from collections import OrderedDict
from typing import Callable, Sequence

from riskdca.config.loader import compute_config_hash
from riskdca.config.models import BacktestConfig
from riskdca.logging import get_logger
from riskdca.risk.models import PricePoint
from riskdca.simulator.models import SimulationResult

logger = get_logger(__name__)


def compute_series_hash(prices: Sequence[PricePoint]) -> str:
    digest = hashlib.sha256()
    for point in prices:
        digest.update(f"{point.timestamp}:{point.price!r};".encode("ascii"))
    return digest.hexdigest()


class SimulationCache:
    """LRU cache of results; a changed series or config yields a new key."""

    def __init__(self, max_entries: int = 32) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self.max_entries = max_entries
        self._entries: OrderedDict[str, SimulationResult] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    @staticmethod
    def key_for(prices: Sequence[PricePoint], config: BacktestConfig) -> str:
        return f"{compute_series_hash(prices)}:{compute_config_hash(config)}"

    def get_or_compute(
        self,
        prices: Sequence[PricePoint],
        config: BacktestConfig,
        compute: Callable[[Sequence[PricePoint], BacktestConfig], SimulationResult],
    ) -> SimulationResult:
        key = self.key_for(prices, config)
        cached = self._entries.get(key)
        if cached is not None:
            self._entries.move_to_end(key)
            self.hits += 1
            logger.debug("simulation_cache_hit", key=key[:16])
            return cached

        self.misses += 1
        logger.debug("simulation_cache_miss", key=key[:16])
        result = compute(prices, config)
        self._entries[key] = result
        if len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)
        return result

    def clear(self) -> None:
        self._entries.clear()
