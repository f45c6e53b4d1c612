"""Tier sizing models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SizingStrategy(str, Enum):
    LINEAR = "linear"
    EXPONENTIAL = "exponential"

    def next_multiplier(self, multiplier: int) -> int:
        if self == SizingStrategy.EXPONENTIAL:
            return multiplier * 2
        return multiplier + 1


@dataclass(frozen=True)
class Tier:
    lower: float
    upper: float
    multiplier: int

    def contains(self, risk: float) -> bool:
        return self.lower <= risk < self.upper
