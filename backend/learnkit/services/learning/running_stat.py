"""
Incremental scalar statistics.

Welford's algorithm keeps count, mean and the sum of squared deviations, so
no history is replayed and the mean stays stable for long streams.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict

from .errors import require_finite


@dataclass
class RunningStat:
    count: int = 0
    mean: float = 0.0
    m2: float = 0.0  # sum of squared deviations from the mean

    def update(self, value: float) -> None:
        """Add one observation. Non-finite input raises InvalidValue and changes nothing."""
        value = require_finite(value)
        n = self.count + 1
        delta = value - self.mean
        mean = self.mean + delta / n
        self.m2 += delta * (value - mean)
        self.mean = mean
        self.count = n

    @property
    def variance(self) -> float:
        """Population variance, 0.0 until two values have been seen."""
        if self.count < 2:
            return 0.0
        return self.m2 / self.count

    @property
    def std(self) -> float:
        return math.sqrt(self.variance)

    def snapshot(self) -> Dict[str, float]:
        return {"count": self.count, "mean": self.mean, "variance": self.variance}
