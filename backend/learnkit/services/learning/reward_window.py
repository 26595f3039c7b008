"""
Rolling reward helpers.

RewardWindow keeps the last N rewards for recent-performance summaries.
RewardNormalizer rescales raw rewards into (0, 1) with a rolling z-score
passed through a sigmoid, so arms see comparable values whatever the units.
"""
from __future__ import annotations

import math
from collections import deque
from typing import Deque, Dict, List

from .errors import InvalidConfig


class RewardWindow:
    """Fixed-size FIFO of recent rewards."""

    def __init__(self, window: int = 50):
        if isinstance(window, bool) or not isinstance(window, int) or window <= 0:
            raise InvalidConfig(f"reward window must be a positive integer, got {window!r}")
        self.window = window
        self._values: Deque[float] = deque(maxlen=window)

    def update(self, reward: float) -> None:
        self._values.append(reward)

    @property
    def count(self) -> int:
        return len(self._values)

    @property
    def mean(self) -> float:
        if not self._values:
            return 0.0
        return sum(self._values) / len(self._values)

    @property
    def min(self) -> float:
        return min(self._values) if self._values else 0.0

    @property
    def max(self) -> float:
        return max(self._values) if self._values else 0.0

    @property
    def values(self) -> List[float]:
        return list(self._values)

    def snapshot(self) -> Dict[str, float]:
        return {
            "count": self.count,
            "mean": self.mean,
            "min": self.min,
            "max": self.max,
        }


class RewardNormalizer:
    """
    Map streaming rewards into (0, 1).

    ``normalized(r)`` computes z = (r - mean) / std over the stored window and
    returns 1 / (1 + e^-z). An empty window or zero variance yields 0.5.
    """

    def __init__(self, window: int):
        if isinstance(window, bool) or not isinstance(window, int) or window <= 0:
            raise InvalidConfig(f"normalizer window must be a positive integer, got {window!r}")
        self.window = window
        self._values: Deque[float] = deque(maxlen=window)

    def update(self, reward: float) -> None:
        self._values.append(reward)

    def normalized(self, reward: float) -> float:
        if not self._values:
            return 0.5

        n = len(self._values)
        mean = sum(self._values) / n
        std = math.sqrt(sum((v - mean) ** 2 for v in self._values) / n)
        if std == 0.0:
            return 0.5

        z = (reward - mean) / std
        # Saturate instead of overflowing exp() on extreme outliers
        if z < -700:
            return 0.0
        return 1.0 / (1.0 + math.exp(-z))

    def push(self, reward: float) -> float:
        """Record ``reward`` and return its normalized value against the updated window."""
        self.update(reward)
        return self.normalized(reward)
