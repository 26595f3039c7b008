"""
Sequential 1-D black-box optimizer.

Adaptive-step local search around the best point seen so far:

- The seed ``x0`` is the first proposal and is offered without an explicit
  ``suggest`` call.
- Each later proposal is ``best_x + direction * step_size``. Directions around
  the current best are tried +1 first, then -1, then at random.
- An improving reward moves the best point and grows the step; anything else
  shrinks it. The step stays within ``[min_step, max_step]``, so proposals
  stay finite however long an improving streak runs.

A proposal stays pending until it is observed, so repeated ``suggest`` calls
return the same value.
"""
from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set, Tuple

from .errors import InvalidConfig, InvalidValue, NoPendingSuggestion, require_finite

logger = logging.getLogger(__name__)


@dataclass
class OptimizerConfig:
    """Creation parameters for an optimizer instance."""

    x0: float = 0.0
    seed: Optional[int] = None
    initial_step: float = 1.0
    grow: float = 1.2       # step factor after an improvement (> 1)
    shrink: float = 0.8     # step factor otherwise (0..1)
    min_step: float = 1e-3  # floor that keeps the search moving
    max_step: float = 1e6   # ceiling that keeps proposals finite


class Optimizer:
    """Single-parameter hill climber with step adaptation."""

    def __init__(self, config: OptimizerConfig):
        try:
            x0 = require_finite(config.x0, "x0")
        except InvalidValue as exc:
            raise InvalidConfig(exc.message)
        if not (config.initial_step > 0.0 and config.min_step > 0.0):
            raise InvalidConfig("initial_step and min_step must be positive")
        if not (math.isfinite(config.max_step) and config.max_step >= config.min_step):
            raise InvalidConfig("max_step must be finite and at least min_step")
        if not (config.grow > 1.0 and 0.0 < config.shrink < 1.0):
            raise InvalidConfig("grow must be > 1 and shrink within (0, 1)")
        if config.seed is not None and (isinstance(config.seed, bool) or not isinstance(config.seed, int)):
            raise InvalidConfig(f"seed must be an integer, got {config.seed!r}")

        self.x0 = x0
        self.current_x = x0
        self.best_x = x0
        self.best_reward: Optional[float] = None
        self.history: List[Tuple[float, float]] = []

        self.step_size = min(max(config.initial_step, config.min_step), config.max_step)
        self.grow = config.grow
        self.shrink = config.shrink
        self.min_step = config.min_step
        self.max_step = config.max_step

        # x0 is implicitly on offer before the first suggest()
        self.pending = True
        self._tried: Set[float] = set()
        self._rng = random.Random(config.seed)

    def suggest(self) -> float:
        """Propose the next point to evaluate; idempotent while a proposal is pending."""
        if self.pending:
            return self.current_x

        if 1.0 not in self._tried:
            direction = 1.0
        elif -1.0 not in self._tried:
            direction = -1.0
        else:
            direction = self._rng.choice((1.0, -1.0))
        self._tried.add(direction)

        self.current_x = self.best_x + direction * self.step_size
        self.pending = True
        return self.current_x

    def observe(self, reward: float) -> None:
        """Record the reward for the pending proposal and adapt the step size."""
        reward = require_finite(reward, "reward")
        if not self.pending:
            raise NoPendingSuggestion("observe() requires a pending suggest() proposal")

        self.history.append((self.current_x, reward))
        if self.best_reward is None or reward > self.best_reward:
            # Improvement: recentre on the new best and reach further
            self.best_x = self.current_x
            self.best_reward = reward
            self.step_size = min(self.step_size * self.grow, self.max_step)
            self._tried.clear()
        else:
            self.step_size = max(self.step_size * self.shrink, self.min_step)
        self.pending = False

    def state(self) -> Dict[str, Any]:
        return {
            "x0": self.x0,
            "current_x": self.current_x,
            "best_x": self.best_x,
            "best_reward": self.best_reward,
            "history_length": len(self.history),
            "step_size": self.step_size,
            "pending": self.pending,
        }

    def recent_history(self, limit: Optional[int] = None) -> List[Dict[str, float]]:
        if limit is None:
            entries = self.history
        elif limit <= 0:
            entries = []
        else:
            entries = self.history[-limit:]
        return [{"x": x, "reward": reward} for x, reward in entries]


def create_optimizer(config: OptimizerConfig) -> Optimizer:
    """Construct an optimizer from ``config``; raises InvalidConfig on bad parameters."""
    optimizer = Optimizer(config)
    logger.debug("Created optimizer at x0=%s", optimizer.x0)
    return optimizer
