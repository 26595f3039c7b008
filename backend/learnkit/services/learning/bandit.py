"""
Multi-armed bandit instances.

Every bandit owns one RunningStat per arm and its own random generator, so
selection sequences are independent across instances and reproducible when a
seed is given. Strategies share the ``select``/``update``/``stats`` interface
of ``Bandit``; the registry and the HTTP layer only ever see that interface.

Supports:
- Epsilon-greedy

New strategies subclass ``Bandit``, implement ``select`` and ``from_param``,
and register themselves in ``BANDIT_STRATEGIES``.
"""
from __future__ import annotations

import logging
import math
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Type

from .errors import InvalidArm, InvalidConfig, require_finite
from .reward_window import RewardNormalizer, RewardWindow
from .running_stat import RunningStat

logger = logging.getLogger(__name__)


class BanditAlgorithm(str, Enum):
    EPSILON_GREEDY = "epsilon_greedy"


@dataclass
class BanditConfig:
    """Creation parameters for a bandit instance."""

    strategy: str = BanditAlgorithm.EPSILON_GREEDY.value
    param: float = 0.1          # epsilon for epsilon_greedy
    num_arms: int = 2
    seed: Optional[int] = None
    reward_window: int = 50     # recent rewards kept for the summary
    normalize_window: Optional[int] = None  # enable reward normalization


class Bandit(ABC):
    """Common state and reward bookkeeping for all bandit strategies."""

    algorithm: BanditAlgorithm

    def __init__(
        self,
        num_arms: int,
        *,
        seed: Optional[int] = None,
        reward_window: int = 50,
        normalize_window: Optional[int] = None,
    ):
        if isinstance(num_arms, bool) or not isinstance(num_arms, int) or num_arms <= 0:
            raise InvalidConfig(f"num_arms must be a positive integer, got {num_arms!r}")
        if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
            raise InvalidConfig(f"seed must be an integer, got {seed!r}")

        self.arms: List[RunningStat] = [RunningStat() for _ in range(num_arms)]
        self.recent = RewardWindow(reward_window)
        self.normalizer = RewardNormalizer(normalize_window) if normalize_window is not None else None
        self._rng = random.Random(seed)

    @classmethod
    @abstractmethod
    def from_param(cls, param: Any, num_arms: int, **kwargs) -> "Bandit":
        """Build the strategy from its single numeric parameter."""

    @abstractmethod
    def select(self) -> int:
        """Return the index of the arm to pull next."""

    @property
    def num_arms(self) -> int:
        return len(self.arms)

    @property
    def params(self) -> Dict[str, float]:
        return {}

    def update(self, arm: int, reward: float) -> None:
        """Feed ``reward`` into ``arm``'s statistics. Validates before mutating."""
        if isinstance(arm, bool) or not isinstance(arm, int) or not 0 <= arm < self.num_arms:
            raise InvalidArm(f"arm must be in [0, {self.num_arms}), got {arm!r}")
        reward = require_finite(reward, "reward")

        value = self.normalizer.push(reward) if self.normalizer is not None else reward
        self.arms[arm].update(value)
        self.recent.update(reward)

    def best_arm(self) -> int:
        """Arm with the highest mean; ties go to the lowest index."""
        best_index = 0
        best_mean = -math.inf
        for i, stat in enumerate(self.arms):
            if stat.mean > best_mean:
                best_mean = stat.mean
                best_index = i
        return best_index

    def stats(self) -> List[Dict[str, float]]:
        return [{"arm": i, **stat.snapshot()} for i, stat in enumerate(self.arms)]

    def summary(self) -> Dict[str, Any]:
        return {
            "strategy": self.algorithm.value,
            "params": self.params,
            "num_arms": self.num_arms,
            "total_count": sum(stat.count for stat in self.arms),
            "normalized": self.normalizer is not None,
            "arms": self.stats(),
            "recent": self.recent.snapshot(),
        }


class EpsilonGreedyBandit(Bandit):
    """
    Epsilon-greedy selection.

    With probability epsilon, choose a uniformly random arm.
    Otherwise, choose the arm with the highest mean reward.
    """

    algorithm = BanditAlgorithm.EPSILON_GREEDY

    def __init__(self, num_arms: int, epsilon: float, **kwargs):
        try:
            epsilon = float(epsilon)
        except (TypeError, ValueError):
            raise InvalidConfig(f"epsilon must be a number, got {epsilon!r}")
        if not (0.0 <= epsilon <= 1.0):
            raise InvalidConfig(f"epsilon must be within [0, 1], got {epsilon}")
        super().__init__(num_arms, **kwargs)
        self.epsilon = epsilon

    @classmethod
    def from_param(cls, param: Any, num_arms: int, **kwargs) -> "EpsilonGreedyBandit":
        return cls(num_arms, param, **kwargs)

    @property
    def params(self) -> Dict[str, float]:
        return {"epsilon": self.epsilon}

    def select(self) -> int:
        if self._rng.random() < self.epsilon:
            # Explore
            return self._rng.randrange(self.num_arms)
        # Exploit
        return self.best_arm()


BANDIT_STRATEGIES: Dict[str, Type[Bandit]] = {
    BanditAlgorithm.EPSILON_GREEDY.value: EpsilonGreedyBandit,
}


def create_bandit(config: BanditConfig) -> Bandit:
    """Construct a bandit from ``config``; raises InvalidConfig on bad parameters."""
    strategy = config.strategy.value if isinstance(config.strategy, Enum) else config.strategy
    bandit_cls = BANDIT_STRATEGIES.get(strategy)
    if bandit_cls is None:
        supported = ", ".join(sorted(BANDIT_STRATEGIES))
        raise InvalidConfig(f"unsupported strategy {strategy!r} (supported: {supported})")

    bandit = bandit_cls.from_param(
        config.param,
        config.num_arms,
        seed=config.seed,
        reward_window=config.reward_window,
        normalize_window=config.normalize_window,
    )
    logger.debug("Created %s bandit with %d arms", strategy, bandit.num_arms)
    return bandit
