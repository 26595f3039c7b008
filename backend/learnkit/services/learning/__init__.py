"""
Online Learning Engine

Stateful bandit and optimizer instances owned by concurrent registries.
"""

from .bandit import (
    BANDIT_STRATEGIES,
    Bandit,
    BanditAlgorithm,
    BanditConfig,
    EpsilonGreedyBandit,
    create_bandit,
)
from .errors import (
    InvalidArm,
    InvalidConfig,
    InvalidValue,
    LearningError,
    NoPendingSuggestion,
    NotFound,
)
from .optimizer import Optimizer, OptimizerConfig, create_optimizer
from .registry import BanditRegistry, InstanceRegistry, OptimizerRegistry
from .reward_window import RewardNormalizer, RewardWindow
from .running_stat import RunningStat

__all__ = [
    # Bandits
    "Bandit",
    "BanditAlgorithm",
    "BanditConfig",
    "EpsilonGreedyBandit",
    "BANDIT_STRATEGIES",
    "create_bandit",
    # Optimizer
    "Optimizer",
    "OptimizerConfig",
    "create_optimizer",
    # Registries
    "InstanceRegistry",
    "BanditRegistry",
    "OptimizerRegistry",
    # Statistics
    "RunningStat",
    "RewardWindow",
    "RewardNormalizer",
    # Errors
    "LearningError",
    "InvalidConfig",
    "InvalidArm",
    "InvalidValue",
    "NotFound",
    "NoPendingSuggestion",
]
