"""
Configuration settings for the learnkit service
"""
import os
from pydantic_settings import BaseSettings
from typing import Optional


def _optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    return int(raw) if raw not in (None, "") else None


class Settings(BaseSettings):
    """Application settings"""

    # Server
    API_HOST: str = os.getenv("API_HOST", "127.0.0.1")
    API_PORT: int = int(os.getenv("API_PORT", "8080"))

    # Randomness (unset = OS entropy per instance)
    DEFAULT_SEED: Optional[int] = _optional_int("DEFAULT_SEED")

    # Bandit Configuration
    REWARD_WINDOW: int = int(os.getenv("REWARD_WINDOW", "50"))

    # Optimizer Configuration
    OPTIMIZER_INITIAL_STEP: float = float(os.getenv("OPTIMIZER_INITIAL_STEP", "1.0"))
    OPTIMIZER_STEP_GROW: float = float(os.getenv("OPTIMIZER_STEP_GROW", "1.2"))
    OPTIMIZER_STEP_SHRINK: float = float(os.getenv("OPTIMIZER_STEP_SHRINK", "0.8"))
    OPTIMIZER_MIN_STEP: float = float(os.getenv("OPTIMIZER_MIN_STEP", "0.001"))
    OPTIMIZER_MAX_STEP: float = float(os.getenv("OPTIMIZER_MAX_STEP", "1000000.0"))
    HISTORY_LIMIT_DEFAULT: int = 50

    # Performance & Monitoring
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    ENABLE_METRICS: bool = os.getenv("ENABLE_METRICS", "true").lower() == "true"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Allow unused env vars for flexible deployments


# Global settings instance
settings = Settings()


# Bandit configuration
BANDIT_CONFIG = {
    "default_seed": settings.DEFAULT_SEED,
    "reward_window": settings.REWARD_WINDOW,
}

# Optimizer configuration
OPTIMIZER_CONFIG = {
    "default_seed": settings.DEFAULT_SEED,
    "initial_step": settings.OPTIMIZER_INITIAL_STEP,
    "grow": settings.OPTIMIZER_STEP_GROW,
    "shrink": settings.OPTIMIZER_STEP_SHRINK,
    "min_step": settings.OPTIMIZER_MIN_STEP,
    "max_step": settings.OPTIMIZER_MAX_STEP,
    "history_limit": settings.HISTORY_LIMIT_DEFAULT,
}
