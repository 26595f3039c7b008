"""
Request-scoped access to the registries created in the application lifespan.
"""
from fastapi import Request

from learnkit.services.learning import BanditRegistry, OptimizerRegistry


def get_bandit_registry(request: Request) -> BanditRegistry:
    """Return the bandit registry attached to the running app."""
    return request.app.state.bandit_registry


def get_optimizer_registry(request: Request) -> OptimizerRegistry:
    """Return the optimizer registry attached to the running app."""
    return request.app.state.optimizer_registry
