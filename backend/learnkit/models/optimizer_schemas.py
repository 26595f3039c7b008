"""
Data models for the Optimizer API.
"""
from typing import Optional, List
from pydantic import BaseModel, Field


class OptimizerCreateRequest(BaseModel):
    """Request to create an optimizer instance"""
    x0: float = Field(default=0.0, description="Seed point, evaluated first")
    seed: Optional[int] = Field(None, description="Seed for reproducible direction choices")


class SuggestResponse(BaseModel):
    """Point to evaluate next"""
    x: float


class ObserveRequest(BaseModel):
    """Reward obtained at the pending point"""
    reward: float = Field(..., description="Observed reward (finite)")


class OptimizerState(BaseModel):
    """Consistent snapshot of an optimizer"""
    id: str = Field(..., description="Instance identifier")
    x0: float
    current_x: float = Field(..., description="Pending proposal, or last observed point")
    best_x: float
    best_reward: Optional[float] = Field(None, description="Best reward so far (null before any observation)")
    history_length: int
    step_size: float
    pending: bool = Field(..., description="Whether current_x awaits an observation")


class Observation(BaseModel):
    x: float
    reward: float


class OptimizerHistory(BaseModel):
    """Most recent observations, oldest first"""
    id: str
    observations: List[Observation] = Field(default_factory=list)
