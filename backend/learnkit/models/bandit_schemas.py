"""
Data models for the Bandit API.
"""
from typing import Optional, List, Dict
from pydantic import BaseModel, Field


class BanditCreateRequest(BaseModel):
    """Request to create a bandit instance"""
    strategy: str = Field(default="epsilon_greedy", description="Selection strategy")
    param: float = Field(..., description="Strategy parameter (epsilon for epsilon_greedy)")
    num_arms: int = Field(..., description="Number of arms (> 0)")
    seed: Optional[int] = Field(None, description="Seed for reproducible selection")
    normalize_window: Optional[int] = Field(
        default=None,
        description="If set, rewards are normalized over a rolling window of this size",
    )


class SelectResponse(BaseModel):
    """Selected arm"""
    arm: int = Field(..., description="Index of the arm to pull")


class UpdateRequest(BaseModel):
    """Reward observed for an arm"""
    arm: int = Field(..., description="Arm index")
    reward: float = Field(..., description="Observed reward (finite)")


class ArmStats(BaseModel):
    """Running statistics for one arm"""
    arm: int
    count: int
    mean: float
    variance: float = 0.0


class RecentRewards(BaseModel):
    """Rolling window over the most recent raw rewards"""
    count: int = 0
    mean: float = 0.0
    min: float = 0.0
    max: float = 0.0


class BanditStats(BaseModel):
    """Consistent snapshot of a bandit"""
    id: str = Field(..., description="Instance identifier")
    strategy: str = Field(..., description="Selection strategy")
    params: Dict[str, float] = Field(default_factory=dict, description="Strategy parameters")
    num_arms: int
    total_count: int = Field(..., description="Total rewards recorded across arms")
    normalized: bool = Field(default=False, description="Whether rewards are normalized")
    arms: List[ArmStats] = Field(default_factory=list)
    recent: RecentRewards = Field(default_factory=RecentRewards)
