"""
Bandit API Endpoints

Endpoints:
- POST   /api/bandit               - Create bandit, returns {"id"}
- GET    /api/bandit               - List live bandits
- GET    /api/bandit/{id}/select   - Select an arm, returns {"arm"}
- POST   /api/bandit/{id}/update   - Record reward {"arm", "reward"}
- GET    /api/bandit/{id}/stats    - Per-arm statistics snapshot
- DELETE /api/bandit/{id}          - Remove bandit

Handlers are plain functions so FastAPI runs them in its threadpool; the
registry locks are blocking locks.
"""

import logging
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from learnkit.config.settings import BANDIT_CONFIG
from learnkit.models.bandit_schemas import (
    BanditCreateRequest,
    BanditStats,
    SelectResponse,
    UpdateRequest,
)
from learnkit.models.common_schemas import (
    ERROR_RESPONSES,
    CreateResponse,
    InstanceList,
    StatusResponse,
)
from learnkit.routers.dependencies import get_bandit_registry
from learnkit.services.learning import BanditConfig, BanditRegistry
from learnkit.services.metrics import track_operation

logger = logging.getLogger(__name__)

router = APIRouter(responses=ERROR_RESPONSES)


@router.get("/health")
def health_check(registry: BanditRegistry = Depends(get_bandit_registry)):
    """Health check endpoint for the bandit service"""
    return JSONResponse(content={
        "status": "healthy",
        "service": "bandit",
        "live_instances": len(registry),
    })


@router.post("", response_model=CreateResponse, status_code=201)
def create_bandit(
    request: BanditCreateRequest,
    registry: BanditRegistry = Depends(get_bandit_registry),
):
    """
    Create a bandit instance.

    Args:
        request: Strategy name, its parameter and the number of arms

    Returns:
        Identifier of the new bandit
    """
    config = BanditConfig(
        strategy=request.strategy,
        param=request.param,
        num_arms=request.num_arms,
        seed=request.seed if request.seed is not None else BANDIT_CONFIG["default_seed"],
        reward_window=BANDIT_CONFIG["reward_window"],
        normalize_window=request.normalize_window,
    )
    with track_operation("bandit", "create"):
        bandit_id = registry.create(config)

    logger.info(f"🎰 Bandit created: {bandit_id} ({request.strategy}, {request.num_arms} arms)")
    return CreateResponse(id=bandit_id)


@router.get("", response_model=InstanceList)
def list_bandits(registry: BanditRegistry = Depends(get_bandit_registry)):
    """List live bandit identifiers"""
    ids = registry.ids()
    return InstanceList(ids=ids, count=len(ids))


@router.get("/{bandit_id}/select", response_model=SelectResponse)
def select_arm(bandit_id: str, registry: BanditRegistry = Depends(get_bandit_registry)):
    """Select the next arm according to the bandit's strategy"""
    with track_operation("bandit", "select"):
        arm = registry.select(bandit_id)
    return SelectResponse(arm=arm)


@router.post("/{bandit_id}/update", response_model=StatusResponse)
def update_reward(
    bandit_id: str,
    request: UpdateRequest,
    registry: BanditRegistry = Depends(get_bandit_registry),
):
    """Record the reward observed for an arm"""
    with track_operation("bandit", "update"):
        registry.update(bandit_id, request.arm, request.reward)
    return StatusResponse(status="ok")


@router.get("/{bandit_id}/stats", response_model=BanditStats)
def get_stats(bandit_id: str, registry: BanditRegistry = Depends(get_bandit_registry)):
    """
    Get a consistent statistics snapshot.

    Returns:
        Per-arm count/mean/variance plus a summary of recent rewards
    """
    with track_operation("bandit", "stats"):
        summary = registry.summary(bandit_id)
    return BanditStats(id=bandit_id, **summary)


@router.delete("/{bandit_id}", response_model=StatusResponse)
def remove_bandit(bandit_id: str, registry: BanditRegistry = Depends(get_bandit_registry)):
    """Remove a bandit; later operations on the identifier return 404"""
    with track_operation("bandit", "remove"):
        registry.remove(bandit_id)

    logger.info(f"🗑️  Bandit removed: {bandit_id}")
    return StatusResponse(status="removed")
