"""
Optimizer API Endpoints

Endpoints:
- POST   /api/optimizer                - Create optimizer, returns {"id"}
- GET    /api/optimizer                - List live optimizers
- GET    /api/optimizer/{id}/suggest   - Next point to evaluate, returns {"x"}
- POST   /api/optimizer/{id}/observe   - Report reward {"reward"}
- GET    /api/optimizer/{id}/state     - Optimizer state snapshot
- GET    /api/optimizer/{id}/history   - Recent observations
- DELETE /api/optimizer/{id}           - Remove optimizer
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from learnkit.config.settings import OPTIMIZER_CONFIG
from learnkit.models.common_schemas import (
    ERROR_RESPONSES,
    CreateResponse,
    ErrorResponse,
    InstanceList,
    StatusResponse,
)
from learnkit.models.optimizer_schemas import (
    ObserveRequest,
    OptimizerCreateRequest,
    OptimizerHistory,
    OptimizerState,
    SuggestResponse,
)
from learnkit.routers.dependencies import get_optimizer_registry
from learnkit.services.learning import OptimizerConfig, OptimizerRegistry
from learnkit.services.metrics import track_operation

logger = logging.getLogger(__name__)

router = APIRouter(responses={
    **ERROR_RESPONSES,
    409: {"model": ErrorResponse, "description": "Observe without a pending proposal"},
})


@router.get("/health")
def health_check(registry: OptimizerRegistry = Depends(get_optimizer_registry)):
    """Health check endpoint for the optimizer service"""
    return JSONResponse(content={
        "status": "healthy",
        "service": "optimizer",
        "live_instances": len(registry),
    })


@router.post("", response_model=CreateResponse, status_code=201)
def create_optimizer(
    request: OptimizerCreateRequest,
    registry: OptimizerRegistry = Depends(get_optimizer_registry),
):
    """
    Create an optimizer seeded at x0.

    The seed point is the first proposal; it can be observed directly
    without calling suggest first.
    """
    config = OptimizerConfig(
        x0=request.x0,
        seed=request.seed if request.seed is not None else OPTIMIZER_CONFIG["default_seed"],
        initial_step=OPTIMIZER_CONFIG["initial_step"],
        grow=OPTIMIZER_CONFIG["grow"],
        shrink=OPTIMIZER_CONFIG["shrink"],
        min_step=OPTIMIZER_CONFIG["min_step"],
        max_step=OPTIMIZER_CONFIG["max_step"],
    )
    with track_operation("optimizer", "create"):
        optimizer_id = registry.create(config)

    logger.info(f"📈 Optimizer created: {optimizer_id} (x0={request.x0})")
    return CreateResponse(id=optimizer_id)


@router.get("", response_model=InstanceList)
def list_optimizers(registry: OptimizerRegistry = Depends(get_optimizer_registry)):
    """List live optimizer identifiers"""
    ids = registry.ids()
    return InstanceList(ids=ids, count=len(ids))


@router.get("/{optimizer_id}/suggest", response_model=SuggestResponse)
def suggest(optimizer_id: str, registry: OptimizerRegistry = Depends(get_optimizer_registry)):
    """Return the pending proposal, computing a new one if the last was observed"""
    with track_operation("optimizer", "suggest"):
        x = registry.suggest(optimizer_id)
    return SuggestResponse(x=x)


@router.post("/{optimizer_id}/observe", response_model=StatusResponse)
def observe(
    optimizer_id: str,
    request: ObserveRequest,
    registry: OptimizerRegistry = Depends(get_optimizer_registry),
):
    """Report the reward obtained at the pending proposal"""
    with track_operation("optimizer", "observe"):
        registry.observe(optimizer_id, request.reward)
    return StatusResponse(status="ok")


@router.get("/{optimizer_id}/state", response_model=OptimizerState)
def get_state(optimizer_id: str, registry: OptimizerRegistry = Depends(get_optimizer_registry)):
    """Get a consistent optimizer state snapshot"""
    with track_operation("optimizer", "state"):
        state = registry.state(optimizer_id)
    return OptimizerState(id=optimizer_id, **state)


@router.get("/{optimizer_id}/history", response_model=OptimizerHistory)
def get_history(
    optimizer_id: str,
    limit: Optional[int] = Query(None, ge=1, description="Return only the last N observations"),
    registry: OptimizerRegistry = Depends(get_optimizer_registry),
):
    """Get observed (x, reward) pairs, oldest first"""
    if limit is None:
        limit = OPTIMIZER_CONFIG["history_limit"]
    with track_operation("optimizer", "history"):
        observations = registry.history(optimizer_id, limit)
    return OptimizerHistory(id=optimizer_id, observations=observations)


@router.delete("/{optimizer_id}", response_model=StatusResponse)
def remove_optimizer(optimizer_id: str, registry: OptimizerRegistry = Depends(get_optimizer_registry)):
    """Remove an optimizer; later operations on the identifier return 404"""
    with track_operation("optimizer", "remove"):
        registry.remove(optimizer_id)

    logger.info(f"🗑️  Optimizer removed: {optimizer_id}")
    return StatusResponse(status="removed")
