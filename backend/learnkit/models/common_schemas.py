"""
Shared data models for the learning APIs.
"""
from typing import List
from pydantic import BaseModel, Field


class CreateResponse(BaseModel):
    """Identifier of a newly created instance"""
    id: str = Field(..., description="Opaque instance identifier")


class StatusResponse(BaseModel):
    """Acknowledgement for write operations"""
    status: str = Field(default="ok", description="Operation status")


class InstanceList(BaseModel):
    """Live instance identifiers"""
    ids: List[str] = Field(default_factory=list, description="Live identifiers in creation order")
    count: int = Field(..., description="Number of live instances")


class ErrorResponse(BaseModel):
    """Error payload returned for rejected operations"""
    error: str = Field(..., description="Error kind (NotFound, InvalidArm, ...)")
    detail: str = Field(..., description="Human readable message")


# OpenAPI documentation for the error kinds every instance route can return
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "InvalidConfig, InvalidArm or InvalidValue"},
    404: {"model": ErrorResponse, "description": "Unknown or removed identifier"},
}
