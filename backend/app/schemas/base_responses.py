"""
Base response schemas for standardized API responses.

Every endpoint answers with ``success`` plus either a payload or an error
message, so the frontend can branch on one field.
"""

from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Standard success envelope."""

    success: bool = Field(default=True, description="Operation success status")
    data: Optional[T] = Field(default=None, description="Response payload")
    message: Optional[str] = Field(default=None, description="Human-readable message")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"success": True, "data": {"id": "01HZY..."}, "message": None}
        }
    )


class ErrorResponse(BaseModel):
    """Standard error envelope produced by the exception handlers."""

    success: bool = Field(default=False)
    message: str = Field(description="Human-readable error message")
    code: Optional[str] = Field(default=None, description="Error code for programmatic handling")
    details: Optional[Dict[str, Any]] = Field(default=None)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": False,
                "message": "This time slot is already booked. Please select a different time.",
                "code": "SLOT_CONFLICT",
            }
        }
    )


class HealthResponse(BaseModel):
    status: str = "healthy"
    service: str
    database: str
