"""
Portfolio API - Response Schemas
================================

What:  Response models shared by every collection route.
How:   Acknowledgment models mirror the JSON the MongoDB driver produces for
       insert/delete results (camelCase keys via field aliases), so
       existing frontends keep reading `insertedId` and `deletedCount`.
"""

from typing import Dict, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Acknowledgments
# ══════════════════════════════════════════════════════════════════════════


class AcknowledgmentModel(BaseModel):
    """Built with snake_case names, serialized with the driver's camelCase keys."""

    model_config = {"populate_by_name": True}


class InsertOneResponse(AcknowledgmentModel):
    """
    Example:
        {"acknowledged": true, "insertedId": "65f1c0d2a4b5c6d7e8f90123"}
    """
    acknowledged: bool = Field(description="Whether the write was acknowledged")
    inserted_id: str = Field(alias="insertedId")


class InsertManyResponse(AcknowledgmentModel):
    """
    Example:
        {"acknowledged": true, "insertedCount": 2,
         "insertedIds": {"0": "65f1...", "1": "65f1..."}}
    """
    acknowledged: bool
    inserted_count: int = Field(alias="insertedCount")
    inserted_ids: Dict[str, str] = Field(alias="insertedIds")


class DeleteResponse(AcknowledgmentModel):
    acknowledged: bool
    deleted_count: int = Field(alias="deletedCount")


class UpdateResponse(BaseModel):
    """`success` is true only when exactly one document was modified."""
    success: bool
    message: str


# ══════════════════════════════════════════════════════════════════════════
# Tokens, Errors & Health
# ══════════════════════════════════════════════════════════════════════════


class TokenResponse(BaseModel):
    token: str = Field(description="HS256 JWT carrying the submitted claims")


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "forbidden",
            "message": "forbidden access",
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="connected or disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
