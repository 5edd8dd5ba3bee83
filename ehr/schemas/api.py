"""Pydantic models shared by every resource router."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Resource envelopes
# ---------------------------------------------------------------------------

class ResourceRead(BaseModel):
    """Server-assigned fields present on every top-level resource."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    fhir_id: str
    created_at: datetime
    updated_at: datetime


class ChildRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime


class Page(BaseModel, Generic[T]):
    items: list[T]
    total: int
    limit: int
    offset: int


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class ErrorResponse(BaseModel):
    error: str
    detail: Any


# ---------------------------------------------------------------------------
# Order workflow
# ---------------------------------------------------------------------------

class StatusTransition(BaseModel):
    status: str = Field(..., min_length=1)
    reason: str | None = None


class StatusHistoryRead(ChildRead):
    resource_type: str
    resource_id: UUID
    from_status: str
    to_status: str
    changed_by: str | None = None
    reason: str | None = None
    changed_at: datetime


# ---------------------------------------------------------------------------
# FHIR $validate
# ---------------------------------------------------------------------------

class OperationOutcomeIssue(BaseModel):
    severity: str
    code: str
    diagnostics: str
    expression: list[str] | None = None


class OperationOutcome(BaseModel):
    resourceType: str = "OperationOutcome"
    issue: list[OperationOutcomeIssue]


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------

class HealthResponse(BaseModel):
    status: str = "healthy"
    environment: str
    database: str = "connected"
