"""
Diagnostic ordering services.

Orders follow a small workflow: a plain update may set any allowed status
(last write wins), while ``transition`` enforces the order state machine
and records each step in the order's status history.
"""

from __future__ import annotations

import uuid
from typing import Any, Mapping

from ehr.errors import InvalidTransitionError
from ehr.models.diagnostics import OrderStatusHistory
from ehr.repositories.diagnostics import (
    DiagnosticReportRepository,
    ImagingStudyRepository,
    ServiceRequestRepository,
    SpecimenRepository,
)
from ehr.services.base import ResourceService, check_status

SERVICE_REQUEST_TRANSITIONS: dict[str, frozenset[str]] = {
    "draft": frozenset({"active", "on-hold", "revoked", "entered-in-error"}),
    "active": frozenset({"on-hold", "revoked", "completed", "entered-in-error"}),
    "on-hold": frozenset({"active", "revoked", "entered-in-error"}),
    "completed": frozenset({"entered-in-error"}),
    "revoked": frozenset({"entered-in-error"}),
    "entered-in-error": frozenset(),
    "unknown": frozenset({"draft", "active", "entered-in-error"}),
}

REQUEST_INTENTS = frozenset(
    {
        "proposal",
        "plan",
        "directive",
        "order",
        "original-order",
        "reflex-order",
        "filler-order",
        "instance-order",
        "option",
    }
)


def validate_transition(from_status: str, to_status: str) -> None:
    allowed = SERVICE_REQUEST_TRANSITIONS.get(from_status)
    if allowed is None:
        raise InvalidTransitionError(f"unknown from-status: {from_status}")
    if to_status not in allowed:
        raise InvalidTransitionError(f"invalid transition from {from_status} to {to_status}")


class ServiceRequestService(ResourceService):
    repository_class = ServiceRequestRepository
    required_fields = ("patient_id", "requester_id", "code_value")
    default_status = "draft"
    defaults = {"intent": "order"}
    allowed_statuses = frozenset(SERVICE_REQUEST_TRANSITIONS)

    def validate(self, data: Mapping[str, Any]) -> None:
        super().validate(data)
        check_status(data.get("intent"), REQUEST_INTENTS, label="intent")

    def transition(self, id: uuid.UUID, to_status: str, reason: str | None = None):
        """Move an order along its workflow and record the step."""
        entity = self.repo.get_by_id(id)
        check_status(to_status, self.allowed_statuses)
        from_status = entity.status
        validate_transition(from_status, to_status)

        entity.status = to_status
        entity = self.repo.update(entity)
        self.repo.status_history.add(
            OrderStatusHistory(
                resource_type=self.resource_type,
                resource_id=entity.id,
                from_status=from_status,
                to_status=to_status,
                changed_by=self.actor,
                reason=reason,
            )
        )
        self._audit("transition", self.resource_type, entity.id, {"from": from_status, "to": to_status})
        return entity

    def status_history(self, id: uuid.UUID) -> list[OrderStatusHistory]:
        return self.list_children(id, "status-history")


class SpecimenService(ResourceService):
    repository_class = SpecimenRepository
    required_fields = ("patient_id",)
    default_status = "available"
    allowed_statuses = frozenset({"available", "unavailable", "unsatisfactory", "entered-in-error"})


class DiagnosticReportService(ResourceService):
    repository_class = DiagnosticReportRepository
    required_fields = ("patient_id", "code_value")
    default_status = "registered"
    allowed_statuses = frozenset(
        {
            "registered",
            "partial",
            "preliminary",
            "final",
            "amended",
            "corrected",
            "appended",
            "cancelled",
            "entered-in-error",
            "unknown",
        }
    )


class ImagingStudyService(ResourceService):
    repository_class = ImagingStudyRepository
    required_fields = ("patient_id",)
    default_status = "registered"
    allowed_statuses = frozenset({"registered", "available", "cancelled", "entered-in-error", "unknown"})
