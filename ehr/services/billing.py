"""Coverage and claim services; claim lines are kept in ``sequence`` order."""

from __future__ import annotations

import uuid
from typing import Any, Mapping

from ehr.errors import ValidationError
from ehr.repositories.billing import ClaimRepository, CoverageRepository
from ehr.services.base import ChildRule, ResourceService

FINANCIAL_STATUSES = frozenset({"active", "cancelled", "draft", "entered-in-error"})


class CoverageService(ResourceService):
    repository_class = CoverageRepository
    required_fields = ("patient_id",)
    default_status = "active"
    allowed_statuses = FINANCIAL_STATUSES

    def validate(self, data: Mapping[str, Any]) -> None:
        super().validate(data)
        if data.get("payor_org_id") is None and not data.get("payor_name"):
            raise ValidationError("payor_org_id or payor_name is required")


class ClaimService(ResourceService):
    repository_class = ClaimRepository
    required_fields = ("patient_id",)
    default_status = "draft"
    allowed_statuses = FINANCIAL_STATUSES
    child_rules = {
        "diagnoses": ChildRule(required_fields=("sequence", "diagnosis_code")),
        "procedures": ChildRule(required_fields=("sequence", "procedure_code")),
        "items": ChildRule(required_fields=("sequence", "product_or_service_code")),
    }

    def validate_child(self, name: str, data: Mapping[str, Any]) -> None:
        super().validate_child(name, data)
        if data["sequence"] < 1:
            raise ValidationError("sequence must be at least 1")

    def add_diagnosis(self, claim_id: uuid.UUID, data: Mapping[str, Any]):
        return self.add_child(claim_id, "diagnoses", data)

    def get_diagnoses(self, claim_id: uuid.UUID):
        return self.list_children(claim_id, "diagnoses")

    def add_procedure(self, claim_id: uuid.UUID, data: Mapping[str, Any]):
        return self.add_child(claim_id, "procedures", data)

    def get_procedures(self, claim_id: uuid.UUID):
        return self.list_children(claim_id, "procedures")

    def add_item(self, claim_id: uuid.UUID, data: Mapping[str, Any]):
        return self.add_child(claim_id, "items", data)

    def get_items(self, claim_id: uuid.UUID):
        return self.list_children(claim_id, "items")
