from __future__ import annotations

from typing import Any, Mapping

from ehr.errors import ValidationError
from ehr.repositories.oncology import CancerDiagnosisRepository, TreatmentProtocolRepository
from ehr.services.base import ChildRule, ResourceService


class CancerDiagnosisService(ResourceService):
    repository_class = CancerDiagnosisRepository
    required_fields = ("patient_id", "diagnosis_date")
    status_field = "current_status"
    default_status = "active-treatment"
    allowed_statuses = frozenset(
        {
            "active-treatment",
            "remission",
            "relapse",
            "progression",
            "stable",
            "surveillance",
            "resolved",
            "deceased",
            "entered-in-error",
        }
    )


class TreatmentProtocolService(ResourceService):
    repository_class = TreatmentProtocolRepository
    required_fields = ("cancer_diagnosis_id", "protocol_name")
    default_status = "planned"
    allowed_statuses = frozenset(
        {"planned", "active", "on-hold", "completed", "stopped", "cancelled", "entered-in-error"}
    )
    child_rules = {
        "cycles": ChildRule(
            required_fields=("cycle_number",),
            default_status="planned",
            allowed_statuses=frozenset(
                {"planned", "in-progress", "completed", "delayed", "cancelled", "entered-in-error"}
            ),
        ),
    }

    def validate_child(self, name: str, data: Mapping[str, Any]) -> None:
        super().validate_child(name, data)
        if name == "cycles" and data["cycle_number"] < 1:
            raise ValidationError("cycle_number must be at least 1")
