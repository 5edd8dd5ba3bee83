from ehr.repositories.encounter import EncounterRepository
from ehr.services.base import ResourceService


class EncounterService(ResourceService):
    repository_class = EncounterRepository
    required_fields = ("patient_id", "class_code", "period_start")
    default_status = "planned"
    allowed_statuses = frozenset(
        {
            "planned",
            "arrived",
            "triaged",
            "in-progress",
            "onleave",
            "finished",
            "cancelled",
            "entered-in-error",
            "unknown",
        }
    )
