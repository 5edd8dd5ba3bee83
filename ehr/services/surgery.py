from ehr.repositories.surgery import SurgicalCaseRepository
from ehr.services.base import ChildRule, ResourceService


class SurgicalCaseService(ResourceService):
    repository_class = SurgicalCaseRepository
    required_fields = ("patient_id", "primary_surgeon_id", "scheduled_date")
    default_status = "scheduled"
    allowed_statuses = frozenset(
        {"scheduled", "confirmed", "in-progress", "completed", "cancelled", "postponed", "entered-in-error"}
    )
    child_rules = {
        "procedures": ChildRule(required_fields=("procedure_code", "procedure_display"), defaults={"sequence": 1}),
        "team": ChildRule(required_fields=("practitioner_id", "role")),
        "time-events": ChildRule(required_fields=("event_type", "event_time")),
    }
