from ehr.repositories.vision import VisionPrescriptionRepository
from ehr.services.base import ChildRule, ResourceService


class VisionPrescriptionService(ResourceService):
    repository_class = VisionPrescriptionRepository
    required_fields = ("patient_id",)
    default_status = "active"
    child_rules = {
        "lens-specifications": ChildRule(required_fields=("product_code", "eye")),
    }
