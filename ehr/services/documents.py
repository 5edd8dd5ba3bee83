from ehr.repositories.documents import CompositionRepository, ConsentRepository, DocumentReferenceRepository
from ehr.services.base import ChildRule, ResourceService


class ConsentService(ResourceService):
    repository_class = ConsentRepository
    required_fields = ("patient_id",)
    default_status = "draft"
    allowed_statuses = frozenset({"draft", "proposed", "active", "rejected", "inactive", "entered-in-error"})


class DocumentReferenceService(ResourceService):
    repository_class = DocumentReferenceRepository
    required_fields = ("patient_id",)
    default_status = "current"
    allowed_statuses = frozenset({"current", "superseded", "entered-in-error"})


class CompositionService(ResourceService):
    repository_class = CompositionRepository
    required_fields = ("patient_id",)
    default_status = "preliminary"
    allowed_statuses = frozenset({"preliminary", "final", "amended", "entered-in-error"})
    child_rules = {"sections": ChildRule(defaults={"sort_order": 0})}
