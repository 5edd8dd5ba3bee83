from ehr.repositories.identity import OrganizationRepository, PatientRepository, PractitionerRepository
from ehr.services.base import ResourceService


class PatientService(ResourceService):
    repository_class = PatientRepository
    required_fields = ("mrn", "name_family")
    status_field = None


class PractitionerService(ResourceService):
    repository_class = PractitionerRepository
    required_fields = ("family_name",)
    status_field = None


class OrganizationService(ResourceService):
    repository_class = OrganizationRepository
    required_fields = ("name",)
    status_field = None
