from enum import Enum

from ehr.models.encounter import Encounter
from ehr.repositories.base import PatientScopedRepository
from ehr.repositories.search import SearchKind, SearchParam


class EncounterFilter(str, Enum):
    PATIENT = "patient"
    STATUS = "status"
    CLASS = "class"
    PRACTITIONER = "practitioner"
    SERVICE_PROVIDER = "service-provider"
    DATE = "date"


class EncounterRepository(PatientScopedRepository[Encounter]):
    model = Encounter
    filters = EncounterFilter
    search_params = {
        EncounterFilter.PATIENT: SearchParam(Encounter.patient_id, SearchKind.REFERENCE),
        EncounterFilter.STATUS: SearchParam(Encounter.status),
        EncounterFilter.CLASS: SearchParam(Encounter.class_code),
        EncounterFilter.PRACTITIONER: SearchParam(Encounter.primary_practitioner_id, SearchKind.REFERENCE),
        EncounterFilter.SERVICE_PROVIDER: SearchParam(Encounter.service_provider_id, SearchKind.REFERENCE),
        EncounterFilter.DATE: SearchParam(Encounter.period_start, SearchKind.DATE),
    }
