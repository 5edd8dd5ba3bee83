from enum import Enum

from ehr.models.identity import Organization, Patient, Practitioner
from ehr.repositories.base import SQLAlchemyRepository
from ehr.repositories.search import SearchKind, SearchParam


class PatientFilter(str, Enum):
    MRN = "mrn"
    GENDER = "gender"
    ACTIVE = "active"
    ORGANIZATION = "organization"


class PatientRepository(SQLAlchemyRepository[Patient]):
    model = Patient
    filters = PatientFilter
    search_params = {
        PatientFilter.MRN: SearchParam(Patient.mrn),
        PatientFilter.GENDER: SearchParam(Patient.gender),
        PatientFilter.ACTIVE: SearchParam(Patient.active, SearchKind.BOOLEAN),
        PatientFilter.ORGANIZATION: SearchParam(Patient.managing_organization_id, SearchKind.REFERENCE),
    }


class PractitionerFilter(str, Enum):
    FAMILY = "family"
    NPI = "npi"
    SPECIALTY = "specialty"
    ACTIVE = "active"


class PractitionerRepository(SQLAlchemyRepository[Practitioner]):
    model = Practitioner
    filters = PractitionerFilter
    search_params = {
        PractitionerFilter.FAMILY: SearchParam(Practitioner.family_name),
        PractitionerFilter.NPI: SearchParam(Practitioner.npi),
        PractitionerFilter.SPECIALTY: SearchParam(Practitioner.specialty_code),
        PractitionerFilter.ACTIVE: SearchParam(Practitioner.active, SearchKind.BOOLEAN),
    }


class OrganizationFilter(str, Enum):
    NAME = "name"
    TYPE = "type"
    ACTIVE = "active"
    PART_OF = "partof"


class OrganizationRepository(SQLAlchemyRepository[Organization]):
    model = Organization
    filters = OrganizationFilter
    search_params = {
        OrganizationFilter.NAME: SearchParam(Organization.name),
        OrganizationFilter.TYPE: SearchParam(Organization.type_code),
        OrganizationFilter.ACTIVE: SearchParam(Organization.active, SearchKind.BOOLEAN),
        OrganizationFilter.PART_OF: SearchParam(Organization.part_of_id, SearchKind.REFERENCE),
    }
