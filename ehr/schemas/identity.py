from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, Field

from ehr.schemas.api import ResourceRead

ISO_DATE = r"^\d{4}-\d{2}-\d{2}$"


# ---------------------------------------------------------------------------
# Organization
# ---------------------------------------------------------------------------

class OrganizationFields(BaseModel):
    name: str | None = None
    type_code: str | None = None
    active: bool | None = None
    phone: str | None = None
    email: str | None = None
    city: str | None = None
    part_of_id: UUID | None = None


class OrganizationCreate(OrganizationFields):
    fhir_id: str | None = None
    name: str = Field(..., min_length=1)


class OrganizationUpdate(OrganizationFields):
    pass


class OrganizationRead(ResourceRead, OrganizationCreate):
    pass


# ---------------------------------------------------------------------------
# Practitioner
# ---------------------------------------------------------------------------

class PractitionerFields(BaseModel):
    family_name: str | None = None
    given_name: str | None = None
    npi: str | None = None
    specialty_code: str | None = None
    specialty_display: str | None = None
    active: bool | None = None
    phone: str | None = None
    email: str | None = None


class PractitionerCreate(PractitionerFields):
    fhir_id: str | None = None
    family_name: str = Field(..., min_length=1)


class PractitionerUpdate(PractitionerFields):
    pass


class PractitionerRead(ResourceRead, PractitionerCreate):
    pass


# ---------------------------------------------------------------------------
# Patient – name, birth date and SSN are encrypted at rest
# ---------------------------------------------------------------------------

class PatientFields(BaseModel):
    name_family: str | None = None
    name_given: str | None = None
    birth_date: str | None = Field(None, pattern=ISO_DATE, description="ISO 8601 date (YYYY-MM-DD)")
    ssn: str | None = Field(None, pattern=r"^\d{3}-\d{2}-\d{4}$")
    gender: str | None = None
    active: bool | None = None
    phone: str | None = None
    email: str | None = None
    managing_organization_id: UUID | None = None


class PatientCreate(PatientFields):
    fhir_id: str | None = None
    mrn: str = Field(..., min_length=1, description="Medical Record Number")
    name_family: str = Field(..., min_length=1)


class PatientUpdate(PatientFields):
    pass


class PatientRead(ResourceRead, PatientCreate):
    pass
