from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field

from ehr.schemas.api import ChildRead, ResourceRead


# ---------------------------------------------------------------------------
# Coverage
# ---------------------------------------------------------------------------

class CoverageFields(BaseModel):
    status: str | None = None
    type_code: str | None = None
    subscriber_id: str | None = None
    subscriber_name: str | None = None
    relationship: str | None = None
    payor_org_id: UUID | None = None
    payor_name: str | None = None
    policy_number: str | None = None
    group_number: str | None = None
    plan_name: str | None = None
    member_id: str | None = None
    period_start: date | None = None
    period_end: date | None = None


class CoverageCreate(CoverageFields):
    fhir_id: str | None = None
    patient_id: UUID


class CoverageUpdate(CoverageFields):
    pass


class CoverageRead(ResourceRead, CoverageCreate):
    pass


# ---------------------------------------------------------------------------
# Claim
# ---------------------------------------------------------------------------

class ClaimFields(BaseModel):
    status: str | None = None
    type_code: str | None = None
    use_code: str | None = None
    encounter_id: UUID | None = None
    insurer_org_id: UUID | None = None
    provider_id: UUID | None = None
    coverage_id: UUID | None = None
    priority_code: str | None = None
    billable_period_start: date | None = None
    billable_period_end: date | None = None
    created_date: datetime | None = None
    total_amount: float | None = None
    currency: str | None = Field(None, min_length=3, max_length=3)
    place_of_service: str | None = None


class ClaimCreate(ClaimFields):
    fhir_id: str | None = None
    patient_id: UUID


class ClaimUpdate(ClaimFields):
    pass


class ClaimRead(ResourceRead, ClaimCreate):
    pass


# ---------------------------------------------------------------------------
# Claim lines – each ordered by ``sequence`` within its claim
# ---------------------------------------------------------------------------

class ClaimDiagnosisCreate(BaseModel):
    sequence: int = Field(..., ge=1)
    diagnosis_code_system: str | None = None
    diagnosis_code: str
    diagnosis_display: str | None = None
    type_code: str | None = None
    on_admission: bool | None = None


class ClaimDiagnosisRead(ChildRead, ClaimDiagnosisCreate):
    claim_id: UUID


class ClaimProcedureCreate(BaseModel):
    sequence: int = Field(..., ge=1)
    type_code: str | None = None
    date: datetime | None = None
    procedure_code_system: str | None = None
    procedure_code: str
    procedure_display: str | None = None


class ClaimProcedureRead(ChildRead, ClaimProcedureCreate):
    claim_id: UUID


class ClaimItemCreate(BaseModel):
    sequence: int = Field(..., ge=1)
    product_or_service_system: str | None = None
    product_or_service_code: str
    product_or_service_display: str | None = None
    serviced_date: date | None = None
    quantity_value: float | None = None
    unit_price: float | None = None
    net_amount: float | None = None
    currency: str | None = None
    revenue_code: str | None = None
    encounter_id: UUID | None = None
    note: str | None = None


class ClaimItemRead(ChildRead, ClaimItemCreate):
    claim_id: UUID
