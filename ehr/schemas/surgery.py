from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field

from ehr.schemas.api import ChildRead, ResourceRead


class SurgicalCaseFields(BaseModel):
    encounter_id: UUID | None = None
    primary_surgeon_id: UUID | None = None
    anesthesiologist_id: UUID | None = None
    status: str | None = None
    case_class: str | None = None
    asa_class: str | None = None
    wound_class: str | None = None
    scheduled_date: date | None = None
    scheduled_start: datetime | None = None
    scheduled_end: datetime | None = None
    actual_start: datetime | None = None
    actual_end: datetime | None = None
    anesthesia_type: str | None = None
    laterality: str | None = None
    pre_op_diagnosis: str | None = None
    post_op_diagnosis: str | None = None
    cancel_reason: str | None = None
    note: str | None = None


class SurgicalCaseCreate(SurgicalCaseFields):
    fhir_id: str | None = None
    patient_id: UUID
    primary_surgeon_id: UUID
    scheduled_date: date


class SurgicalCaseUpdate(SurgicalCaseFields):
    pass


class SurgicalCaseRead(ResourceRead, SurgicalCaseCreate):
    pass


# ---------------------------------------------------------------------------
# Case children: procedures, team and intra-operative time events
# ---------------------------------------------------------------------------

class SurgicalProcedureCreate(BaseModel):
    procedure_code: str
    procedure_display: str
    code_system: str | None = None
    cpt_code: str | None = None
    is_primary: bool = False
    body_site_code: str | None = None
    body_site_display: str | None = None
    sequence: int | None = Field(None, ge=1)


class SurgicalProcedureRead(ChildRead, SurgicalProcedureCreate):
    surgical_case_id: UUID


class SurgicalTeamMemberCreate(BaseModel):
    practitioner_id: UUID
    role: str
    role_display: str | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None


class SurgicalTeamMemberRead(ChildRead, SurgicalTeamMemberCreate):
    surgical_case_id: UUID


class SurgicalTimeEventCreate(BaseModel):
    event_type: str
    event_time: datetime
    recorded_by: UUID | None = None
    note: str | None = None


class SurgicalTimeEventRead(ChildRead, SurgicalTimeEventCreate):
    surgical_case_id: UUID
