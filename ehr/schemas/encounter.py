from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from ehr.schemas.api import ResourceRead


class EncounterFields(BaseModel):
    status: str | None = None
    class_code: str | None = None
    class_display: str | None = None
    type_code: str | None = None
    type_display: str | None = None
    service_type_code: str | None = None
    priority_code: str | None = None
    primary_practitioner_id: UUID | None = None
    service_provider_id: UUID | None = None
    period_start: datetime | None = None
    period_end: datetime | None = None
    length_minutes: int | None = None
    discharge_disposition_code: str | None = None
    is_telehealth: bool | None = None
    reason_text: str | None = None


class EncounterCreate(EncounterFields):
    fhir_id: str | None = None
    patient_id: UUID
    class_code: str
    period_start: datetime


class EncounterUpdate(EncounterFields):
    pass


class EncounterRead(ResourceRead, EncounterCreate):
    pass
