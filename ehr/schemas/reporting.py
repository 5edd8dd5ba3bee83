from __future__ import annotations

from datetime import date
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from ehr.schemas.api import ResourceRead


class MeasureReportFields(BaseModel):
    status: str | None = None
    type: str | None = None
    measure_name: str | None = None
    reporter_id: UUID | None = None
    period_start: date | None = None
    period_end: date | None = None
    results: dict[str, Any] | None = None


class MeasureReportCreate(MeasureReportFields):
    fhir_id: str | None = None
    measure_id: str
    patient_id: UUID | None = None


class MeasureReportUpdate(MeasureReportFields):
    pass


class MeasureReportRead(ResourceRead, MeasureReportCreate):
    pass
