from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from ehr.schemas.api import ChildRead, ResourceRead


class VisionPrescriptionFields(BaseModel):
    status: str | None = None
    encounter_id: UUID | None = None
    prescriber_id: UUID | None = None
    date_written: datetime | None = None


class VisionPrescriptionCreate(VisionPrescriptionFields):
    fhir_id: str | None = None
    patient_id: UUID


class VisionPrescriptionUpdate(VisionPrescriptionFields):
    pass


class VisionPrescriptionRead(ResourceRead, VisionPrescriptionCreate):
    pass


class LensSpecificationCreate(BaseModel):
    product_code: str
    product_display: str | None = None
    eye: str
    sphere: float | None = None
    cylinder: float | None = None
    axis: int | None = None
    prism_amount: float | None = None
    prism_base: str | None = None
    add_power: float | None = None
    power: float | None = None
    back_curve: float | None = None
    diameter: float | None = None
    color: str | None = None
    brand: str | None = None
    note: str | None = None


class LensSpecificationRead(ChildRead, LensSpecificationCreate):
    prescription_id: UUID
