from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from ehr.schemas.api import ResourceRead


# ---------------------------------------------------------------------------
# ServiceRequest
# ---------------------------------------------------------------------------

class ServiceRequestFields(BaseModel):
    encounter_id: UUID | None = None
    performer_id: UUID | None = None
    status: str | None = None
    intent: str | None = None
    priority: str | None = None
    category_code: str | None = None
    category_display: str | None = None
    code_system: str | None = None
    code_value: str | None = None
    code_display: str | None = None
    quantity_value: float | None = None
    quantity_unit: str | None = None
    occurrence_datetime: datetime | None = None
    authored_on: datetime | None = None
    reason_code: str | None = None
    reason_display: str | None = None
    body_site_code: str | None = None
    note: str | None = None
    patient_instruction: str | None = None


class ServiceRequestCreate(ServiceRequestFields):
    fhir_id: str | None = None
    patient_id: UUID
    requester_id: UUID
    code_value: str


class ServiceRequestUpdate(ServiceRequestFields):
    pass


class ServiceRequestRead(ResourceRead, ServiceRequestCreate):
    pass


# ---------------------------------------------------------------------------
# Specimen
# ---------------------------------------------------------------------------

class SpecimenFields(BaseModel):
    request_id: UUID | None = None
    accession_id: str | None = None
    status: str | None = None
    type_code: str | None = None
    type_display: str | None = None
    received_time: datetime | None = None
    collection_collector_id: UUID | None = None
    collection_datetime: datetime | None = None
    collection_quantity: float | None = None
    collection_unit: str | None = None
    collection_method: str | None = None
    collection_body_site: str | None = None
    condition_code: str | None = None
    note: str | None = None


class SpecimenCreate(SpecimenFields):
    fhir_id: str | None = None
    patient_id: UUID


class SpecimenUpdate(SpecimenFields):
    pass


class SpecimenRead(ResourceRead, SpecimenCreate):
    pass


# ---------------------------------------------------------------------------
# DiagnosticReport
# ---------------------------------------------------------------------------

class DiagnosticReportFields(BaseModel):
    encounter_id: UUID | None = None
    performer_id: UUID | None = None
    service_request_id: UUID | None = None
    specimen_id: UUID | None = None
    status: str | None = None
    category_code: str | None = None
    category_display: str | None = None
    code_system: str | None = None
    code_value: str | None = None
    code_display: str | None = None
    effective_datetime: datetime | None = None
    issued: datetime | None = None
    conclusion: str | None = None
    conclusion_code: str | None = None
    presented_form_url: str | None = None


class DiagnosticReportCreate(DiagnosticReportFields):
    fhir_id: str | None = None
    patient_id: UUID
    code_value: str


class DiagnosticReportUpdate(DiagnosticReportFields):
    pass


class DiagnosticReportRead(ResourceRead, DiagnosticReportCreate):
    pass


# ---------------------------------------------------------------------------
# ImagingStudy
# ---------------------------------------------------------------------------

class ImagingStudyFields(BaseModel):
    encounter_id: UUID | None = None
    referrer_id: UUID | None = None
    service_request_id: UUID | None = None
    status: str | None = None
    modality_code: str | None = None
    modality_display: str | None = None
    study_uid: str | None = None
    accession_number: str | None = None
    description: str | None = None
    number_of_series: int | None = None
    number_of_instances: int | None = None
    started: datetime | None = None
    reason_code: str | None = None
    endpoint: str | None = None
    note: str | None = None


class ImagingStudyCreate(ImagingStudyFields):
    fhir_id: str | None = None
    patient_id: UUID


class ImagingStudyUpdate(ImagingStudyFields):
    pass


class ImagingStudyRead(ResourceRead, ImagingStudyCreate):
    pass
