from __future__ import annotations

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field

from ehr.schemas.api import ChildRead, ResourceRead


# ---------------------------------------------------------------------------
# CancerDiagnosis
# ---------------------------------------------------------------------------

class CancerDiagnosisFields(BaseModel):
    diagnosis_date: date | None = None
    cancer_type: str | None = None
    cancer_site: str | None = None
    histology_code: str | None = None
    histology_display: str | None = None
    staging_system: str | None = None
    stage_group: str | None = None
    t_stage: str | None = None
    n_stage: str | None = None
    m_stage: str | None = None
    grade: str | None = None
    laterality: str | None = None
    current_status: str | None = None
    diagnosing_provider_id: UUID | None = None
    icd10_code: str | None = None
    icd10_display: str | None = None
    note: str | None = None


class CancerDiagnosisCreate(CancerDiagnosisFields):
    fhir_id: str | None = None
    patient_id: UUID
    diagnosis_date: date


class CancerDiagnosisUpdate(CancerDiagnosisFields):
    pass


class CancerDiagnosisRead(ResourceRead, CancerDiagnosisCreate):
    pass


# ---------------------------------------------------------------------------
# TreatmentProtocol and its chemotherapy cycles
# ---------------------------------------------------------------------------

class TreatmentProtocolFields(BaseModel):
    protocol_name: str | None = None
    protocol_code: str | None = None
    protocol_type: str | None = None
    intent: str | None = None
    number_of_cycles: int | None = None
    cycle_length_days: int | None = None
    start_date: date | None = None
    end_date: date | None = None
    status: str | None = None
    prescribing_provider_id: UUID | None = None
    clinical_trial_id: str | None = None
    note: str | None = None


class TreatmentProtocolCreate(TreatmentProtocolFields):
    fhir_id: str | None = None
    cancer_diagnosis_id: UUID
    protocol_name: str = Field(..., min_length=1)


class TreatmentProtocolUpdate(TreatmentProtocolFields):
    pass


class TreatmentProtocolRead(ResourceRead, TreatmentProtocolCreate):
    pass


class ChemoCycleCreate(BaseModel):
    cycle_number: int = Field(..., ge=1)
    planned_start_date: date | None = None
    actual_start_date: date | None = None
    actual_end_date: date | None = None
    status: str | None = None
    dose_reduction_pct: float | None = None
    dose_reduction_reason: str | None = None
    delay_days: int | None = None
    bsa_m2: float | None = None
    weight_kg: float | None = None
    provider_id: UUID | None = None
    note: str | None = None


class ChemoCycleRead(ChildRead, ChemoCycleCreate):
    protocol_id: UUID
