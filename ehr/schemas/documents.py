from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from ehr.schemas.api import ChildRead, ResourceRead


# ---------------------------------------------------------------------------
# Consent
# ---------------------------------------------------------------------------

class ConsentFields(BaseModel):
    status: str | None = None
    scope: str | None = None
    category_code: str | None = None
    category_display: str | None = None
    performer_id: UUID | None = None
    organization_id: UUID | None = None
    policy_authority: str | None = None
    policy_uri: str | None = None
    provision_type: str | None = None
    provision_start: datetime | None = None
    provision_end: datetime | None = None
    hipaa_authorization: bool | None = None
    date_time: datetime | None = None
    note: str | None = None


class ConsentCreate(ConsentFields):
    fhir_id: str | None = None
    patient_id: UUID


class ConsentUpdate(ConsentFields):
    pass


class ConsentRead(ResourceRead, ConsentCreate):
    pass


# ---------------------------------------------------------------------------
# DocumentReference
# ---------------------------------------------------------------------------

class DocumentReferenceFields(BaseModel):
    status: str | None = None
    doc_status: str | None = None
    type_code: str | None = None
    type_display: str | None = None
    category_code: str | None = None
    encounter_id: UUID | None = None
    author_id: UUID | None = None
    custodian_id: UUID | None = None
    date: datetime | None = None
    description: str | None = None
    content_type: str | None = None
    attachment_url: str | None = None
    attachment_title: str | None = None


class DocumentReferenceCreate(DocumentReferenceFields):
    fhir_id: str | None = None
    patient_id: UUID


class DocumentReferenceUpdate(DocumentReferenceFields):
    pass


class DocumentReferenceRead(ResourceRead, DocumentReferenceCreate):
    pass


# ---------------------------------------------------------------------------
# Composition and its sections
# ---------------------------------------------------------------------------

class CompositionFields(BaseModel):
    status: str | None = None
    type_code: str | None = None
    type_display: str | None = None
    category_code: str | None = None
    category_display: str | None = None
    encounter_id: UUID | None = None
    date: datetime | None = None
    author_id: UUID | None = None
    title: str | None = None
    confidentiality: str | None = None
    custodian_id: UUID | None = None


class CompositionCreate(CompositionFields):
    fhir_id: str | None = None
    patient_id: UUID


class CompositionUpdate(CompositionFields):
    pass


class CompositionRead(ResourceRead, CompositionCreate):
    pass


class CompositionSectionCreate(BaseModel):
    title: str | None = None
    code_value: str | None = None
    code_display: str | None = None
    text_status: str | None = None
    text_div: str | None = None
    mode: str | None = None
    entry_reference: str | None = None
    sort_order: int | None = None


class CompositionSectionRead(ChildRead, CompositionSectionCreate):
    composition_id: UUID
