from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field

from ehr.schemas.api import ResourceRead


class InboxMessageFields(BaseModel):
    message_type: str | None = None
    priority: str | None = None
    subject: str | None = None
    body: str | None = None
    patient_id: UUID | None = None
    encounter_id: UUID | None = None
    recipient_id: UUID | None = None
    status: str | None = None
    is_urgent: bool | None = None
    due_date: date | None = None
    read_at: datetime | None = None
    completed_at: datetime | None = None


class InboxMessageCreate(InboxMessageFields):
    fhir_id: str | None = None
    message_type: str = Field(..., min_length=1)
    subject: str = Field(..., min_length=1)
    sender_id: UUID | None = None
    parent_id: UUID | None = None
    thread_id: UUID | None = None


class InboxMessageUpdate(InboxMessageFields):
    pass


class InboxMessageRead(ResourceRead, InboxMessageCreate):
    pass
