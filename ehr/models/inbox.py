from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Index, String, Text, Uuid

from ehr.models.database import Base, ResourceMixin


class InboxMessage(ResourceMixin, Base):
    __tablename__ = "inbox_message"

    message_type = Column(String(30), nullable=False, comment="result | refill | patient-message | task | ...")
    priority = Column(String(20), nullable=False)
    subject = Column(String(255), nullable=False)
    body = Column(Text)
    patient_id = Column(Uuid, ForeignKey("patient.id"))
    encounter_id = Column(Uuid, ForeignKey("encounter.id"))
    sender_id = Column(Uuid, ForeignKey("practitioner.id"))
    recipient_id = Column(Uuid, ForeignKey("practitioner.id"))
    status = Column(String(20), nullable=False)
    parent_id = Column(Uuid, ForeignKey("inbox_message.id"))
    thread_id = Column(Uuid)
    is_urgent = Column(Boolean, default=False, nullable=False)
    due_date = Column(Date)
    read_at = Column(DateTime(timezone=True))
    completed_at = Column(DateTime(timezone=True))

    __table_args__ = (
        Index("ix_inbox_message_recipient", "recipient_id"),
        Index("ix_inbox_message_thread", "thread_id"),
    )
