from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text, Uuid

from ehr.models.database import Base, ChildMixin, ResourceMixin


class Consent(ResourceMixin, Base):
    __tablename__ = "consent"

    status = Column(String(30), nullable=False)
    scope = Column(String(30), comment="adr | research | patient-privacy | treatment")
    category_code = Column(String(50))
    category_display = Column(String(255))
    patient_id = Column(Uuid, ForeignKey("patient.id"), nullable=False)
    performer_id = Column(Uuid, ForeignKey("practitioner.id"))
    organization_id = Column(Uuid, ForeignKey("organization.id"))
    policy_authority = Column(String(255))
    policy_uri = Column(Text)
    provision_type = Column(String(10), comment="deny | permit")
    provision_start = Column(DateTime(timezone=True))
    provision_end = Column(DateTime(timezone=True))
    hipaa_authorization = Column(Boolean)
    date_time = Column(DateTime(timezone=True))
    note = Column(Text)

    __table_args__ = (Index("ix_consent_patient", "patient_id"),)


class DocumentReference(ResourceMixin, Base):
    __tablename__ = "document_reference"

    status = Column(String(30), nullable=False)
    doc_status = Column(String(30), comment="preliminary | final | amended")
    type_code = Column(String(50))
    type_display = Column(String(255))
    category_code = Column(String(50))
    patient_id = Column(Uuid, ForeignKey("patient.id"), nullable=False)
    encounter_id = Column(Uuid, ForeignKey("encounter.id"))
    author_id = Column(Uuid, ForeignKey("practitioner.id"))
    custodian_id = Column(Uuid, ForeignKey("organization.id"))
    date = Column(DateTime(timezone=True))
    description = Column(Text)
    content_type = Column(String(100))
    attachment_url = Column(Text)
    attachment_title = Column(String(255))

    __table_args__ = (Index("ix_document_reference_patient", "patient_id"),)


class Composition(ResourceMixin, Base):
    __tablename__ = "composition"

    status = Column(String(30), nullable=False)
    type_code = Column(String(50))
    type_display = Column(String(255))
    category_code = Column(String(50))
    category_display = Column(String(255))
    patient_id = Column(Uuid, ForeignKey("patient.id"), nullable=False)
    encounter_id = Column(Uuid, ForeignKey("encounter.id"))
    date = Column(DateTime(timezone=True))
    author_id = Column(Uuid, ForeignKey("practitioner.id"))
    title = Column(String(255))
    confidentiality = Column(String(10))
    custodian_id = Column(Uuid, ForeignKey("organization.id"))

    __table_args__ = (Index("ix_composition_patient", "patient_id"),)


class CompositionSection(ChildMixin, Base):
    __tablename__ = "composition_section"

    composition_id = Column(Uuid, ForeignKey("composition.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(255))
    code_value = Column(String(50))
    code_display = Column(String(255))
    text_status = Column(String(20))
    text_div = Column(Text)
    mode = Column(String(20))
    entry_reference = Column(Text)
    sort_order = Column(Integer, nullable=False, default=0)
