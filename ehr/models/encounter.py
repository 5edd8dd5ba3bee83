from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text, Uuid

from ehr.models.database import Base, ResourceMixin


class Encounter(ResourceMixin, Base):
    __tablename__ = "encounter"

    status = Column(String(30), nullable=False)
    class_code = Column(String(30), nullable=False, comment="AMB | EMER | IMP | SS | VR | HH | ...")
    class_display = Column(String(100))
    type_code = Column(String(50))
    type_display = Column(String(255))
    service_type_code = Column(String(30))
    priority_code = Column(String(20), comment="R | EM | UR | EL")

    patient_id = Column(Uuid, ForeignKey("patient.id"), nullable=False)
    primary_practitioner_id = Column(Uuid, ForeignKey("practitioner.id"))
    service_provider_id = Column(Uuid, ForeignKey("organization.id"))

    period_start = Column(DateTime(timezone=True), nullable=False)
    period_end = Column(DateTime(timezone=True))
    length_minutes = Column(Integer)
    discharge_disposition_code = Column(String(30))
    is_telehealth = Column(Boolean, default=False)
    reason_text = Column(Text)

    __table_args__ = (Index("ix_encounter_patient", "patient_id"),)
