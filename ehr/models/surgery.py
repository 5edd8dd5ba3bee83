from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Index, Integer, String, Text, Uuid

from ehr.models.database import Base, ChildMixin, ResourceMixin


class SurgicalCase(ResourceMixin, Base):
    __tablename__ = "surgical_case"

    patient_id = Column(Uuid, ForeignKey("patient.id"), nullable=False)
    encounter_id = Column(Uuid, ForeignKey("encounter.id"))
    primary_surgeon_id = Column(Uuid, ForeignKey("practitioner.id"), nullable=False)
    anesthesiologist_id = Column(Uuid, ForeignKey("practitioner.id"))
    status = Column(String(20), nullable=False)
    case_class = Column(String(30), comment="elective | urgent | emergent")
    asa_class = Column(String(10))
    wound_class = Column(String(30))
    scheduled_date = Column(Date, nullable=False)
    scheduled_start = Column(DateTime(timezone=True))
    scheduled_end = Column(DateTime(timezone=True))
    actual_start = Column(DateTime(timezone=True))
    actual_end = Column(DateTime(timezone=True))
    anesthesia_type = Column(String(30))
    laterality = Column(String(20))
    pre_op_diagnosis = Column(Text)
    post_op_diagnosis = Column(Text)
    cancel_reason = Column(Text)
    note = Column(Text)

    __table_args__ = (Index("ix_surgical_case_patient", "patient_id"),)


class SurgicalProcedure(ChildMixin, Base):
    __tablename__ = "surgical_case_procedure"

    surgical_case_id = Column(Uuid, ForeignKey("surgical_case.id", ondelete="CASCADE"), nullable=False)
    procedure_code = Column(String(30), nullable=False)
    procedure_display = Column(String(500), nullable=False)
    code_system = Column(String(255))
    cpt_code = Column(String(10))
    is_primary = Column(Boolean, default=False, nullable=False)
    body_site_code = Column(String(30))
    body_site_display = Column(String(255))
    sequence = Column(Integer, nullable=False, default=1)


class SurgicalTeamMember(ChildMixin, Base):
    __tablename__ = "surgical_case_team"

    surgical_case_id = Column(Uuid, ForeignKey("surgical_case.id", ondelete="CASCADE"), nullable=False)
    practitioner_id = Column(Uuid, ForeignKey("practitioner.id"), nullable=False)
    role = Column(String(50), nullable=False)
    role_display = Column(String(100))
    start_time = Column(DateTime(timezone=True))
    end_time = Column(DateTime(timezone=True))


class SurgicalTimeEvent(ChildMixin, Base):
    __tablename__ = "surgical_time_event"

    surgical_case_id = Column(Uuid, ForeignKey("surgical_case.id", ondelete="CASCADE"), nullable=False)
    event_type = Column(String(50), nullable=False, comment="in-room | incision | closure | out-of-room | ...")
    event_time = Column(DateTime(timezone=True), nullable=False)
    recorded_by = Column(Uuid, ForeignKey("practitioner.id"))
    note = Column(Text)
