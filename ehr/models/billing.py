"""Insurance coverage and claims, with claim lines kept in sequence order."""

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)

from ehr.models.database import Base, ChildMixin, ResourceMixin


class Coverage(ResourceMixin, Base):
    __tablename__ = "coverage"

    status = Column(String(30), nullable=False)
    type_code = Column(String(50))
    patient_id = Column(Uuid, ForeignKey("patient.id"), nullable=False)
    subscriber_id = Column(String(64))
    subscriber_name = Column(String(255))
    relationship = Column(String(30), comment="self | spouse | child | other")
    payor_org_id = Column(Uuid, ForeignKey("organization.id"))
    payor_name = Column(String(255))
    policy_number = Column(String(64))
    group_number = Column(String(64))
    plan_name = Column(String(255))
    member_id = Column(String(64))
    period_start = Column(Date)
    period_end = Column(Date)

    __table_args__ = (Index("ix_coverage_patient", "patient_id"),)


class Claim(ResourceMixin, Base):
    __tablename__ = "claim"

    status = Column(String(30), nullable=False)
    type_code = Column(String(50), comment="institutional | oral | pharmacy | professional | vision")
    use_code = Column(String(30), comment="claim | preauthorization | predetermination")
    patient_id = Column(Uuid, ForeignKey("patient.id"), nullable=False)
    encounter_id = Column(Uuid, ForeignKey("encounter.id"))
    insurer_org_id = Column(Uuid, ForeignKey("organization.id"))
    provider_id = Column(Uuid, ForeignKey("practitioner.id"))
    coverage_id = Column(Uuid, ForeignKey("coverage.id"))
    priority_code = Column(String(20))
    billable_period_start = Column(Date)
    billable_period_end = Column(Date)
    created_date = Column(DateTime(timezone=True))
    total_amount = Column(Float)
    currency = Column(String(3))
    place_of_service = Column(String(10))

    __table_args__ = (Index("ix_claim_patient", "patient_id"),)


class ClaimDiagnosis(ChildMixin, Base):
    __tablename__ = "claim_diagnosis"

    claim_id = Column(Uuid, ForeignKey("claim.id", ondelete="CASCADE"), nullable=False)
    sequence = Column(Integer, nullable=False)
    diagnosis_code_system = Column(String(255))
    diagnosis_code = Column(String(30), nullable=False)
    diagnosis_display = Column(String(255))
    type_code = Column(String(30), comment="principal | admitting | discharge | ...")
    on_admission = Column(Boolean)

    __table_args__ = (UniqueConstraint("claim_id", "sequence", name="uq_claim_diagnosis_sequence"),)


class ClaimProcedure(ChildMixin, Base):
    __tablename__ = "claim_procedure"

    claim_id = Column(Uuid, ForeignKey("claim.id", ondelete="CASCADE"), nullable=False)
    sequence = Column(Integer, nullable=False)
    type_code = Column(String(30))
    date = Column(DateTime(timezone=True))
    procedure_code_system = Column(String(255))
    procedure_code = Column(String(30), nullable=False)
    procedure_display = Column(String(255))

    __table_args__ = (UniqueConstraint("claim_id", "sequence", name="uq_claim_procedure_sequence"),)


class ClaimItem(ChildMixin, Base):
    __tablename__ = "claim_item"

    claim_id = Column(Uuid, ForeignKey("claim.id", ondelete="CASCADE"), nullable=False)
    sequence = Column(Integer, nullable=False)
    product_or_service_system = Column(String(255))
    product_or_service_code = Column(String(30), nullable=False)
    product_or_service_display = Column(String(255))
    serviced_date = Column(Date)
    quantity_value = Column(Float)
    unit_price = Column(Float)
    net_amount = Column(Float)
    currency = Column(String(3))
    revenue_code = Column(String(10))
    encounter_id = Column(Uuid, ForeignKey("encounter.id"))
    note = Column(Text)

    __table_args__ = (UniqueConstraint("claim_id", "sequence", name="uq_claim_item_sequence"),)
