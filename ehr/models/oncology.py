"""Cancer diagnoses, their treatment protocols and chemotherapy cycles."""

from sqlalchemy import (
    Column,
    Date,
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


class CancerDiagnosis(ResourceMixin, Base):
    __tablename__ = "cancer_diagnosis"

    patient_id = Column(Uuid, ForeignKey("patient.id"), nullable=False)
    diagnosis_date = Column(Date, nullable=False)
    cancer_type = Column(String(100))
    cancer_site = Column(String(100))
    histology_code = Column(String(30))
    histology_display = Column(String(255))
    staging_system = Column(String(30), comment="AJCC | FIGO | Ann Arbor | ...")
    stage_group = Column(String(20))
    t_stage = Column(String(10))
    n_stage = Column(String(10))
    m_stage = Column(String(10))
    grade = Column(String(20))
    laterality = Column(String(20))
    current_status = Column(String(30), nullable=False)
    diagnosing_provider_id = Column(Uuid, ForeignKey("practitioner.id"))
    icd10_code = Column(String(10))
    icd10_display = Column(String(255))
    note = Column(Text)

    __table_args__ = (Index("ix_cancer_diagnosis_patient", "patient_id"),)


class TreatmentProtocol(ResourceMixin, Base):
    __tablename__ = "treatment_protocol"

    cancer_diagnosis_id = Column(
        Uuid, ForeignKey("cancer_diagnosis.id", ondelete="CASCADE"), nullable=False
    )
    protocol_name = Column(String(255), nullable=False)
    protocol_code = Column(String(50))
    protocol_type = Column(String(30), comment="chemotherapy | radiation | immunotherapy | ...")
    intent = Column(String(30), comment="curative | palliative | adjuvant | neoadjuvant")
    number_of_cycles = Column(Integer)
    cycle_length_days = Column(Integer)
    start_date = Column(Date)
    end_date = Column(Date)
    status = Column(String(30), nullable=False)
    prescribing_provider_id = Column(Uuid, ForeignKey("practitioner.id"))
    clinical_trial_id = Column(String(50))
    note = Column(Text)


class ChemoCycle(ChildMixin, Base):
    __tablename__ = "chemotherapy_cycle"

    protocol_id = Column(Uuid, ForeignKey("treatment_protocol.id", ondelete="CASCADE"), nullable=False)
    cycle_number = Column(Integer, nullable=False)
    planned_start_date = Column(Date)
    actual_start_date = Column(Date)
    actual_end_date = Column(Date)
    status = Column(String(30), nullable=False)
    dose_reduction_pct = Column(Float)
    dose_reduction_reason = Column(Text)
    delay_days = Column(Integer)
    bsa_m2 = Column(Float)
    weight_kg = Column(Float)
    provider_id = Column(Uuid, ForeignKey("practitioner.id"))
    note = Column(Text)

    __table_args__ = (UniqueConstraint("protocol_id", "cycle_number", name="uq_chemo_cycle_number"),)
