from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, String, Text, Uuid

from ehr.models.database import Base, ChildMixin, ResourceMixin


class VisionPrescription(ResourceMixin, Base):
    __tablename__ = "vision_prescription"

    status = Column(String(20), nullable=False)
    patient_id = Column(Uuid, ForeignKey("patient.id"), nullable=False)
    encounter_id = Column(Uuid, ForeignKey("encounter.id"))
    prescriber_id = Column(Uuid, ForeignKey("practitioner.id"))
    date_written = Column(DateTime(timezone=True))

    __table_args__ = (Index("ix_vision_prescription_patient", "patient_id"),)


class LensSpecification(ChildMixin, Base):
    __tablename__ = "vision_prescription_lensspec"

    prescription_id = Column(
        Uuid, ForeignKey("vision_prescription.id", ondelete="CASCADE"), nullable=False
    )
    product_code = Column(String(30), nullable=False, comment="lens | contact")
    product_display = Column(String(100))
    eye = Column(String(5), nullable=False, comment="right | left")
    sphere = Column(Float)
    cylinder = Column(Float)
    axis = Column(Integer)
    prism_amount = Column(Float)
    prism_base = Column(String(5), comment="up | down | in | out")
    add_power = Column(Float)
    power = Column(Float)
    back_curve = Column(Float)
    diameter = Column(Float)
    color = Column(String(50))
    brand = Column(String(100))
    note = Column(Text)
