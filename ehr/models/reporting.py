from sqlalchemy import Column, Date, ForeignKey, Index, String, Uuid

from ehr.models.database import Base, JSONType, ResourceMixin


class MeasureReport(ResourceMixin, Base):
    __tablename__ = "measure_report"

    status = Column(String(20), nullable=False, comment="complete | pending | error")
    type = Column(String(20), comment="individual | subject-list | summary | data-collection")
    measure_id = Column(String(100), nullable=False)
    measure_name = Column(String(255))
    patient_id = Column(Uuid, ForeignKey("patient.id"))
    reporter_id = Column(Uuid, ForeignKey("organization.id"))
    period_start = Column(Date)
    period_end = Column(Date)
    results = Column(JSONType, comment="Population counts and measure score")

    __table_args__ = (Index("ix_measure_report_measure", "measure_id"),)
