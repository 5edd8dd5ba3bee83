"""
Diagnostic ordering: orders (ServiceRequest), what was collected (Specimen),
what was reported (DiagnosticReport) and imaging (ImagingStudy).
"""

from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, String, Text, Uuid

from ehr.models.database import Base, ChildMixin, ResourceMixin, utcnow


class ServiceRequest(ResourceMixin, Base):
    __tablename__ = "service_request"

    patient_id = Column(Uuid, ForeignKey("patient.id"), nullable=False)
    encounter_id = Column(Uuid, ForeignKey("encounter.id"))
    requester_id = Column(Uuid, ForeignKey("practitioner.id"), nullable=False)
    performer_id = Column(Uuid, ForeignKey("practitioner.id"))

    status = Column(String(30), nullable=False)
    intent = Column(String(30), nullable=False)
    priority = Column(String(20), comment="routine | urgent | asap | stat")
    category_code = Column(String(50))
    category_display = Column(String(255))
    code_system = Column(String(255))
    code_value = Column(String(50), nullable=False)
    code_display = Column(String(255))
    quantity_value = Column(Float)
    quantity_unit = Column(String(30))
    occurrence_datetime = Column(DateTime(timezone=True))
    authored_on = Column(DateTime(timezone=True))
    reason_code = Column(String(50))
    reason_display = Column(String(255))
    body_site_code = Column(String(50))
    note = Column(Text)
    patient_instruction = Column(Text)

    __table_args__ = (
        Index("ix_service_request_patient", "patient_id"),
        Index("ix_service_request_status", "status"),
    )


class OrderStatusHistory(ChildMixin, Base):
    """One row per validated status transition of an order."""

    __tablename__ = "order_status_history"

    resource_type = Column(String(50), nullable=False)
    resource_id = Column(Uuid, ForeignKey("service_request.id", ondelete="CASCADE"), nullable=False)
    from_status = Column(String(30), nullable=False)
    to_status = Column(String(30), nullable=False)
    changed_by = Column(String(255))
    reason = Column(Text)
    changed_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (Index("ix_order_status_history_resource", "resource_type", "resource_id"),)


class Specimen(ResourceMixin, Base):
    __tablename__ = "specimen"

    patient_id = Column(Uuid, ForeignKey("patient.id"), nullable=False)
    request_id = Column(Uuid, ForeignKey("service_request.id"))
    accession_id = Column(String(64))
    status = Column(String(30), nullable=False)
    type_code = Column(String(50))
    type_display = Column(String(255))
    received_time = Column(DateTime(timezone=True))
    collection_collector_id = Column(Uuid, ForeignKey("practitioner.id"))
    collection_datetime = Column(DateTime(timezone=True))
    collection_quantity = Column(Float)
    collection_unit = Column(String(30))
    collection_method = Column(String(50))
    collection_body_site = Column(String(50))
    condition_code = Column(String(50))
    note = Column(Text)

    __table_args__ = (Index("ix_specimen_patient", "patient_id"),)


class DiagnosticReport(ResourceMixin, Base):
    __tablename__ = "diagnostic_report"

    patient_id = Column(Uuid, ForeignKey("patient.id"), nullable=False)
    encounter_id = Column(Uuid, ForeignKey("encounter.id"))
    performer_id = Column(Uuid, ForeignKey("practitioner.id"))
    service_request_id = Column(Uuid, ForeignKey("service_request.id"))
    specimen_id = Column(Uuid, ForeignKey("specimen.id"))

    status = Column(String(30), nullable=False)
    category_code = Column(String(50))
    category_display = Column(String(255))
    code_system = Column(String(255))
    code_value = Column(String(50), nullable=False)
    code_display = Column(String(255))
    effective_datetime = Column(DateTime(timezone=True))
    issued = Column(DateTime(timezone=True))
    conclusion = Column(Text)
    conclusion_code = Column(String(50))
    presented_form_url = Column(Text)

    __table_args__ = (Index("ix_diagnostic_report_patient", "patient_id"),)


class ImagingStudy(ResourceMixin, Base):
    __tablename__ = "imaging_study"

    patient_id = Column(Uuid, ForeignKey("patient.id"), nullable=False)
    encounter_id = Column(Uuid, ForeignKey("encounter.id"))
    referrer_id = Column(Uuid, ForeignKey("practitioner.id"))
    service_request_id = Column(Uuid, ForeignKey("service_request.id"))

    status = Column(String(30), nullable=False)
    modality_code = Column(String(10), comment="DICOM modality, e.g. CT, MR, US")
    modality_display = Column(String(100))
    study_uid = Column(String(128), comment="DICOM Study Instance UID")
    accession_number = Column(String(64))
    description = Column(Text)
    number_of_series = Column(Integer)
    number_of_instances = Column(Integer)
    started = Column(DateTime(timezone=True))
    reason_code = Column(String(50))
    endpoint = Column(Text, comment="DICOMweb endpoint")
    note = Column(Text)

    __table_args__ = (Index("ix_imaging_study_patient", "patient_id"),)
