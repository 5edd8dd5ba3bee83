from enum import Enum

from sqlalchemy.orm import Session

from ehr.models.diagnostics import (
    DiagnosticReport,
    ImagingStudy,
    OrderStatusHistory,
    ServiceRequest,
    Specimen,
)
from ehr.repositories.base import ChildCollection, PatientScopedRepository
from ehr.repositories.search import SearchKind, SearchParam


class ServiceRequestFilter(str, Enum):
    PATIENT = "patient"
    ENCOUNTER = "encounter"
    REQUESTER = "requester"
    STATUS = "status"
    INTENT = "intent"
    PRIORITY = "priority"
    CATEGORY = "category"
    CODE = "code"
    AUTHORED = "authored"


class ServiceRequestRepository(PatientScopedRepository[ServiceRequest]):
    model = ServiceRequest
    filters = ServiceRequestFilter
    search_params = {
        ServiceRequestFilter.PATIENT: SearchParam(ServiceRequest.patient_id, SearchKind.REFERENCE),
        ServiceRequestFilter.ENCOUNTER: SearchParam(ServiceRequest.encounter_id, SearchKind.REFERENCE),
        ServiceRequestFilter.REQUESTER: SearchParam(ServiceRequest.requester_id, SearchKind.REFERENCE),
        ServiceRequestFilter.STATUS: SearchParam(ServiceRequest.status),
        ServiceRequestFilter.INTENT: SearchParam(ServiceRequest.intent),
        ServiceRequestFilter.PRIORITY: SearchParam(ServiceRequest.priority),
        ServiceRequestFilter.CATEGORY: SearchParam(ServiceRequest.category_code),
        ServiceRequestFilter.CODE: SearchParam(ServiceRequest.code_value),
        ServiceRequestFilter.AUTHORED: SearchParam(ServiceRequest.authored_on, SearchKind.DATE),
    }

    def __init__(self, session: Session):
        super().__init__(session)
        self.status_history = ChildCollection(
            session, OrderStatusHistory, "resource_id", order_by=(OrderStatusHistory.changed_at,)
        )
        self.children["status-history"] = self.status_history


class SpecimenFilter(str, Enum):
    PATIENT = "patient"
    STATUS = "status"
    TYPE = "type"
    ACCESSION = "accession"
    REQUEST = "request"
    COLLECTED = "collected"


class SpecimenRepository(PatientScopedRepository[Specimen]):
    model = Specimen
    filters = SpecimenFilter
    search_params = {
        SpecimenFilter.PATIENT: SearchParam(Specimen.patient_id, SearchKind.REFERENCE),
        SpecimenFilter.STATUS: SearchParam(Specimen.status),
        SpecimenFilter.TYPE: SearchParam(Specimen.type_code),
        SpecimenFilter.ACCESSION: SearchParam(Specimen.accession_id),
        SpecimenFilter.REQUEST: SearchParam(Specimen.request_id, SearchKind.REFERENCE),
        SpecimenFilter.COLLECTED: SearchParam(Specimen.collection_datetime, SearchKind.DATE),
    }


class DiagnosticReportFilter(str, Enum):
    PATIENT = "patient"
    ENCOUNTER = "encounter"
    STATUS = "status"
    CATEGORY = "category"
    CODE = "code"
    BASED_ON = "based-on"
    DATE = "date"


class DiagnosticReportRepository(PatientScopedRepository[DiagnosticReport]):
    model = DiagnosticReport
    filters = DiagnosticReportFilter
    search_params = {
        DiagnosticReportFilter.PATIENT: SearchParam(DiagnosticReport.patient_id, SearchKind.REFERENCE),
        DiagnosticReportFilter.ENCOUNTER: SearchParam(DiagnosticReport.encounter_id, SearchKind.REFERENCE),
        DiagnosticReportFilter.STATUS: SearchParam(DiagnosticReport.status),
        DiagnosticReportFilter.CATEGORY: SearchParam(DiagnosticReport.category_code),
        DiagnosticReportFilter.CODE: SearchParam(DiagnosticReport.code_value),
        DiagnosticReportFilter.BASED_ON: SearchParam(DiagnosticReport.service_request_id, SearchKind.REFERENCE),
        DiagnosticReportFilter.DATE: SearchParam(DiagnosticReport.effective_datetime, SearchKind.DATE),
    }


class ImagingStudyFilter(str, Enum):
    PATIENT = "patient"
    STATUS = "status"
    MODALITY = "modality"
    STARTED = "started"
    BASED_ON = "based-on"


class ImagingStudyRepository(PatientScopedRepository[ImagingStudy]):
    model = ImagingStudy
    filters = ImagingStudyFilter
    search_params = {
        ImagingStudyFilter.PATIENT: SearchParam(ImagingStudy.patient_id, SearchKind.REFERENCE),
        ImagingStudyFilter.STATUS: SearchParam(ImagingStudy.status),
        ImagingStudyFilter.MODALITY: SearchParam(ImagingStudy.modality_code),
        ImagingStudyFilter.STARTED: SearchParam(ImagingStudy.started, SearchKind.DATE),
        ImagingStudyFilter.BASED_ON: SearchParam(ImagingStudy.service_request_id, SearchKind.REFERENCE),
    }
