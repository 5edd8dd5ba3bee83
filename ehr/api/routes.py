"""
FastAPI routes – the main API surface.

Resource routers come from ``crud_router``; this module wires them together
and adds the endpoints that do not fit the CRUD mould: health, the order
status workflow and the FHIR views.
"""

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ehr.api.crud import ChildRoute, crud_router, service_dependency
from ehr.api.deps import get_actor, get_db
from ehr.config import settings
from ehr.errors import NotFoundError
from ehr.models.database import get_engine
from ehr.schemas import billing, diagnostics, documents, encounter, identity, inbox, oncology, reporting, surgery, vision
from ehr.schemas.api import HealthResponse, OperationOutcome, StatusHistoryRead, StatusTransition
from ehr.services.billing import ClaimService, CoverageService
from ehr.services.diagnostics import (
    DiagnosticReportService,
    ImagingStudyService,
    ServiceRequestService,
    SpecimenService,
)
from ehr.services.documents import CompositionService, ConsentService, DocumentReferenceService
from ehr.services.encounter import EncounterService
from ehr.services.fhir import to_fhir
from ehr.services.identity import OrganizationService, PatientService, PractitionerService
from ehr.services.inbox import InboxMessageService
from ehr.services.oncology import CancerDiagnosisService, TreatmentProtocolService
from ehr.services.reporting import MeasureReportService
from ehr.services.surgery import SurgicalCaseService
from ehr.services.validation import validate_resource
from ehr.services.vision import VisionPrescriptionService

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------

@router.get("/health", response_model=HealthResponse)
def health_check(engine: Engine = Depends(get_engine)):
    """Basic health endpoint – verifies DB connectivity."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        db_status = "connected"
    except SQLAlchemyError:
        logger.warning("Health check could not reach the database", exc_info=True)
        db_status = "disconnected"
    return HealthResponse(environment=settings.ENVIRONMENT, database=db_status)


# ---------------------------------------------------------------------------
# Resource routers
# ---------------------------------------------------------------------------

service_request_router = crud_router(
    prefix="/service-requests",
    service_class=ServiceRequestService,
    read_schema=diagnostics.ServiceRequestRead,
    create_schema=diagnostics.ServiceRequestCreate,
    update_schema=diagnostics.ServiceRequestUpdate,
    children={"status-history": ChildRoute(StatusHistoryRead)},
)


@service_request_router.post(
    "/{id}/status", response_model=diagnostics.ServiceRequestRead, response_model_exclude_none=True
)
def transition_service_request(
    id: UUID,
    body: StatusTransition,
    service: ServiceRequestService = Depends(service_dependency(ServiceRequestService)),
):
    """Move an order along its workflow; invalid steps are rejected with 400."""
    return diagnostics.ServiceRequestRead.model_validate(service.transition(id, body.status, body.reason))


RESOURCE_ROUTERS = [
    crud_router(
        prefix="/patients",
        service_class=PatientService,
        read_schema=identity.PatientRead,
        create_schema=identity.PatientCreate,
        update_schema=identity.PatientUpdate,
    ),
    crud_router(
        prefix="/practitioners",
        service_class=PractitionerService,
        read_schema=identity.PractitionerRead,
        create_schema=identity.PractitionerCreate,
        update_schema=identity.PractitionerUpdate,
    ),
    crud_router(
        prefix="/organizations",
        service_class=OrganizationService,
        read_schema=identity.OrganizationRead,
        create_schema=identity.OrganizationCreate,
        update_schema=identity.OrganizationUpdate,
    ),
    crud_router(
        prefix="/encounters",
        service_class=EncounterService,
        read_schema=encounter.EncounterRead,
        create_schema=encounter.EncounterCreate,
        update_schema=encounter.EncounterUpdate,
    ),
    service_request_router,
    crud_router(
        prefix="/specimens",
        service_class=SpecimenService,
        read_schema=diagnostics.SpecimenRead,
        create_schema=diagnostics.SpecimenCreate,
        update_schema=diagnostics.SpecimenUpdate,
    ),
    crud_router(
        prefix="/diagnostic-reports",
        service_class=DiagnosticReportService,
        read_schema=diagnostics.DiagnosticReportRead,
        create_schema=diagnostics.DiagnosticReportCreate,
        update_schema=diagnostics.DiagnosticReportUpdate,
    ),
    crud_router(
        prefix="/imaging-studies",
        service_class=ImagingStudyService,
        read_schema=diagnostics.ImagingStudyRead,
        create_schema=diagnostics.ImagingStudyCreate,
        update_schema=diagnostics.ImagingStudyUpdate,
    ),
    crud_router(
        prefix="/coverages",
        service_class=CoverageService,
        read_schema=billing.CoverageRead,
        create_schema=billing.CoverageCreate,
        update_schema=billing.CoverageUpdate,
    ),
    crud_router(
        prefix="/claims",
        service_class=ClaimService,
        read_schema=billing.ClaimRead,
        create_schema=billing.ClaimCreate,
        update_schema=billing.ClaimUpdate,
        children={
            "diagnoses": ChildRoute(billing.ClaimDiagnosisRead, billing.ClaimDiagnosisCreate),
            "procedures": ChildRoute(billing.ClaimProcedureRead, billing.ClaimProcedureCreate),
            "items": ChildRoute(billing.ClaimItemRead, billing.ClaimItemCreate),
        },
    ),
    crud_router(
        prefix="/consents",
        service_class=ConsentService,
        read_schema=documents.ConsentRead,
        create_schema=documents.ConsentCreate,
        update_schema=documents.ConsentUpdate,
    ),
    crud_router(
        prefix="/document-references",
        service_class=DocumentReferenceService,
        read_schema=documents.DocumentReferenceRead,
        create_schema=documents.DocumentReferenceCreate,
        update_schema=documents.DocumentReferenceUpdate,
    ),
    crud_router(
        prefix="/compositions",
        service_class=CompositionService,
        read_schema=documents.CompositionRead,
        create_schema=documents.CompositionCreate,
        update_schema=documents.CompositionUpdate,
        children={"sections": ChildRoute(documents.CompositionSectionRead, documents.CompositionSectionCreate)},
    ),
    crud_router(
        prefix="/cancer-diagnoses",
        service_class=CancerDiagnosisService,
        read_schema=oncology.CancerDiagnosisRead,
        create_schema=oncology.CancerDiagnosisCreate,
        update_schema=oncology.CancerDiagnosisUpdate,
    ),
    crud_router(
        prefix="/treatment-protocols",
        service_class=TreatmentProtocolService,
        read_schema=oncology.TreatmentProtocolRead,
        create_schema=oncology.TreatmentProtocolCreate,
        update_schema=oncology.TreatmentProtocolUpdate,
        children={"cycles": ChildRoute(oncology.ChemoCycleRead, oncology.ChemoCycleCreate)},
    ),
    crud_router(
        prefix="/inbox-messages",
        service_class=InboxMessageService,
        read_schema=inbox.InboxMessageRead,
        create_schema=inbox.InboxMessageCreate,
        update_schema=inbox.InboxMessageUpdate,
    ),
    crud_router(
        prefix="/surgical-cases",
        service_class=SurgicalCaseService,
        read_schema=surgery.SurgicalCaseRead,
        create_schema=surgery.SurgicalCaseCreate,
        update_schema=surgery.SurgicalCaseUpdate,
        children={
            "procedures": ChildRoute(surgery.SurgicalProcedureRead, surgery.SurgicalProcedureCreate),
            "team": ChildRoute(surgery.SurgicalTeamMemberRead, surgery.SurgicalTeamMemberCreate),
            "time-events": ChildRoute(surgery.SurgicalTimeEventRead, surgery.SurgicalTimeEventCreate),
        },
    ),
    crud_router(
        prefix="/measure-reports",
        service_class=MeasureReportService,
        read_schema=reporting.MeasureReportRead,
        create_schema=reporting.MeasureReportCreate,
        update_schema=reporting.MeasureReportUpdate,
    ),
    crud_router(
        prefix="/vision-prescriptions",
        service_class=VisionPrescriptionService,
        read_schema=vision.VisionPrescriptionRead,
        create_schema=vision.VisionPrescriptionCreate,
        update_schema=vision.VisionPrescriptionUpdate,
        children={
            "lens-specifications": ChildRoute(vision.LensSpecificationRead, vision.LensSpecificationCreate),
        },
    ),
]

for resource_router in RESOURCE_ROUTERS:
    router.include_router(resource_router)


# ---------------------------------------------------------------------------
# FHIR views
# ---------------------------------------------------------------------------

FHIR_SERVICES = {
    service_class.repository_class.model.__name__: service_class
    for service_class in (
        PatientService,
        PractitionerService,
        OrganizationService,
        EncounterService,
        ServiceRequestService,
        SpecimenService,
        DiagnosticReportService,
        ImagingStudyService,
        CoverageService,
        ClaimService,
        ConsentService,
        DocumentReferenceService,
        CompositionService,
        MeasureReportService,
        VisionPrescriptionService,
    )
}

FHIR_MEDIA_TYPE = "application/fhir+json"


@router.post("/fhir/{resource_type}/$validate", response_model=OperationOutcome, response_model_exclude_none=True)
def validate_fhir_resource(resource_type: str, payload: dict[str, Any] = Body(...)):
    """Check a FHIR payload against its schema; the outcome lists every problem found."""
    return validate_resource(resource_type, payload)


@router.get("/fhir/{resource_type}/{fhir_id}")
def read_fhir_resource(
    resource_type: str,
    fhir_id: str,
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
):
    service_class = FHIR_SERVICES.get(resource_type)
    if service_class is None:
        raise NotFoundError("ResourceType", resource_type)
    entity = service_class.from_session(db, actor).get_by_fhir_id(fhir_id)
    return JSONResponse(content=to_fhir(entity), media_type=FHIR_MEDIA_TYPE)
