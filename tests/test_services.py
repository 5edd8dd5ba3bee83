"""Tests for service-layer rules: required fields, defaults, status sets, workflow and audit."""

import uuid
from datetime import date, datetime

import pytest
from sqlalchemy import select

from ehr.errors import InvalidTransitionError, NotFoundError, ReferentialIntegrityError, ValidationError
from ehr.models.diagnostics import OrderStatusHistory
from ehr.services.audit import audit_trail
from ehr.services.billing import ClaimService, CoverageService
from ehr.services.diagnostics import (
    DiagnosticReportService,
    ServiceRequestService,
    SpecimenService,
    validate_transition,
)
from ehr.services.documents import CompositionService, DocumentReferenceService
from ehr.services.encounter import EncounterService
from ehr.services.inbox import InboxMessageService
from ehr.services.oncology import CancerDiagnosisService, TreatmentProtocolService
from ehr.services.reporting import MeasureReportService
from ehr.services.surgery import SurgicalCaseService
from ehr.services.vision import VisionPrescriptionService


def _order(patient, practitioner, **overrides):
    data = {"patient_id": patient.id, "requester_id": practitioner.id, "code_value": "2951-2"}
    data.update(overrides)
    return data


# ---------------------------------------------------------------------------
# ServiceRequest
# ---------------------------------------------------------------------------

def test_service_request_defaults(db, patient, practitioner):
    order = ServiceRequestService.from_session(db).create(_order(patient, practitioner))
    assert order.status == "draft"
    assert order.intent == "order"


@pytest.mark.parametrize("missing", ["patient_id", "requester_id", "code_value"])
def test_service_request_required_fields(db, patient, practitioner, missing):
    data = _order(patient, practitioner)
    data.pop(missing)
    with pytest.raises(ValidationError, match=f"{missing} is required"):
        ServiceRequestService.from_session(db).create(data)


def test_service_request_invalid_status(db, patient, practitioner):
    with pytest.raises(ValidationError, match="invalid status: bogus"):
        ServiceRequestService.from_session(db).create(_order(patient, practitioner, status="bogus"))


def test_service_request_invalid_intent(db, patient, practitioner):
    with pytest.raises(ValidationError, match="invalid intent"):
        ServiceRequestService.from_session(db).create(_order(patient, practitioner, intent="wish"))


def test_update_to_completed_with_note_keeps_other_fields(db, patient, practitioner):
    """An active sodium order updated to completed keeps everything it was not told to change."""
    service = ServiceRequestService.from_session(db)
    order = service.create(_order(patient, practitioner, status="active", code_display="Sodium", priority="routine"))

    updated = service.update(order.id, {"status": "completed", "note": "Resulted 138 mmol/L"})

    assert updated.status == "completed"
    assert updated.note == "Resulted 138 mmol/L"
    assert updated.code_value == "2951-2"
    assert updated.code_display == "Sodium"
    assert updated.priority == "routine"
    assert updated.fhir_id == order.fhir_id


def test_update_cannot_change_ids(db, patient, practitioner):
    service = ServiceRequestService.from_session(db)
    order = service.create(_order(patient, practitioner))
    original = (order.id, order.fhir_id)

    service.update(order.id, {"fhir_id": "hijack", "note": "x"})
    assert (order.id, order.fhir_id) == original


def test_update_rejects_clearing_required_field(db, patient, practitioner):
    service = ServiceRequestService.from_session(db)
    order = service.create(_order(patient, practitioner))
    with pytest.raises(ValidationError, match="code_value is required"):
        service.update(order.id, {"code_value": None})


def test_update_missing_resource(db):
    with pytest.raises(NotFoundError):
        ServiceRequestService.from_session(db).update(uuid.uuid4(), {"note": "x"})


def test_transition_records_history(db, patient, practitioner):
    service = ServiceRequestService.from_session(db, actor="dr.grey")
    order = service.create(_order(patient, practitioner))

    service.transition(order.id, "active")
    service.transition(order.id, "completed", reason="resulted")

    history = service.status_history(order.id)
    assert [(h.from_status, h.to_status) for h in history] == [("draft", "active"), ("active", "completed")]
    assert history[1].reason == "resulted"
    assert history[1].changed_by == "dr.grey"
    assert service.get(order.id).status == "completed"


def test_transition_rejects_invalid_step(db, patient, practitioner):
    service = ServiceRequestService.from_session(db)
    order = service.create(_order(patient, practitioner))

    with pytest.raises(InvalidTransitionError):
        service.transition(order.id, "completed")
    assert service.status_history(order.id) == []


def test_update_cannot_clear_defaulted_fields(db, patient, practitioner):
    service = ServiceRequestService.from_session(db)
    order = service.create(_order(patient, practitioner))

    with pytest.raises(ValidationError, match="status is required"):
        service.update(order.id, {"status": None})
    with pytest.raises(ValidationError, match="intent is required"):
        service.update(order.id, {"intent": None})
    assert (order.status, order.intent) == ("draft", "order")


def test_deleting_order_removes_its_status_history(db, patient, practitioner):
    service = ServiceRequestService.from_session(db)
    order = service.create(_order(patient, practitioner))
    service.transition(order.id, "active")

    service.delete(order.id)
    assert db.scalars(select(OrderStatusHistory)).all() == []


def test_entered_in_error_is_terminal():
    with pytest.raises(InvalidTransitionError):
        validate_transition("entered-in-error", "active")
    validate_transition("unknown", "draft")


# ---------------------------------------------------------------------------
# Other diagnostics
# ---------------------------------------------------------------------------

def test_specimen_and_report_defaults(db, patient):
    specimen = SpecimenService.from_session(db).create({"patient_id": patient.id})
    report = DiagnosticReportService.from_session(db).create(
        {"patient_id": patient.id, "code_value": "24323-8", "specimen_id": specimen.id}
    )
    assert specimen.status == "available"
    assert report.status == "registered"


def test_report_requires_code(db, patient):
    with pytest.raises(ValidationError, match="code_value is required"):
        DiagnosticReportService.from_session(db).create({"patient_id": patient.id, "code_value": "  "})


# ---------------------------------------------------------------------------
# Billing
# ---------------------------------------------------------------------------

def test_claim_diagnoses_come_back_in_sequence_order(db, patient):
    service = ClaimService.from_session(db)
    claim = service.create({"patient_id": patient.id})
    assert claim.status == "draft"

    service.add_diagnosis(claim.id, {"sequence": 2, "diagnosis_code": "E11.9"})
    service.add_diagnosis(claim.id, {"sequence": 1, "diagnosis_code": "I10"})

    assert [d.sequence for d in service.get_diagnoses(claim.id)] == [1, 2]


def test_claim_line_rules(db, patient):
    service = ClaimService.from_session(db)
    claim = service.create({"patient_id": patient.id})

    with pytest.raises(ValidationError, match="diagnosis_code is required"):
        service.add_diagnosis(claim.id, {"sequence": 1})
    with pytest.raises(ValidationError, match="product_or_service_code is required"):
        service.add_item(claim.id, {"sequence": 1})
    with pytest.raises(ValidationError, match="procedure_code is required"):
        service.add_procedure(claim.id, {"sequence": 1})
    with pytest.raises(ValidationError, match="sequence must be at least 1"):
        service.add_item(claim.id, {"sequence": 0, "product_or_service_code": "99213"})


def test_child_of_missing_parent(db):
    with pytest.raises(NotFoundError):
        ClaimService.from_session(db).add_diagnosis(uuid.uuid4(), {"sequence": 1, "diagnosis_code": "I10"})


def test_coverage_needs_a_payor(db, patient, organization):
    service = CoverageService.from_session(db)
    with pytest.raises(ValidationError, match="payor"):
        service.create({"patient_id": patient.id})

    by_org = service.create({"patient_id": patient.id, "payor_org_id": organization.id})
    by_name = service.create({"patient_id": patient.id, "payor_name": "Self-pay"})
    assert by_org.status == by_name.status == "active"


def test_coverage_with_unknown_payor_org(db, patient):
    with pytest.raises(ReferentialIntegrityError):
        CoverageService.from_session(db).create({"patient_id": patient.id, "payor_org_id": uuid.uuid4()})


# ---------------------------------------------------------------------------
# Documents, encounters, oncology
# ---------------------------------------------------------------------------

def test_document_defaults(db, patient):
    doc = DocumentReferenceService.from_session(db).create({"patient_id": patient.id})
    comp = CompositionService.from_session(db).create({"patient_id": patient.id, "title": "Discharge summary"})
    assert doc.status == "current"
    assert comp.status == "preliminary"


def test_composition_sections_ordered(db, patient):
    service = CompositionService.from_session(db)
    comp = service.create({"patient_id": patient.id})
    service.add_child(comp.id, "sections", {"title": "Plan", "sort_order": 2})
    service.add_child(comp.id, "sections", {"title": "Assessment", "sort_order": 1})
    service.add_child(comp.id, "sections", {"title": "Header"})

    assert [s.title for s in service.list_children(comp.id, "sections")] == ["Header", "Assessment", "Plan"]


def test_encounter_rules(db, patient, now):
    service = EncounterService.from_session(db)
    with pytest.raises(ValidationError, match="class_code is required"):
        service.create({"patient_id": patient.id, "period_start": now})

    encounter = service.create({"patient_id": patient.id, "class_code": "AMB", "period_start": now})
    assert encounter.status == "planned"

    with pytest.raises(ValidationError, match="invalid status"):
        service.update(encounter.id, {"status": "bogus"})


def test_oncology_defaults_and_cycles(db, patient):
    diagnosis = CancerDiagnosisService.from_session(db).create(
        {"patient_id": patient.id, "diagnosis_date": date(2024, 2, 1)}
    )
    assert diagnosis.current_status == "active-treatment"

    protocols = TreatmentProtocolService.from_session(db)
    protocol = protocols.create({"cancer_diagnosis_id": diagnosis.id, "protocol_name": "FOLFOX"})
    assert protocol.status == "planned"

    protocols.add_child(protocol.id, "cycles", {"cycle_number": 2})
    first = protocols.add_child(protocol.id, "cycles", {"cycle_number": 1})
    assert first.status == "planned"
    assert [c.cycle_number for c in protocols.list_children(protocol.id, "cycles")] == [1, 2]

    with pytest.raises(ValidationError, match="cycle_number must be at least 1"):
        protocols.add_child(protocol.id, "cycles", {"cycle_number": 0})


def test_cancer_diagnosis_requires_date(db, patient):
    with pytest.raises(ValidationError, match="diagnosis_date is required"):
        CancerDiagnosisService.from_session(db).create({"patient_id": patient.id})


# ---------------------------------------------------------------------------
# Inbox, surgery, reporting, vision
# ---------------------------------------------------------------------------

def test_inbox_defaults_and_threading(db, practitioner):
    service = InboxMessageService.from_session(db)
    message = service.create({"message_type": "result", "subject": "Lab Results Ready", "recipient_id": practitioner.id})
    assert message.status == "unread"
    assert message.priority == "normal"
    assert message.thread_id == message.id

    reply = service.create({"message_type": "result", "subject": "Re: Lab", "parent_id": message.id})
    assert reply.thread_id == message.id

    items, total = service.list_by_recipient(practitioner.id, limit=10, offset=0)
    assert total == 1
    assert items[0].id == message.id


def test_reply_to_missing_message(db):
    service = InboxMessageService.from_session(db)
    with pytest.raises(ReferentialIntegrityError, match="parent_id"):
        service.create({"message_type": "result", "subject": "Re: Lab", "parent_id": uuid.uuid4()})


def test_inbox_priority_cannot_be_cleared(db):
    service = InboxMessageService.from_session(db)
    message = service.create({"message_type": "task", "subject": "Sign note"})
    with pytest.raises(ValidationError, match="priority is required"):
        service.update(message.id, {"priority": None})


def test_inbox_requires_subject(db):
    with pytest.raises(ValidationError, match="subject is required"):
        InboxMessageService.from_session(db).create({"message_type": "result"})


def test_surgical_case_children(db, patient, practitioner, now):
    service = SurgicalCaseService.from_session(db)
    case = service.create(
        {"patient_id": patient.id, "primary_surgeon_id": practitioner.id, "scheduled_date": date(2024, 3, 1)}
    )
    assert case.status == "scheduled"

    service.add_child(case.id, "time-events", {"event_type": "closure", "event_time": datetime(2024, 3, 1, 11, 0)})
    service.add_child(case.id, "time-events", {"event_type": "incision", "event_time": datetime(2024, 3, 1, 9, 0)})
    events = service.list_children(case.id, "time-events")
    assert [e.event_type for e in events] == ["incision", "closure"]

    with pytest.raises(ValidationError, match="role is required"):
        service.add_child(case.id, "team", {"practitioner_id": practitioner.id})


def test_statuses_without_allow_list_are_accepted(db, patient):
    report = MeasureReportService.from_session(db).create({"measure_id": "CMS122", "status": "anything-goes"})
    rx = VisionPrescriptionService.from_session(db).create({"patient_id": patient.id})
    assert report.status == "anything-goes"
    assert rx.status == "active"


# ---------------------------------------------------------------------------
# Audit
# ---------------------------------------------------------------------------

def test_writes_are_audited(db, patient, practitioner):
    service = ServiceRequestService.from_session(db, actor="auditor")
    order = service.create(_order(patient, practitioner))
    service.update(order.id, {"note": "hello"})
    service.delete(order.id)

    trail = audit_trail(db, "ServiceRequest", order.id)
    assert [entry.action for entry in trail] == ["create", "update", "delete"]
    assert {entry.actor for entry in trail} == {"auditor"}
    assert trail[1].detail == {"fields": ["note"]}
