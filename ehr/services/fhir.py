"""
Render stored resources as FHIR R4 JSON.

References use internal ids (``Patient/<uuid>``); the resource's own ``id``
is its external FHIR id. Empty elements are dropped, as FHIR requires.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Callable


def _iso(value: date | datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _compact(value: Any) -> Any:
    if isinstance(value, dict):
        items = ((k, _compact(v)) for k, v in value.items())
        return {k: v for k, v in items if v not in (None, "", [], {})}
    if isinstance(value, list):
        return [v for v in (_compact(v) for v in value) if v not in (None, "", [], {})]
    return value


def reference(resource_type: str, id: Any) -> dict | None:
    if id is None:
        return None
    return {"reference": f"{resource_type}/{id}"}


def codeable(code: str | None, display: str | None = None, system: str | None = None) -> dict | None:
    if code is None:
        return None
    return {"coding": [{"system": system, "code": code, "display": display}], "text": display}


def render_patient(p) -> dict:
    return {
        "identifier": [{"system": "urn:ehr:mrn", "value": p.mrn}],
        "active": p.active,
        "name": [{"family": p.name_family, "given": [p.name_given] if p.name_given else []}],
        "gender": p.gender,
        "birthDate": p.birth_date,
        "telecom": [
            {"system": "phone", "value": p.phone} if p.phone else None,
            {"system": "email", "value": p.email} if p.email else None,
        ],
        "managingOrganization": reference("Organization", p.managing_organization_id),
    }


def render_practitioner(p) -> dict:
    return {
        "identifier": [{"system": "http://hl7.org/fhir/sid/us-npi", "value": p.npi}] if p.npi else [],
        "active": p.active,
        "name": [{"family": p.family_name, "given": [p.given_name] if p.given_name else []}],
        "qualification": [{"code": codeable(p.specialty_code, p.specialty_display)}] if p.specialty_code else [],
    }


def render_organization(o) -> dict:
    return {
        "active": o.active,
        "name": o.name,
        "type": [codeable(o.type_code)],
        "address": [{"city": o.city}],
        "partOf": reference("Organization", o.part_of_id),
    }


def render_encounter(e) -> dict:
    return {
        "status": e.status,
        "class": {
            "system": "http://terminology.hl7.org/CodeSystem/v3-ActCode",
            "code": e.class_code,
            "display": e.class_display,
        },
        "type": [codeable(e.type_code, e.type_display)],
        "priority": codeable(e.priority_code),
        "subject": reference("Patient", e.patient_id),
        "participant": [{"individual": reference("Practitioner", e.primary_practitioner_id)}],
        "serviceProvider": reference("Organization", e.service_provider_id),
        "period": {"start": _iso(e.period_start), "end": _iso(e.period_end)},
        "length": {"value": e.length_minutes, "unit": "min"} if e.length_minutes is not None else None,
        "reasonCode": [{"text": e.reason_text}],
    }


def render_service_request(sr) -> dict:
    return {
        "status": sr.status,
        "intent": sr.intent,
        "priority": sr.priority,
        "category": [codeable(sr.category_code, sr.category_display)],
        "code": codeable(sr.code_value, sr.code_display, sr.code_system),
        "subject": reference("Patient", sr.patient_id),
        "encounter": reference("Encounter", sr.encounter_id),
        "requester": reference("Practitioner", sr.requester_id),
        "performer": [reference("Practitioner", sr.performer_id)],
        "occurrenceDateTime": _iso(sr.occurrence_datetime),
        "authoredOn": _iso(sr.authored_on),
        "reasonCode": [codeable(sr.reason_code, sr.reason_display)],
        "bodySite": [codeable(sr.body_site_code)],
        "note": [{"text": sr.note}],
        "patientInstruction": sr.patient_instruction,
    }


def render_diagnostic_report(dr) -> dict:
    return {
        "status": dr.status,
        "category": [codeable(dr.category_code, dr.category_display)],
        "code": codeable(dr.code_value, dr.code_display, dr.code_system),
        "subject": reference("Patient", dr.patient_id),
        "encounter": reference("Encounter", dr.encounter_id),
        "basedOn": [reference("ServiceRequest", dr.service_request_id)],
        "specimen": [reference("Specimen", dr.specimen_id)],
        "performer": [reference("Practitioner", dr.performer_id)],
        "effectiveDateTime": _iso(dr.effective_datetime),
        "issued": _iso(dr.issued),
        "conclusion": dr.conclusion,
        "conclusionCode": [codeable(dr.conclusion_code)],
        "presentedForm": [{"url": dr.presented_form_url}],
    }


def render_coverage(c) -> dict:
    return {
        "status": c.status,
        "type": codeable(c.type_code),
        "subscriberId": c.subscriber_id,
        "beneficiary": reference("Patient", c.patient_id),
        "relationship": codeable(c.relationship),
        "payor": [reference("Organization", c.payor_org_id) or ({"display": c.payor_name} if c.payor_name else None)],
        "period": {"start": _iso(c.period_start), "end": _iso(c.period_end)},
    }


def render_claim(c) -> dict:
    return {
        "status": c.status,
        "type": codeable(c.type_code),
        "use": c.use_code,
        "patient": reference("Patient", c.patient_id),
        "provider": reference("Practitioner", c.provider_id),
        "insurer": reference("Organization", c.insurer_org_id),
        "priority": codeable(c.priority_code),
        "billablePeriod": {"start": _iso(c.billable_period_start), "end": _iso(c.billable_period_end)},
        "created": _iso(c.created_date),
        "insurance": [{"sequence": 1, "focal": True, "coverage": reference("Coverage", c.coverage_id)}]
        if c.coverage_id
        else [],
        "total": {"value": c.total_amount, "currency": c.currency} if c.total_amount is not None else None,
    }


def render_generic(entity) -> dict:
    return {
        "status": getattr(entity, "status", None),
        "subject": reference("Patient", getattr(entity, "patient_id", None)),
    }


RENDERERS: dict[str, Callable[[Any], dict]] = {
    "Patient": render_patient,
    "Practitioner": render_practitioner,
    "Organization": render_organization,
    "Encounter": render_encounter,
    "ServiceRequest": render_service_request,
    "DiagnosticReport": render_diagnostic_report,
    "Coverage": render_coverage,
    "Claim": render_claim,
}


def to_fhir(entity) -> dict:
    resource_type = type(entity).__name__
    resource = {
        "resourceType": resource_type,
        "id": entity.fhir_id,
        "meta": {"lastUpdated": _iso(entity.updated_at)},
    }
    resource.update(RENDERERS.get(resource_type, render_generic)(entity))
    return _compact(resource)
