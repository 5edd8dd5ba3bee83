"""
FHIR R4 JSON schemas for the ``$validate`` operation.

Real FHIR structure definitions are enormous; these capture the elements the
API reads and writes: resource type, id format, required elements, status
value sets, references and date formats. Unknown elements are allowed.
"""

FHIR_ID_PATTERN = "^[A-Za-z0-9\\-\\.]{1,64}$"
DATE_PATTERN = "^\\d{4}(-\\d{2}(-\\d{2})?)?$"
DATETIME_PATTERN = "^\\d{4}-\\d{2}-\\d{2}(T\\d{2}:\\d{2}(:\\d{2}(\\.\\d+)?)?(Z|[+-]\\d{2}:\\d{2})?)?$"

REFERENCE: dict = {
    "type": "object",
    "required": ["reference"],
    "properties": {
        "reference": {"type": "string", "pattern": "^[A-Z][A-Za-z]+/[A-Za-z0-9\\-\\.]{1,64}$"},
        "display": {"type": "string"},
    },
}

CODING: dict = {
    "type": "object",
    "required": ["code"],
    "properties": {
        "system": {"type": "string"},
        "code": {"type": "string", "minLength": 1},
        "display": {"type": "string"},
    },
}

CODEABLE_CONCEPT: dict = {
    "type": "object",
    "properties": {
        "coding": {"type": "array", "items": CODING},
        "text": {"type": "string"},
    },
}

PERIOD: dict = {
    "type": "object",
    "properties": {
        "start": {"type": "string", "pattern": DATETIME_PATTERN},
        "end": {"type": "string", "pattern": DATETIME_PATTERN},
    },
}


def resource_schema(
    resource_type: str,
    required: list[str],
    properties: dict,
    statuses: list[str] | None = None,
) -> dict:
    """Wrap resource-specific properties with the elements every resource shares."""
    props = {
        "resourceType": {"type": "string", "const": resource_type},
        "id": {"type": "string", "pattern": FHIR_ID_PATTERN},
        "meta": {
            "type": "object",
            "properties": {
                "versionId": {"type": "string"},
                "lastUpdated": {"type": "string", "pattern": DATETIME_PATTERN},
            },
        },
    }
    if statuses is not None:
        props["status"] = {"type": "string", "enum": statuses}
    props.update(properties)
    return {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "title": f"FHIR {resource_type} (simplified)",
        "type": "object",
        "required": ["resourceType", *required],
        "properties": props,
    }


FHIR_PATIENT_SCHEMA: dict = resource_schema(
    "Patient",
    ["name"],
    {
        "identifier": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["value"],
                "properties": {"system": {"type": "string"}, "value": {"type": "string", "minLength": 1}},
            },
        },
        "active": {"type": "boolean"},
        "name": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "properties": {
                    "family": {"type": "string"},
                    "given": {"type": "array", "items": {"type": "string"}},
                },
            },
        },
        "gender": {
            "type": "string",
            "enum": ["male", "female", "other", "unknown"],
            "description": "Administrative gender per FHIR value set.",
        },
        "birthDate": {"type": "string", "pattern": DATE_PATTERN},
        "managingOrganization": REFERENCE,
    },
)

FHIR_PRACTITIONER_SCHEMA: dict = resource_schema(
    "Practitioner",
    [],
    {"active": {"type": "boolean"}, "name": {"type": "array"}},
)

FHIR_ORGANIZATION_SCHEMA: dict = resource_schema(
    "Organization",
    [],
    {"active": {"type": "boolean"}, "name": {"type": "string"}, "partOf": REFERENCE},
)

FHIR_ENCOUNTER_SCHEMA: dict = resource_schema(
    "Encounter",
    ["status", "class"],
    {
        "class": {
            "type": "object",
            "required": ["code"],
            "properties": {
                "system": {"type": "string"},
                "code": {
                    "type": "string",
                    "enum": ["AMB", "EMER", "IMP", "ACUTE", "NONAC", "SS", "HH", "FLD", "VR", "OBSENC", "PRENC"],
                },
                "display": {"type": "string"},
            },
        },
        "subject": REFERENCE,
        "period": PERIOD,
    },
    ["planned", "arrived", "triaged", "in-progress", "onleave", "finished", "cancelled", "entered-in-error", "unknown"],
)

FHIR_SERVICE_REQUEST_SCHEMA: dict = resource_schema(
    "ServiceRequest",
    ["status", "intent", "subject"],
    {
        "intent": {
            "type": "string",
            "enum": [
                "proposal", "plan", "directive", "order", "original-order",
                "reflex-order", "filler-order", "instance-order", "option",
            ],
        },
        "priority": {"type": "string", "enum": ["routine", "urgent", "asap", "stat"]},
        "code": CODEABLE_CONCEPT,
        "subject": REFERENCE,
        "requester": REFERENCE,
        "authoredOn": {"type": "string", "pattern": DATETIME_PATTERN},
        "occurrenceDateTime": {"type": "string", "pattern": DATETIME_PATTERN},
    },
    ["draft", "active", "on-hold", "revoked", "completed", "entered-in-error", "unknown"],
)

FHIR_DIAGNOSTIC_REPORT_SCHEMA: dict = resource_schema(
    "DiagnosticReport",
    ["status", "code"],
    {
        "code": CODEABLE_CONCEPT,
        "subject": REFERENCE,
        "effectiveDateTime": {"type": "string", "pattern": DATETIME_PATTERN},
        "issued": {"type": "string", "pattern": DATETIME_PATTERN},
        "conclusion": {"type": "string"},
    },
    [
        "registered", "partial", "preliminary", "final", "amended",
        "corrected", "appended", "cancelled", "entered-in-error", "unknown",
    ],
)

FHIR_SPECIMEN_SCHEMA: dict = resource_schema(
    "Specimen",
    [],
    {"subject": REFERENCE, "type": CODEABLE_CONCEPT, "receivedTime": {"type": "string", "pattern": DATETIME_PATTERN}},
    ["available", "unavailable", "unsatisfactory", "entered-in-error"],
)

FHIR_IMAGING_STUDY_SCHEMA: dict = resource_schema(
    "ImagingStudy",
    ["status", "subject"],
    {
        "subject": REFERENCE,
        "started": {"type": "string", "pattern": DATETIME_PATTERN},
        "numberOfSeries": {"type": "integer", "minimum": 0},
        "numberOfInstances": {"type": "integer", "minimum": 0},
    },
    ["registered", "available", "cancelled", "entered-in-error", "unknown"],
)

FHIR_COVERAGE_SCHEMA: dict = resource_schema(
    "Coverage",
    ["status", "beneficiary"],
    {"beneficiary": REFERENCE, "payor": {"type": "array", "items": REFERENCE}, "period": PERIOD},
    ["active", "cancelled", "draft", "entered-in-error"],
)

FHIR_CLAIM_SCHEMA: dict = resource_schema(
    "Claim",
    ["status", "type", "patient", "provider"],
    {
        "type": CODEABLE_CONCEPT,
        "use": {"type": "string", "enum": ["claim", "preauthorization", "predetermination"]},
        "patient": REFERENCE,
        "provider": REFERENCE,
        "diagnosis": {
            "type": "array",
            "items": {"type": "object", "required": ["sequence"], "properties": {"sequence": {"type": "integer", "minimum": 1}}},
        },
        "item": {
            "type": "array",
            "items": {"type": "object", "required": ["sequence"], "properties": {"sequence": {"type": "integer", "minimum": 1}}},
        },
    },
    ["active", "cancelled", "draft", "entered-in-error"],
)

FHIR_CONSENT_SCHEMA: dict = resource_schema(
    "Consent",
    ["status", "scope", "category"],
    {
        "scope": CODEABLE_CONCEPT,
        "category": {"type": "array", "minItems": 1, "items": CODEABLE_CONCEPT},
        "patient": REFERENCE,
        "dateTime": {"type": "string", "pattern": DATETIME_PATTERN},
    },
    ["draft", "proposed", "active", "rejected", "inactive", "entered-in-error"],
)

FHIR_DOCUMENT_REFERENCE_SCHEMA: dict = resource_schema(
    "DocumentReference",
    ["status", "content"],
    {
        "subject": REFERENCE,
        "content": {
            "type": "array",
            "minItems": 1,
            "items": {"type": "object", "required": ["attachment"], "properties": {"attachment": {"type": "object"}}},
        },
    },
    ["current", "superseded", "entered-in-error"],
)

FHIR_COMPOSITION_SCHEMA: dict = resource_schema(
    "Composition",
    ["status", "type", "date", "author", "title"],
    {
        "type": CODEABLE_CONCEPT,
        "subject": REFERENCE,
        "date": {"type": "string", "pattern": DATETIME_PATTERN},
        "author": {"type": "array", "minItems": 1, "items": REFERENCE},
        "title": {"type": "string", "minLength": 1},
    },
    ["preliminary", "final", "amended", "entered-in-error"],
)

FHIR_SCHEMAS: dict[str, dict] = {
    schema["properties"]["resourceType"]["const"]: schema
    for schema in (
        FHIR_PATIENT_SCHEMA,
        FHIR_PRACTITIONER_SCHEMA,
        FHIR_ORGANIZATION_SCHEMA,
        FHIR_ENCOUNTER_SCHEMA,
        FHIR_SERVICE_REQUEST_SCHEMA,
        FHIR_DIAGNOSTIC_REPORT_SCHEMA,
        FHIR_SPECIMEN_SCHEMA,
        FHIR_IMAGING_STUDY_SCHEMA,
        FHIR_COVERAGE_SCHEMA,
        FHIR_CLAIM_SCHEMA,
        FHIR_CONSENT_SCHEMA,
        FHIR_DOCUMENT_REFERENCE_SCHEMA,
        FHIR_COMPOSITION_SCHEMA,
    )
}
