"""
JSON Schema validation for FHIR payloads.

Collects every error rather than failing on the first one and reports them
as an OperationOutcome, the way a FHIR server answers ``$validate``.
"""

from __future__ import annotations

from typing import Any

import jsonschema

from ehr.errors import ValidationError
from ehr.schemas.api import OperationOutcome, OperationOutcomeIssue
from ehr.schemas.fhir import FHIR_SCHEMAS

# jsonschema keyword -> FHIR IssueType
ISSUE_CODES = {
    "required": "required",
    "enum": "value",
    "const": "value",
    "pattern": "value",
    "minLength": "value",
    "minimum": "value",
    "type": "structure",
    "minItems": "structure",
}


def validate_against_schema(data: dict[str, Any], schema: dict[str, Any]) -> list[str]:
    """
    Validate a dict against a JSON schema.
    Returns a list of error messages (empty list = valid).
    """
    validator = jsonschema.Draft7Validator(schema)
    return [error.message for error in validator.iter_errors(data)]


def validate_resource(resource_type: str, payload: Any) -> OperationOutcome:
    schema = FHIR_SCHEMAS.get(resource_type)
    if schema is None:
        raise ValidationError(f"unsupported resource type: {resource_type}")

    validator = jsonschema.Draft7Validator(schema)
    issues = []
    for error in sorted(validator.iter_errors(payload), key=lambda e: [str(p) for p in e.absolute_path]):
        path = ".".join(str(p) for p in error.absolute_path)
        issues.append(
            OperationOutcomeIssue(
                severity="error",
                code=ISSUE_CODES.get(error.validator, "invariant"),
                diagnostics=error.message,
                expression=[f"{resource_type}.{path}" if path else resource_type],
            )
        )
    if not issues:
        issues.append(OperationOutcomeIssue(severity="information", code="informational", diagnostics="All OK"))
    return OperationOutcome(issue=issues)
