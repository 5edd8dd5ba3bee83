"""Tests for JSON schema validation."""

from ehr.schemas.fhir import FHIR_PATIENT_SCHEMA, FHIR_SCHEMAS
from ehr.services.validation import validate_against_schema


def _make_patient(**overrides):
    record = {
        "resourceType": "Patient",
        "name": [{"family": "Doe", "given": ["Jane"]}],
        "birthDate": "1990-01-15",
        "gender": "female",
    }
    record.update(overrides)
    return record


def test_valid_patient():
    errors = validate_against_schema(_make_patient(), FHIR_PATIENT_SCHEMA)
    assert errors == []


def test_missing_required_fields():
    record = {"resourceType": "Patient"}
    errors = validate_against_schema(record, FHIR_PATIENT_SCHEMA)
    assert any("name" in e for e in errors)


def test_invalid_date_format():
    errors = validate_against_schema(_make_patient(birthDate="01/15/1990"), FHIR_PATIENT_SCHEMA)
    assert len(errors) > 0


def test_invalid_gender():
    errors = validate_against_schema(_make_patient(gender="invalid_value"), FHIR_PATIENT_SCHEMA)
    assert len(errors) > 0


def test_wrong_resource_type():
    errors = validate_against_schema(_make_patient(resourceType="Observation"), FHIR_PATIENT_SCHEMA)
    assert len(errors) == 1


def test_bad_reference_format():
    record = _make_patient(managingOrganization={"reference": "not a reference"})
    assert validate_against_schema(record, FHIR_PATIENT_SCHEMA)


def test_every_schema_is_keyed_by_its_resource_type():
    for resource_type, schema in FHIR_SCHEMAS.items():
        assert schema["properties"]["resourceType"]["const"] == resource_type
        assert schema["required"][0] == "resourceType"
