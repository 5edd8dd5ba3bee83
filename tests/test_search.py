"""Tests for typed search parameters and conjunctive repository search."""

import uuid
from datetime import date, datetime, timezone

import pytest

from ehr.errors import ValidationError
from ehr.models.diagnostics import ServiceRequest
from ehr.repositories.diagnostics import ServiceRequestFilter, ServiceRequestRepository
from ehr.repositories.identity import PatientFilter, PatientRepository
from ehr.repositories.oncology import CancerDiagnosisFilter, CancerDiagnosisRepository
from ehr.repositories.search import DateFilter, SearchKind, SearchParam
from ehr.services.oncology import CancerDiagnosisService


def _seed_orders(db, patient, practitioner):
    repo = ServiceRequestRepository(db)
    rows = [
        ("active", "2951-2", datetime(2024, 1, 10, 8, 0)),
        ("active", "2823-3", datetime(2024, 1, 11, 8, 0)),
        ("completed", "2951-2", datetime(2024, 1, 12, 23, 59)),
    ]
    for status, code, authored in rows:
        repo.create(
            ServiceRequest(
                patient_id=patient.id,
                requester_id=practitioner.id,
                status=status,
                intent="order",
                code_value=code,
                authored_on=authored,
            )
        )
    return repo


def test_token_parse_splits_alternatives():
    param = SearchParam(ServiceRequest.status)
    assert param.parse("status", "active") == "active"
    assert param.parse("status", "active, completed") == ("active", "completed")


def test_reference_parse_accepts_typed_reference():
    param = SearchParam(ServiceRequest.patient_id, SearchKind.REFERENCE)
    pid = uuid.uuid4()
    assert param.parse("patient", str(pid)) == pid
    assert param.parse("patient", f"Patient/{pid}") == pid


@pytest.mark.parametrize("raw", ["not-a-uuid", "Patient/123", ""])
def test_reference_parse_rejects_malformed(raw):
    param = SearchParam(ServiceRequest.patient_id, SearchKind.REFERENCE)
    with pytest.raises(ValidationError):
        param.parse("patient", raw)


def test_date_parse_prefixes():
    param = SearchParam(ServiceRequest.authored_on, SearchKind.DATE)
    assert param.parse("authored", "2024-01-10") == DateFilter("eq", date(2024, 1, 10))
    assert param.parse("authored", "ge2024-01-10") == DateFilter("ge", date(2024, 1, 10))
    assert param.parse("authored", "lt2024-01-10T12:00:00") == DateFilter("lt", datetime(2024, 1, 10, 12, 0))


def test_date_parse_rejects_garbage():
    param = SearchParam(ServiceRequest.authored_on, SearchKind.DATE)
    with pytest.raises(ValidationError):
        param.parse("authored", "ge01/10/2024")


def test_boolean_parse():
    param = SearchParam(ServiceRequest.status, SearchKind.BOOLEAN)
    assert param.parse("active", "TRUE") is True
    assert param.parse("active", "false") is False
    with pytest.raises(ValidationError):
        param.parse("active", "yes")


def test_filters_are_conjunctive(db, patient, practitioner):
    repo = _seed_orders(db, patient, practitioner)

    items, total = repo.search(
        {ServiceRequestFilter.STATUS: "active", ServiceRequestFilter.CODE: "2951-2"}, limit=10, offset=0
    )
    assert total == 1
    assert items[0].code_value == "2951-2"
    assert items[0].status == "active"


def test_token_alternatives_match_any(db, patient, practitioner):
    repo = _seed_orders(db, patient, practitioner)
    filters = repo.parse_filters({"code": "2951-2,2823-3", "status": "active"})

    _, total = repo.search(filters, limit=10, offset=0)
    assert total == 2


def test_bare_date_covers_whole_day(db, patient, practitioner):
    repo = _seed_orders(db, patient, practitioner)

    _, total = repo.search(repo.parse_filters({"authored": "2024-01-12"}), limit=10, offset=0)
    assert total == 1

    _, total = repo.search(repo.parse_filters({"authored": "ge2024-01-11"}), limit=10, offset=0)
    assert total == 2

    _, total = repo.search(repo.parse_filters({"authored": "lt2024-01-11"}), limit=10, offset=0)
    assert total == 1


def test_search_results_are_newest_first(db, patient, practitioner):
    repo = _seed_orders(db, patient, practitioner)
    items, _ = repo.search({ServiceRequestFilter.STATUS: ("active", "completed")}, limit=10, offset=0)

    created = [item.created_at for item in items]
    assert created == sorted(created, reverse=True)


def test_unknown_query_keys_are_ignored():
    assert PatientRepository.parse_filters({"_count": "5", "gender": "female"}) == {PatientFilter.GENDER: "female"}


def test_boolean_filter_on_patients(db, patient):
    repo = PatientRepository(db)
    _, total = repo.search(repo.parse_filters({"active": "true"}), limit=10, offset=0)
    assert total == 1
    _, total = repo.search(repo.parse_filters({"active": "false"}), limit=10, offset=0)
    assert total == 0


def test_date_filter_on_date_column(db, patient):
    CancerDiagnosisService.from_session(db).create(
        {"patient_id": patient.id, "diagnosis_date": date(2023, 6, 1), "cancer_type": "breast"}
    )
    repo = CancerDiagnosisRepository(db)

    _, total = repo.search({CancerDiagnosisFilter.DIAGNOSED: DateFilter("gt", date(2023, 1, 1))}, limit=10, offset=0)
    assert total == 1
    _, total = repo.search(repo.parse_filters({"diagnosed": "lt2023-06-01"}), limit=10, offset=0)
    assert total == 0


def test_reference_parse_splits_alternatives():
    param = SearchParam(ServiceRequest.patient_id, SearchKind.REFERENCE)
    first, second = uuid.uuid4(), uuid.uuid4()
    assert param.parse("patient", f"Patient/{first}, {second}") == (first, second)


def test_reference_alternatives_match_any(db, patient, practitioner):
    repo = _seed_orders(db, patient, practitioner)
    filters = repo.parse_filters({"patient": f"{uuid.uuid4()},Patient/{patient.id}"})

    _, total = repo.search(filters, limit=10, offset=0)
    assert total == 3


def test_date_parse_accepts_utc_designator():
    param = SearchParam(ServiceRequest.authored_on, SearchKind.DATE)
    parsed = param.parse("authored", "ge2024-01-10T08:00:00Z")
    assert parsed == DateFilter("ge", datetime(2024, 1, 10, 8, 0, tzinfo=timezone.utc))
