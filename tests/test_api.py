"""End-to-end tests for the HTTP layer through FastAPI's TestClient."""

import uuid

from sqlalchemy import text

from ehr.api.deps import get_tenant
from ehr.main import app

API = "/api/v1"


def _create_order(client, patient, practitioner, **overrides):
    body = {"patient_id": patient["id"], "requester_id": practitioner["id"], "code_value": "2951-2"}
    body.update(overrides)
    resp = client.post(f"{API}/service-requests", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_health(client):
    resp = client.get(f"{API}/health")
    assert resp.status_code == 200
    assert resp.json()["database"] == "connected"


def test_create_and_read_patient(client, api_patient):
    """PHI round-trips through encryption; absent fields are omitted."""
    resp = client.get(f"{API}/patients/{api_patient['id']}")
    assert resp.status_code == 200
    body = resp.json()
    assert body["name_family"] == "Doe"
    assert body["mrn"] == "MRN-API-1"
    assert "ssn" not in body
    assert "birth_date" not in body

    resp = client.get(f"{API}/patients/fhir/{api_patient['fhir_id']}")
    assert resp.json()["id"] == api_patient["id"]


def test_missing_resource_is_404(client):
    resp = client.get(f"{API}/patients/{uuid.uuid4()}")
    assert resp.status_code == 404
    assert resp.json()["error"] == "not_found"


def test_malformed_id_is_400(client):
    resp = client.get(f"{API}/patients/not-a-uuid")
    assert resp.status_code == 400
    assert resp.json()["error"] == "validation"


def test_invalid_status_is_400(client, api_patient, api_practitioner):
    body = {
        "patient_id": api_patient["id"],
        "requester_id": api_practitioner["id"],
        "code_value": "2951-2",
        "status": "bogus",
    }
    resp = client.post(f"{API}/service-requests", json=body)
    assert resp.status_code == 400
    assert resp.json() == {"error": "validation", "detail": "invalid status: bogus"}


def test_dangling_reference_is_400_referential_integrity(client, api_practitioner):
    body = {"patient_id": str(uuid.uuid4()), "requester_id": api_practitioner["id"], "code_value": "2951-2"}
    resp = client.post(f"{API}/service-requests", json=body)
    assert resp.status_code == 400
    assert resp.json()["error"] == "referential_integrity"

    resp = client.get(f"{API}/service-requests")
    assert resp.json()["total"] == 0


def test_put_overwrites_given_fields_only(client, api_patient, api_practitioner):
    order = _create_order(client, api_patient, api_practitioner, status="active", note="fasting")

    resp = client.put(f"{API}/service-requests/{order['id']}", json={"status": "completed", "priority": "stat"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "completed"
    assert body["note"] == "fasting"
    assert body["code_value"] == "2951-2"

    resp = client.put(f"{API}/service-requests/{order['id']}", json={"note": None})
    assert "note" not in resp.json()


def test_delete_then_get(client, api_patient, api_practitioner):
    order = _create_order(client, api_patient, api_practitioner)

    assert client.delete(f"{API}/service-requests/{order['id']}").status_code == 204
    assert client.get(f"{API}/service-requests/{order['id']}").status_code == 404
    assert client.delete(f"{API}/service-requests/{order['id']}").status_code == 404


def test_list_pagination_envelope(client, api_patient, api_practitioner):
    for code in ("a", "b", "c"):
        _create_order(client, api_patient, api_practitioner, code_value=code)

    resp = client.get(f"{API}/service-requests", params={"limit": 2, "offset": 0})
    body = resp.json()
    assert (len(body["items"]), body["total"], body["limit"], body["offset"]) == (2, 3, 2, 0)

    body = client.get(f"{API}/service-requests", params={"offset": 5}).json()
    assert body["items"] == []
    assert body["total"] == 3


def test_limit_out_of_range_is_400(client):
    assert client.get(f"{API}/patients", params={"limit": 0}).status_code == 400
    assert client.get(f"{API}/patients", params={"limit": 501}).status_code == 400


def test_search_filters_and_unknown_keys(client, api_patient, api_practitioner):
    _create_order(client, api_patient, api_practitioner, status="active")
    _create_order(client, api_patient, api_practitioner, code_value="2823-3")

    body = client.get(
        f"{API}/service-requests",
        params={"patient": f"Patient/{api_patient['id']}", "status": "active", "_sort": "ignored"},
    ).json()
    assert body["total"] == 1
    assert body["items"][0]["status"] == "active"


def test_malformed_filter_is_400(client):
    resp = client.get(f"{API}/service-requests", params={"patient": "nope"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "invalid patient: nope"

    resp = client.get(f"{API}/service-requests", params={"authored": "yesterday"})
    assert resp.status_code == 400


def test_status_transition_and_history(client, api_patient, api_practitioner):
    order = _create_order(client, api_patient, api_practitioner)

    resp = client.post(f"{API}/service-requests/{order['id']}/status", json={"status": "active"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "active"

    resp = client.post(f"{API}/service-requests/{order['id']}/status", json={"status": "draft"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "invalid_transition"

    history = client.get(f"{API}/service-requests/{order['id']}/status-history").json()
    assert [(h["from_status"], h["to_status"]) for h in history] == [("draft", "active")]


def test_claim_children_routes(client, api_patient):
    claim = client.post(f"{API}/claims", json={"patient_id": api_patient["id"]}).json()
    url = f"{API}/claims/{claim['id']}/diagnoses"

    assert client.post(url, json={"sequence": 2, "diagnosis_code": "E11.9"}).status_code == 201
    first = client.post(url, json={"sequence": 1, "diagnosis_code": "I10"}).json()

    rows = client.get(url).json()
    assert [r["sequence"] for r in rows] == [1, 2]
    assert rows[0]["claim_id"] == claim["id"]

    assert client.delete(f"{url}/{first['id']}").status_code == 204
    assert [r["sequence"] for r in client.get(url).json()] == [2]
    assert client.delete(f"{url}/{first['id']}").status_code == 404


def test_child_of_missing_parent_is_404(client):
    resp = client.get(f"{API}/claims/{uuid.uuid4()}/diagnoses")
    assert resp.status_code == 404


def test_inbox_list_by_recipient(client, api_practitioner):
    body = {"message_type": "task", "subject": "Sign note", "recipient_id": api_practitioner["id"]}
    created = client.post(f"{API}/inbox-messages", json=body).json()
    assert created["status"] == "unread"
    assert created["thread_id"] == created["id"]

    page = client.get(f"{API}/inbox-messages", params={"recipient": api_practitioner["id"]}).json()
    assert page["total"] == 1


def test_invalid_tenant_header_is_400(client):
    app.dependency_overrides.pop(get_tenant)
    resp = client.get(f"{API}/patients", headers={"X-Tenant-ID": "bad tenant!"})
    assert resp.status_code == 400
    assert "invalid tenant id" in resp.json()["detail"]


def test_reply_to_missing_message_is_400_referential_integrity(client):
    body = {"message_type": "task", "subject": "Re: sign note", "parent_id": str(uuid.uuid4())}
    resp = client.post(f"{API}/inbox-messages", json=body)
    assert resp.status_code == 400
    assert resp.json()["error"] == "referential_integrity"


def test_clearing_status_is_400_validation(client, api_patient, api_practitioner):
    order = _create_order(client, api_patient, api_practitioner)

    resp = client.put(f"{API}/service-requests/{order['id']}", json={"status": None})
    assert resp.status_code == 400
    assert resp.json() == {"error": "validation", "detail": "status is required"}
    assert client.get(f"{API}/service-requests/{order['id']}").json()["status"] == "draft"


def test_search_with_reference_alternatives(client, api_patient, api_practitioner):
    _create_order(client, api_patient, api_practitioner)

    resp = client.get(f"{API}/service-requests", params={"patient": f"{uuid.uuid4()},{api_patient['id']}"})
    assert resp.status_code == 200
    assert resp.json()["total"] == 1


def test_history_is_gone_after_delete(client, engine, api_patient, api_practitioner):
    order = _create_order(client, api_patient, api_practitioner)
    client.post(f"{API}/service-requests/{order['id']}/status", json={"status": "active"})

    assert client.delete(f"{API}/service-requests/{order['id']}").status_code == 204
    with engine.connect() as conn:
        assert conn.execute(text("SELECT count(*) FROM order_status_history")).scalar() == 0


def test_duplicate_fhir_id_is_409(client):
    body = {"mrn": "MRN-DUP-1", "name_family": "Roe", "fhir_id": "pat-dup"}
    assert client.post(f"{API}/patients", json=body).status_code == 201

    resp = client.post(f"{API}/patients", json={**body, "mrn": "MRN-DUP-2"})
    assert resp.status_code == 409
    assert resp.json()["error"] == "conflict"
