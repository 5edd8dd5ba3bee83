"""Shared fixtures: an in-memory SQLite store standing in for one tenant schema."""

import os
from datetime import datetime, timezone

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from ehr.api.deps import get_tenant
from ehr.main import app
from ehr.models.database import get_engine
from ehr.models.registry import metadata
from ehr.services.identity import OrganizationService, PatientService, PractitionerService
from ehr.tenancy import Tenant, tenant_session

TEST_TENANT = Tenant(id="test", schema=None)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    with tenant_session(engine, TEST_TENANT) as session:
        yield session


@pytest.fixture
def patient(db):
    patient = PatientService.from_session(db).create(
        {"mrn": "MRN-001", "name_family": "Doe", "name_given": "Jane", "birth_date": "1990-01-15", "gender": "female"}
    )
    db.commit()
    return patient


@pytest.fixture
def practitioner(db):
    practitioner = PractitionerService.from_session(db).create({"family_name": "House", "npi": "1234567890"})
    db.commit()
    return practitioner


@pytest.fixture
def organization(db):
    organization = OrganizationService.from_session(db).create({"name": "Acme Insurance", "type_code": "ins"})
    db.commit()
    return organization


@pytest.fixture
def now():
    return datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def client(engine):
    app.dependency_overrides[get_engine] = lambda: engine
    app.dependency_overrides[get_tenant] = lambda: TEST_TENANT
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def api_patient(client):
    resp = client.post("/api/v1/patients", json={"mrn": "MRN-API-1", "name_family": "Doe", "gender": "female"})
    assert resp.status_code == 201
    return resp.json()


@pytest.fixture
def api_practitioner(client):
    resp = client.post("/api/v1/practitioners", json={"family_name": "Grey"})
    assert resp.status_code == 201
    return resp.json()
