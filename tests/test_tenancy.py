"""Tests for tenant resolution and the tenant-scoped unit of work."""

import pytest
from sqlalchemy import select

from ehr.config import settings
from ehr.errors import ValidationError
from ehr.models.identity import Practitioner
from ehr.tenancy import Tenant, provision_tenant, resolve_tenant, tenant_engine, tenant_session


def test_resolve_tenant_maps_to_schema():
    tenant = resolve_tenant("Clinic_A ")
    assert tenant.id == "clinic_a"
    assert tenant.schema == f"{settings.TENANT_SCHEMA_PREFIX}clinic_a"


def test_missing_header_falls_back_to_default():
    assert resolve_tenant(None).id == settings.DEFAULT_TENANT


@pytest.mark.parametrize("bad", ["clinic-a", "clinic;drop", "x" * 49, "   "])
def test_invalid_tenant_ids_are_rejected(bad):
    with pytest.raises(ValidationError):
        resolve_tenant(bad)


def test_tenant_engine_translates_schema(engine):
    scoped = tenant_engine(engine, Tenant("acme", "tenant_acme"))
    assert scoped.get_execution_options()["schema_translate_map"] == {None: "tenant_acme"}
    assert tenant_engine(engine, Tenant("test", None)) is engine


def test_session_commits_on_success(engine):
    tenant = Tenant("test", None)
    with tenant_session(engine, tenant) as session:
        session.add(Practitioner(fhir_id="p-1", family_name="Commit"))

    with tenant_session(engine, tenant) as session:
        names = session.scalars(select(Practitioner.family_name)).all()
    assert names == ["Commit"]


def test_session_rolls_back_on_error(engine):
    tenant = Tenant("test", None)
    with pytest.raises(RuntimeError):
        with tenant_session(engine, tenant) as session:
            session.add(Practitioner(fhir_id="p-2", family_name="Rollback"))
            session.flush()
            raise RuntimeError("boom")

    with tenant_session(engine, tenant) as session:
        assert session.scalars(select(Practitioner)).all() == []


def test_provision_without_schema_creates_tables(engine):
    provision_tenant(engine, Tenant("test", None))
    with tenant_session(engine, Tenant("test", None)) as session:
        assert session.scalars(select(Practitioner)).all() == []
