"""Request-scoped dependencies: tenant, unit of work and acting user."""

from __future__ import annotations

from typing import Iterator

from fastapi import Depends, Header
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from ehr.models.database import get_engine
from ehr.services.base import SYSTEM_ACTOR
from ehr.tenancy import Tenant, resolve_tenant, tenant_session


def get_tenant(x_tenant_id: str | None = Header(None)) -> Tenant:
    return resolve_tenant(x_tenant_id)


def get_db(
    engine: Engine = Depends(get_engine),
    tenant: Tenant = Depends(get_tenant),
) -> Iterator[Session]:
    """One tenant-scoped unit of work per request."""
    with tenant_session(engine, tenant) as session:
        yield session


def get_actor(x_actor: str | None = Header(None)) -> str:
    # Authentication is handled upstream; the gateway forwards the user id
    return x_actor or SYSTEM_ACTOR
