"""
Tenant resolution and tenant-scoped units of work.

Every tenant owns one PostgreSQL schema (``tenant_<id>`` by default) holding
the full set of tables. Instead of a tenant column, SQLAlchemy's
``schema_translate_map`` rewrites every unqualified table to the tenant's
schema for the lifetime of a session.
"""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from sqlalchemy.schema import CreateSchema

from ehr.config import settings
from ehr.errors import ValidationError
from ehr.models.registry import metadata

logger = logging.getLogger(__name__)

TENANT_ID_PATTERN = re.compile(r"^[a-z0-9_]{1,48}$")


@dataclass(frozen=True)
class Tenant:
    id: str
    schema: str | None  # None: use the connection's default schema


def resolve_tenant(tenant_id: str | None) -> Tenant:
    """Map a tenant identifier (e.g. from ``X-Tenant-ID``) to its schema."""
    candidate = (tenant_id or settings.DEFAULT_TENANT).strip().lower()
    if not TENANT_ID_PATTERN.match(candidate):
        raise ValidationError(f"invalid tenant id: {tenant_id}")
    return Tenant(id=candidate, schema=f"{settings.TENANT_SCHEMA_PREFIX}{candidate}")


def tenant_engine(engine: Engine, tenant: Tenant) -> Engine:
    """Engine view that shares ``engine``'s pool but resolves tables in the tenant schema."""
    if tenant.schema is None:
        return engine
    return engine.execution_options(schema_translate_map={None: tenant.schema})


@contextmanager
def tenant_session(engine: Engine, tenant: Tenant) -> Iterator[Session]:
    """One unit of work for one tenant: commit on success, roll back on error, always release."""
    session = Session(bind=tenant_engine(engine, tenant), autoflush=False, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def provision_tenant(engine: Engine, tenant: Tenant) -> None:
    """Create the tenant schema (if any) and every table inside it."""
    with engine.begin() as conn:
        if tenant.schema is not None:
            conn.execute(CreateSchema(tenant.schema, if_not_exists=True))
            conn = conn.execution_options(schema_translate_map={None: tenant.schema})
        metadata.create_all(conn)
    logger.info("Provisioned tenant %s (schema=%s)", tenant.id, tenant.schema or "default")
