import sqlite3
import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, String, Uuid, create_engine, event
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase

from ehr.config import settings

JSONType = JSON().with_variant(JSONB(), "postgresql")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def build_engine(url: str, **kwargs) -> Engine:
    if not url.startswith("sqlite"):
        kwargs.setdefault("pool_size", settings.DB_POOL_SIZE)
    return create_engine(url, pool_pre_ping=True, **kwargs)


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite only enforces REFERENCES clauses when asked to, per connection
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = build_engine(settings.DATABASE_URL)


class Base(DeclarativeBase):
    pass


class ResourceMixin:
    """Columns shared by every top-level FHIR-aligned resource table."""

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    fhir_id = Column(String(64), unique=True, nullable=False, comment="External FHIR id")
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class ChildMixin:
    """Columns shared by rows owned by a parent resource."""

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)


def get_engine() -> Engine:
    """FastAPI dependency returning the process-wide engine (and its pool)."""
    return engine
