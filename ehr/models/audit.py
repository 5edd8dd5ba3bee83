from sqlalchemy import Column, DateTime, Index, Integer, String, Uuid

from ehr.models.database import Base, JSONType, utcnow


# ---------------------------------------------------------------------------
# Audit Log – append-only record of every write made through the services
# ---------------------------------------------------------------------------
class AuditLog(Base):
    __tablename__ = "audit_log"

    id = Column(Integer, primary_key=True, autoincrement=True, comment="Insertion order")
    actor = Column(String(128), nullable=False, comment="User or service identity")
    action = Column(String(64), nullable=False, comment="create | update | delete | transition")
    resource_type = Column(String(64), nullable=False)
    resource_id = Column(Uuid, nullable=False)
    detail = Column(JSONType, comment="Diff or context for the action")
    timestamp = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        Index("ix_audit_timestamp", "timestamp"),
        Index("ix_audit_resource", "resource_type", "resource_id"),
    )
