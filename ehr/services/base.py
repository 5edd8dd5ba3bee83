"""
Service layer shared by every resource family.

A service sits between the HTTP handlers and one repository. It owns the
business rules the database cannot express on its own: required fields,
default and allowed status values, rules for child rows, and the audit
trail. Everything else passes straight through to the repository.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Mapping

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from ehr.errors import ValidationError
from ehr.repositories.base import SQLAlchemyRepository
from ehr.services.audit import log_action

logger = logging.getLogger(__name__)

SYSTEM_ACTOR = "api_user"
IMMUTABLE_FIELDS = frozenset({"id", "fhir_id", "created_at", "updated_at"})


@dataclass(frozen=True)
class ChildRule:
    """Validation rules for one child collection of a resource."""

    required_fields: tuple[str, ...] = ()
    status_field: str = "status"
    allowed_statuses: frozenset[str] | None = None
    default_status: str | None = None
    defaults: Mapping[str, Any] = field(default_factory=dict)


def check_required(data: Mapping[str, Any], names: tuple[str, ...]) -> None:
    for name in names:
        value = data.get(name)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(f"{name} is required")


def check_status(value: Any, allowed: frozenset[str] | None, label: str = "status") -> None:
    if allowed is not None and value is not None and value not in allowed:
        raise ValidationError(f"invalid {label}: {value}")


def apply_defaults(data: dict[str, Any], defaults: Mapping[str, Any]) -> dict[str, Any]:
    for key, value in defaults.items():
        if data.get(key) is None:
            data[key] = value
    return data


class ResourceService:
    """Create, read, update and delete one resource type under its business rules."""

    repository_class: ClassVar[type[SQLAlchemyRepository]]
    required_fields: ClassVar[tuple[str, ...]] = ()
    status_field: ClassVar[str | None] = "status"
    allowed_statuses: ClassVar[frozenset[str] | None] = None
    default_status: ClassVar[str | None] = None
    defaults: ClassVar[dict[str, Any]] = {}
    child_rules: ClassVar[dict[str, ChildRule]] = {}

    def __init__(self, repository: SQLAlchemyRepository, actor: str = SYSTEM_ACTOR):
        self.repo = repository
        self.actor = actor

    @classmethod
    def from_session(cls, session: Session, actor: str = SYSTEM_ACTOR) -> "ResourceService":
        return cls(cls.repository_class(session), actor)

    @property
    def session(self) -> Session:
        return self.repo.session

    @property
    def model(self):
        return self.repo.model

    @property
    def resource_type(self) -> str:
        return self.repo.resource_type

    # -- rules ----------------------------------------------------------------

    def validate(self, data: Mapping[str, Any]) -> None:
        """Check a complete field set; subclasses extend with resource rules."""
        check_required(data, self.required_fields)
        # Defaulted fields are filled on create and may not be cleared later
        check_required(data, tuple(self.defaults))
        if self.status_field:
            if self.default_status:
                check_required(data, (self.status_field,))
            check_status(data.get(self.status_field), self.allowed_statuses)

    def prepare(self, entity) -> None:
        """Hook run on a new entity just before it is inserted."""

    def snapshot(self, entity) -> dict[str, Any]:
        return {attr.key: getattr(entity, attr.key) for attr in inspect(self.model).column_attrs}

    def _audit(self, action: str, resource_type: str, resource_id: uuid.UUID, detail=None) -> None:
        log_action(
            self.session,
            actor=self.actor,
            action=action,
            resource_type=resource_type,
            resource_id=resource_id,
            detail=detail,
        )

    # -- writes ---------------------------------------------------------------

    def create(self, data: Mapping[str, Any]):
        fields = apply_defaults(dict(data), self.defaults)
        if self.status_field and self.default_status and not fields.get(self.status_field):
            fields[self.status_field] = self.default_status
        self.validate(fields)
        entity = self.model(**fields)
        self.prepare(entity)
        entity = self.repo.create(entity)
        self._audit("create", self.resource_type, entity.id, {"fhir_id": entity.fhir_id})
        return entity

    def update(self, id: uuid.UUID, changes: Mapping[str, Any]):
        """Overwrite the given fields; ``None`` clears a field, absent keys are kept."""
        entity = self.repo.get_by_id(id)
        changes = {k: v for k, v in changes.items() if k not in IMMUTABLE_FIELDS}
        self.validate({**self.snapshot(entity), **changes})
        for key, value in changes.items():
            setattr(entity, key, value)
        entity = self.repo.update(entity)
        self._audit("update", self.resource_type, entity.id, {"fields": sorted(changes)})
        return entity

    def delete(self, id: uuid.UUID) -> None:
        self.repo.delete(id)
        self._audit("delete", self.resource_type, id)

    # -- reads ----------------------------------------------------------------

    def get(self, id: uuid.UUID):
        return self.repo.get_by_id(id)

    def get_by_fhir_id(self, fhir_id: str):
        return self.repo.get_by_fhir_id(fhir_id)

    def list(self, limit: int, offset: int):
        return self.repo.list(limit, offset)

    def search(self, filters: Mapping[Enum, Any] | None, limit: int, offset: int):
        return self.repo.search(filters, limit, offset)

    def list_by_patient(self, patient_id: uuid.UUID, limit: int, offset: int):
        return self.repo.list_by_patient(patient_id, limit, offset)

    # -- child collections ----------------------------------------------------

    def validate_child(self, name: str, data: Mapping[str, Any]) -> None:
        rule = self.child_rules.get(name, ChildRule())
        check_required(data, rule.required_fields)
        check_status(data.get(rule.status_field), rule.allowed_statuses)

    def add_child(self, parent_id: uuid.UUID, name: str, data: Mapping[str, Any]):
        collection = self.repo.children[name]
        self.repo.get_by_id(parent_id)
        rule = self.child_rules.get(name, ChildRule())
        fields = apply_defaults(dict(data), rule.defaults)
        if rule.default_status and not fields.get(rule.status_field):
            fields[rule.status_field] = rule.default_status
        self.validate_child(name, fields)
        fields[collection.parent_attr] = parent_id
        child = collection.add(collection.model(**fields))
        self._audit("create", collection.model.__name__, child.id, {"parent_id": str(parent_id)})
        return child

    def list_children(self, parent_id: uuid.UUID, name: str) -> list:
        collection = self.repo.children[name]
        self.repo.get_by_id(parent_id)
        return collection.list(parent_id)

    def remove_child(self, parent_id: uuid.UUID, name: str, child_id: uuid.UUID) -> None:
        collection = self.repo.children[name]
        collection.remove(parent_id, child_id)
        self._audit("delete", collection.model.__name__, child_id, {"parent_id": str(parent_id)})
