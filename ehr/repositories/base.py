"""
Generic SQLAlchemy repository shared by every resource family.

A repository wraps one tenant-scoped ``Session`` (see ``ehr.tenancy``) and
never commits: the unit of work that opened the session decides. Writes are
flushed immediately so that constraint violations surface on the call that
caused them.
"""

from __future__ import annotations

import logging
import uuid
from enum import Enum
from typing import Any, ClassVar, Generic, Mapping, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ehr.errors import ConflictError, NotFoundError, ReferentialIntegrityError
from ehr.ids import new_fhir_id, new_id
from ehr.models.database import Base
from ehr.repositories.search import SearchParam

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
ChildT = TypeVar("ChildT", bound=Base)


def _is_unique_violation(exc: IntegrityError) -> bool:
    # 23505 is unique_violation on PostgreSQL; SQLite only reports it in the message
    return getattr(exc.orig, "pgcode", None) == "23505" or "UNIQUE constraint failed" in str(exc.orig)


def flush_or_raise(session: Session, resource_type: str) -> None:
    """Flush pending writes, translating constraint violations into domain errors."""
    try:
        session.flush()
    except IntegrityError as exc:
        session.rollback()
        logger.warning("%s write rejected by the store: %s", resource_type, exc.orig)
        if _is_unique_violation(exc):
            raise ConflictError(f"{resource_type}: {exc.orig}") from exc
        raise ReferentialIntegrityError(f"{resource_type}: {exc.orig}") from exc


class SQLAlchemyRepository(Generic[ModelT]):
    """CRUD, pagination and typed search over one resource table."""

    model: ClassVar[type[Base]]
    filters: ClassVar[type[Enum] | None] = None
    search_params: ClassVar[dict[Enum, SearchParam]] = {}

    def __init__(self, session: Session):
        self.session = session
        self.children: dict[str, ChildCollection] = {}

    @property
    def resource_type(self) -> str:
        return self.model.__name__

    # -- writes -------------------------------------------------------------

    def create(self, entity: ModelT) -> ModelT:
        if entity.id is None:
            entity.id = new_id()
        if not entity.fhir_id:
            entity.fhir_id = new_fhir_id()
        self.session.add(entity)
        flush_or_raise(self.session, self.resource_type)
        return entity

    def update(self, entity: ModelT) -> ModelT:
        current = self.session.get(self.model, entity.id)
        if current is None:
            raise NotFoundError(self.resource_type, entity.id)
        if current is not entity:
            entity = self.session.merge(entity)
        flush_or_raise(self.session, self.resource_type)
        return entity

    def delete(self, id: uuid.UUID) -> None:
        entity = self.get_by_id(id)
        self.session.delete(entity)
        flush_or_raise(self.session, self.resource_type)

    # -- reads --------------------------------------------------------------

    def get_by_id(self, id: uuid.UUID) -> ModelT:
        entity = self.session.get(self.model, id)
        if entity is None:
            raise NotFoundError(self.resource_type, id)
        return entity

    def get_by_fhir_id(self, fhir_id: str) -> ModelT:
        entity = self.session.scalars(
            select(self.model).where(self.model.fhir_id == fhir_id)
        ).one_or_none()
        if entity is None:
            raise NotFoundError(self.resource_type, fhir_id)
        return entity

    def list(self, limit: int, offset: int) -> tuple[list[ModelT], int]:
        return self._page([], limit, offset)

    def list_by(self, column: Any, value: Any, limit: int, offset: int) -> tuple[list[ModelT], int]:
        return self._page([column == value], limit, offset)

    def search(
        self, filters: Mapping[Enum, Any] | None, limit: int, offset: int
    ) -> tuple[list[ModelT], int]:
        """Conjunctive search; keys this repository does not declare are skipped."""
        criteria = []
        for key, value in (filters or {}).items():
            param = self.search_params.get(key)
            if param is None:
                logger.debug("%s: ignoring unsupported search key %s", self.resource_type, key)
                continue
            criteria.append(param.clause(value))
        return self._page(criteria, limit, offset)

    @classmethod
    def parse_filters(cls, raw: Mapping[str, str]) -> dict[Enum, Any]:
        """Turn raw query parameters into typed filters for ``search``."""
        parsed: dict[Enum, Any] = {}
        for name, value in raw.items():
            if cls.filters is None:
                break
            try:
                key = cls.filters(name)
            except ValueError:
                logger.debug("%s: ignoring unknown query parameter %r", cls.model.__name__, name)
                continue
            parsed[key] = cls.search_params[key].parse(name, value)
        return parsed

    def _page(self, criteria: list, limit: int, offset: int) -> tuple[list[ModelT], int]:
        total = self.session.scalar(select(func.count()).select_from(self.model).where(*criteria))
        stmt = (
            select(self.model)
            .where(*criteria)
            .order_by(self.model.created_at.desc(), self.model.id)
            .limit(limit)
            .offset(offset)
        )
        return list(self.session.scalars(stmt)), total or 0


class PatientScopedRepository(SQLAlchemyRepository[ModelT]):
    """Repository for resources that carry a ``patient_id`` foreign key."""

    def list_by_patient(self, patient_id: uuid.UUID, limit: int, offset: int) -> tuple[list[ModelT], int]:
        return self.list_by(self.model.patient_id, patient_id, limit, offset)


class ChildCollection(Generic[ChildT]):
    """Rows owned by a parent resource: add, list in order, remove."""

    def __init__(self, session: Session, model: type[ChildT], parent_attr: str, order_by: tuple = ()):
        self.session = session
        self.model = model
        self.parent_attr = parent_attr
        self.order_by = order_by

    @property
    def parent_column(self):
        return getattr(self.model, self.parent_attr)

    def add(self, child: ChildT) -> ChildT:
        if child.id is None:
            child.id = new_id()
        self.session.add(child)
        flush_or_raise(self.session, self.model.__name__)
        return child

    def list(self, parent_id: uuid.UUID) -> list[ChildT]:
        stmt = (
            select(self.model)
            .where(self.parent_column == parent_id)
            .order_by(*self.order_by, self.model.created_at, self.model.id)
        )
        return list(self.session.scalars(stmt))

    def remove(self, parent_id: uuid.UUID, child_id: uuid.UUID) -> None:
        child = self.session.get(self.model, child_id)
        if child is None or getattr(child, self.parent_attr) != parent_id:
            raise NotFoundError(self.model.__name__, child_id)
        self.session.delete(child)
        flush_or_raise(self.session, self.model.__name__)
