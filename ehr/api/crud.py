"""
Router factory for the standard resource endpoints.

Every resource gets the same surface: list/search, read by id or FHIR id,
create, update and delete, plus one set of routes per child collection.
"""

from dataclasses import dataclass
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ehr.api.deps import get_actor, get_db
from ehr.config import settings
from ehr.schemas.api import Page
from ehr.services.base import ResourceService

PAGING_PARAMS = frozenset({"limit", "offset"})


@dataclass(frozen=True)
class ChildRoute:
    read_schema: type[BaseModel]
    create_schema: type[BaseModel] | None = None  # None: read-only collection


def service_dependency(service_class: type[ResourceService]):
    def get_service(db: Session = Depends(get_db), actor: str = Depends(get_actor)) -> ResourceService:
        return service_class.from_session(db, actor)

    return get_service


def crud_router(
    *,
    prefix: str,
    service_class: type[ResourceService],
    read_schema: type[BaseModel],
    create_schema: type[BaseModel],
    update_schema: type[BaseModel],
    children: dict[str, ChildRoute] | None = None,
) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[service_class.repository_class.model.__name__])
    get_service = service_dependency(service_class)
    repository_class = service_class.repository_class

    @router.get("", response_model=Page[read_schema], response_model_exclude_none=True)
    def list_resources(
        request: Request,
        limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
        offset: int = Query(0, ge=0),
        service: ResourceService = Depends(get_service),
    ):
        raw = {k: v for k, v in request.query_params.items() if k not in PAGING_PARAMS}
        filters = repository_class.parse_filters(raw)
        if filters:
            items, total = service.search(filters, limit, offset)
        else:
            items, total = service.list(limit, offset)
        return Page[read_schema](
            items=[read_schema.model_validate(item) for item in items],
            total=total,
            limit=limit,
            offset=offset,
        )

    @router.get("/fhir/{fhir_id}", response_model=read_schema, response_model_exclude_none=True)
    def get_by_fhir_id(fhir_id: str, service: ResourceService = Depends(get_service)):
        return read_schema.model_validate(service.get_by_fhir_id(fhir_id))

    @router.get("/{id}", response_model=read_schema, response_model_exclude_none=True)
    def get_resource(id: UUID, service: ResourceService = Depends(get_service)):
        return read_schema.model_validate(service.get(id))

    @router.post(
        "",
        response_model=read_schema,
        response_model_exclude_none=True,
        status_code=status.HTTP_201_CREATED,
    )
    def create_resource(body: create_schema, service: ResourceService = Depends(get_service)):
        return read_schema.model_validate(service.create(body.model_dump(exclude_none=True)))

    @router.put("/{id}", response_model=read_schema, response_model_exclude_none=True)
    def update_resource(id: UUID, body: update_schema, service: ResourceService = Depends(get_service)):
        return read_schema.model_validate(service.update(id, body.model_dump(exclude_unset=True)))

    @router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
    def delete_resource(id: UUID, service: ResourceService = Depends(get_service)):
        service.delete(id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    for name, child in (children or {}).items():
        add_child_routes(router, get_service, name, child)

    return router


def add_child_routes(router: APIRouter, get_service, name: str, child: ChildRoute) -> None:
    read_schema = child.read_schema

    @router.get(f"/{{id}}/{name}", response_model=list[read_schema], response_model_exclude_none=True)
    def list_children(id: UUID, service: ResourceService = Depends(get_service)):
        return [read_schema.model_validate(row) for row in service.list_children(id, name)]

    if child.create_schema is None:
        return
    create_schema = child.create_schema

    @router.post(
        f"/{{id}}/{name}",
        response_model=read_schema,
        response_model_exclude_none=True,
        status_code=status.HTTP_201_CREATED,
    )
    def add_child(id: UUID, body: create_schema, service: ResourceService = Depends(get_service)):
        return read_schema.model_validate(service.add_child(id, name, body.model_dump(exclude_none=True)))

    @router.delete(f"/{{id}}/{name}/{{child_id}}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
    def remove_child(id: UUID, child_id: UUID, service: ResourceService = Depends(get_service)):
        service.remove_child(id, name, child_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
