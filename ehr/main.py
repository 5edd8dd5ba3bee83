"""
FastAPI application entrypoint.

Run locally:  uvicorn ehr.main:app --reload
"""

import logging

from fastapi import FastAPI

from ehr.api.errors import register_exception_handlers
from ehr.api.routes import router
from ehr.config import settings
from ehr.models.database import engine
from ehr.tenancy import provision_tenant, resolve_tenant

logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s | %(name)s | %(message)s")

logger = logging.getLogger(__name__)

app = FastAPI(
    title="EHR Resource API",
    description=(
        "Multi-tenant electronic health record backend exposing FHIR-aligned "
        "clinical, diagnostic, billing and document resources."
    ),
    version="1.0.0",
)

register_exception_handlers(app)
app.include_router(router, prefix="/api/v1")


@app.on_event("startup")
def on_startup():
    tenant_ids = dict.fromkeys([settings.DEFAULT_TENANT, *settings.PROVISION_TENANTS])
    for tenant_id in tenant_ids:
        provision_tenant(engine, resolve_tenant(tenant_id))
    logger.info("Provisioned %d tenant(s)", len(tenant_ids))
