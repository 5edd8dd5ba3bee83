"""Imports every model module so ``Base.metadata`` knows all tables."""

from ehr.models import audit, billing, diagnostics, documents, encounter, identity, inbox  # noqa: F401
from ehr.models import oncology, reporting, surgery, vision  # noqa: F401
from ehr.models.database import Base

metadata = Base.metadata
