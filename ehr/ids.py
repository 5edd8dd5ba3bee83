"""Identifier generation for internal keys and FHIR-facing ids."""

import uuid


def new_id() -> uuid.UUID:
    return uuid.uuid4()


def new_fhir_id() -> str:
    # FHIR ids allow [A-Za-z0-9-.]{1,64}; a hyphenated uuid4 fits
    return str(uuid.uuid4())
