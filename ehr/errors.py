"""
Domain error taxonomy.

Services and repositories raise these; the HTTP layer maps them to status
codes in ``ehr.api.errors``. Nothing in this package retries on any of them.
"""

from __future__ import annotations


class EHRError(Exception):
    """Base class for errors the API knows how to report."""

    kind = "error"


class ValidationError(EHRError):
    """A required field is missing or a value is outside its allowed set."""

    kind = "validation"


class InvalidTransitionError(ValidationError):
    kind = "invalid_transition"


class NotFoundError(EHRError):
    kind = "not_found"

    def __init__(self, resource: str, key: object):
        self.resource = resource
        self.key = key
        super().__init__(f"{resource} not found: {key}")


class ReferentialIntegrityError(EHRError):
    """The store rejected a write: dangling foreign key or missing NOT NULL value."""

    kind = "referential_integrity"


class ConflictError(EHRError):
    """The write collides with an existing row on a unique key."""

    kind = "conflict"
