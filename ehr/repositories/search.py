"""
Typed search parameters.

Each repository declares an ``Enum`` of the query keys it supports and maps
every member to a ``SearchParam`` describing the column and the kind of
comparison. Raw query strings are parsed into typed values before any SQL is
built, so a malformed UUID or date is a validation error rather than a
silent non-match.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Any

from sqlalchemy import DateTime, and_, not_

from ehr.errors import ValidationError


class SearchKind(str, Enum):
    TOKEN = "token"
    REFERENCE = "reference"
    DATE = "date"
    BOOLEAN = "boolean"


DATE_PREFIXES = ("eq", "ne", "gt", "ge", "lt", "le")


@dataclass(frozen=True)
class DateFilter:
    prefix: str
    value: date | datetime


@dataclass(frozen=True)
class SearchParam:
    column: Any
    kind: SearchKind = SearchKind.TOKEN

    def parse(self, name: str, raw: str) -> Any:
        raw = raw.strip()
        if not raw:
            raise ValidationError(f"invalid {name}: empty value")
        if self.kind is SearchKind.REFERENCE:
            # Accept both a bare id and a FHIR-style "Patient/<id>" reference; commas mean any-of
            try:
                ids = tuple(uuid.UUID(v.strip().rsplit("/", 1)[-1]) for v in raw.split(","))
            except ValueError:
                raise ValidationError(f"invalid {name}: {raw}") from None
            return ids[0] if len(ids) == 1 else ids
        if self.kind is SearchKind.DATE:
            prefix, value = "eq", raw
            if raw[:2] in DATE_PREFIXES:
                prefix, value = raw[:2], raw[2:]
            try:
                if "T" in value:
                    # fromisoformat only accepts a trailing Z from Python 3.11
                    parsed = datetime.fromisoformat(value[:-1] + "+00:00" if value.endswith("Z") else value)
                else:
                    parsed = date.fromisoformat(value)
            except ValueError:
                raise ValidationError(f"invalid {name}: {raw}") from None
            return DateFilter(prefix, parsed)
        if self.kind is SearchKind.BOOLEAN:
            if raw.lower() not in ("true", "false"):
                raise ValidationError(f"invalid {name}: {raw}")
            return raw.lower() == "true"
        if "," in raw:
            # FHIR: comma-separated token values are alternatives
            return tuple(v.strip() for v in raw.split(",") if v.strip())
        return raw

    def clause(self, value: Any):
        if self.kind is SearchKind.DATE:
            return self._date_clause(value)
        if isinstance(value, tuple):
            return self.column.in_(value)
        return self.column == value

    def _date_clause(self, flt: DateFilter):
        col = self.column
        value = flt.value
        is_timestamp = isinstance(getattr(col, "expression", col).type, DateTime)
        if is_timestamp and not isinstance(value, datetime):
            # A bare date against a timestamp column covers the whole day
            start = datetime.combine(value, time.min)
            end = start + timedelta(days=1)
            return {
                "eq": and_(col >= start, col < end),
                "ne": not_(and_(col >= start, col < end)),
                "gt": col >= end,
                "ge": col >= start,
                "lt": col < start,
                "le": col < end,
            }[flt.prefix]
        if not is_timestamp and isinstance(value, datetime):
            value = value.date()
        return {
            "eq": col == value,
            "ne": col != value,
            "gt": col > value,
            "ge": col >= value,
            "lt": col < value,
            "le": col <= value,
        }[flt.prefix]
