"""Conflict Field Extraction — maps a store duplicate-key error to the offending field.

Invariants:
    - extract() never raises; None means "field could not be determined"
    - Handlers only see a field name, never driver error payloads

Design Decisions:
    - Protocol over ABC: handlers and the session manager depend on the shape only
    - Named constraints (uq_<table>_<field>) are resolved first; driver message
      parsing (PostgreSQL DETAIL line, SQLite "UNIQUE constraint failed") is the fallback
"""

import re
from typing import Protocol

from sqlalchemy.exc import IntegrityError

_CONSTRAINT_RE = re.compile(r"^uq_[a-z0-9]+_(?P<field>[A-Za-z0-9_]+)$")
_PG_DETAIL_RE = re.compile(r"Key \((?P<field>[A-Za-z0-9_]+)\)=")
_PG_CONSTRAINT_RE = re.compile(r'unique constraint "(?P<name>[^"]+)"')
_SQLITE_RE = re.compile(r"UNIQUE constraint failed: [A-Za-z0-9_]+\.(?P<field>[A-Za-z0-9_]+)")


class ConflictFieldExtractor(Protocol):
    """Contract for turning a duplicate-key error into an entity field name."""
    def extract(self, exc: Exception) -> str | None: ...


def field_from_constraint(name: str | None) -> str | None:
    if not name:
        return None
    match = _CONSTRAINT_RE.match(name)
    return match.group("field") if match else None


class SQLAlchemyConflictFieldExtractor:
    """Reads IntegrityError payloads from asyncpg and sqlite drivers."""

    def extract(self, exc: Exception) -> str | None:
        if not isinstance(exc, IntegrityError):
            return None
        driver_exc = exc.orig
        # asyncpg errors are chained under the DBAPI adapter
        for candidate in (driver_exc, getattr(driver_exc, "__cause__", None)):
            field = field_from_constraint(getattr(candidate, "constraint_name", None))
            if field:
                return field
        return self._from_message(str(driver_exc))

    @staticmethod
    def _from_message(message: str) -> str | None:
        match = _PG_CONSTRAINT_RE.search(message)
        if match:
            field = field_from_constraint(match.group("name"))
            if field:
                return field
        for pattern in (_PG_DETAIL_RE, _SQLITE_RE):
            match = pattern.search(message)
            if match:
                return match.group("field")
        return None
