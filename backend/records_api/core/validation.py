"""Payload Validation — required-field and JSON-type checks per entity.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - A field is missing when absent, null, or the empty string
    - No coercion: "amount": "12" is invalid, not 12
    - Numbers must be finite: inf and nan are invalid
    - Strings must encode as UTF-8: lone surrogates are invalid
    - Uniqueness is NOT checked here (needs a read — sequenced by the handler)

Design Decisions:
    - validate_payload returns a list of issues (empty = valid) so callers can
      report every problem at once; ensure_valid is the raising wrapper
    - EntityRules is data, one constant per entity, no per-entity subclasses
"""

import math
from dataclasses import dataclass
from datetime import date, datetime

from records_api.core.errors import ValidationError

MISSING = "missing"
INVALID = "invalid"


@dataclass(frozen=True)
class FieldIssue:
    field: str
    problem: str

    def to_dict(self) -> dict:
        return {"field": self.field, "problem": self.problem}


@dataclass(frozen=True)
class EntityRules:
    """Known fields of an entity, which are required, and which are non-strings."""
    entity: str
    fields: tuple[str, ...]
    required: tuple[str, ...]
    number_fields: frozenset[str] = frozenset()
    date_fields: frozenset[str] = frozenset()


SIGNUP = EntityRules(
    entity="account",
    fields=("username", "email", "password"),
    required=("username", "email", "password"),
)

LOGIN = EntityRules(
    entity="login",
    fields=("email", "password"),
    required=("email", "password"),
)

APPOINTMENT = EntityRules(
    entity="appointment",
    fields=(
        "patientName", "patientId", "date", "time",
        "doctor", "reason", "status", "notes",
    ),
    required=("patientName", "date"),
    date_fields=frozenset({"date"}),
)

CLINICAL_RECORD = EntityRules(
    entity="medical record",
    fields=(
        "patientName", "patientId", "dateOfBirth", "condition",
        "treatment", "medications", "notes",
    ),
    required=("patientName", "condition"),
)

BILLING_ENTRY = EntityRules(
    entity="billing record",
    fields=(
        "patientName", "patientId", "serviceType", "amount",
        "paymentMethod", "insuranceProvider", "insurancePolicyNumber",
        "billingAddress",
    ),
    required=("patientName", "amount", "paymentMethod"),
    number_fields=frozenset({"amount"}),
)


def is_missing(value: object) -> bool:
    return value is None or value == ""


def is_number(value: object) -> bool:
    """Finite JSON number. bool is an int subclass in Python but not a JSON number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    # 1e999, Infinity and NaN decode to non-finite floats; huge ints don't fit a float
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def is_text(value: object) -> bool:
    """JSON string that is valid UTF-8. JSON escapes can produce lone surrogates."""
    if not isinstance(value, str):
        return False
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def parse_iso_date(value: str) -> date | None:
    """Parse YYYY-MM-DD or a full ISO datetime (date part kept). None if neither."""
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        return None


def _check_type(name: str, value: object, rules: EntityRules) -> bool:
    if name in rules.number_fields:
        return is_number(value)
    if not is_text(value):
        return False
    if name in rules.date_fields:
        return parse_iso_date(value) is not None
    return True


def validate_payload(payload: dict, rules: EntityRules) -> list[FieldIssue]:
    """Return every missing required field and every wrongly-typed known field."""
    issues: list[FieldIssue] = []
    for name in rules.fields:
        value = payload.get(name)
        if is_missing(value):
            if name in rules.required:
                issues.append(FieldIssue(name, MISSING))
            continue
        if not _check_type(name, value, rules):
            issues.append(FieldIssue(name, INVALID))
    return issues


def ensure_valid(payload: dict, rules: EntityRules, message: str) -> None:
    """Raise ValidationError(message) listing the issues, if any."""
    issues = validate_payload(payload, rules)
    if issues:
        raise ValidationError(message, [i.to_dict() for i in issues])


def extract_fields(payload: dict, rules: EntityRules) -> dict:
    """Known, present fields only. Unknown keys are dropped."""
    return {
        name: payload[name]
        for name in rules.fields
        if not is_missing(payload.get(name))
    }
