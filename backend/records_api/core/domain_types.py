"""Domain Types — enums and identifiers shared across layers.

Invariants:
    - RecordId is a 32-char UUID4 hex string
    - Connection states and roles encoded as Enums — no raw string matching
"""

import uuid
from enum import Enum
from typing import NewType


RecordId = NewType("RecordId", str)


def new_record_id() -> RecordId:
    return RecordId(uuid.uuid4().hex)


class ConnectionState(str, Enum):
    """Persistence connectivity as reported by /health and /metrics."""
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


class AccountRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


# Appointment.status is free text; this is what an omitted status becomes
DEFAULT_APPOINTMENT_STATUS = "Scheduled"

ADMIN_REDIRECT = "/admin"
