"""ORM Models — one table per entity, no foreign keys between them.

Invariants:
    - All models inherit from Base (db/base.py)
    - Primary keys are generated UUID4 hex strings (RecordId)

Design Decisions:
    - All models imported here so Base.metadata knows every table before create_all
"""

from records_api.models.account import Account  # noqa: F401
from records_api.models.appointment import Appointment  # noqa: F401
from records_api.models.clinical_record import ClinicalRecord  # noqa: F401
from records_api.models.billing_entry import BillingEntry  # noqa: F401
