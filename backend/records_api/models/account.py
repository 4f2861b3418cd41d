"""Account ORM — user identity with unique username and email.

Invariants:
    - username and email each unique via named constraints (uq_accounts_<field>);
      the constraint name is what the conflict field extractor reads back
    - password_hash holds the encoded PBKDF2 hash, never plaintext
    - role is "user" unless seeded as "admin"
"""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from records_api.core.domain_types import AccountRole, new_record_id
from records_api.db.base import Base


class Account(Base):
    __tablename__ = "accounts"
    __table_args__ = (
        UniqueConstraint("username", name="uq_accounts_username"),
        UniqueConstraint("email", name="uq_accounts_email"),
    )

    id: Mapped[str] = mapped_column(
        String(32), primary_key=True, default=new_record_id,
    )
    username: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=AccountRole.USER.value,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
