"""Account Handlers — signup, login, account listing, admin seeding.

Invariants:
    - Signup pre-checks email THEN username; the unique constraints remain the guarantee
    - A DuplicateKeyError that slips past the pre-check gets the same messages
      as the pre-check (email/username) or "<field> already exists"
    - Login never reveals whether an email is registered: one AuthError message
    - Account listing selects id/username/email columns only; the hash is never loaded
    - Plaintext passwords and hashes are never logged

Design Decisions:
    - Dependency failures are re-raised with a per-operation client message;
      the underlying error code is kept for logs
    - The admin bypass is a settings-gated shortcut evaluated before any store access
"""

import logging
import secrets

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from records_api.config import Settings
from records_api.core.domain_types import ADMIN_REDIRECT, AccountRole
from records_api.core.errors import (
    AuthError, ConflictError, DependencyError, DuplicateKeyError,
)
from records_api.core.validation import (
    LOGIN, SIGNUP, ensure_valid, extract_fields, is_text, validate_payload,
)
from records_api.infrastructure.database import translate_errors
from records_api.infrastructure.password_hasher import PasswordHasher
from records_api.models.account import Account
from records_api.schemas.accounts import AccountSummary, LoginResponse, MessageResponse

logger = logging.getLogger(__name__)

SIGNUP_FIELDS_REQUIRED = "All fields are required"
SIGNUP_SUCCESS = "User registered successfully!"
SIGNUP_FAILED = "Error registering user. Please try again."
EMAIL_TAKEN = "Email already in use"
USERNAME_TAKEN = "Username already taken"
LOGIN_SUCCESS = "Login successful"
ADMIN_LOGIN_SUCCESS = "Admin login successful"
LOGIN_FAILED = "Error logging in"
LIST_USERS_FAILED = "Error fetching users"

_CONFLICT_MESSAGES = {"email": EMAIL_TAKEN, "username": USERNAME_TAKEN}


def conflict_message(field: str | None) -> str:
    """Client message for a uniqueness violation on `field`."""
    if not field:
        return "Account already exists"
    return _CONFLICT_MESSAGES.get(field, f"{field} already exists")


async def _find_by(db: AsyncSession, column, value: str) -> Account | None:
    result = await db.execute(select(Account).where(column == value))
    return result.scalar_one_or_none()


async def signup(
    payload: dict, db: AsyncSession, hasher: PasswordHasher,
) -> MessageResponse:
    """Validate, pre-check uniqueness, hash, persist."""
    ensure_valid(payload, SIGNUP, SIGNUP_FIELDS_REQUIRED)
    fields = extract_fields(payload, SIGNUP)
    logger.info("Signup request", extra={"username": fields["username"]})

    try:
        with translate_errors("signup lookup"):
            if await _find_by(db, Account.email, fields["email"]):
                raise ConflictError(EMAIL_TAKEN, "email")
            if await _find_by(db, Account.username, fields["username"]):
                raise ConflictError(USERNAME_TAKEN, "username")

        password_hash = await hasher.hash_async(fields["password"])
        account = Account(
            username=fields["username"],
            email=fields["email"],
            password_hash=password_hash,
        )
        with translate_errors("signup insert"):
            db.add(account)
            await db.commit()
    except DuplicateKeyError as e:
        await db.rollback()
        raise ConflictError(conflict_message(e.field), e.field) from e
    except DependencyError as e:
        logger.error(f"Signup failed: {e.message}", extra={"error_code": e.code})
        raise DependencyError(SIGNUP_FAILED, e.code) from e

    logger.info("Account created", extra={"username": account.username})
    return MessageResponse(message=SIGNUP_SUCCESS)


def _is_admin_bypass(email: object, password: object, settings: Settings) -> bool:
    if not settings.admin_bypass_enabled:
        return False
    if not is_text(email) or not is_text(password):
        return False
    return secrets.compare_digest(
        email.encode("utf-8"), settings.admin_bypass_email.encode("utf-8"),
    ) and secrets.compare_digest(
        password.encode("utf-8"), settings.admin_bypass_password.encode("utf-8"),
    )


async def login(
    payload: dict,
    db: AsyncSession,
    hasher: PasswordHasher,
    settings: Settings,
) -> LoginResponse:
    """Authenticate by email + password. Same 401 for unknown email and bad password."""
    email = payload.get("email")
    password = payload.get("password")

    if _is_admin_bypass(email, password, settings):
        logger.warning("Admin bypass login used")
        return LoginResponse(message=ADMIN_LOGIN_SUCCESS, redirect_to=ADMIN_REDIRECT)

    if validate_payload(payload, LOGIN):
        raise AuthError()

    try:
        with translate_errors("login lookup"):
            account = await _find_by(db, Account.email, email)
        if account is None or not await hasher.verify_async(
            password, account.password_hash,
        ):
            raise AuthError()
    except DependencyError as e:
        logger.error(f"Login failed: {e.message}", extra={"error_code": e.code})
        raise DependencyError(LOGIN_FAILED, e.code) from e

    if account.role == AccountRole.ADMIN.value:
        return LoginResponse(message=LOGIN_SUCCESS, redirect_to=ADMIN_REDIRECT)
    return LoginResponse(message=LOGIN_SUCCESS)


async def list_accounts(db: AsyncSession) -> list[AccountSummary]:
    """All accounts projected to _id, username, email."""
    try:
        with translate_errors("list accounts"):
            result = await db.execute(
                select(Account.id, Account.username, Account.email)
                .order_by(Account.created_at),
            )
            rows = result.all()
    except DependencyError as e:
        raise DependencyError(LIST_USERS_FAILED, e.code) from e
    return [
        AccountSummary(id=row.id, username=row.username, email=row.email)
        for row in rows
    ]


async def seed_admin_account(
    db: AsyncSession,
    hasher: PasswordHasher,
    username: str,
    email: str,
    password: str,
) -> bool:
    """Create the privileged account if neither its email nor username exists.

    Returns True when a new account was written. Another replica seeding the
    same account concurrently loses on the unique constraint, which is fine.
    """
    with translate_errors("admin seed lookup"):
        if await _find_by(db, Account.email, email) or await _find_by(
            db, Account.username, username,
        ):
            return False
    account = Account(
        username=username,
        email=email,
        password_hash=await hasher.hash_async(password),
        role=AccountRole.ADMIN.value,
    )
    try:
        with translate_errors("admin seed insert"):
            db.add(account)
            await db.commit()
    except DuplicateKeyError:
        await db.rollback()
        return False
    logger.info("Admin account seeded", extra={"username": username})
    return True
