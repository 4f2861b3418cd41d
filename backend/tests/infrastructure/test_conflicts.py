"""Conflict field extraction — PostgreSQL and SQLite duplicate-key payloads."""

from sqlalchemy.exc import IntegrityError

from records_api.infrastructure.conflicts import (
    SQLAlchemyConflictFieldExtractor, field_from_constraint,
)


class _UniqueViolation(Exception):
    def __init__(self, message, constraint_name=None):
        super().__init__(message)
        self.constraint_name = constraint_name


def _integrity(orig: Exception) -> IntegrityError:
    return IntegrityError("INSERT INTO accounts ...", {}, orig)


def test_field_from_constraint_name():
    assert field_from_constraint("uq_accounts_email") == "email"
    assert field_from_constraint("uq_accounts_username") == "username"
    assert field_from_constraint("accounts_pkey") is None
    assert field_from_constraint(None) is None


def test_extracts_from_constraint_name_attribute():
    orig = _UniqueViolation("boom", constraint_name="uq_accounts_username")
    assert SQLAlchemyConflictFieldExtractor().extract(_integrity(orig)) == "username"


def test_extracts_from_chained_driver_error():
    adapter = Exception("adapter error")
    adapter.__cause__ = _UniqueViolation("boom", constraint_name="uq_accounts_email")
    assert SQLAlchemyConflictFieldExtractor().extract(_integrity(adapter)) == "email"


def test_extracts_from_postgres_message():
    orig = Exception(
        'duplicate key value violates unique constraint "uq_accounts_email"\n'
        "DETAIL:  Key (email)=(bob@x.com) already exists.",
    )
    assert SQLAlchemyConflictFieldExtractor().extract(_integrity(orig)) == "email"


def test_extracts_from_postgres_detail_for_unnamed_constraint():
    orig = Exception(
        'duplicate key value violates unique constraint "accounts_phone_key"\n'
        "DETAIL:  Key (phone)=(555) already exists.",
    )
    assert SQLAlchemyConflictFieldExtractor().extract(_integrity(orig)) == "phone"


def test_extracts_from_sqlite_message():
    orig = Exception("UNIQUE constraint failed: accounts.username")
    assert SQLAlchemyConflictFieldExtractor().extract(_integrity(orig)) == "username"


def test_unknown_payload_returns_none():
    extractor = SQLAlchemyConflictFieldExtractor()
    assert extractor.extract(_integrity(Exception("NOT NULL constraint failed"))) is None
    assert extractor.extract(ValueError("not an integrity error")) is None
