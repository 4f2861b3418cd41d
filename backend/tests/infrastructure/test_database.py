"""Database manager — connectivity state and driver error translation."""

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError, ProgrammingError

from records_api.core.domain_types import ConnectionState
from records_api.core.errors import (
    DatabaseError, DatabaseUnavailableError, DuplicateKeyError,
)
from records_api.infrastructure.database import (
    DatabaseSessionManager, translate_errors,
)


async def test_connect_marks_connected(tmp_path):
    manager = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path / 'db.sqlite'}")
    assert manager.state is ConnectionState.DISCONNECTED
    assert await manager.connect() is True
    assert manager.is_connected
    assert await manager.health_check() is True
    await manager.dispose()
    assert manager.state is ConnectionState.DISCONNECTED


async def test_failed_connect_does_not_raise(tmp_path):
    manager = DatabaseSessionManager(
        f"sqlite+aiosqlite:///{tmp_path / 'nope' / 'db.sqlite'}",
    )
    assert await manager.connect() is False
    assert manager.state is ConnectionState.DISCONNECTED
    assert await manager.health_check() is False
    await manager.dispose()


async def test_readiness_ping_corrects_stale_connected_state(tmp_path):
    manager = DatabaseSessionManager(
        f"sqlite+aiosqlite:///{tmp_path / 'gone' / 'db.sqlite'}",
    )
    # Last known state from an earlier pool connect; nothing has run since
    manager._on_connect(None, None)
    assert manager.is_connected
    assert await manager.health_check() is False
    assert manager.state is ConnectionState.DISCONNECTED
    await manager.dispose()


def test_integrity_error_becomes_duplicate_key_with_field():
    with pytest.raises(DuplicateKeyError) as exc_info:
        with translate_errors("insert"):
            raise IntegrityError(
                "INSERT", {}, Exception("UNIQUE constraint failed: accounts.email"),
            )
    assert exc_info.value.field == "email"


def test_operational_error_becomes_unavailable():
    with pytest.raises(DatabaseUnavailableError):
        with translate_errors("select"):
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))


def test_other_sqlalchemy_errors_become_database_error():
    with pytest.raises(DatabaseError) as exc_info:
        with translate_errors("select"):
            raise ProgrammingError("SELECT", {}, Exception("syntax"))
    assert not isinstance(exc_info.value, DatabaseUnavailableError)


def test_non_database_errors_pass_through():
    with pytest.raises(KeyError):
        with translate_errors("select"):
            raise KeyError("x")
