"""Root conftest — shared test configuration."""

import os

# Must be set before records_api.main is imported (settings are read at import)
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("PASSWORD_HASH_ITERATIONS", "1000")
os.environ.setdefault("LOG_FORMAT", "text")
