"""Database Metadata — the SQLAlchemy declarative Base shared by models/.

Invariants:
    - Engine and sessions live in infrastructure/database.py, not here
"""
