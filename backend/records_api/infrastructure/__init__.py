"""Infrastructure Layer — database, credential hashing, and observability.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Driver-specific errors are mapped to core/errors.py types here
"""
