"""Services Layer — request handlers composing validation, persistence, hashing.

Invariants:
    - One handler module per resource family
    - Handlers raise core/errors.py types; routes never build error bodies
"""
