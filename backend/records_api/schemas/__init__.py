"""Pydantic Schemas — response shapes for API endpoints.

Invariants:
    - Response schemas never carry password material

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
