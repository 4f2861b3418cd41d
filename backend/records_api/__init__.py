"""Records API — account and clinical record access service.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
