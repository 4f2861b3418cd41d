"""FastAPI dependencies for process-wide collaborators stored on app.state."""

from fastapi import Request

from records_api.infrastructure.observability import ProcessMetrics
from records_api.infrastructure.password_hasher import PasswordHasher


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_metrics(request: Request) -> ProcessMetrics:
    return request.app.state.metrics
