"""REST API for the school bus service."""

from schoolbus.api.app import app, create_app
from schoolbus.api.models import (
    APIResponse,
    CountResponse,
    StudentRequest,
    StudentResponse,
)

__all__ = [
    "APIResponse",
    "CountResponse",
    "StudentRequest",
    "StudentResponse",
    "app",
    "create_app",
]
