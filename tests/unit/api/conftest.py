"""Fixtures for API route unit tests."""

from collections.abc import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from schoolbus.api.app import create_app
from schoolbus.api.dependencies import get_student_service
from schoolbus.students import StudentService


@pytest.fixture
def app(service: StudentService) -> FastAPI:
    """Create a test FastAPI app backed by the in-memory service."""
    app = create_app(":memory:")

    def override_get_student_service() -> Generator[StudentService, None, None]:
        yield service

    app.dependency_overrides[get_student_service] = override_get_student_service
    return app


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Create a test client.

    Not used as a context manager, so the app lifespan (which would open
    its own database) never runs.
    """
    yield TestClient(app, raise_server_exceptions=False)
