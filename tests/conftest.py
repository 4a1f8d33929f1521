"""Shared pytest fixtures and configuration."""

from collections.abc import Callable, Generator
from typing import Any

import pytest

from schoolbus.students import StudentData, StudentService


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


# Shared fixtures


@pytest.fixture
def service() -> Generator[StudentService, None, None]:
    """Create an in-memory StudentService."""
    s = StudentService(":memory:")
    yield s
    s.close()


@pytest.fixture
def make_student_data() -> Callable[..., StudentData]:
    """Factory for valid StudentData; keyword arguments override fields."""

    def _make(**overrides: Any) -> StudentData:
        fields: dict[str, Any] = {
            "first_name": "John",
            "last_name": "Doe",
            "student_id": "STU001",
            "age": 10,
            "grade": "5th Grade",
            "address": "123 Main Street, City, State 12345",
            "parent_contact": "5551234567",
        }
        fields.update(overrides)
        return StudentData(**fields)

    return _make


@pytest.fixture
def student_payload() -> dict[str, Any]:
    """Valid JSON body for POST/PUT /students."""
    return {
        "first_name": "John",
        "last_name": "Doe",
        "student_id": "STU001",
        "age": 10,
        "grade": "5th Grade",
        "address": "123 Main Street, City, State 12345",
        "parent_contact": "5551234567",
    }
