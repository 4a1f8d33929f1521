"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from typing import Annotated

from fastapi import Depends

from schoolbus.students import StudentService

# Global StudentService instance (initialized on app startup)
_student_service: StudentService | None = None


def init_student_service(db_path: str = "schoolbus.db") -> StudentService:
    """Initialize the global StudentService instance."""
    global _student_service  # noqa: PLW0603
    _student_service = StudentService(db_path)
    return _student_service


def close_student_service() -> None:
    """Close the global StudentService instance."""
    global _student_service  # noqa: PLW0603
    if _student_service is not None:
        _student_service.close()
        _student_service = None


def get_student_service() -> Generator[StudentService, None, None]:
    """Dependency that provides the StudentService instance."""
    if _student_service is None:
        raise RuntimeError("StudentService not initialized. Call init_student_service() first.")
    yield _student_service


# Type alias for dependency injection
StudentServiceDep = Annotated[StudentService, Depends(get_student_service)]
