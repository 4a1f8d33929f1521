"""Student records - validated storage and queries for school bus students."""

from schoolbus.students.exceptions import (
    InvalidStudentDataError,
    StudentExistsError,
    StudentNotFoundError,
    StudentStoreError,
)
from schoolbus.students.models import Student, StudentData, StudentRecord
from schoolbus.students.service import StudentService

__all__ = [
    "InvalidStudentDataError",
    "Student",
    "StudentData",
    "StudentExistsError",
    "StudentNotFoundError",
    "StudentRecord",
    "StudentService",
    "StudentStoreError",
]
