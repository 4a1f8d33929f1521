"""Field constraints for student data.

Every check runs only when the field is set. Checks run in field order and
the first violation is raised as InvalidStudentDataError.
"""

from __future__ import annotations

import re

from schoolbus.students.exceptions import InvalidStudentDataError
from schoolbus.students.models import StudentData

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
STUDENT_ID_MIN_LENGTH = 5
STUDENT_ID_MAX_LENGTH = 20
ADDRESS_MIN_LENGTH = 10
ADDRESS_MAX_LENGTH = 200
MIN_AGE = 3
MAX_AGE = 18
PHONE_PATTERN = r"^[0-9]{10,15}$"

_PHONE_RE = re.compile(PHONE_PATTERN)

# (attribute, label) for required fields, in validation order
REQUIRED_FIELDS: tuple[tuple[str, str], ...] = (
    ("first_name", "First name"),
    ("last_name", "Last name"),
    ("student_id", "Student ID"),
    ("age", "Age"),
    ("grade", "Grade"),
    ("address", "Address"),
    ("parent_contact", "Parent contact"),
)


def _check_length(value: str, label: str, min_length: int, max_length: int) -> None:
    if not min_length <= len(value) <= max_length:
        raise InvalidStudentDataError(
            f"{label} must be between {min_length} and {max_length} characters"
        )


def _check_text(
    value: str | None,
    label: str,
    min_length: int | None = None,
    max_length: int | None = None,
) -> None:
    if value is None:
        return
    if not value.strip():
        raise InvalidStudentDataError(f"{label} cannot be empty")
    if min_length is not None and max_length is not None:
        _check_length(value, label, min_length, max_length)


def _check_required(data: StudentData) -> None:
    for attr, label in REQUIRED_FIELDS:
        if getattr(data, attr) is None:
            raise InvalidStudentDataError(f"{label} is required")


def validate_student_data(data: StudentData | None, complete: bool = False) -> StudentData:
    """Validate student data.

    Args:
        data: The data to validate.
        complete: Require every mandatory field to be set.

    Returns:
        The same data, once it has passed every check.

    Raises:
        InvalidStudentDataError: If data is None or a constraint is violated.
    """
    if data is None:
        raise InvalidStudentDataError("Student data cannot be null")

    if complete:
        _check_required(data)

    _check_text(data.first_name, "First name", NAME_MIN_LENGTH, NAME_MAX_LENGTH)
    _check_text(data.last_name, "Last name", NAME_MIN_LENGTH, NAME_MAX_LENGTH)
    _check_text(data.student_id, "Student ID", STUDENT_ID_MIN_LENGTH, STUDENT_ID_MAX_LENGTH)

    if data.age is not None and not MIN_AGE <= data.age <= MAX_AGE:
        raise InvalidStudentDataError(f"Age must be between {MIN_AGE} and {MAX_AGE}")

    _check_text(data.grade, "Grade")
    _check_text(data.address, "Address", ADDRESS_MIN_LENGTH, ADDRESS_MAX_LENGTH)
    _check_text(data.parent_contact, "Parent contact")

    if data.parent_contact is not None and not _PHONE_RE.fullmatch(data.parent_contact):
        raise InvalidStudentDataError("Parent contact must be a valid phone number")

    return data


def require_non_blank(value: str | None, label: str) -> str:
    """Return value trimmed, or raise if it is missing or blank."""
    if value is None or not value.strip():
        raise InvalidStudentDataError(f"{label} cannot be empty")
    return value.strip()
