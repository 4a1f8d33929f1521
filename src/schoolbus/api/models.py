"""Pydantic models for REST API."""

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from schoolbus.students.models import StudentData, StudentRecord
from schoolbus.students.validation import (
    ADDRESS_MAX_LENGTH,
    ADDRESS_MIN_LENGTH,
    MAX_AGE,
    MIN_AGE,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    PHONE_PATTERN,
    STUDENT_ID_MAX_LENGTH,
    STUDENT_ID_MIN_LENGTH,
)

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


# Student models


class StudentRequest(BaseModel):
    """Request model for creating or replacing a student."""

    first_name: str = Field(..., min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    last_name: str = Field(..., min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    student_id: str = Field(
        ..., min_length=STUDENT_ID_MIN_LENGTH, max_length=STUDENT_ID_MAX_LENGTH
    )
    age: int = Field(..., ge=MIN_AGE, le=MAX_AGE)
    grade: str = Field(..., min_length=1)
    address: str = Field(..., min_length=ADDRESS_MIN_LENGTH, max_length=ADDRESS_MAX_LENGTH)
    parent_contact: str = Field(..., pattern=PHONE_PATTERN)
    bus_route: str | None = None
    pickup_time: str | None = None
    dropoff_time: str | None = None

    def to_student_data(self) -> StudentData:
        """Convert to the service's input shape."""
        return StudentData(
            first_name=self.first_name,
            last_name=self.last_name,
            student_id=self.student_id,
            age=self.age,
            grade=self.grade,
            address=self.address,
            parent_contact=self.parent_contact,
            bus_route=self.bus_route,
            pickup_time=self.pickup_time,
            dropoff_time=self.dropoff_time,
        )


class StudentResponse(BaseModel):
    """Response model for a student."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    student_id: str
    age: int
    grade: str
    address: str
    parent_contact: str
    bus_route: str | None
    pickup_time: str | None
    dropoff_time: str | None
    created_at: datetime
    updated_at: datetime


def student_to_response(student: StudentRecord) -> StudentResponse:
    """Convert a StudentRecord to StudentResponse."""
    return StudentResponse.model_validate(student)


class CountResponse(BaseModel):
    """Response model for a student count."""

    count: int
