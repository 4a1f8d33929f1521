"""SQLAlchemy model and data shapes for student records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime  # noqa: TC003 - used at runtime for SQLAlchemy
from typing import Any

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class Student(Base):
    """Student model - one row per student riding the school bus."""

    __tablename__ = "students"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    student_id: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    grade: Mapped[str] = mapped_column(String, nullable=False)
    address: Mapped[str] = mapped_column(String(200), nullable=False)
    parent_contact: Mapped[str] = mapped_column(String(15), nullable=False)
    bus_route: Mapped[str | None] = mapped_column(String, nullable=True)
    pickup_time: Mapped[str | None] = mapped_column(String, nullable=True)
    dropoff_time: Mapped[str | None] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    def __init__(
        self,
        first_name: str,
        last_name: str,
        student_id: str,
        age: int,
        grade: str,
        address: str,
        parent_contact: str,
        bus_route: str | None = None,
        pickup_time: str | None = None,
        dropoff_time: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.first_name = first_name
        self.last_name = last_name
        self.student_id = student_id
        self.age = age
        self.grade = grade
        self.address = address
        self.parent_contact = parent_contact
        self.bus_route = bus_route
        self.pickup_time = pickup_time
        self.dropoff_time = dropoff_time

    def __repr__(self) -> str:
        return (
            f"<Student(id={self.id!r}, student_id={self.student_id!r}, "
            f"name={self.first_name!r} {self.last_name!r})>"
        )


@dataclass
class StudentData:
    """Caller-supplied student fields.

    A field left as None is unset. Validation skips unset fields unless the
    operation needs a complete record (create, update).
    """

    first_name: str | None = None
    last_name: str | None = None
    student_id: str | None = None
    age: int | None = None
    grade: str | None = None
    address: str | None = None
    parent_contact: str | None = None
    bus_route: str | None = None
    pickup_time: str | None = None
    dropoff_time: str | None = None


@dataclass(frozen=True)
class StudentRecord:
    """Stored representation of a student returned by the service."""

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


def build_student(data: StudentData) -> Student:
    """Create a new Student row from validated data."""
    return Student(
        first_name=data.first_name,  # type: ignore[arg-type]
        last_name=data.last_name,  # type: ignore[arg-type]
        student_id=data.student_id,  # type: ignore[arg-type]
        age=data.age,  # type: ignore[arg-type]
        grade=data.grade,  # type: ignore[arg-type]
        address=data.address,  # type: ignore[arg-type]
        parent_contact=data.parent_contact,  # type: ignore[arg-type]
        bus_route=data.bus_route,
        pickup_time=data.pickup_time,
        dropoff_time=data.dropoff_time,
    )


def apply_student_data(student: Student, data: StudentData) -> None:
    """Overwrite every caller-editable field of a Student row.

    Optional fields are overwritten too, so passing None clears them.
    """
    student.first_name = data.first_name  # type: ignore[assignment]
    student.last_name = data.last_name  # type: ignore[assignment]
    student.student_id = data.student_id  # type: ignore[assignment]
    student.age = data.age  # type: ignore[assignment]
    student.grade = data.grade  # type: ignore[assignment]
    student.address = data.address  # type: ignore[assignment]
    student.parent_contact = data.parent_contact  # type: ignore[assignment]
    student.bus_route = data.bus_route
    student.pickup_time = data.pickup_time
    student.dropoff_time = data.dropoff_time


def to_record(student: Student) -> StudentRecord:
    """Convert a Student row to a StudentRecord."""
    return StudentRecord(
        id=student.id,
        first_name=student.first_name,
        last_name=student.last_name,
        student_id=student.student_id,
        age=student.age,
        grade=student.grade,
        address=student.address,
        parent_contact=student.parent_contact,
        bus_route=student.bus_route,
        pickup_time=student.pickup_time,
        dropoff_time=student.dropoff_time,
        created_at=student.created_at,
        updated_at=student.updated_at,
    )
