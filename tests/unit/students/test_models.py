"""Unit tests for student models and mappings."""

from collections.abc import Callable
from datetime import datetime

import pytest

from schoolbus.students import Student, StudentData
from schoolbus.students.models import apply_student_data, build_student, to_record


@pytest.mark.unit
class TestStudentModel:
    """Tests for Student model."""

    def test_optional_fields_default_to_none(self) -> None:
        student = Student(
            first_name="John",
            last_name="Doe",
            student_id="STU001",
            age=10,
            grade="5th Grade",
            address="123 Main Street, City",
            parent_contact="5551234567",
        )

        assert student.bus_route is None
        assert student.pickup_time is None
        assert student.dropoff_time is None

    def test_repr(self) -> None:
        student = Student(
            first_name="John",
            last_name="Doe",
            student_id="STU001",
            age=10,
            grade="5th Grade",
            address="123 Main Street, City",
            parent_contact="5551234567",
        )

        repr_str = repr(student)
        assert "STU001" in repr_str
        assert "John" in repr_str


@pytest.mark.unit
class TestMappings:
    """Tests for the StudentData / Student / StudentRecord mappings."""

    def test_build_student_copies_every_field(
        self, make_student_data: Callable[..., StudentData]
    ) -> None:
        data = make_student_data(bus_route="Route 7", pickup_time="07:15", dropoff_time="15:30")

        student = build_student(data)

        assert student.first_name == "John"
        assert student.last_name == "Doe"
        assert student.student_id == "STU001"
        assert student.age == 10
        assert student.grade == "5th Grade"
        assert student.address == "123 Main Street, City, State 12345"
        assert student.parent_contact == "5551234567"
        assert student.bus_route == "Route 7"
        assert student.pickup_time == "07:15"
        assert student.dropoff_time == "15:30"

    def test_apply_student_data_clears_optional_fields(
        self, make_student_data: Callable[..., StudentData]
    ) -> None:
        student = build_student(
            make_student_data(bus_route="Route 7", pickup_time="07:15", dropoff_time="15:30")
        )

        apply_student_data(student, make_student_data(first_name="Jane", age=12))

        assert student.first_name == "Jane"
        assert student.age == 12
        assert student.bus_route is None
        assert student.pickup_time is None
        assert student.dropoff_time is None

    def test_to_record(self, make_student_data: Callable[..., StudentData]) -> None:
        student = build_student(make_student_data())
        student.id = 42
        student.created_at = datetime(2024, 1, 1, 8, 0, 0)
        student.updated_at = datetime(2024, 1, 2, 8, 0, 0)

        record = to_record(student)

        assert record.id == 42
        assert record.student_id == "STU001"
        assert record.created_at == datetime(2024, 1, 1, 8, 0, 0)
        assert record.updated_at == datetime(2024, 1, 2, 8, 0, 0)
        assert record.bus_route is None

    def test_record_is_immutable(self, make_student_data: Callable[..., StudentData]) -> None:
        student = build_student(make_student_data())
        student.id = 1
        student.created_at = student.updated_at = datetime(2024, 1, 1)

        record = to_record(student)

        with pytest.raises(AttributeError):
            record.age = 11  # type: ignore[misc]
