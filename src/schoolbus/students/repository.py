"""Persistence gateway for student rows.

A StudentRepository is bound to one session and never commits; the caller
owns the transaction boundary.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, or_, select

from schoolbus.students.models import Student

if TYPE_CHECKING:
    from sqlalchemy import Select
    from sqlalchemy.orm import Session


class StudentRepository:
    """Queries and single-row writes against the students table."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def _all(self, stmt: Select[tuple[Student]]) -> list[Student]:
        return list(self.session.execute(stmt).scalars().all())

    def _count(self, *criteria: object) -> int:
        stmt = select(func.count(Student.id)).where(*criteria)  # type: ignore[arg-type]
        return int(self.session.execute(stmt).scalar_one())

    # --- Single-row access ---

    def insert(self, student: Student) -> Student:
        """Add a student; id and timestamps are assigned when the session flushes."""
        self.session.add(student)
        return student

    def get(self, pk: int) -> Student | None:
        return self.session.get(Student, pk)

    def get_by_student_id(self, student_id: str) -> Student | None:
        stmt = select(Student).where(Student.student_id == student_id)
        return self.session.execute(stmt).scalar_one_or_none()

    def exists_by_student_id(self, student_id: str, exclude_pk: int | None = None) -> bool:
        """Check whether a student ID is taken, optionally ignoring one row."""
        stmt = select(Student.id).where(Student.student_id == student_id)
        if exclude_pk is not None:
            stmt = stmt.where(Student.id != exclude_pk)
        return self.session.execute(stmt.limit(1)).first() is not None

    def delete(self, student: Student) -> None:
        self.session.delete(student)

    # --- Predicate queries ---

    def find_all(self) -> list[Student]:
        return self._all(select(Student).order_by(Student.first_name, Student.id))

    def find_by_grade(self, grade: str) -> list[Student]:
        stmt = (
            select(Student)
            .where(Student.grade == grade)
            .order_by(Student.first_name, Student.id)
        )
        return self._all(stmt)

    def find_by_bus_route(self, bus_route: str) -> list[Student]:
        stmt = (
            select(Student)
            .where(Student.bus_route == bus_route)
            .order_by(Student.pickup_time, Student.id)
        )
        return self._all(stmt)

    def find_by_grade_and_bus_route(self, grade: str, bus_route: str) -> list[Student]:
        stmt = (
            select(Student)
            .where(Student.grade == grade, Student.bus_route == bus_route)
            .order_by(Student.first_name, Student.id)
        )
        return self._all(stmt)

    def find_by_parent_contact(self, parent_contact: str) -> list[Student]:
        stmt = (
            select(Student)
            .where(Student.parent_contact == parent_contact)
            .order_by(Student.first_name, Student.id)
        )
        return self._all(stmt)

    def find_by_age_between(self, min_age: int, max_age: int) -> list[Student]:
        stmt = (
            select(Student)
            .where(Student.age.between(min_age, max_age))
            .order_by(Student.age, Student.id)
        )
        return self._all(stmt)

    def search_by_name(self, term: str) -> list[Student]:
        """Case-insensitive substring match on first or last name."""
        stmt = (
            select(Student)
            .where(
                or_(
                    Student.first_name.icontains(term, autoescape=True),
                    Student.last_name.icontains(term, autoescape=True),
                )
            )
            .order_by(Student.first_name, Student.id)
        )
        return self._all(stmt)

    def find_without_bus_route(self) -> list[Student]:
        stmt = (
            select(Student)
            .where(Student.bus_route.is_(None))
            .order_by(Student.first_name, Student.id)
        )
        return self._all(stmt)

    # --- Aggregates ---

    def count_by_grade(self, grade: str) -> int:
        return self._count(Student.grade == grade)

    def count_by_bus_route(self, bus_route: str) -> int:
        return self._count(Student.bus_route == bus_route)

    def distinct_grades(self) -> list[str]:
        stmt = select(Student.grade).distinct().order_by(Student.grade)
        return list(self.session.execute(stmt).scalars().all())

    def distinct_bus_routes(self) -> list[str]:
        stmt = (
            select(Student.bus_route)
            .where(Student.bus_route.is_not(None))
            .distinct()
            .order_by(Student.bus_route)
        )
        return [route for route in self.session.execute(stmt).scalars().all() if route is not None]
