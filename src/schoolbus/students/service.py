"""StudentService - Main API for student records operations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from schoolbus.students.database import Database
from schoolbus.students.exceptions import (
    InvalidStudentDataError,
    StudentExistsError,
    StudentNotFoundError,
)
from schoolbus.students.models import (
    StudentRecord,
    apply_student_data,
    build_student,
    to_record,
)
from schoolbus.students.repository import StudentRepository
from schoolbus.students.validation import require_non_blank, validate_student_data

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.orm import Session

    from schoolbus.students.models import Student, StudentData

logger = logging.getLogger(__name__)


def _is_student_id_conflict(error: IntegrityError) -> bool:
    message = str(error)
    return "UNIQUE constraint failed" in message or "students.student_id" in message


class StudentService:
    """Main API for student records.

    Validates input, enforces student ID uniqueness and maps stored rows to
    StudentRecord objects. Every operation runs in its own session and
    commits before returning.
    """

    def __init__(self, db_path: str = "schoolbus.db") -> None:
        """Initialize the service with a SQLite database.

        Creates database and tables if they don't exist.

        Args:
            db_path: Path to SQLite database file
        """
        self._db = Database(db_path)
        self._db.create_tables()

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    def _get_or_raise(self, repo: StudentRepository, pk: int) -> Student:
        student = repo.get(pk)
        if student is None:
            raise StudentNotFoundError(f"Student not found with ID: {pk}")
        return student

    def _commit(self, session: Session, student: Student) -> StudentRecord:
        student_id = student.student_id
        try:
            session.commit()
        except IntegrityError as e:
            session.rollback()
            if _is_student_id_conflict(e):
                raise StudentExistsError(f"Student with ID '{student_id}' already exists") from e
            raise
        session.refresh(student)
        return to_record(student)

    def _list(self, query: Callable[[StudentRepository], list[Student]]) -> list[StudentRecord]:
        session = self._db.get_session()
        try:
            return [to_record(s) for s in query(StudentRepository(session))]
        finally:
            session.close()

    # --- CRUD ---

    def create(self, data: StudentData | None) -> StudentRecord:
        """Create a new student.

        Args:
            data: Complete student data

        Returns:
            The stored student with generated id and timestamps

        Raises:
            InvalidStudentDataError: If data is missing or invalid
            StudentExistsError: If the student ID is already used
        """
        data = validate_student_data(data, complete=True)

        session = self._db.get_session()
        try:
            repo = StudentRepository(session)
            if repo.exists_by_student_id(data.student_id):  # type: ignore[arg-type]
                logger.warning("Rejected duplicate student ID %s", data.student_id)
                raise StudentExistsError(f"Student with ID '{data.student_id}' already exists")

            student = repo.insert(build_student(data))
            record = self._commit(session, student)
            logger.info("Created student %s (id=%d)", record.student_id, record.id)
            return record
        finally:
            session.close()

    def get(self, pk: int) -> StudentRecord:
        """Get student by internal ID.

        Raises:
            StudentNotFoundError: If student doesn't exist
        """
        session = self._db.get_session()
        try:
            return to_record(self._get_or_raise(StudentRepository(session), pk))
        finally:
            session.close()

    def get_by_student_id(self, student_id: str) -> StudentRecord:
        """Get student by student ID.

        Raises:
            StudentNotFoundError: If student doesn't exist
        """
        session = self._db.get_session()
        try:
            student = StudentRepository(session).get_by_student_id(student_id)
            if student is None:
                raise StudentNotFoundError(f"Student not found with Student ID: {student_id}")
            return to_record(student)
        finally:
            session.close()

    def list_all(self) -> list[StudentRecord]:
        """List all students, ordered by first name."""
        return self._list(lambda repo: repo.find_all())

    def update(self, pk: int, data: StudentData | None) -> StudentRecord:
        """Replace every field of a student.

        Optional fields not passed are cleared; there is no merge with the
        stored values.

        Args:
            pk: The student's internal ID
            data: Complete student data

        Returns:
            The updated student

        Raises:
            InvalidStudentDataError: If data is missing or invalid
            StudentNotFoundError: If student doesn't exist
            StudentExistsError: If the new student ID belongs to another student
        """
        data = validate_student_data(data, complete=True)

        session = self._db.get_session()
        try:
            repo = StudentRepository(session)
            student = self._get_or_raise(repo, pk)

            if student.student_id != data.student_id and repo.exists_by_student_id(
                data.student_id,  # type: ignore[arg-type]
                exclude_pk=pk,
            ):
                logger.warning(
                    "Rejected student ID change %s -> %s", student.student_id, data.student_id
                )
                raise StudentExistsError(f"Student with ID '{data.student_id}' already exists")

            apply_student_data(student, data)
            student.updated_at = func.now()  # type: ignore[assignment]
            record = self._commit(session, student)
            logger.info("Updated student %s (id=%d)", record.student_id, record.id)
            return record
        finally:
            session.close()

    def delete(self, pk: int) -> None:
        """Delete a student permanently.

        Raises:
            StudentNotFoundError: If student doesn't exist
        """
        session = self._db.get_session()
        try:
            repo = StudentRepository(session)
            student = self._get_or_raise(repo, pk)
            repo.delete(student)
            session.commit()
            logger.info("Deleted student %s (id=%d)", student.student_id, pk)
        finally:
            session.close()

    # --- Filters ---

    def list_by_grade(self, grade: str) -> list[StudentRecord]:
        """List students in a grade, ordered by first name."""
        return self._list(lambda repo: repo.find_by_grade(grade))

    def list_by_bus_route(self, bus_route: str) -> list[StudentRecord]:
        """List students on a bus route, ordered by pickup time."""
        return self._list(lambda repo: repo.find_by_bus_route(bus_route))

    def list_by_grade_and_bus_route(self, grade: str, bus_route: str) -> list[StudentRecord]:
        """List students in a grade riding a bus route, ordered by first name."""
        return self._list(lambda repo: repo.find_by_grade_and_bus_route(grade, bus_route))

    def list_by_parent_contact(self, parent_contact: str) -> list[StudentRecord]:
        """List siblings sharing a parent contact, ordered by first name."""
        return self._list(lambda repo: repo.find_by_parent_contact(parent_contact))

    def search_by_name(self, name: str | None) -> list[StudentRecord]:
        """Case-insensitive search on first or last name.

        A blank or missing name returns every student, like list_all().
        """
        if name is None or not name.strip():
            return self.list_all()
        term = name.strip()
        return self._list(lambda repo: repo.search_by_name(term))

    def list_by_age_range(self, min_age: int | None, max_age: int | None) -> list[StudentRecord]:
        """List students aged min_age..max_age inclusive, ordered by age.

        Raises:
            InvalidStudentDataError: If a bound is missing or min_age > max_age
        """
        if min_age is None or max_age is None:
            raise InvalidStudentDataError("Both min_age and max_age must be provided")
        if min_age > max_age:
            raise InvalidStudentDataError("min_age cannot be greater than max_age")
        return self._list(lambda repo: repo.find_by_age_between(min_age, max_age))

    def list_without_bus_route(self) -> list[StudentRecord]:
        """List students with no bus route, ordered by first name."""
        return self._list(lambda repo: repo.find_without_bus_route())

    # --- Bus route assignment ---

    def assign_bus_route(
        self,
        pk: int,
        bus_route: str | None,
        pickup_time: str | None,
        dropoff_time: str | None,
    ) -> StudentRecord:
        """Assign bus route, pickup time and dropoff time together.

        Args:
            pk: The student's internal ID
            bus_route: Route label
            pickup_time: Pickup time label
            dropoff_time: Dropoff time label

        Returns:
            The updated student

        Raises:
            StudentNotFoundError: If student doesn't exist
            InvalidStudentDataError: If any argument is blank
        """
        session = self._db.get_session()
        try:
            student = self._get_or_raise(StudentRepository(session), pk)

            route = require_non_blank(bus_route, "Bus route")
            pickup = require_non_blank(pickup_time, "Pickup time")
            dropoff = require_non_blank(dropoff_time, "Dropoff time")

            student.bus_route = route
            student.pickup_time = pickup
            student.dropoff_time = dropoff
            student.updated_at = func.now()  # type: ignore[assignment]
            session.commit()
            session.refresh(student)
            logger.info("Assigned bus route %s to student %s", route, student.student_id)
            return to_record(student)
        finally:
            session.close()

    # --- Aggregates ---

    def count_by_grade(self, grade: str) -> int:
        """Count students in a grade."""
        session = self._db.get_session()
        try:
            return StudentRepository(session).count_by_grade(grade)
        finally:
            session.close()

    def count_by_bus_route(self, bus_route: str) -> int:
        """Count students on a bus route."""
        session = self._db.get_session()
        try:
            return StudentRepository(session).count_by_bus_route(bus_route)
        finally:
            session.close()

    def list_grades(self) -> list[str]:
        """List distinct grades, sorted."""
        session = self._db.get_session()
        try:
            return StudentRepository(session).distinct_grades()
        finally:
            session.close()

    def list_bus_routes(self) -> list[str]:
        """List distinct assigned bus routes, sorted."""
        session = self._db.get_session()
        try:
            return StudentRepository(session).distinct_bus_routes()
        finally:
            session.close()
