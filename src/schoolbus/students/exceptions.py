"""Custom exceptions for the student records service."""


class StudentStoreError(Exception):
    """Base exception for student records errors."""


class InvalidStudentDataError(StudentStoreError, ValueError):
    """Student data or query arguments are malformed or missing."""


class StudentNotFoundError(StudentStoreError):
    """Student with given ID does not exist."""


class StudentExistsError(StudentStoreError):
    """Student with given student ID already exists."""
