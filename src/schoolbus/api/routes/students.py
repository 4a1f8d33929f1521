"""Student CRUD endpoints."""

from fastapi import APIRouter, Query, status

from schoolbus.api.dependencies import StudentServiceDep
from schoolbus.api.models import (
    APIResponse,
    StudentRequest,
    StudentResponse,
    student_to_response,
)

router = APIRouter(prefix="/students", tags=["students"])


@router.get("", response_model=APIResponse[list[StudentResponse]])
def list_students(service: StudentServiceDep) -> APIResponse[list[StudentResponse]]:
    """List all students, ordered by first name."""
    students = service.list_all()
    return APIResponse(data=[student_to_response(s) for s in students])


@router.post(
    "",
    response_model=APIResponse[StudentResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_student(
    student: StudentRequest, service: StudentServiceDep
) -> APIResponse[StudentResponse]:
    """Create a new student."""
    created = service.create(student.to_student_data())
    return APIResponse(data=student_to_response(created))


@router.get("/student-id/{student_id}", response_model=APIResponse[StudentResponse])
def get_student_by_student_id(
    student_id: str, service: StudentServiceDep
) -> APIResponse[StudentResponse]:
    """Get a student by student ID."""
    student = service.get_by_student_id(student_id)
    return APIResponse(data=student_to_response(student))


@router.get("/{pk}", response_model=APIResponse[StudentResponse])
def get_student(pk: int, service: StudentServiceDep) -> APIResponse[StudentResponse]:
    """Get a student by ID."""
    student = service.get(pk)
    return APIResponse(data=student_to_response(student))


@router.put("/{pk}", response_model=APIResponse[StudentResponse])
def update_student(
    pk: int, student: StudentRequest, service: StudentServiceDep
) -> APIResponse[StudentResponse]:
    """Replace every field of a student."""
    updated = service.update(pk, student.to_student_data())
    return APIResponse(data=student_to_response(updated))


@router.delete("/{pk}", status_code=status.HTTP_204_NO_CONTENT)
def delete_student(pk: int, service: StudentServiceDep) -> None:
    """Delete a student."""
    service.delete(pk)


@router.put("/{pk}/assign-bus-route", response_model=APIResponse[StudentResponse])
def assign_bus_route(
    pk: int,
    service: StudentServiceDep,
    bus_route: str = Query(..., description="Bus route"),
    pickup_time: str = Query(..., description="Pickup time"),
    dropoff_time: str = Query(..., description="Dropoff time"),
) -> APIResponse[StudentResponse]:
    """Assign a bus route with pickup and dropoff times."""
    updated = service.assign_bus_route(pk, bus_route, pickup_time, dropoff_time)
    return APIResponse(data=student_to_response(updated))
