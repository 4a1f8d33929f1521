"""Student filter and search endpoints."""

from fastapi import APIRouter, Query

from schoolbus.api.dependencies import StudentServiceDep
from schoolbus.api.models import APIResponse, StudentResponse, student_to_response

router = APIRouter(prefix="/students", tags=["filters"])


@router.get("/grade/{grade}", response_model=APIResponse[list[StudentResponse]])
def list_by_grade(grade: str, service: StudentServiceDep) -> APIResponse[list[StudentResponse]]:
    """List students in a grade."""
    students = service.list_by_grade(grade)
    return APIResponse(data=[student_to_response(s) for s in students])


@router.get(
    "/grade/{grade}/bus-route/{bus_route}",
    response_model=APIResponse[list[StudentResponse]],
)
def list_by_grade_and_bus_route(
    grade: str, bus_route: str, service: StudentServiceDep
) -> APIResponse[list[StudentResponse]]:
    """List students in a grade riding a bus route."""
    students = service.list_by_grade_and_bus_route(grade, bus_route)
    return APIResponse(data=[student_to_response(s) for s in students])


@router.get("/bus-route/{bus_route}", response_model=APIResponse[list[StudentResponse]])
def list_by_bus_route(
    bus_route: str, service: StudentServiceDep
) -> APIResponse[list[StudentResponse]]:
    """List students on a bus route, ordered by pickup time."""
    students = service.list_by_bus_route(bus_route)
    return APIResponse(data=[student_to_response(s) for s in students])


@router.get(
    "/parent-contact/{parent_contact}",
    response_model=APIResponse[list[StudentResponse]],
)
def list_by_parent_contact(
    parent_contact: str, service: StudentServiceDep
) -> APIResponse[list[StudentResponse]]:
    """List students sharing a parent contact."""
    students = service.list_by_parent_contact(parent_contact)
    return APIResponse(data=[student_to_response(s) for s in students])


@router.get("/search", response_model=APIResponse[list[StudentResponse]])
def search_by_name(
    service: StudentServiceDep,
    name: str | None = Query(default=None, description="Part of a first or last name"),
) -> APIResponse[list[StudentResponse]]:
    """Search students by first or last name."""
    students = service.search_by_name(name)
    return APIResponse(data=[student_to_response(s) for s in students])


@router.get("/age-range", response_model=APIResponse[list[StudentResponse]])
def list_by_age_range(
    service: StudentServiceDep,
    min_age: int | None = Query(default=None, description="Minimum age (inclusive)"),
    max_age: int | None = Query(default=None, description="Maximum age (inclusive)"),
) -> APIResponse[list[StudentResponse]]:
    """List students within an age range."""
    students = service.list_by_age_range(min_age, max_age)
    return APIResponse(data=[student_to_response(s) for s in students])


@router.get("/without-bus-route", response_model=APIResponse[list[StudentResponse]])
def list_without_bus_route(service: StudentServiceDep) -> APIResponse[list[StudentResponse]]:
    """List students with no bus route assigned."""
    students = service.list_without_bus_route()
    return APIResponse(data=[student_to_response(s) for s in students])
