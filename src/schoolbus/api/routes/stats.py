"""Student count and distinct-value endpoints."""

from fastapi import APIRouter

from schoolbus.api.dependencies import StudentServiceDep
from schoolbus.api.models import APIResponse, CountResponse

router = APIRouter(prefix="/students", tags=["stats"])


@router.get("/count/grade/{grade}", response_model=APIResponse[CountResponse])
def count_by_grade(grade: str, service: StudentServiceDep) -> APIResponse[CountResponse]:
    """Count students in a grade."""
    return APIResponse(data=CountResponse(count=service.count_by_grade(grade)))


@router.get("/count/bus-route/{bus_route}", response_model=APIResponse[CountResponse])
def count_by_bus_route(bus_route: str, service: StudentServiceDep) -> APIResponse[CountResponse]:
    """Count students on a bus route."""
    return APIResponse(data=CountResponse(count=service.count_by_bus_route(bus_route)))


@router.get("/grades", response_model=APIResponse[list[str]])
def list_grades(service: StudentServiceDep) -> APIResponse[list[str]]:
    """List distinct grades."""
    return APIResponse(data=service.list_grades())


@router.get("/bus-routes", response_model=APIResponse[list[str]])
def list_bus_routes(service: StudentServiceDep) -> APIResponse[list[str]]:
    """List distinct assigned bus routes."""
    return APIResponse(data=service.list_bus_routes())
