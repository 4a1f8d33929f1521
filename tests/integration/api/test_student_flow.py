"""Integration tests for the student API against a SQLite file."""

from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from fastapi.testclient import TestClient

from schoolbus.api.app import create_app


@pytest.fixture
def client(tmp_path: Path) -> Generator[TestClient, None, None]:
    """Create a test client whose lifespan opens a temporary database."""
    app = create_app(str(tmp_path / "schoolbus.db"))
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client


@pytest.mark.integration
class TestStudentCrudFullFlow:
    """Integration test for full CRUD flow."""

    def test_student_crud_full_flow(
        self, client: TestClient, student_payload: dict[str, Any]
    ) -> None:
        """Create -> Read -> Update -> Assign -> Delete flow."""
        # 1. Create
        create_response = client.post("/api/v1/students", json=student_payload)
        assert create_response.status_code == 201
        created = create_response.json()["data"]
        pk = created["id"]
        assert created["updated_at"] == created["created_at"]

        # 2. Duplicate student ID is rejected
        duplicate = client.post("/api/v1/students", json=student_payload)
        assert duplicate.status_code == 409

        # 3. Read
        get_response = client.get(f"/api/v1/students/{pk}")
        assert get_response.status_code == 200
        assert get_response.json()["data"]["first_name"] == "John"

        # 4. Update
        update_response = client.put(
            f"/api/v1/students/{pk}",
            json={**student_payload, "grade": "6th Grade", "age": 11},
        )
        assert update_response.status_code == 200
        assert update_response.json()["data"]["grade"] == "6th Grade"

        # 5. Assign bus route
        assign_response = client.put(
            f"/api/v1/students/{pk}/assign-bus-route",
            params={"bus_route": "Route 12", "pickup_time": "07:35", "dropoff_time": "15:05"},
        )
        assert assign_response.status_code == 200
        assigned = assign_response.json()["data"]
        assert assigned["updated_at"] >= assigned["created_at"]

        assert client.get("/api/v1/students/bus-routes").json()["data"] == ["Route 12"]
        assert client.get("/api/v1/students/count/grade/6th Grade").json()["data"] == {
            "count": 1
        }

        # 6. Delete
        delete_response = client.delete(f"/api/v1/students/{pk}")
        assert delete_response.status_code == 204

        get_response2 = client.get(f"/api/v1/students/{pk}")
        assert get_response2.status_code == 404


@pytest.mark.integration
class TestPersistence:
    """Data survives an application restart."""

    def test_students_persist_across_apps(
        self, tmp_path: Path, student_payload: dict[str, Any]
    ) -> None:
        db_path = str(tmp_path / "persist.db")

        with TestClient(create_app(db_path)) as first:
            pk = first.post("/api/v1/students", json=student_payload).json()["data"]["id"]

        with TestClient(create_app(db_path)) as second:
            response = second.get(f"/api/v1/students/{pk}")

        assert response.status_code == 200
        assert response.json()["data"]["student_id"] == "STU001"


@pytest.mark.integration
class TestOpenAPIDocs:
    """Integration test for OpenAPI documentation."""

    def test_openapi_docs_available(self, client: TestClient) -> None:
        response = client.get("/docs")
        assert response.status_code == 200

    def test_openapi_json_lists_student_paths(self, client: TestClient) -> None:
        response = client.get("/openapi.json")
        assert response.status_code == 200
        paths = response.json()["paths"]
        assert "/api/v1/students" in paths
        assert "/api/v1/students/{pk}/assign-bus-route" in paths
        assert "/api/v1/students/age-range" in paths
