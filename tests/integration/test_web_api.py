"""Integration tests for the nesting REST API."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterator

import pytest
from fastapi.testclient import TestClient

from cabinet_nesting.application.factory import ServiceFactory
from cabinet_nesting.contracts.protocols import PersistenceError
from cabinet_nesting.infrastructure.stores import InMemoryRecordStore
from cabinet_nesting.web.app import create_app
from cabinet_nesting.web.dependencies import get_service_factory

pytestmark = pytest.mark.integration


# =============================================================================
# Fixtures
# =============================================================================


class UnavailableRecordStore(InMemoryRecordStore):
    """Store whose reads always fail."""

    def select(self, table: str, record_id: str) -> dict[str, Any] | None:
        raise PersistenceError("database unavailable", table=table)


@pytest.fixture
def kitchen(fixtures_path: Path) -> dict[str, Any]:
    return json.loads((fixtures_path / "kitchen.json").read_text(encoding="utf-8"))


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def client(store: InMemoryRecordStore) -> Iterator[TestClient]:
    app = create_app()
    factory = ServiceFactory(store=store)
    app.dependency_overrides[get_service_factory] = lambda: factory
    with TestClient(app) as test_client:
        yield test_client


# =============================================================================
# Tests
# =============================================================================


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestNestingJobs:
    """Tests for /api/v1/nesting/jobs."""

    def test_run_job(self, client: TestClient, kitchen: dict[str, Any]) -> None:
        response = client.post("/api/v1/nesting/jobs", json={"config": kitchen})

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["job"]["status"] == "completed"
        assert body["job"]["name"] == "Kitchen base units"
        assert body["boards_used"] == len(body["layouts"])
        assert sum(len(layout["panels"]) for layout in body["layouts"]) == 8
        assert 0 < body["material_efficiency"] <= 100

    def test_job_name_override(self, client: TestClient, kitchen: dict[str, Any]) -> None:
        response = client.post(
            "/api/v1/nesting/jobs", json={"config": kitchen, "job_name": "Rush order"}
        )
        assert response.json()["job"]["name"] == "Rush order"

    def test_unplaced_panels_reported(self, client: TestClient) -> None:
        config = {
            "boards": [{"id": "b1", "width": 2000, "height": 1000}],
            "panels": [{"id": "worktop", "name": "Worktop", "width": 3600, "height": 600}],
        }
        response = client.post("/api/v1/nesting/jobs", json={"config": config})

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["boards_used"] == 0
        assert body["unused_panels"][0]["id"] == "worktop"

    def test_get_job(self, client: TestClient, kitchen: dict[str, Any]) -> None:
        job_id = client.post("/api/v1/nesting/jobs", json={"config": kitchen}).json()[
            "job"
        ]["id"]

        response = client.get(f"/api/v1/nesting/jobs/{job_id}")

        assert response.status_code == 200
        assert response.json()["id"] == job_id
        assert response.json()["status"] == "completed"

    def test_get_unknown_job(self, client: TestClient) -> None:
        response = client.get("/api/v1/nesting/jobs/missing")

        assert response.status_code == 404
        assert response.json()["error_type"] == "not_found"

    def test_invalid_config(self, client: TestClient, kitchen: dict[str, Any]) -> None:
        kitchen["panels"][0]["width"] = -1
        response = client.post("/api/v1/nesting/jobs", json={"config": kitchen})

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "Invalid nesting configuration"
        assert body["error_type"] == "validation"
        assert body["details"][0]["path"] == "panels[0].width"

    def test_store_failure_maps_to_503(self) -> None:
        app = create_app()
        factory = ServiceFactory(store=UnavailableRecordStore())
        app.dependency_overrides[get_service_factory] = lambda: factory

        with TestClient(app) as client:
            response = client.get("/api/v1/nesting/jobs/job-1")

        assert response.status_code == 503
        assert response.json()["error_type"] == "persistence"


class TestEdgeTape:
    """Tests for /api/v1/edge-tape."""

    def test_estimate(self, client: TestClient, kitchen: dict[str, Any]) -> None:
        response = client.post("/api/v1/edge-tape", json={"config": kitchen})

        assert response.status_code == 200
        [estimate] = response.json()
        assert estimate["tape_id"] == "abs-22"
        assert estimate["length"] == pytest.approx(9.616)
        assert estimate["reels"] == 1
        assert estimate["shortfall_reels"] == 0

    def test_unknown_tape(self, client: TestClient, kitchen: dict[str, Any]) -> None:
        response = client.post(
            "/api/v1/edge-tape", json={"config": kitchen, "tape_id": "pvc-40"}
        )

        assert response.status_code == 404
        assert response.json()["details"]["available"] == ["abs-22"]
