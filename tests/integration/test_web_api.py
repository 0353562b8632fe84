"""Integration tests for the REST API.

These tests exercise the FastAPI application through TestClient and verify:
- Layout generation, with and without tiles and masks
- Layout validation errors are reported per field with status 422
- Project configurations generate and validate over HTTP
- Export endpoints return CSV and JSON, and reject unknown formats
- The pattern catalogue, details and preview endpoints
"""

from typing import Any

import pytest
from fastapi.testclient import TestClient

from tilesetup.web.app import create_app


@pytest.fixture
def client() -> TestClient:
    """Create a test client for the API."""
    return TestClient(create_app())


@pytest.fixture
def layout_body() -> dict[str, Any]:
    return {
        "area": {"width": 1000, "height": 1000},
        "tile": {"width": 300, "height": 300},
    }


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestGenerateLayout:
    """Tests for POST /api/v1/layouts."""

    def test_generate(self, client: TestClient, layout_body: dict[str, Any]) -> None:
        response = client.post("/api/v1/layouts", json=layout_body)

        assert response.status_code == 200
        data = response.json()
        assert data["pattern"] == "LINEAR_SQUARE"
        assert data["grid"] == {"columns": 4, "rows": 4}
        assert data["statistics"]["full_count"] == 9
        assert data["statistics"]["small_count"] == 7
        assert data["remainders"]["right"] == 100.0
        assert data["tiles"] is None

    def test_include_tiles(self, client: TestClient, layout_body: dict[str, Any]) -> None:
        response = client.post("/api/v1/layouts", json={**layout_body, "include_tiles": True})

        tiles = response.json()["tiles"]
        assert len(tiles) == 16
        assert tiles[0]["id"] == "tile_0_0"

    def test_masks_and_pattern(self, client: TestClient, layout_body: dict[str, Any]) -> None:
        body = {
            **layout_body,
            "start_line": {"x": "center"},
            "pattern": "RUNNING_BOND_SQUARE",
            "masks": [
                {"type": "rectangle", "id": "door", "x": 0, "y": 0, "width": 50, "height": 1000}
            ],
        }

        response = client.post("/api/v1/layouts", json=body)

        assert response.status_code == 200
        data = response.json()
        assert data["pattern"] == "RUNNING_BOND_SQUARE"
        assert data["remainders"]["left"] == 50.0
        assert data["masks"][0]["id"] == "door"
        assert data["masks"][0]["covered_tiles"]

    def test_layout_validation_error(self, client: TestClient, layout_body: dict[str, Any]) -> None:
        body = {**layout_body, "area": {"width": 50, "height": 1000}}

        response = client.post("/api/v1/layouts", json=body)

        assert response.status_code == 422
        data = response.json()
        assert data["error_type"] == "layout_validation"
        assert {"field": "area_width", "message": "Area width must be at least 100mm"} in data[
            "details"
        ]

    def test_unknown_pattern_is_a_request_error(
        self, client: TestClient, layout_body: dict[str, Any]
    ) -> None:
        response = client.post("/api/v1/layouts", json={**layout_body, "pattern": "ZIGZAG"})
        assert response.status_code == 422

    def test_pattern_warning(self, client: TestClient, layout_body: dict[str, Any]) -> None:
        response = client.post(
            "/api/v1/layouts", json={**layout_body, "pattern": "TRADITIONAL_HERRINGBONE"}
        )

        assert response.status_code == 200
        assert response.json()["warnings"]


class TestGenerateFromConfig:
    """Tests for POST /api/v1/layouts/from-config."""

    def test_generate(self, client: TestClient, valid_config_data: dict[str, Any]) -> None:
        config = {
            **valid_config_data,
            "masks": [{"type": "circle", "id": "drain", "cx": 450, "cy": 450, "radius": 100}],
        }

        response = client.post("/api/v1/layouts/from-config", json={"config": config})

        assert response.status_code == 200
        data = response.json()
        assert data["masks"][0]["type"] == "circle"
        assert data["statistics"]["total_count"] < 16

    def test_schema_error(self, client: TestClient, valid_config_data: dict[str, Any]) -> None:
        config = {**valid_config_data, "gap": -1}

        response = client.post("/api/v1/layouts/from-config", json={"config": config})

        assert response.status_code == 422
        data = response.json()
        assert data["error_type"] == "config_validation"
        assert data["details"][0]["path"] == "gap"

    def test_layout_error(self, client: TestClient, valid_config_data: dict[str, Any]) -> None:
        config = {**valid_config_data, "area": {"width": 200, "height": 1000}}

        response = client.post("/api/v1/layouts/from-config", json={"config": config})

        assert response.status_code == 422
        data = response.json()
        assert data["error_type"] == "layout_validation"
        assert data["details"][0]["field"] == "tile_width"


class TestExport:
    """Tests for POST /api/v1/layouts/export/{format}."""

    def test_csv(self, client: TestClient, layout_body: dict[str, Any]) -> None:
        response = client.post("/api/v1/layouts/export/csv", json=layout_body)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        lines = response.text.splitlines()
        assert lines[0].startswith("id,row,col,kind")
        assert len(lines) == 17

    def test_json(self, client: TestClient, layout_body: dict[str, Any]) -> None:
        response = client.post("/api/v1/layouts/export/json", json=layout_body)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        assert len(response.json()["tiles"]) == 16

    def test_unsupported_format(self, client: TestClient, layout_body: dict[str, Any]) -> None:
        response = client.post("/api/v1/layouts/export/dxf", json=layout_body)

        assert response.status_code == 400
        data = response.json()
        assert data["error_type"] == "unsupported_format"
        assert data["details"]["available"] == ["csv", "json"]


class TestPatterns:
    """Tests for the pattern catalogue endpoints."""

    def test_list(self, client: TestClient) -> None:
        data = client.get("/api/v1/patterns").json()

        assert data["count"] == 15
        assert data["patterns"][0]["id"] == "LINEAR_SQUARE"

    def test_list_square_only(self, client: TestClient) -> None:
        data = client.get("/api/v1/patterns", params={"square": True}).json()

        assert data["count"] == 10
        assert not any(p["requires_rectangular"] for p in data["patterns"])

    def test_details(self, client: TestClient) -> None:
        response = client.get("/api/v1/patterns/BASKET_WEAVE")

        assert response.status_code == 200
        data = response.json()
        assert data["name_en"] == "Basket Weave"
        assert data["requires_rectangular"] is True

    def test_unknown_pattern(self, client: TestClient) -> None:
        response = client.get("/api/v1/patterns/ZIGZAG")

        assert response.status_code == 404
        data = response.json()
        assert data["error_type"] == "not_found"
        assert data["details"] == {"pattern_id": "ZIGZAG"}

    def test_preview(self, client: TestClient) -> None:
        data = client.get("/api/v1/patterns/RUNNING_BOND_SQUARE/preview").json()

        assert data["pattern_id"] == "RUNNING_BOND_SQUARE"
        assert data["tile_size"] == 100.0
        assert data["gap"] == 2.0
        assert len(data["offsets"]) == 4
        assert all(len(row) == 4 for row in data["offsets"])
        assert data["offsets"][0][0]["dx"] == 0.0
        assert data["offsets"][1][0]["dx"] == 50.0

    def test_preview_unknown_pattern(self, client: TestClient) -> None:
        assert client.get("/api/v1/patterns/ZIGZAG/preview").status_code == 404


class TestValidateEndpoint:
    """Tests for POST /api/v1/validate."""

    def test_valid(self, client: TestClient, valid_config_data: dict[str, Any]) -> None:
        data = client.post("/api/v1/validate", json={"config": valid_config_data}).json()

        assert data == {"is_valid": True, "errors": [], "warnings": []}

    def test_warnings(self, client: TestClient, valid_config_data: dict[str, Any]) -> None:
        config = {**valid_config_data, "pattern": "STRAIGHT_HERRINGBONE"}

        data = client.post("/api/v1/validate", json={"config": config}).json()

        assert data["is_valid"] is True
        assert data["warnings"][0]["path"] == "pattern"

    def test_layout_errors(self, client: TestClient, valid_config_data: dict[str, Any]) -> None:
        config = {**valid_config_data, "tile": {"width": 5, "height": 300}}

        data = client.post("/api/v1/validate", json={"config": config}).json()

        assert data["is_valid"] is False
        assert data["errors"][0]["path"] == "tile.width"

    def test_schema_error(self, client: TestClient) -> None:
        response = client.post("/api/v1/validate", json={"config": {"schema_version": "1.0"}})

        assert response.status_code == 422
        assert response.json()["error_type"] == "config_validation"
