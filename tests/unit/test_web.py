"""Tests for the REST API."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from cutplan.web.app import create_app


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())


def _payload(**overrides) -> dict:
    payload = {
        "pieces": [
            {"piece_id": "P1", "material_id": "MDF18", "w_mm": 300, "h_mm": 200, "qty": 16, "rotate": True},
        ],
        "config": {
            "default_sheet_mm": [1220, 2440],
            "saw_kerf_mm": 4,
            "min_offcut_mm": [100, 100],
        },
    }
    payload.update(overrides)
    return payload


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestOptimizeEndpoint:
    """Tests for POST /api/v1/optimize."""

    def test_returns_report_and_cut_list(self, client: TestClient) -> None:
        response = client.post("/api/v1/optimize", json=_payload(project_id="kitchen"))

        assert response.status_code == 200
        data = response.json()
        assert data["project_id"] == "kitchen"
        assert data["total_sheets"] == 1
        assert data["total_pieces"] == 16
        material = data["material_sheets"]["MDF18"]
        assert material["sheets_used"] == 1
        assert material["waste_pct"] == 0.678
        assert len(data["cut_list"]) == 16
        assert data["cut_list"][1]["x"] == 304

    def test_catalog_sheet_size(self, client: TestClient) -> None:
        payload = _payload(catalog={"items": {"MDF18": {"sheet_mm": [1830, 2750], "price": 12}}})

        response = client.post("/api/v1/optimize", json=payload)

        assert response.status_code == 200
        assert response.json()["material_sheets"]["MDF18"]["sheet_mm"] == [1830, 2750]

    def test_default_config(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/optimize",
            json={"pieces": [{"piece_id": "A", "material_id": "PLY", "w_mm": "600", "h_mm": "400"}]},
        )

        assert response.status_code == 200
        assert response.json()["material_sheets"]["PLY"]["kerf_mm"] == 4

    def test_malformed_quantity_defaults_to_one(self, client: TestClient) -> None:
        payload = _payload(
            pieces=[{"piece_id": "A", "material_id": "MDF18", "w_mm": 300, "h_mm": 200, "qty": "lots"}]
        )

        response = client.post("/api/v1/optimize", json=payload)

        assert response.status_code == 200
        assert response.json()["total_pieces"] == 1

    def test_overflowing_numbers_fall_back(self, client: TestClient) -> None:
        """Dimensions and quantities beyond float range do not crash the run."""
        payload = _payload(
            pieces=[{"piece_id": "A", "material_id": "MDF18", "w_mm": "1e999", "h_mm": 200, "qty": "inf"}]
        )

        response = client.post("/api/v1/optimize", json=payload)

        assert response.status_code == 200
        data = response.json()
        assert data["total_pieces"] == 1
        assert data["cut_list"][0]["w"] == 1

    def test_piece_too_large(self, client: TestClient) -> None:
        payload = _payload(
            pieces=[{"piece_id": "BIG", "material_id": "MDF18", "w_mm": 1300, "h_mm": 500}]
        )

        response = client.post("/api/v1/optimize", json=payload)

        assert response.status_code == 422
        body = response.json()
        assert body["error_type"] == "piece_too_large"
        assert body["details"]["code"] == "E-CUT-001"
        assert body["details"]["piece_id"] == "BIG"
        assert body["details"]["sheet_mm"] == [1220, 2440]

    def test_invalid_config(self, client: TestClient) -> None:
        response = client.post("/api/v1/optimize", json=_payload(config={"saw_kerf_mm": -1}))

        assert response.status_code == 422
        body = response.json()
        assert body["error_type"] == "validation"
        assert body["details"][0]["path"] == "saw_kerf_mm"

    def test_missing_pieces(self, client: TestClient) -> None:
        response = client.post("/api/v1/optimize", json={"config": {}})

        assert response.status_code == 422


class TestExportEndpoints:
    """Tests for format listing and export downloads."""

    def test_list_formats(self, client: TestClient) -> None:
        response = client.get("/api/v1/optimize/formats")

        assert response.status_code == 200
        assert response.json() == {"formats": ["csv", "json", "svg"]}

    def test_export_csv(self, client: TestClient) -> None:
        response = client.post("/api/v1/optimize/export/csv", json=_payload(project_id="den"))

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert 'filename="den_csv.csv"' in response.headers["content-disposition"]
        lines = response.text.splitlines()
        assert lines[0] == "piece_id,material_id,sheet_index,x_mm,y_mm,w_mm,h_mm,rotated,banding"
        assert len(lines) == 17

    def test_export_svg(self, client: TestClient) -> None:
        response = client.post("/api/v1/optimize/export/svg", json=_payload())

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("image/svg+xml")
        assert "<svg" in response.text

    def test_unsupported_format(self, client: TestClient) -> None:
        response = client.post("/api/v1/optimize/export/dxf", json=_payload())

        assert response.status_code == 400
        body = response.json()
        assert body["error_type"] == "unsupported_format"
        assert body["details"]["available"] == ["csv", "json", "svg"]


class TestOpenAPI:
    """Tests for the published API schema."""

    def test_error_responses_documented(self, client: TestClient) -> None:
        schema = client.get("/openapi.json").json()

        optimize = schema["paths"]["/api/v1/optimize"]["post"]["responses"]
        export = schema["paths"]["/api/v1/optimize/export/{format_name}"]["post"]["responses"]
        error_ref = "#/components/schemas/ErrorResponseSchema"
        assert optimize["422"]["content"]["application/json"]["schema"]["$ref"] == error_ref
        assert export["400"]["content"]["application/json"]["schema"]["$ref"] == error_ref
        assert set(schema["components"]["schemas"]["ErrorResponseSchema"]["required"]) == {
            "error",
            "error_type",
        }
