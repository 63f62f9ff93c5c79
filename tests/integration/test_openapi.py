"""
Integration tests for OpenAPI documentation.

Verifies OpenAPI schema is correctly generated for all endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from src.api.main import app


@pytest.fixture
def client() -> TestClient:
    """Create test client for the application."""
    return TestClient(app)


class TestOpenAPISchema:
    """Tests for OpenAPI schema generation."""

    def test_openapi_schema_accessible(self, client: TestClient) -> None:
        """OpenAPI schema is accessible at /openapi.json."""
        response = client.get("/openapi.json")
        assert response.status_code == 200
        schema = response.json()
        assert "openapi" in schema
        assert "info" in schema
        assert "paths" in schema

    def test_openapi_title_and_description(self, client: TestClient) -> None:
        """OpenAPI schema has correct title and description."""
        schema = client.get("/openapi.json").json()
        assert schema["info"]["title"] == "naricare"
        assert "Prompt dispatch" in schema["info"]["description"]
        assert schema["info"]["version"] == "0.1.0"

    def test_list_actions_in_schema(self, client: TestClient) -> None:
        """GET /v1/actions is documented."""
        schema = client.get("/openapi.json").json()
        assert "get" in schema["paths"]["/v1/actions"]
        assert schema["paths"]["/v1/actions"]["get"]["summary"] == "List available actions"

    def test_run_action_in_schema(self, client: TestClient) -> None:
        """POST /v1/actions/{name} documents its error responses."""
        schema = client.get("/openapi.json").json()
        run = schema["paths"]["/v1/actions/{name}"]["post"]
        assert run["summary"] == "Run an action"
        assert {"404", "422", "502"} <= set(run["responses"])

    def test_model_schemas(self, client: TestClient) -> None:
        """ActionSummary and ErrorResponse appear as components."""
        components = client.get("/openapi.json").json()["components"]["schemas"]
        assert set(components["ActionSummary"]["properties"]) == {"name", "description"}
        assert "detail" in components["ErrorResponse"]["properties"]

    def test_endpoints_tagged_with_v1(self, client: TestClient) -> None:
        """Action endpoints are tagged with v1."""
        schema = client.get("/openapi.json").json()
        assert "v1" in [t["name"] for t in schema.get("tags", [])]
        assert "v1" in schema["paths"]["/v1/actions"]["get"]["tags"]
        assert "v1" in schema["paths"]["/v1/actions/{name}"]["post"]["tags"]


class TestHealth:
    """Tests for the health endpoint."""

    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestSwaggerUI:
    """Tests for Swagger UI availability."""

    def test_docs_endpoint_accessible(self, client: TestClient) -> None:
        """Swagger UI is accessible at /docs."""
        response = client.get("/docs")
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "swagger" in response.text.lower()
