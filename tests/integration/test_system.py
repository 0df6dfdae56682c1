"""
Integration tests for system endpoints and the error envelope.
"""


class TestSystemEndpoints:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database_connected"] is True
        assert data["environment"] == "test"

    def test_root(self, client):
        data = client.get("/").json()
        assert data["docs"] == "/api/docs"
        assert data["health"] == "/health"

    def test_request_id_header(self, client):
        response = client.get("/health")
        assert len(response.headers["X-Request-ID"]) == 8


class TestErrorEnvelope:
    def test_unknown_route(self, client):
        response = client.get("/api/nowhere")

        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["request_id"] == response.headers["X-Request-ID"]

    def test_missing_token(self, client):
        response = client.get("/api/complaints")

        assert response.status_code == 401
        assert response.json()["success"] is False

    def test_validation_error_shape(self, client, alice_headers):
        response = client.post("/api/complaints", headers=alice_headers, json={"title": "Hi"})

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Invalid input data"
        fields = {error["field"] for error in body["errors"]}
        assert {"accused_id", "type", "title", "description", "incident_date"} <= fields
