"""End-to-end tests for the HTTP surface: envelopes, errors and CORS."""

from tests.harness import create_client_fixture

client = create_client_fixture()


class TestHttpProtocol:
    """End-to-end tests for routing and error responses."""

    def test_preflight(self, client):
        # Act
        response = client.options("/api")

        # Assert
        assert response.status_code == 204
        assert response.headers["access-control-allow-origin"] == "*"
        assert "POST" in response.headers["access-control-allow-methods"]

    def test_cors_headers_on_errors(self, client):
        response = client.post("/api", json={})

        assert response.status_code == 400
        assert response.headers["access-control-allow-origin"] == "*"
        assert response.json() == {
            "success": False,
            "message": "Missing required parameters: type and action",
        }

    def test_bad_json(self, client):
        # Act
        response = client.post(
            "/api",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        # Assert
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_unknown_action(self, client):
        response = client.post("/api", json={"type": "comment", "action": "fly"})

        assert response.status_code == 400

    def test_method_not_allowed(self, client):
        response = client.patch("/api", json={})

        assert response.status_code == 405
        assert response.json()["message"] == "Method not allowed: PATCH"

    def test_unknown_route(self, client):
        response = client.get("/nowhere")

        assert response.status_code == 404
        assert response.json()["message"] == "Route not found: /nowhere"
        assert response.headers["access-control-allow-origin"] == "*"

    def test_envelope_in_query_string(self, client):
        # Act
        liked = client.post(
            "/api/like", json={"type": "article", "userId": "alice", "postId": "post1"}
        )
        count = client.get(
            "/api", params={"type": "article", "action": "count", "postId": "post1"}
        )

        # Assert
        assert liked.json() == {
            "success": True,
            "data": {"isNewLike": True, "likesCount": 1},
        }
        assert count.json()["data"]["likesCount"] == 1

    def test_index_lists_routes(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert "POST /api" in response.json()["data"]["routes"]

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["environment"] == "test"
        assert data["pending_refreshes"] == 0
