"""Tests for error rendering."""

import pytest

from bookart.errors import BadRequest

NIL_ID = "00000000-0000-0000-0000-000000000000"

RESOURCES = [
    ("series", "Series"),
    ("books", "Book"),
    ("chapters", "Chapter"),
    ("characters", "Character"),
    ("locations", "Location"),
    ("items", "Item"),
    ("artists", "Artist"),
    ("art", "Art"),
]


class TestNotFound:
    """Tests for unknown ids."""

    @pytest.mark.parametrize("path,label", RESOURCES)
    def test_get_put_delete_unknown_id(self, client, admin_headers, path, label):
        """Test that every resource answers 404 for a well-formed unknown id."""
        expected = {"error": f"{label} not found"}

        response = client.get(f"/api/{path}/{NIL_ID}")
        assert response.status_code == 404
        assert response.get_json() == expected

        response = client.put(f"/api/{path}/{NIL_ID}", json={}, headers=admin_headers)
        assert response.status_code == 404
        assert response.get_json() == expected

        response = client.delete(f"/api/{path}/{NIL_ID}", headers=admin_headers)
        assert response.status_code == 404
        assert response.get_json() == expected

    def test_unknown_route_is_json(self, client):
        response = client.get("/api/nowhere")
        assert response.status_code == 404
        assert "error" in response.get_json()


class TestBadRequest:
    """Tests for malformed input."""

    def test_non_json_body(self, client, admin_headers):
        response = client.post(
            "/api/series", data="title=x", headers=admin_headers, content_type="text/plain"
        )
        assert response.status_code == 400
        assert response.get_json() == {"error": "Request body must be a JSON object"}

    def test_json_array_body(self, client, admin_headers):
        response = client.post("/api/series", json=["x"], headers=admin_headers)
        assert response.status_code == 400

    def test_wrong_type(self, client, admin_headers, series):
        response = client.post(
            "/api/chapters",
            json={"bookId": "b", "title": "x", "chapterNumber": "first"},
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert response.get_json()["error"].startswith("chapterNumber")

    def test_null_required_field(self, client, admin_headers, series):
        response = client.put(
            f"/api/series/{series.id}", json={"title": None}, headers=admin_headers
        )
        assert response.status_code == 400
        assert response.get_json() == {"error": "title cannot be null"}


class TestUnexpectedErrors:
    """Tests for errors raised outside the domain taxonomy."""

    def test_stray_value_error_is_internal(self, app, client):
        """Test that a ValueError not raised as BadRequest becomes a 500."""

        def explode():
            raise ValueError("boom")

        app.add_url_rule("/api/explode", "explode", explode)

        response = client.get("/api/explode")
        assert response.status_code == 500
        assert response.get_json() == {"error": "Internal server error"}

    def test_domain_rejection_still_bad_request(self, client, admin_headers):
        response = client.post(
            "/api/books", json={"seriesId": NIL_ID, "title": "Orphan"}, headers=admin_headers
        )
        assert response.status_code == 400
        assert "does not exist" in response.get_json()["error"]

    def test_bad_request_is_value_error(self):
        assert issubclass(BadRequest, ValueError)
        assert BadRequest("x").status_code == 400
