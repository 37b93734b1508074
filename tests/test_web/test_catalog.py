"""Tests for the catalog routes."""

import pytest

NIL_ID = "00000000-0000-0000-0000-000000000000"


@pytest.fixture
def series_id(client, admin_headers) -> str:
    response = client.post(
        "/api/series",
        json={"title": "The Lord of the Rings", "coverImageUrl": "https://example.com/lotr.jpg"},
        headers=admin_headers,
    )
    return response.get_json()["series"]["id"]


@pytest.fixture
def book_id(client, admin_headers, series_id) -> str:
    response = client.post(
        "/api/books",
        json={"seriesId": series_id, "title": "The Fellowship of the Ring"},
        headers=admin_headers,
    )
    return response.get_json()["book"]["id"]


class TestSeriesRoutes:
    """Tests for /api/series."""

    def test_create_returns_camel_case(self, client, admin_headers):
        """Test that the created row is wrapped and camelCased."""
        response = client.post(
            "/api/series",
            json={"title": "Earthsea", "coverImageUrl": "https://example.com/e.jpg"},
            headers=admin_headers,
        )

        assert response.status_code == 201
        series = response.get_json()["series"]
        assert series["title"] == "Earthsea"
        assert series["coverImageUrl"] == "https://example.com/e.jpg"
        assert "createdAt" in series
        assert "cover_image_url" not in series

    def test_list_is_public(self, client, series_id):
        response = client.get("/api/series")
        assert response.status_code == 200
        assert [s["id"] for s in response.get_json()["series"]] == [series_id]

    def test_get_one(self, client, series_id):
        response = client.get(f"/api/series/{series_id}")
        assert response.get_json()["series"]["id"] == series_id

    def test_update(self, client, admin_headers, series_id):
        response = client.put(
            f"/api/series/{series_id}", json={"author": "Tolkien"}, headers=admin_headers
        )
        assert response.status_code == 200
        assert response.get_json()["series"]["author"] == "Tolkien"

    def test_delete(self, client, admin_headers, series_id, book_id):
        """Test that delete reports success and cascades to books."""
        response = client.delete(f"/api/series/{series_id}", headers=admin_headers)

        assert response.status_code == 200
        assert response.get_json() == {"message": "Series deleted successfully"}
        assert client.get(f"/api/books/{book_id}").status_code == 404

    def test_nested_books(self, client, series_id, book_id):
        response = client.get(f"/api/series/{series_id}/books")
        assert [b["id"] for b in response.get_json()["books"]] == [book_id]

    def test_missing_title(self, client, admin_headers):
        response = client.post("/api/series", json={"author": "x"}, headers=admin_headers)
        assert response.status_code == 400
        assert response.get_json() == {"error": "title is required"}


class TestBookRoutes:
    """Tests for /api/books and nested projections."""

    def test_filter_by_series(self, client, admin_headers, series_id, book_id):
        other = client.post("/api/series", json={"title": "Dune"}, headers=admin_headers)
        other_id = other.get_json()["series"]["id"]
        client.post("/api/books", json={"seriesId": other_id, "title": "Dune"}, headers=admin_headers)

        response = client.get(f"/api/books?seriesId={series_id}")
        assert [b["id"] for b in response.get_json()["books"]] == [book_id]
        assert len(client.get("/api/books").get_json()["books"]) == 2

    def test_unknown_series_is_bad_request(self, client, admin_headers):
        response = client.post(
            "/api/books", json={"seriesId": NIL_ID, "title": "Orphan"}, headers=admin_headers
        )
        assert response.status_code == 400
        assert "does not exist" in response.get_json()["error"]

    def test_chapters_nested(self, client, admin_headers, book_id):
        for number in (2, 1):
            client.post(
                "/api/chapters",
                json={"bookId": book_id, "title": f"Chapter {number}", "chapterNumber": number},
                headers=admin_headers,
            )

        chapters = client.get(f"/api/books/{book_id}/chapters").get_json()["chapters"]
        assert [c["chapterNumber"] for c in chapters] == [1, 2]

    def test_nested_of_missing_book(self, client):
        response = client.get(f"/api/books/{NIL_ID}/chapters")
        assert response.status_code == 404
        assert response.get_json() == {"error": "Book not found"}


class TestEntityRoutes:
    """Tests for characters, locations and items."""

    def test_character_with_books(self, client, admin_headers, series_id, book_id):
        """Test that bookIds links the character and shows up on the book."""
        response = client.post(
            "/api/characters",
            json={
                "seriesId": series_id,
                "name": "Frodo",
                "data": {"race": "Hobbit"},
                "bookIds": [book_id],
            },
            headers=admin_headers,
        )
        assert response.status_code == 201
        character = response.get_json()["character"]
        assert character["data"] == {"race": "Hobbit"}

        books = client.get(f"/api/characters/{character['id']}/books").get_json()["books"]
        assert [b["id"] for b in books] == [book_id]
        on_book = client.get(f"/api/books/{book_id}/characters").get_json()["characters"]
        assert [c["name"] for c in on_book] == ["Frodo"]

    def test_data_keys_returned_verbatim(self, client, admin_headers, series_id):
        """Test that keys inside free-form data are not camel-cased."""
        data = {"eye_color": "blue", "home_town": {"map_ref": 3}}
        created = client.post(
            "/api/characters",
            json={"seriesId": series_id, "name": "Legolas", "data": data},
            headers=admin_headers,
        ).get_json()["character"]
        assert created["data"] == data
        assert "seriesId" in created

        fetched = client.get(f"/api/characters/{created['id']}").get_json()["character"]
        assert fetched["data"] == data

    def test_paginated_list(self, client, admin_headers, series_id):
        for name in ("Bree", "Moria", "Rivendell"):
            client.post(
                "/api/locations", json={"seriesId": series_id, "name": name}, headers=admin_headers
            )

        body = client.get("/api/locations?page=2&limit=2").get_json()
        assert body["total"] == 3
        assert body["page"] == 2
        assert body["limit"] == 2
        assert [loc["name"] for loc in body["locations"]] == ["Rivendell"]

    def test_link_and_unlink_book(self, client, admin_headers, series_id, book_id):
        item = client.post(
            "/api/items", json={"seriesId": series_id, "name": "Sting"}, headers=admin_headers
        ).get_json()["item"]

        response = client.post(
            f"/api/items/{item['id']}/books", json={"bookId": book_id}, headers=admin_headers
        )
        assert response.status_code == 201
        assert len(client.get(f"/api/books/{book_id}/items").get_json()["items"]) == 1

        response = client.delete(f"/api/items/{item['id']}/books/{book_id}", headers=admin_headers)
        assert response.status_code == 200
        assert client.get(f"/api/books/{book_id}/items").get_json()["items"] == []

    def test_cross_series_link_rejected(self, client, admin_headers, series_id):
        other = client.post("/api/series", json={"title": "Dune"}, headers=admin_headers)
        dune_book = client.post(
            "/api/books",
            json={"seriesId": other.get_json()["series"]["id"], "title": "Dune"},
            headers=admin_headers,
        ).get_json()["book"]

        response = client.post(
            "/api/characters",
            json={"seriesId": series_id, "name": "Gandalf", "bookIds": [dune_book["id"]]},
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert "not found in this series" in response.get_json()["error"]


class TestArtistRoutes:
    """Tests for /api/artists."""

    def test_create_and_get(self, client, admin_headers):
        created = client.post(
            "/api/artists", json={"name": "Alan Lee"}, headers=admin_headers
        ).get_json()["artist"]

        response = client.get(f"/api/artists/{created['id']}")
        assert response.get_json()["artist"]["name"] == "Alan Lee"
        assert client.get(f"/api/artists/{created['id']}/art").get_json() == {"art": []}
