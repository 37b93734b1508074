"""Tests for the search route."""

from bookart.catalog.manager import ItemManager
from bookart.db.schemas import SeriesEntityCreate


class TestSearchRoute:
    """Tests for /api/search."""

    def test_response_shape(self, client, series):
        """Test the camelCased envelope with all six groups."""
        body = client.get("/api/search?q=lord").get_json()

        assert body["query"] == "lord"
        assert body["totalCount"] == 1
        assert set(body["results"]) == {
            "series", "books", "chapters", "characters", "locations", "items",
        }
        hit = body["results"]["series"][0]
        assert hit["type"] == "series"
        assert hit["name"] == "The Lord of the Rings"
        assert "imageUrl" in hit
        assert "parentId" in hit

    def test_prefix_first(self, db, client, series):
        items = ItemManager(db)
        items.create(SeriesEntityCreate(series_id=series.id, name="The Ring"))
        items.create(SeriesEntityCreate(series_id=series.id, name="Ring of Fire"))

        hits = client.get("/api/search?q=ring").get_json()["results"]["items"]
        assert [h["name"] for h in hits] == ["Ring of Fire", "The Ring"]

    def test_no_matches(self, client, series):
        body = client.get("/api/search?q=zzz").get_json()
        assert body["totalCount"] == 0

    def test_blank_query(self, client):
        for url in ("/api/search", "/api/search?q=", "/api/search?q=%20%20"):
            response = client.get(url)
            assert response.status_code == 400
            assert response.get_json() == {"error": "Search query is required"}
