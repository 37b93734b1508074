"""Tests for utility functions."""

from bookart.utils import snake_to_camel, to_camel_case


class TestSnakeToCamel:
    """Tests for snake_to_camel."""

    def test_multi_word(self):
        assert snake_to_camel("cover_image_url") == "coverImageUrl"

    def test_single_word(self):
        assert snake_to_camel("id") == "id"

    def test_already_camel(self):
        assert snake_to_camel("seriesId") == "seriesId"

    def test_digit_segment_kept(self):
        """Test that an underscore before a digit is not folded."""
        assert snake_to_camel("chapter_1") == "chapter_1"
        assert snake_to_camel("line_2_text") == "line_2Text"


class TestToCamelCase:
    """Tests for to_camel_case."""

    def test_flat_dict(self):
        result = to_camel_case({"series_id": "s1", "created_at": "2025-01-01"})
        assert result == {"seriesId": "s1", "createdAt": "2025-01-01"}

    def test_nested_structures(self):
        """Test that nested dicts and lists are rewritten."""
        value = {
            "total_count": 1,
            "results": {"books": [{"parent_id": "x", "image_url": None}]},
        }
        assert to_camel_case(value) == {
            "totalCount": 1,
            "results": {"books": [{"parentId": "x", "imageUrl": None}]},
        }

    def test_list_of_rows(self):
        rows = [{"chapter_number": 1}, {"chapter_number": 2}]
        assert to_camel_case(rows) == [{"chapterNumber": 1}, {"chapterNumber": 2}]

    def test_values_untouched(self):
        """Test that string values are not rewritten."""
        assert to_camel_case({"role": "user_admin"}) == {"role": "user_admin"}

    def test_scalars_pass_through(self):
        assert to_camel_case(None) is None
        assert to_camel_case(42) == 42
        assert to_camel_case("snake_case") == "snake_case"

    def test_input_not_mutated(self):
        original = {"book_id": "b1"}
        to_camel_case(original)
        assert original == {"book_id": "b1"}

    def test_keep_values_leaves_nested_keys(self):
        """Test that values under keep_values keys keep their own keys."""
        value = [{"series_id": "s1", "data": {"eye_color": "blue", "home_town": {"map_ref": 1}}}]
        assert to_camel_case(value, {"data"}) == [
            {"seriesId": "s1", "data": {"eye_color": "blue", "home_town": {"map_ref": 1}}}
        ]

    def test_keep_values_not_set_rewrites_everything(self):
        assert to_camel_case({"data": {"eye_color": "blue"}}) == {"data": {"eyeColor": "blue"}}
