"""Utility functions for bookart."""

import re
from typing import Any, Collection

_SNAKE_SEGMENT = re.compile(r"_([a-z])")


def snake_to_camel(name: str) -> str:
    """
    Convert a snake_case identifier to camelCase.

    Args:
        name: The identifier to convert

    Returns:
        The camelCase identifier

    Example:
        >>> snake_to_camel("cover_image_url")
        'coverImageUrl'
        >>> snake_to_camel("id")
        'id'
    """
    return _SNAKE_SEGMENT.sub(lambda m: m.group(1).upper(), name)


def to_camel_case(value: Any, keep_values: Collection[str] = ()) -> Any:
    """
    Recursively rewrite every dict key from snake_case to camelCase.

    Lists are mapped element-wise, values are left untouched and anything
    that is neither a dict nor a list is returned as-is. The value stored
    under a key named in ``keep_values`` is copied without rewriting the keys
    inside it, which keeps user-supplied JSON intact.

    Example:
        >>> to_camel_case({"series_id": "s1", "books": [{"cover_image_url": None}]})
        {'seriesId': 's1', 'books': [{'coverImageUrl': None}]}
        >>> to_camel_case({"image_url": "x", "data": {"eye_color": "blue"}}, {"data"})
        {'imageUrl': 'x', 'data': {'eye_color': 'blue'}}
        >>> to_camel_case(3)
        3
    """
    if isinstance(value, dict):
        return {
            snake_to_camel(key) if isinstance(key, str) else key: (
                item if key in keep_values else to_camel_case(item, keep_values)
            )
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [to_camel_case(item, keep_values) for item in value]
    return value
