"""Request parsing and response helpers shared by the blueprints."""

from typing import Any, TypeVar

from flask import current_app, jsonify, request
from pydantic import BaseModel

from ..db.sqlite import Database
from ..errors import BadRequest
from ..utils import to_camel_case

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def get_database() -> Database:
    """Database bound to the running app."""
    return current_app.extensions["bookart.db"]


def parse_body(schema: type[SchemaT]) -> SchemaT:
    """Validate the JSON request body against ``schema``.

    Raises:
        BadRequest: If the body is missing or not a JSON object
        pydantic.ValidationError: If the body fails validation
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise BadRequest("Request body must be a JSON object")
    return schema.model_validate(data)


def int_arg(name: str, default: int) -> int:
    """Read an integer query parameter."""
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise BadRequest(f"{name} must be an integer") from None


# Response fields holding client-supplied JSON whose keys are returned verbatim
FREE_FORM_FIELDS = frozenset({"data"})


def dump(value: Any) -> Any:
    """Convert models (or lists of them) into JSON-ready data."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, list):
        return [v.model_dump(mode="json") if isinstance(v, BaseModel) else v for v in value]
    return value


def respond(payload: dict[str, Any], status: int = 200):
    """JSON response with every field name converted to camelCase."""
    body = {key: dump(value) for key, value in payload.items()}
    return jsonify(to_camel_case(body, FREE_FORM_FIELDS)), status
