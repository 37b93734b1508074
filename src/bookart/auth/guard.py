"""Request guard for authenticated and admin-only routes.

The guard verifies the bearer token once per request and stores the decoded
``AuthSession`` on ``flask.g``. Handlers read it with ``current_session()``
instead of decoding the token again.
"""

import logging
from dataclasses import dataclass
from functools import wraps
from typing import Callable, Optional

from flask import current_app, g, request

from ..errors import Forbidden, Unauthorized
from .tokens import InvalidTokenError, verify_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthSession:
    """Identity of the caller for the current request."""

    user_id: str
    email: str
    is_admin: bool


def _bearer_token() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def authenticate_request() -> AuthSession:
    """Verify the request's bearer token and record the session on ``g``.

    Raises:
        Unauthorized: If the header is missing or malformed, or the token
                      fails verification
    """
    existing = getattr(g, "auth", None)
    if existing is not None:
        return existing

    token = _bearer_token()
    if token is None:
        raise Unauthorized("Unauthorized")

    try:
        claims = verify_token(
            token,
            current_app.config["SECRET_KEY"],
            max_age=current_app.config["TOKEN_TTL"],
        )
    except InvalidTokenError as e:
        logger.debug("Rejected token: %s", e)
        raise Unauthorized("Unauthorized: invalid credential") from e

    g.auth = AuthSession(user_id=claims.user_id, email=claims.email, is_admin=claims.is_admin)
    return g.auth


def current_session() -> Optional[AuthSession]:
    """Session established by the guard for this request, if any."""
    return getattr(g, "auth", None)


def login_required(view: Callable) -> Callable:
    """Reject requests without a valid bearer token."""

    @wraps(view)
    def wrapped(*args, **kwargs):
        authenticate_request()
        return view(*args, **kwargs)

    return wrapped


def admin_required(view: Callable) -> Callable:
    """Reject requests without a valid admin bearer token."""

    @wraps(view)
    def wrapped(*args, **kwargs):
        session = authenticate_request()
        if not session.is_admin:
            raise Forbidden("Forbidden")
        return view(*args, **kwargs)

    return wrapped
