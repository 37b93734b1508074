"""Signed, time-limited bearer tokens.

A token carries ``{userId, email, isAdmin}`` signed with the server secret.
Verification checks the signature and the token's age.
"""

from dataclasses import dataclass
from typing import Any

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

TOKEN_SALT = "bookart.auth.token"


class InvalidTokenError(Exception):
    """Token failed signature or expiry checks."""


@dataclass(frozen=True)
class TokenClaims:
    """Claims decoded from a verified token."""

    user_id: str
    email: str
    is_admin: bool


def _serializer(secret: str) -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(secret, salt=TOKEN_SALT)


def issue_token(user_id: str, email: str, is_admin: bool, secret: str) -> str:
    """Sign a token for a user."""
    payload: dict[str, Any] = {"userId": user_id, "email": email, "isAdmin": is_admin}
    return _serializer(secret).dumps(payload)


def verify_token(token: str, secret: str, max_age: int) -> TokenClaims:
    """Verify a token and decode its claims.

    Args:
        token: Token string from the Authorization header
        secret: Server signing secret
        max_age: Maximum token age in seconds

    Raises:
        InvalidTokenError: If the signature is wrong, the token expired or
                           the payload is malformed
    """
    try:
        payload = _serializer(secret).loads(token, max_age=max_age)
    except SignatureExpired as e:
        raise InvalidTokenError("Token expired") from e
    except BadSignature as e:
        raise InvalidTokenError("Bad signature") from e

    if not isinstance(payload, dict) or "userId" not in payload:
        raise InvalidTokenError("Malformed token payload")

    return TokenClaims(
        user_id=str(payload["userId"]),
        email=str(payload.get("email", "")),
        is_admin=payload.get("isAdmin") is True,
    )
