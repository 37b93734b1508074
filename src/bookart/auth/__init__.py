"""Accounts, password hashing, bearer tokens and the request guard."""

from .guard import AuthSession, admin_required, current_session, login_required
from .manager import UserManager
from .passwords import hash_password, verify_password
from .schemas import LoginRequest, UserCreate, UserResponse, UserRole
from .tokens import InvalidTokenError, TokenClaims, issue_token, verify_token

__all__ = [
    "AuthSession",
    "admin_required",
    "current_session",
    "login_required",
    "UserManager",
    "hash_password",
    "verify_password",
    "LoginRequest",
    "UserCreate",
    "UserResponse",
    "UserRole",
    "InvalidTokenError",
    "TokenClaims",
    "issue_token",
    "verify_token",
]
