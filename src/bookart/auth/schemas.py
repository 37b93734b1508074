"""Pydantic schemas for accounts and authentication."""

from enum import Enum

from pydantic import Field

from ..db.schemas import RequestModel, ResponseModel


class UserRole(str, Enum):
    """Account role."""

    USER = "user"
    ADMIN = "admin"


class UserCreate(RequestModel):
    """Schema for registering an account."""

    email: str = Field(..., min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=1)
    username: str = Field(..., min_length=1, max_length=100)


class LoginRequest(RequestModel):
    """Schema for logging in."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserResponse(ResponseModel):
    """Account without its password hash."""

    id: str
    email: str
    username: str
    role: UserRole
    created_at: str
