"""Blueprint for registration, login and the current account."""

from flask import Blueprint, current_app

from ..auth.guard import current_session, login_required
from ..auth.manager import UserManager
from ..auth.schemas import LoginRequest, UserCreate, UserResponse, UserRole
from ..auth.tokens import issue_token
from ..errors import NotFound, Unauthorized
from .helpers import get_database, parse_body, respond

auth_bp = Blueprint("auth", __name__)


def _manager() -> UserManager:
    return UserManager(get_database())


def _token_for(user: UserResponse) -> str:
    return issue_token(
        user.id, user.email, user.role == UserRole.ADMIN, current_app.config["SECRET_KEY"]
    )


@auth_bp.post("/register")
def register():
    payload = parse_body(UserCreate)
    user = _manager().register(payload)
    return respond({"user": user, "token": _token_for(user)}, 201)


@auth_bp.post("/login")
def login():
    payload = parse_body(LoginRequest)
    user = _manager().authenticate(payload.email, payload.password)
    if user is None:
        raise Unauthorized("Invalid credentials")
    return respond({"user": user, "token": _token_for(user)})


@auth_bp.post("/logout")
def logout():
    # Tokens are stateless; the client discards its copy
    return respond({"message": "Logged out successfully"})


@auth_bp.get("/me")
@login_required
def me():
    user = _manager().get_user(current_session().user_id)
    if user is None:
        raise NotFound("User not found")
    return respond({"user": user})
