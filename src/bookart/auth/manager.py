"""Manager for user accounts."""

import logging
from typing import Optional

from sqlalchemy import func, select

from ..db.models import User
from ..db.sqlite import Database
from ..errors import BadRequest
from .passwords import hash_password, verify_password
from .schemas import UserCreate, UserResponse, UserRole

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserManager:
    """Registers, authenticates and administers accounts."""

    def __init__(self, db: Database):
        """Initialize the user manager.

        Args:
            db: Database instance
        """
        self.db = db

    def register(self, user: UserCreate, role: UserRole = UserRole.USER) -> UserResponse:
        """Create an account.

        Args:
            user: Registration data
            role: Role to grant

        Returns:
            The created account

        Raises:
            BadRequest: If the email is already registered
        """
        email = normalize_email(user.email)

        with self.db.get_session() as session:
            existing = session.execute(
                select(User.id).where(func.lower(User.email) == email)
            ).first()
            if existing:
                raise BadRequest("Email already registered")

            db_user = User(
                email=email,
                password_hash=hash_password(user.password),
                username=user.username,
                role=role.value,
            )
            session.add(db_user)
            session.flush()

            logger.info("Registered user %s (%s)", db_user.id, role.value)
            return UserResponse.model_validate(db_user)

    def authenticate(self, email: str, password: str) -> Optional[UserResponse]:
        """Check credentials.

        Returns:
            The account, or None if the email is unknown or the password wrong
        """
        with self.db.get_session() as session:
            db_user = session.execute(
                select(User).where(func.lower(User.email) == normalize_email(email))
            ).scalar_one_or_none()

            if db_user is None or not verify_password(password, db_user.password_hash):
                logger.debug("Failed login for %s", email)
                return None

            return UserResponse.model_validate(db_user)

    def get_user(self, user_id: str) -> Optional[UserResponse]:
        """Get an account by ID."""
        with self.db.get_session() as session:
            db_user = session.get(User, user_id)
            if db_user is None:
                return None
            return UserResponse.model_validate(db_user)

    def set_role(self, email: str, role: UserRole) -> Optional[UserResponse]:
        """Change an account's role.

        Returns:
            The updated account, or None if no account has this email
        """
        with self.db.get_session() as session:
            db_user = session.execute(
                select(User).where(func.lower(User.email) == normalize_email(email))
            ).scalar_one_or_none()
            if db_user is None:
                return None

            db_user.role = role.value
            session.flush()

            logger.info("Set role of %s to %s", db_user.id, role.value)
            return UserResponse.model_validate(db_user)
