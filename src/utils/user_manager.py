"""User management utilities.

This module provides user management functionality including user storage,
password hashing and credential checks.
"""

import logging
from typing import List, Optional

import bcrypt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from config import BCRYPT_ROUNDS
from core.exceptions import UserAlreadyExistsError, UserNotFoundError
from models.user import UserModel
from schemas.user import User
from utils.converters import model_to_user, user_to_model

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    password_bytes = password.encode("utf-8")
    if len(password_bytes) > BCRYPT_MAX_BYTES:
        logger.warning(
            "Password exceeds %d bytes (%d bytes), truncating",
            BCRYPT_MAX_BYTES, len(password_bytes),
        )
        password_bytes = password_bytes[:BCRYPT_MAX_BYTES]
    return password_bytes


def hash_password(password: str) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password.

    Returns:
        Hashed password (bcrypt hash string).
    """
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a bcrypt hash.

    Args:
        plain_password: Plain text password to verify.
        hashed_password: Bcrypt hash string to verify against.

    Returns:
        True if password matches, False otherwise.
    """
    try:
        return bcrypt.checkpw(
            _password_bytes(plain_password), hashed_password.encode("utf-8")
        )
    except ValueError as e:
        logger.error("Password verification error: %s", e)
        return False


class UserManager:
    """Manages user data persistence and operations using SQLAlchemy."""

    def __init__(self, db: Session):
        """Initialize UserManager.

        Args:
            db: SQLAlchemy Session.
        """
        self.db = db

    def create_user(
        self,
        username: str,
        password: str,
        name: Optional[str] = None,
        is_admin: bool = False,
    ) -> User:
        """Create a new user.

        Args:
            username: Username for the new user.
            password: Plain text password; only its bcrypt hash is stored.
            name: Optional display name.
            is_admin: Whether the user is an administrator.

        Returns:
            Created User object.

        Raises:
            UserAlreadyExistsError: If username already exists.
        """
        existing = self.db.query(UserModel).filter(UserModel.username == username).first()
        if existing:
            raise UserAlreadyExistsError(f"User '{username}' already exists")

        user = User(
            username=username,
            password_hash=hash_password(password),
            name=name,
            is_admin=is_admin,
        )

        # Two concurrent signups can both pass the check above; the unique
        # constraint on username rejects the second one.
        try:
            self.db.add(user_to_model(user))
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise UserAlreadyExistsError(f"User '{username}' already exists") from e

        logger.info("Created user: %s", username)
        return user

    def authenticate(self, username: str, password: str) -> Optional[User]:
        """Return the user if the credentials match, None otherwise."""
        user = self.get_user_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Failed login attempt for username: %s", username)
            return None
        return user

    def get_user_by_username(self, username: str) -> Optional[User]:
        """Get a user by username.

        Args:
            username: Username to look up.

        Returns:
            User object if found, None otherwise.
        """
        model = self.db.query(UserModel).filter(UserModel.username == username).first()
        if model:
            return model_to_user(model)
        return None

    def get_user_by_id(self, user_id: str) -> User:
        """Get a user by user ID.

        Raises:
            UserNotFoundError: If no user has this ID.
        """
        model = self.db.query(UserModel).filter(UserModel.user_id == user_id).first()
        if not model:
            raise UserNotFoundError(user_id)
        return model_to_user(model)

    def list_users(self) -> List[User]:
        """List all users.

        Returns:
            List of User objects.
        """
        models = self.db.query(UserModel).order_by(UserModel.username).all()
        return [model_to_user(m) for m in models]
