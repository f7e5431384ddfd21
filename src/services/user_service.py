"""User service for the users that bookings reference."""

import logging
import uuid
from typing import Optional

from core.constants import DEFAULT_USER_ROLE, USER_ROLES
from core.database import Database
from core.exceptions import NotFoundError, ValidationError
from models import User
from utils.validators import validate_name


class UserService:
    """Service for user records."""

    def __init__(self, database: Database, logger: Optional[logging.Logger] = None):
        self.database = database
        self.logger = logger or logging.getLogger(__name__)

    def create_user(
        self,
        email: str,
        name: str,
        role: str = DEFAULT_USER_ROLE,
        phone: Optional[str] = None
    ) -> User:
        """
        Create a user.

        Raises:
            ValidationError: Missing email/name or unknown role
            ConstraintViolationError: Email already registered
        """
        if not email or "@" not in email:
            raise ValidationError("A valid email is required.")
        if role not in USER_ROLES:
            raise ValidationError(f"Role must be one of: {', '.join(USER_ROLES)}.")

        user = User(email=email.strip().lower(), name=validate_name(name), role=role, phone=phone)
        with self.database.transaction() as db:
            db.add(user)
            db.flush()
            self.logger.info(f"Created user {user.id}")

        return user

    def get_user(self, user_id: uuid.UUID) -> User:
        with self.database.session() as db:
            user = db.query(User).filter(User.id == user_id).first()
            if user is None:
                raise NotFoundError("User not found.")
            return user
