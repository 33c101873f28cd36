"""
Auth service: registration and login.
"""

import logging
import random

from fastapi import HTTPException, status

from ..auth import create_access_token, hash_password, verify_password
from ..database import Database
from ..database.models import DBUser

logger = logging.getLogger(__name__)


class AuthService:
    """Service for account registration and credential checks."""

    def __init__(self, db: Database):
        self.db = db

    def register(self, username: str, password: str) -> int:
        """
        Create an account.

        Returns:
            The new user's ID

        Raises:
            HTTPException: 409 if the username is taken
        """
        if self.db.get_user_by_username(username):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already exists")

        user_id = self.db.add_user(
            username=username,
            password_hash=hash_password(password),
            nickname=f"user_{random.randint(0, 999)}",
        )
        if user_id is None:
            # Lost a race with a concurrent registration
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already exists")

        logger.info(f"Registered user {username} (id={user_id})")
        return user_id

    def login(self, username: str, password: str) -> tuple[str, DBUser]:
        """
        Check credentials and issue an access token.

        Raises:
            HTTPException: 401 on unknown username or wrong password
        """
        user = self.db.get_user_by_username(username)
        if not user or not verify_password(password, user.password_hash):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid username or password",
            )

        return create_access_token(user.id, user.username), user

    def get_profile(self, user_id: int) -> DBUser:
        """Get the profile behind a valid token."""
        user = self.db.get_user(user_id)
        if not user:
            # Token signed for an account that no longer exists
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
        return user
