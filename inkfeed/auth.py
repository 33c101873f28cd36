"""
Authentication module: password hashing and bearer tokens.

Tokens are signed, timestamped payloads ({"sub": user_id, "username": ...})
produced with itsdangerous. They are stateless: logging out only means the
client forgets its token.
"""

import logging
from typing import Annotated

import bcrypt
from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from .config import config

logger = logging.getLogger(__name__)

TOKEN_SALT = "inkfeed-access-token"

# bcrypt only looks at the first 72 bytes of a password
_BCRYPT_MAX_BYTES = 72

BEARER_SCHEME = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    """Hash a password with bcrypt."""
    salt = bcrypt.gensalt(rounds=config.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8")[:_BCRYPT_MAX_BYTES], salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(
            password.encode("utf-8")[:_BCRYPT_MAX_BYTES],
            password_hash.encode("utf-8"),
        )
    except ValueError:
        # Malformed hash
        return False


def get_serializer() -> URLSafeTimedSerializer:
    """Get the token serializer for the configured secret."""
    return URLSafeTimedSerializer(config.SECRET_KEY, salt=TOKEN_SALT)


def create_access_token(user_id: int, username: str) -> str:
    """Issue a signed bearer token for a user."""
    return get_serializer().dumps({"sub": user_id, "username": username})


def decode_access_token(token: str) -> dict | None:
    """Validate a bearer token. Returns its payload, or None if invalid or expired."""
    try:
        payload = get_serializer().loads(token, max_age=config.TOKEN_MAX_AGE)
    except SignatureExpired:
        logger.debug("Access token expired")
        return None
    except BadSignature:
        logger.warning("Invalid access token signature")
        return None

    if not isinstance(payload, dict) or not isinstance(payload.get("sub"), int):
        logger.warning("Access token payload is malformed")
        return None
    return payload


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Security(BEARER_SCHEME)
) -> int:
    """
    Require a valid bearer token and return the authenticated user's ID.

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated. Please login.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return payload["sub"]


CurrentUserId = Annotated[int, Depends(get_current_user_id)]
