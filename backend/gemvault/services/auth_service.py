"""Authentication service for password hashing and JWT management."""

import logging
from datetime import UTC, datetime, timedelta

import bcrypt
import jwt

from gemvault.config import settings

logger = logging.getLogger(__name__)


class AuthService:
    """Service for admin authentication operations."""

    # Pre-computed bcrypt hash for timing-consistent password verification
    # Used when the admin doesn't exist to prevent username enumeration via timing attacks
    _DUMMY_HASH = "$2b$12$LQv3c1yqBWVHxkd0LHAkCOYz6TtxMQJqhN8/X4.VTtYA9dWQ6E3Ky"

    @staticmethod
    def get_dummy_hash() -> str:
        """Get a dummy password hash for timing-consistent verification."""
        return AuthService._DUMMY_HASH

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash a password using bcrypt."""
        salt = bcrypt.gensalt()
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    @staticmethod
    def verify_password(password: str, hashed: str) -> bool:
        """Verify a password against its hash."""
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
        except Exception as e:
            logger.error(f"Password verification error: {e}")
            return False

    @staticmethod
    def token_lifetime() -> timedelta:
        return timedelta(minutes=settings.access_token_expire_minutes)

    @staticmethod
    def create_access_token(
        admin_id: int,
        username: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a JWT access token for an admin."""
        if expires_delta is None:
            expires_delta = AuthService.token_lifetime()

        now = datetime.now(UTC)
        payload = {
            "sub": str(admin_id),
            "username": username,
            "exp": now + expires_delta,
            "iat": now,
            "iss": settings.jwt_issuer,
            "aud": settings.jwt_audience,
            "type": "access",
        }
        return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)

    @staticmethod
    def decode_access_token(token: str) -> dict | None:
        """Decode and validate a JWT token."""
        try:
            payload = jwt.decode(
                token,
                settings.jwt_secret_key,
                algorithms=[settings.jwt_algorithm],
                audience=settings.jwt_audience,
                issuer=settings.jwt_issuer,
            )
            return payload
        except jwt.ExpiredSignatureError:
            logger.debug("Token expired")
            return None
        except jwt.InvalidTokenError as e:
            logger.debug(f"Invalid token: {e}")
            return None
