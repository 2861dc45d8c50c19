"""
Security utilities for authentication and authorization.

Provides password hashing (bcrypt) and JWT token management. The signing
secret is handed to ``TokenService`` explicitly; nothing in here reads it
from a global.
"""

from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError
from passlib.context import CryptContext
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from jobboard.core.config import settings
from jobboard.core.errors import InvalidToken, TokenExpired
from jobboard.models.user import Role

# Password hashing context using bcrypt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

BEARER_PREFIX = "Bearer "


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: The plain text password to verify
        hashed_password: The hashed password to compare against

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: The plain text password to hash

    Returns:
        The salted hash string
    """
    return pwd_context.hash(password)


class TokenClaims(BaseModel):
    """Identity carried by a verified token."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    role: Role
    company_id: Optional[str] = Field(default=None, alias="companyId")

    def to_payload(self) -> dict:
        return {"id": self.id, "role": self.role.value, "companyId": self.company_id}


class TokenService:
    """Issues and verifies signed identity tokens."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 60):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, claims: TokenClaims, expires_delta: Optional[timedelta] = None) -> str:
        """
        Create a JWT access token.

        Args:
            claims: The identity to encode under the ``user`` key
            expires_delta: Optional custom expiration time

        Returns:
            The encoded JWT token string
        """
        expire = datetime.now(timezone.utc) + (
            expires_delta or timedelta(minutes=self.expire_minutes)
        )
        payload = {"user": claims.to_payload(), "exp": expire}
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> TokenClaims:
        """Decode a bare token string (no ``Bearer`` prefix)."""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError as exc:
            raise TokenExpired() from exc
        except InvalidTokenError as exc:
            raise InvalidToken() from exc

        user = payload.get("user")
        if not isinstance(user, dict):
            raise InvalidToken()
        try:
            return TokenClaims.model_validate(user)
        except ValidationError as exc:
            raise InvalidToken() from exc

    def verify(self, header_value: str) -> TokenClaims:
        """
        Verify an ``x-auth-token`` header value of the form ``Bearer <token>``.

        Raises:
            InvalidToken: prefix missing, bad signature or malformed payload
            TokenExpired: token is past its expiry
        """
        if not header_value.startswith(BEARER_PREFIX):
            raise InvalidToken("Invalid token format")
        return self.decode(header_value[len(BEARER_PREFIX):].strip())


@lru_cache
def get_token_service() -> TokenService:
    """FastAPI dependency building the token service from settings."""
    return TokenService(
        secret_key=settings.JWT_SECRET,
        algorithm=settings.ALGORITHM,
        expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )
