"""
Token issuing/verification and password hashing.

Tokens are HS256 JWTs carrying a single ``username`` claim (plus ``exp``
when an expiry is configured). Passwords never appear in a token.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Verified against when the username is unknown, so sign-in timing does not
# reveal which accounts exist.
_DUMMY_HASH = pwd_context.hash("not-a-real-password")


class InvalidToken(Exception):
    """Raised when a bearer token is missing, malformed, forged or expired."""


# PUBLIC_INTERFACE
def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


# PUBLIC_INTERFACE
def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Constant-time check of a password against a stored hash."""
    if hashed_password is None:
        pwd_context.verify(plain_password, _DUMMY_HASH)
        return False
    return pwd_context.verify(plain_password, hashed_password)


class TokenIssuer:
    """
    Issues and verifies signed identity tokens with a symmetric key.
    """

    def __init__(self, secret_key: str, algorithm: str = ALGORITHM, expires_delta: Optional[timedelta] = None):
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = expires_delta

    # PUBLIC_INTERFACE
    def issue(self, username: str) -> str:
        """Generates a token whose claims identify `username`."""
        to_encode = {"username": username}
        if self.expires_delta is not None:
            to_encode["exp"] = datetime.now(timezone.utc) + self.expires_delta
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    # PUBLIC_INTERFACE
    def verify(self, token: Optional[str]) -> dict:
        """
        Decodes and verifies `token`, returning its claims.

        Raises InvalidToken for a missing token, a bad signature, a malformed
        token, an expired token, or claims without a string username.
        """
        if not token:
            raise InvalidToken("Missing token.")
        try:
            claims = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as exc:
            logger.warning("Rejected token: %s", exc)
            raise InvalidToken("Could not validate credentials.") from exc
        username = claims.get("username")
        if not isinstance(username, str) or not username:
            raise InvalidToken("Token carries no username claim.")
        return claims


def issuer_from_settings(settings) -> TokenIssuer:
    expires_delta = None
    if settings.access_token_expire_minutes > 0:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    return TokenIssuer(settings.secret_key, settings.algorithm, expires_delta)
