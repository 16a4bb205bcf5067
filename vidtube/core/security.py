from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any
from uuid import uuid4
import hashlib
import hmac

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from vidtube.core.result import Err, Failure, Ok, Result

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Token type constants
TOKEN_TYPE_ACCESS = "access"
TOKEN_TYPE_REFRESH = "refresh"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt."""
    return pwd_context.hash(password)


def dummy_verify_password() -> None:
    """Burn the same time as a real verification when no account matched."""
    pwd_context.dummy_verify()


def hash_token(token: str) -> str:
    """Create SHA-256 hash of a token for storage."""
    return hashlib.sha256(token.encode()).hexdigest()


def token_matches(token: str, stored_hash: str | None) -> bool:
    """Constant-time comparison of a presented token against the stored digest."""
    if not stored_hash:
        return False
    return hmac.compare_digest(hash_token(token), stored_hash)


@dataclass(frozen=True)
class TokenConfig:
    """Signing configuration, built once at startup."""

    access_secret: str
    refresh_secret: str
    algorithm: str = "HS256"
    access_ttl: timedelta = timedelta(minutes=15)
    refresh_ttl: timedelta = timedelta(days=10)

    @classmethod
    def from_settings(cls, settings) -> "TokenConfig":
        return cls(
            access_secret=settings.ACCESS_TOKEN_SECRET,
            refresh_secret=settings.REFRESH_TOKEN_SECRET,
            algorithm=settings.ALGORITHM,
            access_ttl=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
            refresh_ttl=timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
        )

    def secret_for(self, token_type: str) -> str:
        if token_type == TOKEN_TYPE_ACCESS:
            return self.access_secret
        return self.refresh_secret

    def ttl_for(self, token_type: str) -> timedelta:
        if token_type == TOKEN_TYPE_ACCESS:
            return self.access_ttl
        return self.refresh_ttl


def create_token(
    config: TokenConfig,
    subject: str,
    token_type: str,
    issued_at: datetime,
) -> tuple[str, datetime]:
    """
    Create a signed JWT of the given class.
    Returns (token, expires_at).
    """
    expire = issued_at + config.ttl_for(token_type)
    to_encode = {
        "sub": subject,
        "iat": issued_at,
        "exp": expire,
        "type": token_type,
        # Unique token ID so two tokens minted in the same second differ
        "jti": str(uuid4()),
    }
    encoded_jwt = jwt.encode(
        to_encode, config.secret_for(token_type), algorithm=config.algorithm
    )
    return encoded_jwt, expire


def decode_token(config: TokenConfig, token: str, expected_type: str) -> Result[dict[str, Any]]:
    """
    Verify a JWT of the expected class and return its payload.

    The secret is chosen by the expected class, and the ``type`` claim is
    checked as well, so a refresh token is never accepted as an access token
    and vice versa.
    """
    try:
        payload = jwt.decode(
            token, config.secret_for(expected_type), algorithms=[config.algorithm]
        )
    except ExpiredSignatureError:
        return Err(Failure.TOKEN_EXPIRED)
    except JWTError:
        return Err(Failure.TOKEN_INVALID)

    if payload.get("type") != expected_type:
        return Err(Failure.TOKEN_INVALID)
    if not payload.get("sub"):
        return Err(Failure.TOKEN_INVALID)

    return Ok(payload)
