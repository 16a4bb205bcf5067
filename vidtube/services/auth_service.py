import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from vidtube.core.result import Err, Failure, Ok, Result
from vidtube.core.sanitization import (
    sanitize_email,
    sanitize_name,
    sanitize_username,
    validate_email,
    validate_username,
)
from vidtube.models import User
from vidtube.schemas.users import RegisterRequest
from vidtube.services.credential_store import CredentialStore
from vidtube.services.token_service import TokenPair, TokenService

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8

# Same message for unknown account and wrong password
INVALID_LOGIN = "Invalid credentials"


def validate_password_strength(password: str) -> Optional[str]:
    """Return a description of the first unmet password rule, or None."""
    if len(password) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    if not any(c.isupper() for c in password):
        return "Password must contain at least one uppercase letter"
    if not any(c.islower() for c in password):
        return "Password must contain at least one lowercase letter"
    if not any(c.isdigit() for c in password):
        return "Password must contain at least one number"
    return None


class AuthService:
    """Service for handling authentication business logic."""

    @staticmethod
    def register(
        db: Session, tokens: TokenService, data: RegisterRequest
    ) -> Result[tuple[User, TokenPair]]:
        """
        Register a new user and log them in.
        Returns the user and a fresh token pair.
        """
        username = sanitize_username(data.username)
        email = sanitize_email(data.email)
        fullname = sanitize_name(data.fullname)

        if not validate_username(username):
            return Err(
                Failure.VALIDATION,
                "Username may only contain lowercase letters, digits, '_' and '.'",
            )
        if not validate_email(email):
            return Err(Failure.VALIDATION, "Invalid email format")
        if not fullname:
            return Err(Failure.VALIDATION, "Full name is required")

        weakness = validate_password_strength(data.password)
        if weakness:
            return Err(Failure.VALIDATION, weakness)

        store = CredentialStore(db)
        if store.find_by_username_or_email(username) or store.find_by_username_or_email(email):
            return Err(Failure.CONFLICT, "User with email or username already exists")

        created = store.create_identity(
            username=username,
            email=email,
            fullname=fullname,
            password=data.password,
            avatar=data.avatar.strip(),
            cover_image=data.cover_image.strip() if data.cover_image else None,
        )
        if isinstance(created, Err):
            return created

        user = created.value
        logger.info("Registered user %s", user.id)
        return Ok((user, tokens.issue(store, user)))

    @staticmethod
    def login(
        db: Session, tokens: TokenService, identifier: str, password: str
    ) -> Result[tuple[User, TokenPair]]:
        """
        Authenticate by username or email and start a new session.
        Any previous session's refresh token stops working.
        """
        store = CredentialStore(db)
        user = store.find_by_username_or_email(identifier)
        if not store.verify_password(user, password):
            return Err(Failure.INVALID_CREDENTIALS, INVALID_LOGIN)

        return Ok((user, tokens.issue(store, user)))

    @staticmethod
    def refresh_tokens(
        db: Session, tokens: TokenService, refresh_token: Optional[str]
    ) -> Result[tuple[User, TokenPair]]:
        """Rotate a refresh token into a new pair."""
        rotated = tokens.rotate(CredentialStore(db), refresh_token)
        if isinstance(rotated, Err):
            logger.info("Refresh token rejected: %s", rotated.failure.value)
        return rotated

    @staticmethod
    def logout(db: Session, tokens: TokenService, user_id: UUID) -> None:
        tokens.revoke(CredentialStore(db), user_id)

    @staticmethod
    def change_password(
        db: Session,
        user_id: UUID,
        old_password: str,
        new_password: str,
    ) -> Result[None]:
        """Change the password after verifying the current one. Tokens are untouched."""
        store = CredentialStore(db)
        user = store.get_by_id(user_id)
        if user is None:
            return Err(Failure.IDENTITY_MISSING)
        if not store.verify_password(user, old_password):
            return Err(Failure.INVALID_CREDENTIALS, "Old password is incorrect")

        weakness = validate_password_strength(new_password)
        if weakness:
            return Err(Failure.VALIDATION, weakness)

        store.set_password(user, new_password)
        return Ok(None)
