"""
Credential store: the identity records the session core depends on.

All refresh-slot writes go through single-row UPDATE statements, so the
store's atomic update is what keeps at most one refresh token per identity.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import or_, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from vidtube.core.result import Err, Failure, Ok, Result
from vidtube.core.security import (
    dummy_verify_password,
    get_password_hash,
    hash_token,
    verify_password,
)
from vidtube.models import User


class CredentialStore:
    """Identity lookups and refresh-slot writes over one request's session."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: UUID) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def find_by_username_or_email(self, key: str) -> Optional[User]:
        """Usernames are stored lower-cased; emails are compared lower-cased."""
        key = key.strip().lower()
        return self.db.query(User).filter(
            or_(User.username == key, User.email == key)
        ).first()

    def verify_password(self, identity: Optional[User], plaintext: str) -> bool:
        """
        Check a password in time independent of whether the identity exists.
        bcrypt's own comparison is constant time.
        """
        if identity is None:
            dummy_verify_password()
            return False
        return verify_password(plaintext, identity.password_hash)

    def create_identity(
        self,
        username: str,
        email: str,
        fullname: str,
        password: str,
        avatar: str,
        cover_image: Optional[str] = None,
    ) -> Result[User]:
        """Create an identity; a duplicate username or email is a conflict."""
        user = User(
            username=username.lower(),
            email=email.lower(),
            fullname=fullname,
            password_hash=get_password_hash(password),
            avatar=avatar,
            cover_image=cover_image,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            return Err(Failure.CONFLICT, "User with email or username already exists")
        self.db.refresh(user)
        return Ok(user)

    def set_password(self, identity: User, password: str) -> None:
        identity.password_hash = get_password_hash(password)
        self.db.commit()

    def set_refresh_token(self, identity_id: UUID, token: Optional[str]) -> None:
        """Overwrite (or clear, with None) the identity's single refresh slot."""
        self.db.execute(
            update(User)
            .where(User.id == identity_id)
            .values(refresh_token_hash=hash_token(token) if token else None)
        )
        self.db.commit()

    def swap_refresh_token(self, identity_id: UUID, expected: str, new: str) -> bool:
        """
        Compare-and-set on the refresh slot.
        Returns False when the slot no longer holds ``expected``.
        """
        result = self.db.execute(
            update(User)
            .where(User.id == identity_id, User.refresh_token_hash == hash_token(expected))
            .values(refresh_token_hash=hash_token(new))
        )
        self.db.commit()
        return result.rowcount == 1
