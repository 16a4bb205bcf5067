"""
Session token service: issue, verify, rotate and revoke credential tokens.

Access tokens are stateless. Refresh tokens are additionally checked against
the identity's single refresh slot, which is the only revocation mechanism:
overwriting or clearing the slot stales every other outstanding refresh
token. Already-issued access tokens stay valid until they expire.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from vidtube.core.ownership import parse_reference
from vidtube.core.result import Err, Failure, Ok, Result
from vidtube.core.security import (
    TOKEN_TYPE_ACCESS,
    TOKEN_TYPE_REFRESH,
    TokenConfig,
    create_token,
    decode_token,
    token_matches,
)
from vidtube.models import User
from vidtube.services.credential_store import CredentialStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str
    access_expires_at: datetime
    refresh_expires_at: datetime


class TokenService:
    """Holds the process-wide signing configuration; stores are passed per call."""

    def __init__(self, config: TokenConfig, clock: Callable[[], datetime] = datetime.utcnow):
        self.config = config
        self.clock = clock

    def _mint(self, user_id) -> TokenPair:
        now = self.clock()
        subject = str(user_id)
        access_token, access_exp = create_token(self.config, subject, TOKEN_TYPE_ACCESS, now)
        refresh_token, refresh_exp = create_token(self.config, subject, TOKEN_TYPE_REFRESH, now)
        return TokenPair(access_token, refresh_token, access_exp, refresh_exp)

    def _resolve_subject(self, store: CredentialStore, payload: dict) -> Result[User]:
        user_id = parse_reference(payload.get("sub"))
        if user_id is None:
            return Err(Failure.TOKEN_INVALID)
        user = store.get_by_id(user_id)
        if user is None:
            return Err(Failure.IDENTITY_MISSING)
        return Ok(user)

    def issue(self, store: CredentialStore, identity: User) -> TokenPair:
        """Mint a new pair and overwrite the identity's refresh slot with it."""
        pair = self._mint(identity.id)
        store.set_refresh_token(identity.id, pair.refresh_token)
        return pair

    def verify_access(self, store: CredentialStore, token: str) -> Result[User]:
        decoded = decode_token(self.config, token, TOKEN_TYPE_ACCESS)
        if isinstance(decoded, Err):
            return decoded
        return self._resolve_subject(store, decoded.value)

    def rotate(
        self, store: CredentialStore, refresh_token: Optional[str]
    ) -> Result[tuple[User, TokenPair]]:
        """
        Exchange a refresh token for a new pair. Refresh tokens are single-use:
        the slot is swapped atomically, so a concurrent or repeated rotation
        of the same token fails as stale.
        """
        if not refresh_token:
            return Err(Failure.TOKEN_MISSING)

        decoded = decode_token(self.config, refresh_token, TOKEN_TYPE_REFRESH)
        if isinstance(decoded, Err):
            return decoded

        resolved = self._resolve_subject(store, decoded.value)
        if isinstance(resolved, Err):
            return resolved
        user = resolved.value

        if not token_matches(refresh_token, user.refresh_token_hash):
            return Err(Failure.TOKEN_STALE)

        pair = self._mint(user.id)
        if not store.swap_refresh_token(user.id, refresh_token, pair.refresh_token):
            logger.info("Refresh token for user %s was rotated concurrently", user.id)
            return Err(Failure.TOKEN_STALE)

        return Ok((user, pair))

    def revoke(self, store: CredentialStore, identity_id) -> None:
        """Clear the refresh slot. Clearing an empty slot is a no-op."""
        store.set_refresh_token(identity_id, None)
