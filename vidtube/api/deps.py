import logging
from dataclasses import dataclass
from typing import Generator, Optional

from fastapi import Depends, Query, Request
from sqlalchemy.orm import Session

from vidtube.core.database import SessionLocal
from vidtube.core.exceptions import UnauthorizedError
from vidtube.core.result import Err
from vidtube.schemas.users import AuthenticatedUser
from vidtube.services.credential_store import CredentialStore
from vidtube.services.token_service import TokenService

logger = logging.getLogger(__name__)

ACCESS_COOKIE = "accessToken"
REFRESH_COOKIE = "refreshToken"


def get_db() -> Generator:
    """Database session dependency."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_token_service(request: Request) -> TokenService:
    """The token service built at startup from settings."""
    return request.app.state.token_service


def extract_access_token(request: Request) -> Optional[str]:
    """Cookie first, then ``Authorization: Bearer <token>``."""
    token = request.cookies.get(ACCESS_COOKIE)
    if token:
        return token

    authorization = request.headers.get("Authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> AuthenticatedUser:
    """
    Dependency to get the current authenticated user from the access token.
    Every verification failure gets the same response; the reason is only logged.
    """
    token = extract_access_token(request)
    if token is None:
        raise UnauthorizedError("Unauthorized request")

    verified = tokens.verify_access(CredentialStore(db), token)
    if isinstance(verified, Err):
        logger.info("Access token rejected: %s", verified.failure.value)
        raise UnauthorizedError()

    return AuthenticatedUser.model_validate(verified.value)


@dataclass
class PageParams:
    page: int
    limit: int


def get_page_params(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> PageParams:
    return PageParams(page=page, limit=limit)
