from typing import Optional

from fastapi import APIRouter, Body, Depends, Request, Response, status
from sqlalchemy.orm import Session

from vidtube.api.deps import (
    ACCESS_COOKIE,
    REFRESH_COOKIE,
    get_current_user,
    get_db,
    get_token_service,
)
from vidtube.core.config import settings
from vidtube.core.rate_limit import limiter
from vidtube.core.result import unwrap
from vidtube.schemas.users import (
    AuthenticatedUser,
    AuthResponse,
    ChangePasswordRequest,
    ChannelProfileResponse,
    ImageUpdateRequest,
    LoginRequest,
    MessageResponse,
    RefreshTokenRequest,
    RefreshTokenResponse,
    RegisterRequest,
    UpdateAccountRequest,
    UserResponse,
)
from vidtube.schemas.videos import VideoResponse
from vidtube.services.auth_service import AuthService
from vidtube.services.token_service import TokenPair, TokenService
from vidtube.services.user_service import UserService


router = APIRouter(prefix="/users", tags=["Users"])


def set_auth_cookies(response: Response, pair: TokenPair) -> None:
    for name, value in ((ACCESS_COOKIE, pair.access_token), (REFRESH_COOKIE, pair.refresh_token)):
        response.set_cookie(
            key=name,
            value=value,
            httponly=True,
            secure=settings.cookie_secure,
            samesite="none",
        )


def clear_auth_cookies(response: Response) -> None:
    for name in (ACCESS_COOKIE, REFRESH_COOKIE):
        response.delete_cookie(
            key=name,
            httponly=True,
            secure=settings.cookie_secure,
            samesite="none",
        )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("5/minute")
def register(
    request: Request,
    response: Response,
    data: RegisterRequest,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Register a new user and log them in.
    Tokens are set as cookies and mirrored in the body.
    """
    user, pair = unwrap(AuthService.register(db, tokens, data))
    set_auth_cookies(response, pair)
    return AuthResponse(
        user=UserResponse.model_validate(user),
        access_token=pair.access_token,
        refresh_token=pair.refresh_token,
    )


@router.post("/login", response_model=AuthResponse)
@limiter.limit("10/minute")
def login(
    request: Request,
    response: Response,
    data: LoginRequest,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """Authenticate by email or username. Starts a new session."""
    identifier = data.email or data.username
    user, pair = unwrap(AuthService.login(db, tokens, identifier, data.password))
    set_auth_cookies(response, pair)
    return AuthResponse(
        user=UserResponse.model_validate(user),
        access_token=pair.access_token,
        refresh_token=pair.refresh_token,
    )


@router.post("/refresh-token", response_model=RefreshTokenResponse)
@limiter.limit("30/minute")
def refresh_token(
    request: Request,
    response: Response,
    data: Optional[RefreshTokenRequest] = Body(None),
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Exchange a refresh token (cookie or body) for a new token pair.
    The presented refresh token is invalidated.
    """
    presented = request.cookies.get(REFRESH_COOKIE) or (data.refresh_token if data else None)
    _, pair = unwrap(AuthService.refresh_tokens(db, tokens, presented))
    set_auth_cookies(response, pair)
    return RefreshTokenResponse(access_token=pair.access_token, refresh_token=pair.refresh_token)


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    AuthService.logout(db, tokens, current_user.id)
    clear_auth_cookies(response)
    return MessageResponse(message="User logged out")


@router.post("/change-password", response_model=MessageResponse)
def change_password(
    data: ChangePasswordRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Change password. Existing tokens stay valid."""
    unwrap(AuthService.change_password(db, current_user.id, data.old_password, data.new_password))
    return MessageResponse(message="Password changed successfully")


@router.get("/current-user", response_model=UserResponse)
def get_current_user_info(
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    return current_user


@router.patch("/update-account", response_model=UserResponse)
def update_account(
    data: UpdateAccountRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    user = unwrap(UserService.update_account(db, current_user.id, data.fullname, data.email))
    return UserResponse.model_validate(user)


@router.patch("/avatar", response_model=UserResponse)
def update_avatar(
    data: ImageUpdateRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    user = unwrap(UserService.update_image(db, current_user.id, "avatar", data.url))
    return UserResponse.model_validate(user)


@router.patch("/cover-image", response_model=UserResponse)
def update_cover_image(
    data: ImageUpdateRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    user = unwrap(UserService.update_image(db, current_user.id, "cover_image", data.url))
    return UserResponse.model_validate(user)


@router.get("/c/{username}", response_model=ChannelProfileResponse)
def get_channel_profile(
    username: str,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return unwrap(UserService.get_channel_profile(db, username, current_user.id))


@router.get("/history", response_model=list[VideoResponse])
def get_watch_history(
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Watched videos, most recent first."""
    videos = UserService.get_watch_history(db, current_user.id)
    return [VideoResponse.model_validate(v) for v in videos]
