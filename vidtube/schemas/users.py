from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, model_validator


# Request schemas
class RegisterRequest(BaseModel):
    fullname: str = Field(..., min_length=2, max_length=100)
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    avatar: str = Field(..., min_length=1, max_length=1024, description="Hosted avatar image URL")
    cover_image: Optional[str] = Field(None, max_length=1024)


class LoginRequest(BaseModel):
    """Either email or username identifies the account."""
    email: Optional[str] = None
    username: Optional[str] = None
    password: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def require_identifier(self):
        if not (self.email or self.username):
            raise ValueError("email or username is required")
        return self


class RefreshTokenRequest(BaseModel):
    refresh_token: Optional[str] = None


class ChangePasswordRequest(BaseModel):
    old_password: str
    new_password: str = Field(..., min_length=8, max_length=128)


class UpdateAccountRequest(BaseModel):
    fullname: str = Field(..., min_length=2, max_length=100)
    email: EmailStr


class ImageUpdateRequest(BaseModel):
    url: str = Field(..., min_length=1, max_length=1024)


# Response schemas
class UserResponse(BaseModel):
    id: UUID
    username: str
    email: str
    fullname: str
    avatar: str
    cover_image: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class AuthenticatedUser(UserResponse):
    """The requester's identity with credential fields stripped."""

    model_config = {"from_attributes": True, "frozen": True}


class OwnerSummary(BaseModel):
    id: UUID
    username: str
    fullname: str
    avatar: str

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    user: UserResponse
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class RefreshTokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class MessageResponse(BaseModel):
    message: str


class ChannelProfileResponse(BaseModel):
    id: UUID
    username: str
    fullname: str
    email: str
    avatar: str
    cover_image: Optional[str] = None
    subscribers_count: int
    channels_subscribed_to_count: int
    is_subscribed: bool
