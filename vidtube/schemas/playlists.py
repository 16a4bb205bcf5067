from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from vidtube.schemas.users import OwnerSummary
from vidtube.schemas.videos import VideoResponse


class PlaylistCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=5000)


class PlaylistUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=1, max_length=5000)

    @model_validator(mode="after")
    def require_a_field(self):
        if self.name is None and self.description is None:
            raise ValueError("At least one field (name or description) is required")
        return self


class PlaylistResponse(BaseModel):
    id: UUID
    name: str
    description: str
    owner: OwnerSummary
    video_count: int = 0
    created_at: datetime
    updated_at: datetime


class PlaylistDetailResponse(PlaylistResponse):
    videos: list[VideoResponse] = []


class PlaylistListResponse(BaseModel):
    playlists: list[PlaylistResponse]
    current_page: int
    total_pages: int
    total_playlists: int
