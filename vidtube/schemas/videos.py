from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from vidtube.schemas.users import OwnerSummary


class VideoCreateRequest(BaseModel):
    """Video and thumbnail are uploaded to the asset host beforehand."""
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=5000)
    video_file: str = Field(..., min_length=1, max_length=1024)
    thumbnail: str = Field(..., min_length=1, max_length=1024)
    duration: int = Field(0, ge=0)
    is_published: bool = True


class VideoUpdateRequest(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1, max_length=5000)
    thumbnail: Optional[str] = Field(None, min_length=1, max_length=1024)


class VideoResponse(BaseModel):
    id: UUID
    title: str
    description: str
    video_file: str
    thumbnail: str
    duration: int
    views: int
    is_published: bool
    owner: OwnerSummary
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class VideoWithStatsResponse(VideoResponse):
    total_likes: int = 0
    total_comments: int = 0


class VideoDetailResponse(BaseModel):
    video: VideoResponse
    total_likes: int


class VideoListResponse(BaseModel):
    videos: list[VideoWithStatsResponse]
    current_page: int
    total_pages: int
    total_videos: int


class VideoLikesResponse(BaseModel):
    total_likes: int


SortField = Literal["created_at", "views", "duration", "title"]
SortType = Literal["asc", "desc"]
