from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from vidtube.schemas.users import OwnerSummary


class TweetCreateRequest(BaseModel):
    content: str = Field(..., min_length=1, max_length=2000)


class TweetUpdateRequest(BaseModel):
    content: str = Field(..., min_length=1, max_length=2000)


class TweetResponse(BaseModel):
    id: UUID
    content: str
    owner: OwnerSummary
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TweetListResponse(BaseModel):
    tweets: list[TweetResponse]
    current_page: int
    total_pages: int
    total_tweets: int
