from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from vidtube.schemas.users import OwnerSummary


class CommentCreateRequest(BaseModel):
    content: str = Field(..., min_length=1, max_length=2000)


class CommentUpdateRequest(BaseModel):
    content: str = Field(..., min_length=1, max_length=2000)


class CommentResponse(BaseModel):
    id: UUID
    video_id: UUID
    content: str
    owner: OwnerSummary
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CommentListResponse(BaseModel):
    comments: list[CommentResponse]
    current_page: int
    total_pages: int
    total_comments: int
