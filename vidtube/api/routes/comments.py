from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from vidtube.api.deps import PageParams, get_current_user, get_db, get_page_params
from vidtube.core.result import unwrap
from vidtube.schemas.comments import (
    CommentCreateRequest,
    CommentListResponse,
    CommentResponse,
    CommentUpdateRequest,
)
from vidtube.schemas.users import AuthenticatedUser, MessageResponse
from vidtube.services.comment_service import CommentService


router = APIRouter(prefix="/comments", tags=["Comments"])


@router.get("/video/{video_id}", response_model=CommentListResponse)
def get_video_comments(
    video_id: str,
    paging: PageParams = Depends(get_page_params),
    db: Session = Depends(get_db),
):
    page = unwrap(CommentService.get_video_comments(db, video_id, paging.page, paging.limit))
    return CommentListResponse(
        comments=[CommentResponse.model_validate(c) for c in page.items],
        current_page=page.page,
        total_pages=page.total_pages,
        total_comments=page.total,
    )


@router.post("/video/{video_id}", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def add_comment(
    video_id: str,
    data: CommentCreateRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    comment = unwrap(CommentService.add_comment(db, video_id, current_user.id, data.content))
    return CommentResponse.model_validate(comment)


@router.patch("/{comment_id}", response_model=CommentResponse)
def update_comment(
    comment_id: str,
    data: CommentUpdateRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    comment = unwrap(CommentService.update_comment(db, comment_id, current_user.id, data.content))
    return CommentResponse.model_validate(comment)


@router.delete("/{comment_id}", response_model=MessageResponse)
def delete_comment(
    comment_id: str,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    unwrap(CommentService.delete_comment(db, comment_id, current_user.id))
    return MessageResponse(message="Comment deleted successfully")
