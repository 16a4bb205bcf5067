from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from vidtube.api.deps import PageParams, get_current_user, get_db, get_page_params
from vidtube.core.result import unwrap
from vidtube.schemas.users import AuthenticatedUser, MessageResponse
from vidtube.schemas.videos import (
    SortField,
    SortType,
    VideoCreateRequest,
    VideoDetailResponse,
    VideoLikesResponse,
    VideoListResponse,
    VideoResponse,
    VideoUpdateRequest,
    VideoWithStatsResponse,
)
from vidtube.services.video_service import VideoService


router = APIRouter(prefix="/videos", tags=["Videos"])


def to_stats_responses(rows: list[dict]) -> list[VideoWithStatsResponse]:
    return [
        VideoWithStatsResponse(
            **VideoResponse.model_validate(row["video"]).model_dump(),
            total_likes=row["total_likes"],
            total_comments=row["total_comments"],
        )
        for row in rows
    ]


@router.get("", response_model=VideoListResponse)
def list_videos(
    query: Optional[str] = Query(None, max_length=200),
    sort_by: Optional[SortField] = None,
    sort_type: Optional[SortType] = None,
    user_id: Optional[str] = None,
    paging: PageParams = Depends(get_page_params),
    db: Session = Depends(get_db),
):
    """
    List published videos.
    Supports title/description search, owner filter and sorting.
    """
    page = unwrap(VideoService.list_published(
        db,
        paging.page,
        paging.limit,
        query=query,
        sort_by=sort_by,
        sort_type=sort_type or ("desc" if sort_by else None),
        raw_user_id=user_id,
    ))
    return VideoListResponse(
        videos=to_stats_responses(VideoService.with_stats(db, page.items)),
        current_page=page.page,
        total_pages=page.total_pages,
        total_videos=page.total,
    )


@router.post("", response_model=VideoResponse, status_code=status.HTTP_201_CREATED)
def publish_video(
    data: VideoCreateRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    video = unwrap(VideoService.create_video(db, current_user.id, data))
    return VideoResponse.model_validate(video)


@router.get("/{video_id}", response_model=VideoDetailResponse)
def get_video(
    video_id: str,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Fetch a video for playback. Counts a view and records watch history."""
    video, total_likes = unwrap(VideoService.view_video(db, video_id, current_user.id))
    return VideoDetailResponse(video=VideoResponse.model_validate(video), total_likes=total_likes)


@router.patch("/{video_id}", response_model=VideoResponse)
def update_video(
    video_id: str,
    data: VideoUpdateRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    video = unwrap(VideoService.update_video(db, video_id, current_user.id, data))
    return VideoResponse.model_validate(video)


@router.delete("/{video_id}", response_model=MessageResponse)
def delete_video(
    video_id: str,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    unwrap(VideoService.delete_video(db, video_id, current_user.id))
    return MessageResponse(message="Video deleted successfully")


@router.patch("/{video_id}/publish", response_model=VideoResponse)
def toggle_publish_status(
    video_id: str,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    video = unwrap(VideoService.toggle_publish(db, video_id, current_user.id))
    return VideoResponse.model_validate(video)


@router.get("/{video_id}/likes", response_model=VideoLikesResponse)
def get_video_likes(
    video_id: str,
    db: Session = Depends(get_db),
):
    return VideoLikesResponse(total_likes=unwrap(VideoService.get_like_count(db, video_id)))
