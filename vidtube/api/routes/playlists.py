from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from vidtube.api.deps import PageParams, get_current_user, get_db, get_page_params
from vidtube.core.result import unwrap
from vidtube.models import Playlist
from vidtube.schemas.playlists import (
    PlaylistCreateRequest,
    PlaylistDetailResponse,
    PlaylistListResponse,
    PlaylistResponse,
    PlaylistUpdateRequest,
)
from vidtube.schemas.users import AuthenticatedUser, MessageResponse, OwnerSummary
from vidtube.schemas.videos import VideoResponse
from vidtube.services.playlist_service import PlaylistService


router = APIRouter(prefix="/playlists", tags=["Playlists"])


def to_detail(playlist: Playlist, viewer_id: Optional[UUID]) -> PlaylistDetailResponse:
    videos = PlaylistService.playlist_videos(playlist, viewer_id)
    return PlaylistDetailResponse(
        id=playlist.id,
        name=playlist.name,
        description=playlist.description,
        owner=OwnerSummary.model_validate(playlist.owner),
        video_count=len(videos),
        created_at=playlist.created_at,
        updated_at=playlist.updated_at,
        videos=[VideoResponse.model_validate(v) for v in videos],
    )


@router.post("", response_model=PlaylistDetailResponse, status_code=status.HTTP_201_CREATED)
def create_playlist(
    data: PlaylistCreateRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    playlist = unwrap(PlaylistService.create_playlist(db, current_user.id, data))
    return to_detail(playlist, current_user.id)


@router.get("", response_model=PlaylistListResponse)
def list_my_playlists(
    paging: PageParams = Depends(get_page_params),
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """The signed-in user's playlists with their video counts."""
    page = PlaylistService.list_user_playlists(db, current_user.id, paging.page, paging.limit)
    counts = PlaylistService.video_counts(db, [p.id for p in page.items])
    return PlaylistListResponse(
        playlists=[
            PlaylistResponse(
                id=p.id,
                name=p.name,
                description=p.description,
                owner=OwnerSummary.model_validate(p.owner),
                video_count=counts.get(p.id, 0),
                created_at=p.created_at,
                updated_at=p.updated_at,
            )
            for p in page.items
        ],
        current_page=page.page,
        total_pages=page.total_pages,
        total_playlists=page.total,
    )


@router.get("/{playlist_id}", response_model=PlaylistDetailResponse)
def get_playlist(
    playlist_id: str,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    playlist = unwrap(PlaylistService.get_playlist(db, playlist_id))
    return to_detail(playlist, current_user.id)


@router.patch("/{playlist_id}", response_model=PlaylistDetailResponse)
def update_playlist(
    playlist_id: str,
    data: PlaylistUpdateRequest,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    playlist = unwrap(PlaylistService.update_playlist(db, playlist_id, current_user.id, data))
    return to_detail(playlist, current_user.id)


@router.delete("/{playlist_id}", response_model=MessageResponse)
def delete_playlist(
    playlist_id: str,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    unwrap(PlaylistService.delete_playlist(db, playlist_id, current_user.id))
    return MessageResponse(message="Playlist deleted successfully")


@router.patch("/{playlist_id}/videos/{video_id}", response_model=PlaylistDetailResponse)
def add_video_to_playlist(
    playlist_id: str,
    video_id: str,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    playlist = unwrap(PlaylistService.add_video(db, playlist_id, video_id, current_user.id))
    return to_detail(playlist, current_user.id)


@router.delete("/{playlist_id}/videos/{video_id}", response_model=PlaylistDetailResponse)
def remove_video_from_playlist(
    playlist_id: str,
    video_id: str,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    playlist = unwrap(PlaylistService.remove_video(db, playlist_id, video_id, current_user.id))
    return to_detail(playlist, current_user.id)
