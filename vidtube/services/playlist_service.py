import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from vidtube.core.ownership import parse_reference
from vidtube.core.pagination import Page, paginate
from vidtube.core.result import Err, Failure, Ok, Result
from vidtube.core.sanitization import sanitize_description, sanitize_name
from vidtube.models import Playlist, PlaylistVideo, Video
from vidtube.schemas.playlists import PlaylistCreateRequest, PlaylistUpdateRequest
from vidtube.services.ownership_service import OwnershipService

logger = logging.getLogger(__name__)


class PlaylistService:
    """Service for handling Playlist business logic."""

    @staticmethod
    def video_counts(db: Session, playlist_ids: list[UUID]) -> dict:
        if not playlist_ids:
            return {}
        return dict(
            db.query(PlaylistVideo.playlist_id, func.count(PlaylistVideo.id))
            .filter(PlaylistVideo.playlist_id.in_(playlist_ids))
            .group_by(PlaylistVideo.playlist_id)
            .all()
        )

    @staticmethod
    def create_playlist(db: Session, owner_id: UUID, data: PlaylistCreateRequest) -> Result[Playlist]:
        name = sanitize_name(data.name)
        description = sanitize_description(data.description)
        if not name or not description:
            return Err(Failure.VALIDATION, "Name and description are required")

        playlist = Playlist(owner_id=owner_id, name=name, description=description)
        db.add(playlist)
        db.commit()
        db.refresh(playlist)
        return Ok(playlist)

    @staticmethod
    def list_user_playlists(db: Session, owner_id: UUID, page: int, limit: int) -> Page:
        query = (
            db.query(Playlist)
            .filter(Playlist.owner_id == owner_id)
            .order_by(Playlist.created_at.desc())
        )
        return paginate(query, page, limit)

    @staticmethod
    def get_playlist(db: Session, raw_playlist_id: str) -> Result[Playlist]:
        """Playlists are readable by anyone who has the id."""
        playlist_id = parse_reference(raw_playlist_id)
        if playlist_id is None:
            return Err(Failure.INVALID_REFERENCE, "Invalid playlist ID")

        playlist = db.query(Playlist).filter(Playlist.id == playlist_id).first()
        if playlist is None:
            return Err(Failure.NOT_FOUND, "Playlist not found")
        return Ok(playlist)

    @staticmethod
    def playlist_videos(playlist: Playlist, viewer_id: Optional[UUID] = None) -> list[Video]:
        """Videos in insertion order; other people's drafts are hidden."""
        return [
            entry.video
            for entry in playlist.entries
            if entry.video.is_published or entry.video.owner_id == viewer_id
        ]

    @staticmethod
    def update_playlist(
        db: Session, raw_playlist_id: str, requester_id: UUID, data: PlaylistUpdateRequest
    ) -> Result[Playlist]:
        loaded = OwnershipService.load_for_mutation(db, Playlist, raw_playlist_id, requester_id, "Playlist")
        if isinstance(loaded, Err):
            return loaded
        playlist = loaded.value

        if data.name is not None:
            playlist.name = sanitize_name(data.name) or playlist.name
        if data.description is not None:
            playlist.description = sanitize_description(data.description) or playlist.description

        db.commit()
        db.refresh(playlist)
        return Ok(playlist)

    @staticmethod
    def delete_playlist(db: Session, raw_playlist_id: str, requester_id: UUID) -> Result[None]:
        loaded = OwnershipService.load_for_mutation(db, Playlist, raw_playlist_id, requester_id, "Playlist")
        if isinstance(loaded, Err):
            return loaded

        db.delete(loaded.value)
        db.commit()
        return Ok(None)

    @staticmethod
    def add_video(
        db: Session, raw_playlist_id: str, raw_video_id: str, requester_id: UUID
    ) -> Result[Playlist]:
        video_id = parse_reference(raw_video_id)
        if video_id is None:
            return Err(Failure.INVALID_REFERENCE, "Invalid video ID")

        loaded = OwnershipService.load_for_mutation(db, Playlist, raw_playlist_id, requester_id, "Playlist")
        if isinstance(loaded, Err):
            return loaded
        playlist = loaded.value

        if db.query(Video.id).filter(Video.id == video_id).first() is None:
            return Err(Failure.NOT_FOUND, "Video not found")

        existing = db.query(PlaylistVideo.id).filter(
            PlaylistVideo.playlist_id == playlist.id,
            PlaylistVideo.video_id == video_id,
        ).first()
        if existing is not None:
            return Err(Failure.CONFLICT, "Video already in playlist")

        db.add(PlaylistVideo(playlist_id=playlist.id, video_id=video_id))
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.info("Video %s was added to playlist %s concurrently", video_id, playlist.id)
            return Err(Failure.CONFLICT, "Video already in playlist")

        db.refresh(playlist)
        return Ok(playlist)

    @staticmethod
    def remove_video(
        db: Session, raw_playlist_id: str, raw_video_id: str, requester_id: UUID
    ) -> Result[Playlist]:
        video_id = parse_reference(raw_video_id)
        if video_id is None:
            return Err(Failure.INVALID_REFERENCE, "Invalid video ID")

        loaded = OwnershipService.load_for_mutation(db, Playlist, raw_playlist_id, requester_id, "Playlist")
        if isinstance(loaded, Err):
            return loaded
        playlist = loaded.value

        removed = db.query(PlaylistVideo).filter(
            PlaylistVideo.playlist_id == playlist.id,
            PlaylistVideo.video_id == video_id,
        ).delete(synchronize_session=False)
        if not removed:
            db.rollback()
            return Err(Failure.NOT_FOUND, "Video not in playlist")

        db.commit()
        db.expire(playlist)
        return Ok(playlist)
