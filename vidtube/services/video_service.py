from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from vidtube.core.ownership import parse_reference
from vidtube.core.pagination import Page, paginate
from vidtube.core.result import Err, Failure, Ok, Result
from vidtube.core.sanitization import sanitize_description, sanitize_title
from vidtube.models import Comment, Like, LikeTarget, Video, WatchHistory
from vidtube.schemas.videos import VideoCreateRequest, VideoUpdateRequest
from vidtube.services.engagement_service import EngagementService
from vidtube.services.ownership_service import OwnershipService


class VideoService:
    """Service for handling Video business logic."""

    @staticmethod
    def get_video_by_id(db: Session, video_id: UUID) -> Optional[Video]:
        return db.query(Video).filter(Video.id == video_id).first()

    @staticmethod
    def with_stats(db: Session, videos: list[Video]) -> list[dict]:
        """Attach like and comment counts to each video."""
        if not videos:
            return []
        ids = [v.id for v in videos]

        like_counts = dict(
            db.query(Like.target_id, func.count(Like.id))
            .filter(Like.target_type == LikeTarget.VIDEO.value, Like.target_id.in_(ids))
            .group_by(Like.target_id)
            .all()
        )
        comment_counts = dict(
            db.query(Comment.video_id, func.count(Comment.id))
            .filter(Comment.video_id.in_(ids))
            .group_by(Comment.video_id)
            .all()
        )

        return [
            {
                "video": video,
                "total_likes": like_counts.get(video.id, 0),
                "total_comments": comment_counts.get(video.id, 0),
            }
            for video in videos
        ]

    @staticmethod
    def list_published(
        db: Session,
        page: int,
        limit: int,
        query: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_type: Optional[str] = None,
        raw_user_id: Optional[str] = None,
    ) -> Result[Page]:
        """Published videos, optionally searched by title/description and filtered by owner."""
        q = db.query(Video).filter(Video.is_published.is_(True))

        if query:
            pattern = f"%{query}%"
            q = q.filter(or_(Video.title.ilike(pattern), Video.description.ilike(pattern)))

        if raw_user_id:
            user_id = parse_reference(raw_user_id)
            if user_id is None:
                return Err(Failure.INVALID_REFERENCE, "Invalid user ID")
            q = q.filter(Video.owner_id == user_id)

        if sort_by and sort_type:
            column = getattr(Video, sort_by)
            q = q.order_by(column.desc() if sort_type == "desc" else column.asc())
        else:
            q = q.order_by(Video.created_at.desc())

        return Ok(paginate(q, page, limit))

    @staticmethod
    def create_video(db: Session, owner_id: UUID, data: VideoCreateRequest) -> Result[Video]:
        title = sanitize_title(data.title)
        description = sanitize_description(data.description)
        if not title or not description:
            return Err(Failure.VALIDATION, "Title and description are required")

        video = Video(
            owner_id=owner_id,
            title=title,
            description=description,
            video_file=data.video_file.strip(),
            thumbnail=data.thumbnail.strip(),
            duration=data.duration,
            is_published=data.is_published,
        )
        db.add(video)
        db.commit()
        db.refresh(video)
        return Ok(video)

    @staticmethod
    def view_video(db: Session, raw_video_id: str, viewer_id: UUID) -> Result[tuple[Video, int]]:
        """
        Fetch a video for playback: bumps the view counter, records it in the
        viewer's watch history and returns it with its like count.
        """
        video_id = parse_reference(raw_video_id)
        if video_id is None:
            return Err(Failure.INVALID_REFERENCE, "Invalid video ID")

        video = VideoService.get_video_by_id(db, video_id)
        if video is None:
            return Err(Failure.NOT_FOUND, "Video not found")
        if not video.is_published and video.owner_id != viewer_id:
            return Err(Failure.NOT_FOUND, "Video not found")

        # Atomic increment in the store
        db.query(Video).filter(Video.id == video_id).update(
            {Video.views: Video.views + 1}, synchronize_session=False
        )
        db.commit()
        VideoService._record_watch(db, viewer_id, video_id)
        db.refresh(video)

        return Ok((video, EngagementService.count_likes(db, LikeTarget.VIDEO, video_id)))

    @staticmethod
    def _record_watch(db: Session, user_id: UUID, video_id: UUID) -> None:
        updated = db.query(WatchHistory).filter(
            WatchHistory.user_id == user_id,
            WatchHistory.video_id == video_id,
        ).update({WatchHistory.watched_at: datetime.utcnow()}, synchronize_session=False)
        if updated:
            db.commit()
            return

        db.add(WatchHistory(user_id=user_id, video_id=video_id))
        try:
            db.commit()
        except IntegrityError:
            # Recorded by a concurrent request
            db.rollback()

    @staticmethod
    def get_like_count(db: Session, raw_video_id: str) -> Result[int]:
        video_id = parse_reference(raw_video_id)
        if video_id is None:
            return Err(Failure.INVALID_REFERENCE, "Invalid video ID")
        return Ok(EngagementService.count_likes(db, LikeTarget.VIDEO, video_id))

    @staticmethod
    def update_video(
        db: Session, raw_video_id: str, requester_id: UUID, data: VideoUpdateRequest
    ) -> Result[Video]:
        loaded = OwnershipService.load_for_mutation(db, Video, raw_video_id, requester_id, "Video")
        if isinstance(loaded, Err):
            return loaded
        video = loaded.value

        if data.title is not None:
            video.title = sanitize_title(data.title) or video.title
        if data.description is not None:
            video.description = sanitize_description(data.description) or video.description
        if data.thumbnail is not None:
            video.thumbnail = data.thumbnail.strip()

        db.commit()
        db.refresh(video)
        return Ok(video)

    @staticmethod
    def toggle_publish(db: Session, raw_video_id: str, requester_id: UUID) -> Result[Video]:
        loaded = OwnershipService.load_for_mutation(db, Video, raw_video_id, requester_id, "Video")
        if isinstance(loaded, Err):
            return loaded
        video = loaded.value

        video.is_published = not video.is_published
        db.commit()
        db.refresh(video)
        return Ok(video)

    @staticmethod
    def delete_video(db: Session, raw_video_id: str, requester_id: UUID) -> Result[None]:
        """Delete a video together with its comments and every like pointing at either."""
        loaded = OwnershipService.load_for_mutation(db, Video, raw_video_id, requester_id, "Video")
        if isinstance(loaded, Err):
            return loaded
        video = loaded.value

        comment_ids = [c.id for c in video.comments]
        EngagementService.delete_likes(db, LikeTarget.COMMENT, comment_ids)
        EngagementService.delete_likes(db, LikeTarget.VIDEO, [video.id])
        db.delete(video)
        db.commit()
        return Ok(None)
