from uuid import UUID

from sqlalchemy.orm import Session

from vidtube.core.ownership import parse_reference
from vidtube.core.pagination import Page, paginate
from vidtube.core.result import Err, Failure, Ok, Result
from vidtube.core.sanitization import sanitize_content
from vidtube.models import Comment, LikeTarget, Video
from vidtube.services.engagement_service import EngagementService
from vidtube.services.ownership_service import OwnershipService


class CommentService:
    """Service for handling Comment business logic."""

    @staticmethod
    def get_video_comments(db: Session, raw_video_id: str, page: int, limit: int) -> Result[Page]:
        """Comments on a video, newest first."""
        video_id = parse_reference(raw_video_id)
        if video_id is None:
            return Err(Failure.INVALID_REFERENCE, "Invalid video ID")

        query = (
            db.query(Comment)
            .filter(Comment.video_id == video_id)
            .order_by(Comment.created_at.desc())
        )
        return Ok(paginate(query, page, limit))

    @staticmethod
    def add_comment(db: Session, raw_video_id: str, owner_id: UUID, content: str) -> Result[Comment]:
        video_id = parse_reference(raw_video_id)
        if video_id is None:
            return Err(Failure.INVALID_REFERENCE, "Invalid video ID")

        content = sanitize_content(content)
        if not content:
            return Err(Failure.VALIDATION, "Comment content is required")

        if db.query(Video.id).filter(Video.id == video_id).first() is None:
            return Err(Failure.NOT_FOUND, "Video not found")

        comment = Comment(video_id=video_id, owner_id=owner_id, content=content)
        db.add(comment)
        db.commit()
        db.refresh(comment)
        return Ok(comment)

    @staticmethod
    def update_comment(
        db: Session, raw_comment_id: str, requester_id: UUID, content: str
    ) -> Result[Comment]:
        content = sanitize_content(content)
        if not content:
            return Err(Failure.VALIDATION, "Comment content is required")

        loaded = OwnershipService.load_for_mutation(db, Comment, raw_comment_id, requester_id, "Comment")
        if isinstance(loaded, Err):
            return loaded
        comment = loaded.value

        comment.content = content
        db.commit()
        db.refresh(comment)
        return Ok(comment)

    @staticmethod
    def delete_comment(db: Session, raw_comment_id: str, requester_id: UUID) -> Result[None]:
        loaded = OwnershipService.load_for_mutation(db, Comment, raw_comment_id, requester_id, "Comment")
        if isinstance(loaded, Err):
            return loaded
        comment = loaded.value

        EngagementService.delete_likes(db, LikeTarget.COMMENT, [comment.id])
        db.delete(comment)
        db.commit()
        return Ok(None)
