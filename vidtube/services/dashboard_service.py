from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from vidtube.core.pagination import Page, paginate
from vidtube.models import Like, LikeTarget, Subscription, Video


class DashboardService:
    """Channel statistics for the signed-in owner."""

    @staticmethod
    def get_channel_stats(db: Session, owner_id: UUID) -> dict:
        total_videos, total_views = (
            db.query(func.count(Video.id), func.coalesce(func.sum(Video.views), 0))
            .filter(Video.owner_id == owner_id)
            .one()
        )
        total_subscribers = (
            db.query(func.count(Subscription.id))
            .filter(Subscription.channel_id == owner_id)
            .scalar()
        )
        own_videos = select(Video.id).where(Video.owner_id == owner_id)
        total_likes = (
            db.query(func.count(Like.id))
            .filter(
                Like.target_type == LikeTarget.VIDEO.value,
                Like.target_id.in_(own_videos),
            )
            .scalar()
        )

        return {
            "total_videos": total_videos or 0,
            "total_subscribers": total_subscribers or 0,
            "total_views": int(total_views or 0),
            "total_likes": total_likes or 0,
        }

    @staticmethod
    def get_channel_videos(db: Session, owner_id: UUID, page: int, limit: int) -> Page:
        """All of the owner's videos, drafts included, newest first."""
        query = (
            db.query(Video)
            .filter(Video.owner_id == owner_id)
            .order_by(Video.created_at.desc())
        )
        return paginate(query, page, limit)
