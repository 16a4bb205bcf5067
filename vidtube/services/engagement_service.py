"""
Toggle-style engagement edges: likes and subscriptions.

An edge's existence is its boolean state. A toggle reads the edge for the
exact key and then deletes or creates it. The read and the write are not one
transaction, so two concurrent toggles for the same key can race; the
store's unique constraint rejects the second create and a second delete
finds nothing. Both outcomes collapse into the state the caller asked for
instead of surfacing as errors. A create rejected while no edge exists,
such as one whose target was deleted in between, reports the target missing.
"""

import enum
import logging
from typing import Type
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from vidtube.core.database import Base
from vidtube.core.ownership import parse_reference
from vidtube.core.pagination import Page, paginate
from vidtube.core.result import Err, Failure, Ok, Result
from vidtube.models import Like, LikeTarget, Subscription, User, Video

logger = logging.getLogger(__name__)


class EdgeState(str, enum.Enum):
    PRESENT = "present"
    ABSENT = "absent"

    @property
    def is_present(self) -> bool:
        return self is EdgeState.PRESENT


class EngagementService:
    """Service for like and subscription edges."""

    @staticmethod
    def _find_edge(db: Session, model: Type[Base], key: dict):
        return db.query(model.id).filter_by(**key).first()

    @staticmethod
    def _edge_exists(db: Session, model: Type[Base], key: dict) -> bool:
        return db.query(model.id).filter_by(**key).first() is not None

    @staticmethod
    def _toggle_edge(db: Session, model: Type[Base], key: dict) -> Result[EdgeState]:
        if EngagementService._find_edge(db, model, key) is not None:
            deleted = db.query(model).filter_by(**key).delete(synchronize_session=False)
            db.commit()
            if not deleted:
                logger.info("%s edge %s was already removed", model.__tablename__, key)
            return Ok(EdgeState.ABSENT)

        db.add(model(**key))
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            # Unique key taken by a concurrent toggle, or a referenced row vanished
            if not EngagementService._edge_exists(db, model, key):
                logger.info("%s edge %s rejected by the store: %s", model.__tablename__, key, e.orig)
                return Err(Failure.TARGET_NOT_FOUND, "Target not found")
            logger.info("%s edge %s already exists", model.__tablename__, key)
        return Ok(EdgeState.PRESENT)

    @staticmethod
    def toggle_like(
        db: Session, actor_id: UUID, raw_target_id: str, target: LikeTarget
    ) -> Result[EdgeState]:
        """Like or unlike a video, comment or tweet. Liking your own content is allowed."""
        target_id = parse_reference(raw_target_id)
        if target_id is None:
            return Err(Failure.INVALID_REFERENCE, f"Invalid {target.value} ID")

        key = {"liked_by": actor_id, "target_type": target.value, "target_id": target_id}
        return EngagementService._toggle_edge(db, Like, key)

    @staticmethod
    def toggle_subscription(
        db: Session, actor_id: UUID, raw_channel_id: str
    ) -> Result[EdgeState]:
        """Subscribe to or unsubscribe from a channel. Self-subscription is rejected."""
        channel_id = parse_reference(raw_channel_id)
        if channel_id is None:
            return Err(Failure.INVALID_REFERENCE, "Invalid channel ID")
        if channel_id == actor_id:
            return Err(Failure.SELF_REFERENCE_FORBIDDEN, "You cannot subscribe to yourself")
        if db.query(User.id).filter(User.id == channel_id).first() is None:
            return Err(Failure.TARGET_NOT_FOUND, "Channel not found")

        key = {"subscriber_id": actor_id, "channel_id": channel_id}
        return EngagementService._toggle_edge(db, Subscription, key)

    @staticmethod
    def count_likes(db: Session, target: LikeTarget, target_id: UUID) -> int:
        return db.query(Like).filter(
            Like.target_type == target.value,
            Like.target_id == target_id,
        ).count()

    @staticmethod
    def delete_likes(db: Session, target: LikeTarget, target_ids: list[UUID]) -> None:
        """Drop like edges pointing at deleted content. Caller commits."""
        if not target_ids:
            return
        db.query(Like).filter(
            Like.target_type == target.value,
            Like.target_id.in_(target_ids),
        ).delete(synchronize_session=False)

    @staticmethod
    def get_liked_videos(db: Session, user_id: UUID, page: int, limit: int) -> Page:
        query = (
            db.query(Video)
            .join(Like, Like.target_id == Video.id)
            .filter(
                Like.liked_by == user_id,
                Like.target_type == LikeTarget.VIDEO.value,
                or_(Video.is_published.is_(True), Video.owner_id == user_id),
            )
            .order_by(Like.created_at.desc())
        )
        return paginate(query, page, limit)

    @staticmethod
    def get_channel_subscribers(
        db: Session, raw_channel_id: str, page: int, limit: int
    ) -> Result[Page]:
        channel_id = parse_reference(raw_channel_id)
        if channel_id is None:
            return Err(Failure.INVALID_REFERENCE, "Invalid channel ID")

        query = (
            db.query(User)
            .join(Subscription, Subscription.subscriber_id == User.id)
            .filter(Subscription.channel_id == channel_id)
            .order_by(Subscription.created_at.desc())
        )
        return Ok(paginate(query, page, limit))

    @staticmethod
    def get_subscribed_channels(
        db: Session, raw_subscriber_id: str, page: int, limit: int
    ) -> Result[Page]:
        subscriber_id = parse_reference(raw_subscriber_id)
        if subscriber_id is None:
            return Err(Failure.INVALID_REFERENCE, "Invalid subscriber ID")

        query = (
            db.query(User)
            .join(Subscription, Subscription.channel_id == User.id)
            .filter(Subscription.subscriber_id == subscriber_id)
            .order_by(Subscription.created_at.desc())
        )
        return Ok(paginate(query, page, limit))

    @staticmethod
    def is_subscribed(db: Session, subscriber_id: UUID, channel_id: UUID) -> bool:
        return db.query(Subscription.id).filter(
            Subscription.subscriber_id == subscriber_id,
            Subscription.channel_id == channel_id,
        ).first() is not None
