from typing import Optional
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from vidtube.core.result import Err, Failure, Ok, Result
from vidtube.core.sanitization import sanitize_email, sanitize_name, sanitize_username, validate_email
from vidtube.models import Subscription, User, Video, WatchHistory
from vidtube.services.engagement_service import EngagementService


class UserService:
    """Account details, channel profiles and watch history."""

    @staticmethod
    def get_user(db: Session, user_id: UUID) -> Result[User]:
        user = db.query(User).filter(User.id == user_id).first()
        if user is None:
            return Err(Failure.IDENTITY_MISSING)
        return Ok(user)

    @staticmethod
    def update_account(db: Session, user_id: UUID, fullname: str, email: str) -> Result[User]:
        fullname = sanitize_name(fullname)
        email = sanitize_email(email)
        if not fullname:
            return Err(Failure.VALIDATION, "Full name is required")
        if not validate_email(email):
            return Err(Failure.VALIDATION, "Invalid email format")

        loaded = UserService.get_user(db, user_id)
        if isinstance(loaded, Err):
            return loaded
        user = loaded.value

        taken = db.query(User.id).filter(User.email == email, User.id != user_id).first()
        if taken is not None:
            return Err(Failure.CONFLICT, "Email is already in use")

        user.fullname = fullname
        user.email = email
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            return Err(Failure.CONFLICT, "Email is already in use")
        db.refresh(user)
        return Ok(user)

    @staticmethod
    def update_image(db: Session, user_id: UUID, field: str, url: str) -> Result[User]:
        """Point the avatar or cover image at a new hosted URL."""
        url = url.strip()
        if not url:
            return Err(Failure.VALIDATION, "Image URL is required")

        loaded = UserService.get_user(db, user_id)
        if isinstance(loaded, Err):
            return loaded
        user = loaded.value

        setattr(user, field, url)
        db.commit()
        db.refresh(user)
        return Ok(user)

    @staticmethod
    def get_channel_profile(
        db: Session, username: str, viewer_id: Optional[UUID] = None
    ) -> Result[dict]:
        username = sanitize_username(username)
        if not username:
            return Err(Failure.VALIDATION, "Username is required")

        channel = db.query(User).filter(User.username == username).first()
        if channel is None:
            return Err(Failure.NOT_FOUND, "Channel does not exist")

        subscribers = db.query(Subscription).filter(Subscription.channel_id == channel.id).count()
        subscribed_to = db.query(Subscription).filter(Subscription.subscriber_id == channel.id).count()
        is_subscribed = (
            viewer_id is not None
            and EngagementService.is_subscribed(db, viewer_id, channel.id)
        )

        return Ok({
            "id": channel.id,
            "username": channel.username,
            "fullname": channel.fullname,
            "email": channel.email,
            "avatar": channel.avatar,
            "cover_image": channel.cover_image,
            "subscribers_count": subscribers,
            "channels_subscribed_to_count": subscribed_to,
            "is_subscribed": is_subscribed,
        })

    @staticmethod
    def get_watch_history(db: Session, user_id: UUID) -> list[Video]:
        """Watched videos, most recently watched first. Other people's drafts are left out."""
        return (
            db.query(Video)
            .join(WatchHistory, WatchHistory.video_id == Video.id)
            .filter(
                WatchHistory.user_id == user_id,
                or_(Video.is_published.is_(True), Video.owner_id == user_id),
            )
            .order_by(WatchHistory.watched_at.desc())
            .all()
        )
