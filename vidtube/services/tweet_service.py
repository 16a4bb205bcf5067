from uuid import UUID

from sqlalchemy.orm import Session

from vidtube.core.ownership import parse_reference
from vidtube.core.pagination import Page, paginate
from vidtube.core.result import Err, Failure, Ok, Result
from vidtube.core.sanitization import sanitize_content
from vidtube.models import LikeTarget, Tweet
from vidtube.services.engagement_service import EngagementService
from vidtube.services.ownership_service import OwnershipService


class TweetService:
    """Service for handling Tweet business logic."""

    @staticmethod
    def create_tweet(db: Session, owner_id: UUID, content: str) -> Result[Tweet]:
        content = sanitize_content(content)
        if not content:
            return Err(Failure.VALIDATION, "Tweet content is required")

        tweet = Tweet(owner_id=owner_id, content=content)
        db.add(tweet)
        db.commit()
        db.refresh(tweet)
        return Ok(tweet)

    @staticmethod
    def list_tweets(db: Session, page: int, limit: int) -> Page:
        query = db.query(Tweet).order_by(Tweet.created_at.desc())
        return paginate(query, page, limit)

    @staticmethod
    def list_user_tweets(db: Session, raw_user_id: str, page: int, limit: int) -> Result[Page]:
        user_id = parse_reference(raw_user_id)
        if user_id is None:
            return Err(Failure.INVALID_REFERENCE, "Invalid user ID")

        query = (
            db.query(Tweet)
            .filter(Tweet.owner_id == user_id)
            .order_by(Tweet.created_at.desc())
        )
        return Ok(paginate(query, page, limit))

    @staticmethod
    def update_tweet(db: Session, raw_tweet_id: str, requester_id: UUID, content: str) -> Result[Tweet]:
        content = sanitize_content(content)
        if not content:
            return Err(Failure.VALIDATION, "Tweet content is required")

        loaded = OwnershipService.load_for_mutation(db, Tweet, raw_tweet_id, requester_id, "Tweet")
        if isinstance(loaded, Err):
            return loaded
        tweet = loaded.value

        tweet.content = content
        db.commit()
        db.refresh(tweet)
        return Ok(tweet)

    @staticmethod
    def delete_tweet(db: Session, raw_tweet_id: str, requester_id: UUID) -> Result[None]:
        loaded = OwnershipService.load_for_mutation(db, Tweet, raw_tweet_id, requester_id, "Tweet")
        if isinstance(loaded, Err):
            return loaded
        tweet = loaded.value

        EngagementService.delete_likes(db, LikeTarget.TWEET, [tweet.id])
        db.delete(tweet)
        db.commit()
        return Ok(None)
