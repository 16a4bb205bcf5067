"""Like edges on videos, comments and tweets."""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Column, String, DateTime, ForeignKey, Index, UniqueConstraint, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID

from vidtube.core.database import Base


class LikeTarget(str, enum.Enum):
    VIDEO = "video"
    COMMENT = "comment"
    TWEET = "tweet"


class Like(Base):
    """
    A (liked_by, target_type, target_id) edge. The row's existence is the
    "liked" state; the unique constraint keeps at most one edge per key.
    """

    __tablename__ = "likes"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    liked_by = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    target_type = Column(String(10), nullable=False)
    target_id = Column(UUID(as_uuid=True), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("liked_by", "target_type", "target_id", name="uq_like_actor_target"),
        CheckConstraint("target_type IN ('video', 'comment', 'tweet')", name="ck_like_target_type"),
        Index("ix_likes_target", "target_type", "target_id"),
    )
