import uuid
from datetime import datetime

from sqlalchemy import Column, Text, DateTime, ForeignKey, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from vidtube.core.database import Base


class Tweet(Base):
    """Short text post on a user's channel."""
    __tablename__ = "tweets"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    owner = relationship("User", back_populates="tweets")

    __table_args__ = (
        Index("ix_tweets_owner_created", "owner_id", "created_at"),
    )

    def __repr__(self):
        return f"<Tweet {self.id}>"
