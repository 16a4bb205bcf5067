import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, String, Text, Integer, DateTime, ForeignKey, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from vidtube.core.database import Base


class Video(Base):
    """A published (or draft) video hosted on the external asset host."""
    __tablename__ = "videos"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    video_file = Column(String(1024), nullable=False)
    thumbnail = Column(String(1024), nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    duration = Column(Integer, nullable=False, default=0)  # Seconds
    views = Column(Integer, nullable=False, default=0)
    is_published = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    owner = relationship("User", back_populates="videos")
    comments = relationship("Comment", back_populates="video", cascade="all, delete-orphan")
    playlist_entries = relationship("PlaylistVideo", back_populates="video", cascade="all, delete-orphan")
    watch_entries = relationship("WatchHistory", back_populates="video", cascade="all, delete-orphan")

    __table_args__ = (
        Index("ix_videos_owner_id", "owner_id"),
        Index("ix_videos_published_created", "is_published", "created_at"),
    )

    def __repr__(self):
        return f"<Video {self.title}>"
