import uuid
from datetime import datetime

from sqlalchemy import Column, String, DateTime
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from vidtube.core.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    username = Column(String(50), nullable=False, unique=True, index=True)  # Stored lower-cased
    email = Column(String(255), nullable=False, unique=True, index=True)
    fullname = Column(String(100), nullable=False)
    avatar = Column(String(1024), nullable=False)
    cover_image = Column(String(1024), nullable=True)
    password_hash = Column(String(255), nullable=False)
    # Single active session slot: SHA-256 of the current refresh token, or NULL
    refresh_token_hash = Column(String(64), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    videos = relationship("Video", back_populates="owner")
    tweets = relationship("Tweet", back_populates="owner")
    playlists = relationship("Playlist", back_populates="owner")

    def __repr__(self):
        return f"<User {self.username}>"
