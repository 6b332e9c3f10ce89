from sqlalchemy import Column, String, Text, Boolean, DateTime, Integer, Float, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid
from .users_models import Base

# video_id columns are plain references: deleting a video leaves its
# comments and likes in place.

class Video(Base):
    __tablename__ = "videos"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)

    # Media store URLs
    video_file = Column(String(1024), nullable=False)
    thumbnail = Column(String(1024), nullable=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    duration = Column(Float, nullable=False, default=0)  # Duration in seconds

    # Analytics
    views = Column(Integer, nullable=False, default=0)
    is_published = Column(Boolean, nullable=False, default=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    owner = relationship("User", back_populates="videos")

    def __repr__(self):
        return f"<Video(id={self.id}, title={self.title})>"

class VideoComment(Base):
    __tablename__ = "video_comments"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    video_id = Column(Uuid, nullable=False, index=True)
    owner_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    owner = relationship("User", back_populates="video_comments")

class VideoLike(Base):
    __tablename__ = "video_likes"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    video_id = Column(Uuid, nullable=False, index=True)
    owner_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    owner = relationship("User", back_populates="video_likes")
