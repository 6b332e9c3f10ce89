from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import declarative_base, relationship
from datetime import datetime

Base = declarative_base()

class User(Base):
    __tablename__ = "users"

    # Primary identifiers
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)

    # Public profile
    full_name = Column(String(255), nullable=True)
    avatar = Column(String(1024), nullable=True)  # Media store URL

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)

    # Video relationships
    videos = relationship("Video", back_populates="owner", lazy="dynamic")
    video_comments = relationship("VideoComment", back_populates="owner", lazy="dynamic")
    video_likes = relationship("VideoLike", back_populates="owner", lazy="dynamic")

    def __repr__(self):
        return f"<User(username={self.username}, email={self.email})>"
