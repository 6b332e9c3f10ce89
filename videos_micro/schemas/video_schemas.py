from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional
from datetime import datetime
from uuid import UUID

# Records are read and written by field name and serialized with camelCase keys

class CamelModel(BaseModel):
    class Config:
        from_attributes = True
        populate_by_name = True
        alias_generator = to_camel

# Owner Schemas
class OwnerSummary(CamelModel):
    id: int = Field(..., alias="_id")
    username: str

class OwnerProfile(OwnerSummary):
    avatar: Optional[str] = None

# Comment Schemas
class VideoCommentView(CamelModel):
    id: UUID = Field(..., alias="_id")
    content: str
    owner: OwnerProfile
    created_at: Optional[datetime] = None

# Video Schemas
class VideoListItem(CamelModel):
    id: UUID = Field(..., alias="_id")
    video_file: str
    thumbnail: Optional[str] = None
    owner: OwnerSummary
    title: str
    duration: float = 0
    created_at: Optional[datetime] = None

class VideoRecord(CamelModel):
    id: UUID = Field(..., alias="_id")
    video_file: str
    thumbnail: Optional[str] = None
    title: str
    description: Optional[str] = None
    duration: float = 0
    views: int = 0
    owner: int
    is_published: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class VideoDetail(VideoRecord):
    owner: Optional[OwnerProfile] = None
    comments: List[VideoCommentView] = Field(default_factory=list, alias="commentsOnTheVideo")
    number_of_likes: int = 0


def create_video_record(video) -> VideoRecord:
    """Convert a Video row to its public record"""
    return VideoRecord(
        id=video.id,
        video_file=video.video_file,
        thumbnail=video.thumbnail,
        title=video.title,
        description=video.description,
        duration=video.duration or 0,
        views=video.views or 0,
        owner=video.owner_id,
        is_published=video.is_published,
        created_at=video.created_at,
        updated_at=video.updated_at
    )
