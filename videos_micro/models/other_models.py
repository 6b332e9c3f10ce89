# Import all models for the video service
from .users_models import User, Base
from .video_models import Video, VideoComment, VideoLike

metadata = Base.metadata

# Export all tables
__all__ = [
    'User', 'Base', 'metadata',
    'Video', 'VideoComment', 'VideoLike'
]
