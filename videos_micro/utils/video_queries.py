"""
Video Query Assembly

Builds the two read models the video endpoints serve:

- the listing: match -> sort -> paginate -> join owner -> shape
- the detail view: one published video joined with its owner, its comments
  (each joined with its own owner) and a like count computed at query time

The builders return Query objects so each stage can be inspected on its own;
the fetch/assemble functions run them and shape the rows into schemas.
"""

import uuid
from typing import List, Union

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, aliased

from models.users_models import User
from models.video_models import Video, VideoComment, VideoLike
from schemas.schemas import VideoListQuery
from schemas.video_schemas import (
    OwnerSummary, OwnerProfile, VideoCommentView, VideoListItem, VideoDetail
)
from utils.api_utils import ValidationError, NotFoundError


def parse_video_id(video_id: Union[str, uuid.UUID]) -> uuid.UUID:
    """Convert a path parameter into a video id"""
    if isinstance(video_id, uuid.UUID):
        return video_id
    try:
        return uuid.UUID(str(video_id).strip())
    except ValueError:
        raise ValidationError("Invalid video id")


def escape_like(text: str) -> str:
    """Make LIKE wildcards in user input match literally"""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def video_list_filters(params: VideoListQuery) -> list:
    """Match stage: published videos, optionally by text and owner"""
    filters = [Video.is_published == True]

    if params.query:
        search_term = f"%{escape_like(params.query)}%"
        filters.append(
            or_(
                Video.title.ilike(search_term, escape="\\"),
                Video.description.ilike(search_term, escape="\\")
            )
        )

    if params.user_id is not None:
        filters.append(Video.owner_id == params.user_id)

    return filters


def video_sort_clauses(entity, params: VideoListQuery) -> list:
    """Sort stage: requested field/direction, else creation time ascending"""
    column_name = params.sort_column
    if column_name is None:
        return [entity.created_at.asc(), entity.id.asc()]

    column = getattr(entity, column_name)
    ordering = column.asc() if params.sort_type == 1 else column.desc()
    return [ordering, entity.id.asc()]


def build_video_list_query(db: Session, params: VideoListQuery):
    # match, sort, paginate
    page = (
        db.query(Video)
        .filter(*video_list_filters(params))
        .order_by(*video_sort_clauses(Video, params))
        .offset(params.offset)
        .limit(params.limit)
        .subquery()
    )
    paged = aliased(Video, page)

    # join owner, shape
    return (
        db.query(
            paged.id,
            paged.video_file,
            paged.thumbnail,
            paged.title,
            paged.duration,
            paged.created_at,
            User.id.label("owner_id"),
            User.username.label("owner_username")
        )
        .join(User, User.id == paged.owner_id)
        .order_by(*video_sort_clauses(paged, params))
    )


def fetch_video_list(db: Session, params: VideoListQuery) -> List[VideoListItem]:
    rows = build_video_list_query(db, params).all()

    if not rows:
        raise NotFoundError("No videos found")

    return [
        VideoListItem(
            id=row.id,
            video_file=row.video_file,
            thumbnail=row.thumbnail,
            owner=OwnerSummary(id=row.owner_id, username=row.owner_username),
            title=row.title,
            duration=row.duration or 0,
            created_at=row.created_at
        )
        for row in rows
    ]


def build_video_detail_query(db: Session, video_id: uuid.UUID):
    number_of_likes = (
        db.query(func.count(VideoLike.id))
        .filter(VideoLike.video_id == Video.id)
        .correlate(Video)
        .scalar_subquery()
    )

    return (
        db.query(Video, User, number_of_likes.label("number_of_likes"))
        .outerjoin(User, User.id == Video.owner_id)
        .filter(Video.id == video_id, Video.is_published == True)
    )


def build_video_comments_query(db: Session, video_id: uuid.UUID):
    # Inner join: comments whose owner is gone drop out
    return (
        db.query(VideoComment, User)
        .join(User, User.id == VideoComment.owner_id)
        .filter(VideoComment.video_id == video_id)
        .order_by(VideoComment.created_at.asc(), VideoComment.id.asc())
    )


def create_owner_profile(user: User) -> OwnerProfile:
    return OwnerProfile(id=user.id, username=user.username, avatar=user.avatar)


def assemble_video_detail(db: Session, video_id: Union[str, uuid.UUID]) -> VideoDetail:
    """Published video with owner, comments and like count"""
    video_id = parse_video_id(video_id)

    row = build_video_detail_query(db, video_id).first()
    if row is None:
        raise NotFoundError("No such video exists")

    video, owner, number_of_likes = row

    comments = [
        VideoCommentView(
            id=comment.id,
            content=comment.content,
            owner=create_owner_profile(comment_owner),
            created_at=comment.created_at
        )
        for comment, comment_owner in build_video_comments_query(db, video.id).all()
    ]

    return VideoDetail(
        id=video.id,
        video_file=video.video_file,
        thumbnail=video.thumbnail,
        title=video.title,
        description=video.description,
        duration=video.duration or 0,
        views=video.views or 0,
        owner=create_owner_profile(owner) if owner else None,
        is_published=video.is_published,
        created_at=video.created_at,
        updated_at=video.updated_at,
        comments=comments,
        number_of_likes=number_of_likes or 0
    )
