"""
Video Resource API

GET    /videos/                              - List/search published videos
GET    /videos/{video_id}                    - Video with owner, comments and like count
POST   /videos/                              - Publish a video (multipart: thumbnail, video)
PATCH  /videos/{video_id}                    - Replace the thumbnail (multipart: thumbnail)
PATCH  /videos/update-details/{video_id}     - Update title and description
PATCH  /videos/toggle/publish/{video_id}     - Flip the publish flag
DELETE /videos/{video_id}                    - Delete a video and its media

Every route except the listing needs a bearer token. Responses use the
{statusCode, data, message, success} envelope.
"""

from fastapi import APIRouter, Depends, HTTPException, status, Query, UploadFile, File, Form
from sqlalchemy.orm import Session
from db.connection import get_db
from db.verify_token import verify_token
from models.users_models import User
from models.video_models import Video
from schemas.schemas import VideoListQuery, VideoDetailsUpdate
from schemas.video_schemas import create_video_record
from utils.api_utils import api_response, ValidationError, NotFoundError
from utils.google_drive_utils import GoogleDriveUtils, MediaStoreError, get_media_store
from utils.video_queries import fetch_video_list, assemble_video_detail, parse_video_id
from typing import Optional
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/videos", tags=["Videos"])


def get_video_or_404(db: Session, video_id: str, message: str = "No such video exists.") -> Video:
    video = db.query(Video).filter(Video.id == parse_video_id(video_id)).first()
    if not video:
        raise NotFoundError(message)
    return video


def has_file(upload: Optional[UploadFile]) -> bool:
    return upload is not None and bool(upload.filename)


@router.get("/")
async def get_all_videos(
    page: int = Query(1, ge=1),
    limit: int = Query(3, ge=1, le=50),
    query: Optional[str] = Query(None),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_type: Optional[str] = Query(None, alias="sortType"),
    user_id: Optional[int] = Query(None, alias="userId"),
    db: Session = Depends(get_db)
):
    """List published videos with optional search, sorting and owner filter"""
    params = VideoListQuery(
        page=page,
        limit=limit,
        query=query,
        sort_by=sort_by,
        sort_type=sort_type,
        user_id=user_id
    )

    videos = fetch_video_list(db, params)

    return api_response(status.HTTP_200_OK, videos, "Successfully fetched videos based on query.")


@router.post("/")
async def publish_video(
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    thumbnail: Optional[UploadFile] = File(None),
    video: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(verify_token),
    media_store: GoogleDriveUtils = Depends(get_media_store)
):
    """Upload thumbnail and video to the media store and create the video"""
    try:
        if not (title and title.strip()) or not (description and description.strip()):
            raise ValidationError("Title and Description are required.")

        if not has_file(thumbnail):
            raise ValidationError("Thumbnail is required.")
        if not has_file(video):
            raise ValidationError("Video is required.")

        try:
            uploaded_thumbnail = await media_store.upload_file(thumbnail, kind="image")
            uploaded_video = await media_store.upload_file(video, kind="video")
        except MediaStoreError as e:
            logger.error(f"Media upload failed for user {current_user.id}: {e}")
            raise ValidationError("Failure while uploading thumbnail or video on Cloud. Try again!")

        if not uploaded_thumbnail.url or not uploaded_video.url:
            raise ValidationError("Failure while uploading thumbnail or video on Cloud. Try again!")

        new_video = Video(
            video_file=uploaded_video.url,
            thumbnail=uploaded_thumbnail.url,
            title=title.strip(),
            description=description.strip(),
            duration=uploaded_video.duration,
            owner_id=current_user.id
        )

        db.add(new_video)
        db.commit()
        db.refresh(new_video)

        logger.info(f"Video {new_video.id} published by user {current_user.id}")

        return api_response(status.HTTP_200_OK, create_video_record(new_video), "Video uploaded successfully.")

    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Video upload failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to upload video: {str(e)}"
        )


@router.get("/{video_id}")
async def get_video(
    video_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(verify_token)
):
    """Get a published video with its owner, comments and like count"""
    video = assemble_video_detail(db, video_id)

    return api_response(status.HTTP_200_OK, video, "Video fetched successfully")


@router.patch("/update-details/{video_id}")
async def update_video_details(
    video_id: str,
    details: VideoDetailsUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(verify_token)
):
    """Replace title and description"""
    try:
        title = (details.title or "").strip()
        description = (details.description or "").strip()

        if not title or not description:
            raise ValidationError("Please dont keep any fields empty.")

        video = get_video_or_404(db, video_id, "No such video exists to update.")

        video.title = title
        video.description = description

        db.commit()
        db.refresh(video)

        return api_response(status.HTTP_200_OK, create_video_record(video), "Video details updated successfully.")

    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update video: {str(e)}"
        )


@router.patch("/toggle/publish/{video_id}")
async def toggle_publish_status(
    video_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(verify_token)
):
    """Flip the publish flag"""
    try:
        video = get_video_or_404(db, video_id, "No such video exists to toggle.")

        video.is_published = not video.is_published

        db.commit()
        db.refresh(video)

        return api_response(status.HTTP_200_OK, create_video_record(video), "Video publicity toggled successfully.")

    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to toggle video: {str(e)}"
        )


@router.patch("/{video_id}")
async def update_video_thumbnail(
    video_id: str,
    thumbnail: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(verify_token),
    media_store: GoogleDriveUtils = Depends(get_media_store)
):
    """Upload a new thumbnail and remove the old one from the media store"""
    try:
        if not has_file(thumbnail):
            raise ValidationError("thumbnail was not received by the server.")

        video = get_video_or_404(db, video_id, "No such video exists to update.")

        try:
            uploaded_thumbnail = await media_store.upload_file(thumbnail, kind="image")
        except MediaStoreError as e:
            logger.error(f"Thumbnail upload failed for video {video_id}: {e}")
            raise ValidationError("Failure uploading thumbnail to the media store.")

        if not uploaded_thumbnail.url:
            raise ValidationError("Failure uploading thumbnail to the media store.")

        if video.thumbnail:
            await media_store.delete_by_url(video.thumbnail)

        video.thumbnail = uploaded_thumbnail.url

        db.commit()
        db.refresh(video)

        return api_response(status.HTTP_200_OK, create_video_record(video), "Video thumbnail updated successfully.")

    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Thumbnail update failed for video {video_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update thumbnail: {str(e)}"
        )


@router.delete("/{video_id}")
async def delete_video(
    video_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(verify_token),
    media_store: GoogleDriveUtils = Depends(get_media_store)
):
    """Delete a video; media cleanup is best-effort"""
    try:
        video = get_video_or_404(db, video_id)

        if video.video_file and video.thumbnail:
            for url in (video.thumbnail, video.video_file):
                try:
                    await media_store.delete_by_url(url)
                except Exception as e:
                    logger.warning(f"Failed to delete media {url} for video {video.id}: {e}")

        deleted = create_video_record(video)

        db.delete(video)
        db.commit()

        return api_response(status.HTTP_200_OK, deleted, "Video deleted successfully.")

    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to delete video: {str(e)}"
        )
