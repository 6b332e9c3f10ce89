"""
Google Drive Utilities for Media Storage

Video files and thumbnails are uploaded to a Google Drive folder and made
publicly readable. The service keeps only the resulting URL; the Drive file id
is recovered from that URL again whenever a file has to be deleted.

Requirements:
- google-api-python-client
- google-auth

Setup:
1. Create a Google Cloud Project
2. Enable Google Drive API
3. Create Service Account credentials
4. Download the JSON key file
5. Share your target folder with the service account email
"""

import asyncio
import io
import os
import logging
import mimetypes
from dataclasses import dataclass
from functools import lru_cache
from pathlib import PurePosixPath
from typing import Optional
from urllib.parse import urlparse, parse_qs

from dotenv import load_dotenv
from fastapi import UploadFile
from googleapiclient.discovery import build
from googleapiclient.http import MediaIoBaseUpload
from google.oauth2.service_account import Credentials

from utils.api_utils import ValidationError

load_dotenv()

logger = logging.getLogger(__name__)

SCOPES = ['https://www.googleapis.com/auth/drive']


class MediaStoreError(Exception):
    """Raised when the media store rejects an upload or deletion"""


@dataclass
class UploadedMedia:
    file_id: str
    url: str
    duration: float = 0


def retrieve_file_id_from_url(url: Optional[str]) -> Optional[str]:
    """
    Extract the media store identifier from a stored URL

    Handles Drive share links (.../file/d/<id>/view), query-string links
    (uc?id=<id>, open?id=<id>) and plain asset URLs, where the identifier is
    the last path segment without its extension.
    """
    if not url or not url.strip():
        return None

    parsed = urlparse(url.strip())

    ids = parse_qs(parsed.query).get("id")
    if ids and ids[0].strip():
        return ids[0].strip()

    segments = [segment for segment in parsed.path.split("/") if segment]
    if "d" in segments:
        index = segments.index("d")
        if index + 1 < len(segments):
            return segments[index + 1]

    if not segments:
        return None

    file_id = PurePosixPath(segments[-1]).stem.strip()
    return file_id or None


def build_drive_service(credentials_file: Optional[str] = None):
    credentials_paths = [
        credentials_file or "",
        os.getenv("GOOGLE_DRIVE_CREDENTIALS_PATH", ""),
        "credentials/google_drive_credentials.json",
        "google_drive_credentials.json",
    ]

    credentials_file = next((path for path in credentials_paths if path and os.path.exists(path)), None)
    if not credentials_file:
        raise MediaStoreError(
            "Google Drive credentials not found. Set GOOGLE_DRIVE_CREDENTIALS_PATH."
        )

    credentials = Credentials.from_service_account_file(credentials_file, scopes=SCOPES)
    service = build('drive', 'v3', credentials=credentials, cache_discovery=False)
    logger.info(f"Google Drive service initialized from {credentials_file}")
    return service


class GoogleDriveUtils:
    """Utility class for Google Drive operations"""

    # Allowed MIME types
    ALLOWED_VIDEO_TYPES = {
        'video/mp4', 'video/mpeg', 'video/quicktime',
        'video/x-msvideo', 'video/webm', 'video/ogg', 'video/3gpp',
        'video/x-flv', 'video/x-ms-wmv'
    }

    ALLOWED_IMAGE_TYPES = {
        'image/jpeg', 'image/jpg', 'image/png', 'image/gif',
        'image/webp', 'image/bmp'
    }

    # Size limits (in bytes)
    MAX_VIDEO_SIZE = 500 * 1024 * 1024  # 500MB
    MAX_IMAGE_SIZE = 10 * 1024 * 1024  # 10MB

    def __init__(self, service=None, folder_id: Optional[str] = None, credentials_file: Optional[str] = None):
        """
        Wrap a Drive v3 service

        Without a service, one is built from the service account key file the
        first time Drive is actually called.
        """
        self._service = service
        self.credentials_file = credentials_file
        self.folder_id = folder_id or os.getenv("GOOGLE_DRIVE_FOLDER_ID")

    @property
    def service(self):
        if self._service is None:
            self._service = build_drive_service(self.credentials_file)
        return self._service

    @classmethod
    def from_service_account(cls, credentials_file: Optional[str] = None, folder_id: Optional[str] = None):
        """Build the Drive service from a service account key file"""
        return cls(service=build_drive_service(credentials_file), folder_id=folder_id)

    @staticmethod
    def shareable_url(file_id: str) -> str:
        return f"https://drive.google.com/file/d/{file_id}/view"

    async def upload_file(self, upload: UploadFile, kind: str = "video") -> UploadedMedia:
        """
        Upload a video or image to Google Drive

        Args:
            upload: The uploaded file
            kind: "video" or "image", selects the type and size checks

        Returns:
            UploadedMedia with the Drive file id, public URL and duration
            in seconds (0 when Drive has not reported one yet)
        """
        content = await upload.read()
        content_type = self._validate_file(upload, content, kind)

        file_metadata = {'name': upload.filename or f"{kind}_upload"}
        if self.folder_id:
            file_metadata['parents'] = [self.folder_id]

        media = MediaIoBaseUpload(
            io.BytesIO(content),
            mimetype=content_type,
            resumable=True
        )

        try:
            service = self.service
            request = service.files().create(
                body=file_metadata,
                media_body=media,
                fields='id,videoMediaMetadata'
            )
            created = await asyncio.to_thread(request.execute)

            file_id = created.get('id')
            if not file_id:
                raise MediaStoreError("Google Drive did not return a file id")

            # Make file publicly accessible
            permission = service.permissions().create(
                fileId=file_id,
                body={'role': 'reader', 'type': 'anyone'}
            )
            await asyncio.to_thread(permission.execute)
        except MediaStoreError:
            raise
        except Exception as e:
            raise MediaStoreError(f"Failed to upload {kind} to Google Drive: {str(e)}") from e

        duration_ms = (created.get('videoMediaMetadata') or {}).get('durationMillis')
        duration = int(duration_ms) / 1000 if duration_ms else 0

        logger.info(f"Uploaded {kind} {file_id} ({len(content)} bytes)")
        return UploadedMedia(file_id=file_id, url=self.shareable_url(file_id), duration=duration)

    def _validate_file(self, upload: UploadFile, content: bytes, kind: str) -> str:
        """Validate file type and size, returning the resolved MIME type"""
        if kind == "video":
            allowed, max_size = self.ALLOWED_VIDEO_TYPES, self.MAX_VIDEO_SIZE
        else:
            allowed, max_size = self.ALLOWED_IMAGE_TYPES, self.MAX_IMAGE_SIZE

        if not content:
            raise ValidationError(f"Uploaded {kind} file is empty")

        if len(content) > max_size:
            raise ValidationError(f"{kind.capitalize()} file too large. Maximum size is {max_size // (1024*1024)}MB")

        content_type = upload.content_type
        if content_type not in allowed:
            # Try to guess MIME type from filename
            guessed_type, _ = mimetypes.guess_type(upload.filename or "")
            if guessed_type not in allowed:
                raise ValidationError(
                    f"Unsupported {kind} format. Allowed formats: {', '.join(sorted(allowed))}"
                )
            content_type = guessed_type

        return content_type

    async def delete_file(self, file_id: str):
        """Delete a file from Google Drive"""
        try:
            request = self.service.files().delete(fileId=file_id)
            await asyncio.to_thread(request.execute)
        except MediaStoreError:
            raise
        except Exception as e:
            raise MediaStoreError(f"Failed to delete {file_id} from Google Drive: {str(e)}") from e
        logger.info(f"Deleted media {file_id}")

    async def delete_by_url(self, url: str):
        """Delete the file a stored URL points at"""
        file_id = retrieve_file_id_from_url(url)
        if not file_id:
            raise MediaStoreError(f"Could not find a media id in {url!r}")
        await self.delete_file(file_id)


@lru_cache(maxsize=1)
def get_media_store() -> GoogleDriveUtils:
    """Process-wide media store; the Drive service is built on first call"""
    return GoogleDriveUtils()
