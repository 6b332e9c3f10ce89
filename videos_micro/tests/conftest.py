"""Test configuration: import paths, environment, database and media store fixtures."""

from __future__ import annotations

import os
import sys
from datetime import datetime
from pathlib import Path

import pytest

SERVICE_ROOT = Path(__file__).resolve().parents[1]

service_path = str(SERVICE_ROOT)
if service_path not in sys.path:
    sys.path.insert(0, service_path)

# Must be in place before the db layer is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ALGORITHM"] = "HS256"

from fastapi.testclient import TestClient
from jose import jwt

from db.database import engine, SessionLocal
from main import app
from models.other_models import Base
from models.users_models import User
from models.video_models import Video, VideoComment, VideoLike
from utils.google_drive_utils import GoogleDriveUtils, MediaStoreError, UploadedMedia, get_media_store


class FakeMediaStore(GoogleDriveUtils):
    """Records uploads and deletions instead of talking to Google Drive."""

    def __init__(self):
        super().__init__(service=None, folder_id="test-folder")
        self.uploads: list[tuple[str, str, bytes]] = []
        self.deleted: list[str] = []
        self.fail_uploads = False
        self.fail_deletes = False
        self.video_duration = 42.5

    async def upload_file(self, upload, kind="video"):
        if self.fail_uploads:
            raise MediaStoreError("upload rejected")
        content = await upload.read()
        self.uploads.append((kind, upload.filename, content))
        file_id = f"{kind}-{len(self.uploads)}"
        duration = self.video_duration if kind == "video" else 0
        return UploadedMedia(file_id=file_id, url=self.shareable_url(file_id), duration=duration)

    async def delete_file(self, file_id):
        if self.fail_deletes:
            raise MediaStoreError(f"cannot delete {file_id}")
        self.deleted.append(file_id)


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def media_store():
    return FakeMediaStore()


@pytest.fixture
def client(db_session, media_store):
    app.dependency_overrides[get_media_store] = lambda: media_store
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    def _make_user(username: str = "creator", avatar: str | None = None) -> User:
        user = User(username=username, email=f"{username}@example.com", avatar=avatar)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_video(db_session):
    def _make_video(owner_id: int, title: str = "A video", **fields) -> Video:
        fields.setdefault("description", f"About {title}")
        fields.setdefault("video_file", f"https://drive.google.com/file/d/{title.replace(' ', '_')}-file/view")
        fields.setdefault("thumbnail", f"https://drive.google.com/file/d/{title.replace(' ', '_')}-thumb/view")
        video = Video(owner_id=owner_id, title=title, **fields)
        db_session.add(video)
        db_session.commit()
        db_session.refresh(video)
        return video

    return _make_video


@pytest.fixture
def add_comment(db_session):
    def _add_comment(video: Video, owner_id: int, content: str, created_at: datetime | None = None) -> VideoComment:
        comment = VideoComment(video_id=video.id, owner_id=owner_id, content=content)
        if created_at is not None:
            comment.created_at = created_at
        db_session.add(comment)
        db_session.commit()
        return comment

    return _add_comment


@pytest.fixture
def add_likes(db_session):
    def _add_likes(video: Video, owner_ids: list[int]) -> None:
        for owner_id in owner_ids:
            db_session.add(VideoLike(video_id=video.id, owner_id=owner_id))
        db_session.commit()

    return _add_likes


def issue_token(user: User) -> str:
    return jwt.encode(
        {"uname": user.username, "id": user.id},
        os.environ["SECRET_KEY"],
        algorithm=os.environ["ALGORITHM"],
    )


@pytest.fixture
def auth_headers():
    def _auth_headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {issue_token(user)}"}

    return _auth_headers
