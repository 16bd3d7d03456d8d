"""
IUploader adapter for the YouTube Data API v3.

OAuth2 credentials are loaded from a pickled token file, refreshed when
expired, or obtained through the installed-app flow on first use.
"""

import logging
import os
import pickle
from typing import Any, Dict, List, Optional

from google.auth.transport.requests import Request
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaFileUpload

from news_briefing.config import YOUTUBE_CREDENTIALS_FILE, YOUTUBE_TOKEN_FILE
from news_briefing.errors import UploadError
from news_briefing.ports.interfaces import IUploader

logger = logging.getLogger(__name__)

# YouTube API scopes
SCOPES = ["https://www.googleapis.com/auth/youtube.upload"]
DEFAULT_TAGS = ["india news", "news briefing", "daily news", "news update"]
MAX_CHUNK_RETRIES = 3


class YouTubeUploader(IUploader):
    """Uploads finished briefings to the authenticated channel."""

    def __init__(
        self,
        credentials_file: Optional[str] = None,
        token_file: Optional[str] = None,
    ):
        self.credentials_file = credentials_file or YOUTUBE_CREDENTIALS_FILE
        self.token_file = token_file or YOUTUBE_TOKEN_FILE
        self.youtube = None
        self.credentials = None

    def authenticate(self) -> None:
        if os.path.exists(self.token_file):
            with open(self.token_file, "rb") as token:
                self.credentials = pickle.load(token)

        if not self.credentials or not self.credentials.valid:
            if self.credentials and self.credentials.expired and self.credentials.refresh_token:
                self.credentials.refresh(Request())
            else:
                if not os.path.exists(self.credentials_file):
                    raise UploadError(
                        f"YouTube credentials file not found: {self.credentials_file}"
                    )
                flow = InstalledAppFlow.from_client_secrets_file(self.credentials_file, SCOPES)
                self.credentials = flow.run_local_server(port=0)

            with open(self.token_file, "wb") as token:
                pickle.dump(self.credentials, token)

        self.youtube = build("youtube", "v3", credentials=self.credentials)
        logger.info("YouTube API authenticated")

    def upload_video(
        self,
        video_path: str,
        title: str,
        description: str = "",
        tags: Optional[List[str]] = None,
        category_id: str = "25",
        privacy_status: str = "public",
    ) -> Dict[str, Any]:
        if not self.youtube:
            self.authenticate()

        if not os.path.exists(video_path):
            raise UploadError(f"Video file not found: {video_path}")

        body = {
            "snippet": {
                # YouTube rejects titles over 100 characters
                "title": title[:100],
                "description": description,
                "tags": tags or DEFAULT_TAGS,
                "categoryId": category_id,
            },
            "status": {
                "privacyStatus": privacy_status,
                "selfDeclaredMadeForKids": False,
            },
        }
        media = MediaFileUpload(video_path, chunksize=-1, resumable=True, mimetype="video/mp4")

        logger.info("Uploading %s to YouTube as %r (%s)", video_path, title, privacy_status)
        insert_request = self.youtube.videos().insert(
            part=",".join(body.keys()),
            body=body,
            media_body=media,
        )
        response = self._resumable_upload(insert_request)

        video_id = response["id"]
        video_url = f"https://www.youtube.com/watch?v={video_id}"
        logger.info("Uploaded video %s", video_url)
        return {"video_id": video_id, "url": video_url, "title": title}

    def _resumable_upload(self, insert_request) -> Dict[str, Any]:
        response = None
        retry = 0
        while response is None:
            try:
                status, response = insert_request.next_chunk()
                if status:
                    logger.debug("Upload progress: %d%%", int(status.progress() * 100))
            except (HttpError, OSError) as exc:
                retry += 1
                if retry > MAX_CHUNK_RETRIES:
                    raise UploadError(f"Upload failed after {MAX_CHUNK_RETRIES} retries: {exc}") from exc
                logger.warning("Upload error (retry %d/%d): %s", retry, MAX_CHUNK_RETRIES, exc)

        if "id" not in response:
            raise UploadError(f"Unexpected upload response: {response}")
        return response
