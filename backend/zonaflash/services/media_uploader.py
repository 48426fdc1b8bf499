"""
Capture photo storage (S3-compatible bucket via boto3).

Uploads are best-effort: every failure is raised as MediaUploadFailure so
the hunt orchestrator can log it and carry on without a photo.
"""
import logging
import time
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..core.config import settings
from ..core.errors import MediaUploadFailure

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "image/jpeg"


class MediaUploader:
    """Puts capture photos in a bucket and returns their public URL"""

    def __init__(
        self,
        bucket: str,
        *,
        region: str = "us-east-1",
        prefix: str = "zona_flash/captures",
        public_base_url: str = "https://storage.googleapis.com",
        endpoint_url: Optional[str] = None,
        client=None,
    ):
        self.bucket = bucket
        self.region = region
        self.prefix = prefix.strip("/")
        self.public_base_url = public_base_url.rstrip("/")
        self.endpoint_url = endpoint_url or None
        self._client = client

    @classmethod
    def from_settings(cls) -> "MediaUploader":
        return cls(
            settings.MEDIA_BUCKET,
            region=settings.MEDIA_REGION,
            prefix=settings.MEDIA_PREFIX,
            public_base_url=settings.MEDIA_PUBLIC_BASE_URL,
            endpoint_url=settings.MEDIA_ENDPOINT_URL,
        )

    @property
    def enabled(self) -> bool:
        return bool(self.bucket)

    @property
    def client(self):
        if self._client is None:
            self._client = boto3.client("s3", region_name=self.region, endpoint_url=self.endpoint_url)
        return self._client

    def object_name(self, user_id: str, timestamp: Optional[float] = None) -> str:
        ts = int(timestamp if timestamp is not None else time.time())
        return f"{self.prefix}/{user_id}/{ts}.jpg"

    def public_url(self, object_name: str) -> str:
        return f"{self.public_base_url}/{self.bucket}/{object_name}"

    def upload(self, data: bytes, content_type: Optional[str], user_id: str) -> str:
        """Store the photo and return its URL. Raises MediaUploadFailure."""
        if not self.enabled:
            raise MediaUploadFailure("Media bucket not configured")
        if not data:
            raise MediaUploadFailure("Empty photo")

        key = self.object_name(user_id)
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type or DEFAULT_CONTENT_TYPE,
            )
        except (BotoCoreError, ClientError) as e:
            raise MediaUploadFailure(f"Error uploading {key}: {e}") from e
        except Exception as e:
            raise MediaUploadFailure(f"Unexpected error uploading {key}: {e}") from e

        url = self.public_url(key)
        logger.info(f"Photo uploaded: {url}")
        return url
