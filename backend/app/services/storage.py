"""
Blob storage for generated brand assets (S3 compatible bucket).
"""

from typing import Optional
import logging

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from app.core.config import settings

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the bucket rejects an operation"""
    pass


class BlobStorage:
    """Upload, link and remove objects keyed ``{user_id}/{file_name}``"""

    def __init__(
        self,
        bucket: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        public_url: Optional[str] = None,
        client=None,
    ):
        self.bucket = bucket or settings.STORAGE_BUCKET
        self.endpoint_url = endpoint_url if endpoint_url is not None else settings.STORAGE_ENDPOINT_URL
        self.public_url = public_url if public_url is not None else settings.STORAGE_PUBLIC_URL
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = boto3.client(
                "s3",
                aws_access_key_id=settings.AWS_ACCESS_KEY_ID or None,
                aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY or None,
                region_name=settings.AWS_REGION,
                endpoint_url=self.endpoint_url or None,
                config=Config(s3={"addressing_style": "path"}),
            )
        return self._client

    def get_public_url(self, path: str) -> str:
        if self.public_url:
            return f"{self.public_url.rstrip('/')}/{self.bucket}/{path}"
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket}/{path}"
        return f"https://{self.bucket}.s3.{settings.AWS_REGION}.amazonaws.com/{path}"

    def upload(self, path: str, data: bytes, content_type: str = "image/png") -> str:
        """Store bytes at ``path`` and return the public URL"""
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=path,
                Body=data,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error uploading {path} to bucket {self.bucket}: {e}")
            raise StorageError(f"Upload failed: {e}") from e
        return self.get_public_url(path)

    def remove(self, path: str) -> None:
        try:
            self.client.delete_object(Bucket=self.bucket, Key=path)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error deleting {path} from bucket {self.bucket}: {e}")
            raise StorageError(f"Delete failed: {e}") from e


_storage: Optional[BlobStorage] = None


def get_storage() -> BlobStorage:
    global _storage
    if _storage is None:
        _storage = BlobStorage()
    return _storage
