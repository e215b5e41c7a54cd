"""Object storage capability used by the event provisioner.

The provisioner only needs to write an object and learn its public URL.
``S3ObjectStorage`` implements that on top of boto3 and turns every client
error into ``StorageWriteFailed``, telling credential problems apart from
everything else.
"""
import logging
from typing import Protocol

from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError

from eventshare.core.config import settings
from eventshare.events.errors import StorageFailureReason, StorageWriteFailed
from eventshare.storage.client import get_s3_client

logger = logging.getLogger(__name__)

# S3 error codes caused by bad or mismatched credentials
AUTH_ERROR_CODES = frozenset({"SignatureDoesNotMatch", "InvalidAccessKeyId"})


class ObjectStorage(Protocol):
    def put_object(self, key: str, body: bytes, content_type: str) -> str:
        """Write ``body`` under ``key`` and return its public URL."""
        ...

    def public_url(self, key: str) -> str:
        ...


def classify_storage_error(error: Exception) -> StorageFailureReason:
    """Map a botocore exception to a storage failure reason."""
    if isinstance(error, NoCredentialsError):
        return StorageFailureReason.AUTH_FAILURE
    if isinstance(error, ClientError):
        code = error.response.get("Error", {}).get("Code", "")
        if code in AUTH_ERROR_CODES:
            return StorageFailureReason.AUTH_FAILURE
    return StorageFailureReason.OTHER


class S3ObjectStorage:
    """Object storage backed by an S3 bucket."""

    def __init__(self, client=None, bucket: str | None = None, public_base_url: str | None = None):
        self._client = client
        self.bucket = bucket or settings.s3_bucket_name
        self.public_base_url = (
            public_base_url
            if public_base_url is not None
            else settings.s3_public_base_url
        ) or f"https://{self.bucket}.s3.amazonaws.com"

    @property
    def client(self):
        if self._client is None:
            self._client = get_s3_client()
        return self._client

    def put_object(self, key: str, body: bytes, content_type: str) -> str:
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=body,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as e:
            reason = classify_storage_error(e)
            logger.error(f"Failed to write {key} to bucket {self.bucket}: {e}")
            raise StorageWriteFailed(key, reason) from e

        return self.public_url(key)

    def public_url(self, key: str) -> str:
        return f"{self.public_base_url.rstrip('/')}/{key}"


def get_object_storage() -> ObjectStorage:
    """Dependency for getting the configured object storage."""
    return S3ObjectStorage()
