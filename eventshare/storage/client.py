"""S3 client built from configured credentials."""
import logging

import boto3
from botocore.client import Config

from eventshare.core.config import settings

logger = logging.getLogger(__name__)

# Cached client
_client = None


def get_s3_client():
    """Build the S3 client once and reuse it."""
    global _client

    if _client is not None:
        return _client

    if not has_storage_credentials():
        logger.warning("No S3 access key configured, falling back to the default credential chain")

    _client = boto3.client(
        "s3",
        endpoint_url=settings.s3_endpoint_url or None,
        aws_access_key_id=settings.s3_access_key_id or None,
        aws_secret_access_key=settings.s3_secret_access_key or None,
        config=Config(signature_version="s3v4"),
        region_name=settings.s3_region,
    )
    logger.info(f"S3 client initialized for bucket: {settings.s3_bucket_name}")
    return _client


def has_storage_credentials() -> bool:
    """Check if explicit storage credentials are configured."""
    return bool(settings.s3_access_key_id and settings.s3_secret_access_key)
