"""Tests for the S3 object storage adapter and key layout."""

import re

import boto3
import pytest
from botocore.exceptions import ClientError, EndpointConnectionError, NoCredentialsError
from botocore.stub import Stubber

from eventshare.events.errors import StorageFailureReason, StorageWriteFailed
from eventshare.events.ids import generate_event_id
from eventshare.storage.namespace import (
    DIRECTORY_CONTENT_TYPE,
    cover_key,
    event_prefix,
    folder_keys,
)
from eventshare.storage.objects import S3ObjectStorage, classify_storage_error


@pytest.fixture(name="s3")
def s3_fixture():
    client = boto3.client(
        "s3",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )
    with Stubber(client) as stubber:
        yield client, stubber


class TestNamespace:
    def test_folder_keys_in_write_order(self):
        assert folder_keys("abc") == [
            "events/shared/abc/",
            "events/shared/abc/images/",
            "events/shared/abc/selfies/",
            "events/shared/abc/videos/",
        ]

    def test_cover_key(self):
        assert cover_key("abc") == "events/shared/abc/cover.jpg"

    def test_custom_root(self):
        assert event_prefix("abc", root="/tenants/t1/") == "tenants/t1/abc/"


class TestS3ObjectStorage:
    def test_put_object_returns_public_url(self, s3):
        client, stubber = s3
        stubber.add_response(
            "put_object",
            {"ETag": '"d41d8cd98f00b204e9800998ecf8427e"'},
            {
                "Bucket": "test-bucket",
                "Key": "events/shared/abc/",
                "Body": b"",
                "ContentType": DIRECTORY_CONTENT_TYPE,
            },
        )
        storage = S3ObjectStorage(client=client, bucket="test-bucket", public_base_url="")

        url = storage.put_object("events/shared/abc/", b"", DIRECTORY_CONTENT_TYPE)

        assert url == "https://test-bucket.s3.amazonaws.com/events/shared/abc/"
        stubber.assert_no_pending_responses()

    def test_public_base_url_override(self):
        storage = S3ObjectStorage(client=object(), bucket="b", public_base_url="https://cdn.example.com/")

        assert storage.public_url("events/shared/x/cover.jpg") == "https://cdn.example.com/events/shared/x/cover.jpg"

    @pytest.mark.parametrize(
        "code, reason",
        [
            ("SignatureDoesNotMatch", StorageFailureReason.AUTH_FAILURE),
            ("InvalidAccessKeyId", StorageFailureReason.AUTH_FAILURE),
            ("NoSuchBucket", StorageFailureReason.OTHER),
            ("InternalError", StorageFailureReason.OTHER),
        ],
    )
    def test_client_errors_are_classified(self, s3, code, reason):
        client, stubber = s3
        stubber.add_client_error("put_object", service_error_code=code, http_status_code=403)
        storage = S3ObjectStorage(client=client, bucket="test-bucket", public_base_url="")

        with pytest.raises(StorageWriteFailed) as exc_info:
            storage.put_object("events/shared/abc/images/", b"", DIRECTORY_CONTENT_TYPE)

        assert exc_info.value.reason is reason
        assert exc_info.value.key == "events/shared/abc/images/"
        assert isinstance(exc_info.value.__cause__, ClientError)

    def test_missing_credentials_is_auth_failure(self):
        assert classify_storage_error(NoCredentialsError()) is StorageFailureReason.AUTH_FAILURE

    def test_connection_error_is_other(self):
        error = EndpointConnectionError(endpoint_url="https://s3.amazonaws.com")
        assert classify_storage_error(error) is StorageFailureReason.OTHER


class TestEventIds:
    def test_short_and_url_safe(self):
        event_id = generate_event_id()

        assert len(event_id) == 11
        assert re.fullmatch(r"[A-Za-z0-9_-]+", event_id)

    def test_unique_across_many(self):
        ids = {generate_event_id() for _ in range(5000)}
        assert len(ids) == 5000
