"""Tests for the boto3-backed object store client."""

from unittest.mock import MagicMock

import boto3
import pytest
from botocore.exceptions import ClientError, EndpointConnectionError
from moto import mock_aws

from bucketfs.core.exceptions import (
    ErrorKind,
    ObjectNotFoundError,
    StoreError,
    StorePermissionError,
    TransientStoreError,
    ValidationError,
)
from bucketfs.objectstorage.clients import S3ObjectStore
from bucketfs.objectstorage.clients.s3_store import put_arguments, translate_error

BUCKET = "test-bucket"


def _client_error(code, operation="GetObject"):
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


@mock_aws
class TestS3ObjectStore:
    """Test store calls against a mocked S3 bucket."""

    def setup_method(self, method):
        """Set up test environment."""

        self.s3_client = boto3.client(
            "s3",
            aws_access_key_id="test_key",
            aws_secret_access_key="test_secret",
            region_name="us-east-1",
        )
        self.s3_client.create_bucket(Bucket=BUCKET)
        self.store = S3ObjectStore(self.s3_client)

    def test_put_and_get(self):
        """Test content and headers round trip through the store."""
        self.store.put(
            BUCKET,
            "docs/readme.md",
            b"# hello",
            {
                "Content-Type": "text/markdown",
                "Cache-Control": "no-cache",
                "headers": {"x-amz-meta-owner": "ops"},
            },
        )

        assert self.store.get(BUCKET, "docs/readme.md") == b"# hello"
        head = self.s3_client.head_object(Bucket=BUCKET, Key="docs/readme.md")
        assert head["ContentType"] == "text/markdown"
        assert head["CacheControl"] == "no-cache"
        assert head["Metadata"] == {"owner": "ops"}

    def test_get_missing(self):
        """Test missing objects raise ObjectNotFoundError."""
        with pytest.raises(ObjectNotFoundError) as exc_info:
            self.store.get(BUCKET, "missing.txt")
        assert exc_info.value.kind is ErrorKind.not_found
        assert exc_info.value.key == "missing.txt"

    def test_exists(self):
        """Test existence checks."""
        self.s3_client.put_object(Bucket=BUCKET, Key="here.txt", Body=b"x")
        assert self.store.exists(BUCKET, "here.txt") is True
        assert self.store.exists(BUCKET, "gone.txt") is False

    def test_acl(self):
        """Test ACL read back as public-read or private."""
        self.store.put(
            BUCKET, "public.txt", b"x", {"headers": {"x-amz-acl": "public-read"}}
        )
        self.store.put(BUCKET, "private.txt", b"x", {})

        assert self.store.get_acl(BUCKET, "public.txt") == "public-read"
        assert self.store.get_acl(BUCKET, "private.txt") == "private"

        self.store.set_acl(BUCKET, "private.txt", "public-read")
        assert self.store.get_acl(BUCKET, "private.txt") == "public-read"

    def test_head_object(self):
        """Test raw metadata headers."""
        self.s3_client.put_object(
            Bucket=BUCKET, Key="img.png", Body=b"1234", ContentType="image/png"
        )
        raw = self.store.head_object(BUCKET, "img.png")

        assert raw["content-type"] == "image/png"
        assert int(raw["content-length"]) == 4
        assert raw["last-modified"]

    def test_copy(self):
        """Test server-side copy."""
        self.s3_client.put_object(Bucket=BUCKET, Key="src.txt", Body=b"data")
        self.store.copy(BUCKET, "src.txt", BUCKET, "dst.txt")
        assert self.store.get(BUCKET, "dst.txt") == b"data"

    def test_copy_missing_source(self):
        with pytest.raises(StoreError):
            self.store.copy(BUCKET, "nope.txt", BUCKET, "dst.txt")

    def test_delete_many(self):
        """Test bulk deletion."""
        for key in ("d/1", "d/2", "keep"):
            self.s3_client.put_object(Bucket=BUCKET, Key=key, Body=b"x")

        self.store.delete_many(BUCKET, ["d/1", "d/2"])

        response = self.s3_client.list_objects(Bucket=BUCKET)
        keys = [o["Key"] for o in response["Contents"]]
        assert keys == ["keep"]

    def test_create_marker_object(self):
        """Test directory markers are zero-byte keys with a trailing slash."""
        self.store.create_marker_object(BUCKET, "photos", {"Content-Length": 99})

        head = self.s3_client.head_object(Bucket=BUCKET, Key="photos/")
        assert head["ContentLength"] == 0

    def test_list_objects(self):
        """Test one page of a delimiter listing."""
        for key in ("p/a.txt", "p/sub/b.txt"):
            self.s3_client.put_object(Bucket=BUCKET, Key=key, Body=b"xy")

        page = self.store.list_objects(BUCKET, prefix="p/", delimiter="/")

        assert [o.key for o in page.objects] == ["p/a.txt"]
        assert page.objects[0].size == 2
        assert page.common_prefixes == ["p/sub/"]
        assert page.is_truncated is False

    def test_sign_url(self):
        """Test presigned GET URLs."""
        url = self.store.sign_url(BUCKET, "p/a.txt", 600, "GET", {})
        assert "p/a.txt" in url
        assert "Signature" in url or "X-Amz-Signature" in url

    def test_sign_url_invalid_method(self):
        with pytest.raises(ValidationError, match="Unsupported HTTP method"):
            self.store.sign_url(BUCKET, "p/a.txt", 600, "PATCH")


class TestDeleteBatching:
    """Test bulk deletes are split at the S3 request limit."""

    def test_batches_of_one_thousand(self):
        client = MagicMock()
        client.delete_objects.return_value = {}
        keys = [f"k/{i}" for i in range(2500)]

        S3ObjectStore(client).delete_many(BUCKET, keys)

        sizes = [
            len(call.kwargs["Delete"]["Objects"])
            for call in client.delete_objects.call_args_list
        ]
        assert sizes == [1000, 1000, 500]

    def test_reported_errors_raise(self):
        client = MagicMock()
        client.delete_objects.return_value = {
            "Errors": [{"Key": "k/1", "Code": "AccessDenied", "Message": "denied"}]
        }

        with pytest.raises(StoreError, match="k/1"):
            S3ObjectStore(client).delete_many(BUCKET, ["k/1"])


class TestTranslateError:
    """Test botocore error classification."""

    @pytest.mark.parametrize(
        "code,expected",
        [
            ("NoSuchKey", ObjectNotFoundError),
            ("404", ObjectNotFoundError),
            ("NoSuchBucket", ObjectNotFoundError),
            ("AccessDenied", StorePermissionError),
            ("403", StorePermissionError),
            ("SlowDown", TransientStoreError),
            ("InternalError", TransientStoreError),
        ],
    )
    def test_client_errors(self, code, expected):
        error = translate_error(_client_error(code), "get", "a.txt")
        assert type(error) is expected
        assert error.code == code

    def test_unknown_code(self):
        error = translate_error(_client_error("InvalidArgument"), "put", "a.txt")
        assert type(error) is StoreError
        assert error.kind is ErrorKind.unknown

    def test_connection_errors_are_transient(self):
        error = translate_error(
            EndpointConnectionError(endpoint_url="https://s3.example.com"), "get"
        )
        assert error.kind is ErrorKind.transient


class TestPutArguments:
    """Test conversion of request options into put_object arguments."""

    def test_mapping(self):
        kwargs = put_arguments(
            {
                "Content-Type": "text/plain",
                "Content-Length": 5,
                "Content-Disposition": "inline",
                "visibility": "public",
                "mimetype": "text/plain",
                "headers": {
                    "x-amz-acl": "public-read",
                    "x-amz-meta-Team": "media",
                    "x-custom": "dropped",
                },
            }
        )

        assert kwargs == {
            "ContentType": "text/plain",
            "ContentLength": 5,
            "ContentDisposition": "inline",
            "ACL": "public-read",
            "Metadata": {"team": "media"},
        }
