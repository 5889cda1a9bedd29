"""Tests for signed and public URL generation."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import boto3
import pytest
from moto import mock_aws

from bucketfs.core.exceptions import UnsupportedOperationError, ValidationError
from bucketfs.objectstorage.clients import S3ObjectStore
from bucketfs.objectstorage.paths import PathPrefixer
from bucketfs.objectstorage.urls import SignedUrlGenerator

BUCKET = "test-bucket"
NOW = 1_700_000_000.0


def fixed_clock():
    return NOW


class TestSignedUrl:
    """Test timeout computation and delegation to the store."""

    def setup_method(self, method):
        self.store = MagicMock()
        self.store.sign_url.return_value = "https://signed.example/x"
        self.generator = SignedUrlGenerator(
            self.store, BUCKET, PathPrefixer("root"), clock=fixed_clock
        )

    def test_epoch_expiry(self):
        """Test the timeout is the distance from now to the expiry."""
        url = self.generator.signed_url(
            "a/b.txt", NOW + 900, {"ResponseContentType": "x"}
        )

        assert url == "https://signed.example/x"
        self.store.sign_url.assert_called_once_with(
            BUCKET, "root/a/b.txt", 900, "GET", {"ResponseContentType": "x"}
        )

    def test_datetime_expiry(self):
        """Test aware datetimes are accepted."""
        expires = datetime.fromtimestamp(NOW + 60, tz=timezone.utc)
        self.generator.signed_url("a/b.txt", expires)

        assert self.store.sign_url.call_args.args[2] == 60

    def test_sub_second_expiry_rounds_up(self):
        """Test an expiry less than a second away is still signed."""
        self.generator.signed_url("a/b.txt", NOW + 0.4)

        assert self.store.sign_url.call_args.args[2] == 1

    def test_fractional_timeout_rounds_up(self):
        self.generator.signed_url("a/b.txt", NOW + 59.2)

        assert self.store.sign_url.call_args.args[2] == 60

    @pytest.mark.parametrize("offset", [0, -30])
    def test_expiry_not_in_future(self, offset):
        """Test error when the expiry has passed."""
        with pytest.raises(ValidationError, match="Expiry must be in the future"):
            self.generator.signed_url("a/b.txt", NOW + offset)
        self.store.sign_url.assert_not_called()


@mock_aws
class TestPublicUrl:
    """Test public URL derivation against a mocked S3 bucket."""

    def setup_method(self, method):
        """Set up test environment."""

        self.s3_client = boto3.client(
            "s3",
            aws_access_key_id="test_key",
            aws_secret_access_key="test_secret",
            region_name="us-east-1",
        )
        self.s3_client.create_bucket(Bucket=BUCKET)
        self.s3_client.put_object(
            Bucket=BUCKET, Key="site/index.html", Body=b"<html/>", ACL="public-read"
        )
        self.s3_client.put_object(Bucket=BUCKET, Key="site/secret.txt", Body=b"s")
        self.generator = SignedUrlGenerator(
            S3ObjectStore(self.s3_client), BUCKET, PathPrefixer("site")
        )

    def test_public_object(self):
        """Test the signature is stripped from the URL."""
        url = self.generator.public_url("index.html")

        assert url.startswith("https://")
        assert url.endswith("/site/index.html")
        assert "?" not in url

    def test_private_object_rejected(self):
        """Test private objects have no public URL."""
        with pytest.raises(UnsupportedOperationError, match="private object"):
            self.generator.public_url("secret.txt")
