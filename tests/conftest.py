"""Test configuration and fixtures for bucketfs."""

import pytest

from bucketfs.objectstorage.clients import S3ClientConfig


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Keep boto3 away from real credentials and endpoints."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "test_key")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "test_secret")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.delenv("AWS_PROFILE", raising=False)


@pytest.fixture
def client_config():
    """S3 client configuration with the mocked credentials."""
    return S3ClientConfig(
        access_key_id="test_key",
        secret_access_key="test_secret",
        region_name="us-east-1",
    )


@pytest.fixture
def local_file(tmp_path):
    """Create a local file for upload tests."""
    path = tmp_path / "report.txt"
    path.write_text("quarterly numbers")
    return path
