"""Test configuration and fixtures for s3-tools."""

import pytest

from s3_tools.objectstorage.clients import S3ClientConfig

_ENV_VARS = (
    "S3_BUCKET",
    "S3_PREFIX",
    "S3_FILTER",
    "S3_ENDPOINT_URL",
    "AWS_PROFILE",
    "AWS_SESSION_TOKEN",
)


@pytest.fixture(autouse=True)
def aws_environment(monkeypatch):
    """Keep tests away from real credentials and ambient command defaults."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "test_key")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "test_secret")
    monkeypatch.setenv("AWS_REGION", "us-east-1")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture
def s3_config():
    """Client configuration with explicit test credentials."""
    return S3ClientConfig(
        access_key_id="test_key",
        secret_access_key="test_secret",
        region_name="us-east-1",
    )


@pytest.fixture
def sample_file(tmp_path):
    """Create a small local file for upload tests."""
    path = tmp_path / "report.csv"
    path.write_bytes(b"id,value\n1,alpha\n2,beta\n")
    return path
