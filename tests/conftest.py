"""Shared test fixtures for the content invalidator test suite."""

from __future__ import annotations

import pytest

from tests.helpers import FakeCloudFront


@pytest.fixture(autouse=True)
def aws_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep boto3 away from real credentials and the dispatch flags of the host."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    for name in ("CF_INV_DISTRIBUTION_ID", "CF_INV_DRY_RUN", "CF_INV_TIMEOUT", "CONTENT_TYPES"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_cloudfront() -> FakeCloudFront:
    return FakeCloudFront()
