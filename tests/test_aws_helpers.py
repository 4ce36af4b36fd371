"""Tests for the CloudFront and S3 helpers, using botocore's Stubber."""

from __future__ import annotations

import io
from datetime import datetime, timezone

import boto3
import pytest
from botocore.exceptions import ReadTimeoutError
from botocore.response import StreamingBody
from botocore.stub import Stubber

from shared.aws_helpers import CloudFrontHelper, S3Helper
from shared.errors import CDNInvalidationError, CDNTransportError, S3Error


@pytest.fixture
def cloudfront_client():
    return boto3.client("cloudfront", region_name="us-east-1")


@pytest.fixture
def s3_client():
    return boto3.client("s3", region_name="us-east-1")


def _invalidation_response(paths: list[str], caller_reference: str) -> dict:
    return {
        "Location": "https://cloudfront.amazonaws.com/2020-05-31/distribution/E123/invalidation/I1",
        "Invalidation": {
            "Id": "I1",
            "Status": "InProgress",
            "CreateTime": datetime(2024, 5, 1, 10, 15, tzinfo=timezone.utc),
            "InvalidationBatch": {
                "Paths": {"Quantity": len(paths), "Items": paths},
                "CallerReference": caller_reference,
            },
        },
    }


def test_create_invalidation_sends_batch(cloudfront_client) -> None:
    helper = CloudFrontHelper(client=cloudfront_client)
    paths = ["/blog/launch", "/blog/launch"]

    with Stubber(cloudfront_client) as stubber:
        stubber.add_response(
            "create_invalidation",
            _invalidation_response(paths, "7-202405011015"),
            {
                "DistributionId": "E123",
                "InvalidationBatch": {
                    "Paths": {"Quantity": 2, "Items": paths},
                    "CallerReference": "7-202405011015",
                },
            },
        )
        invalidation_id = helper.create_invalidation("E123", paths, "7-202405011015")
        stubber.assert_no_pending_responses()

    assert invalidation_id == "I1"


def test_create_invalidation_client_error(cloudfront_client) -> None:
    helper = CloudFrontHelper(client=cloudfront_client)

    with Stubber(cloudfront_client) as stubber:
        stubber.add_client_error(
            "create_invalidation",
            service_error_code="TooManyInvalidationsInProgress",
            service_message="Slow down",
            http_status_code=400,
        )
        with pytest.raises(CDNInvalidationError) as excinfo:
            helper.create_invalidation("E123", ["/a"], "ref")

    assert excinfo.value.code == "TooManyInvalidationsInProgress"
    assert not isinstance(excinfo.value, CDNTransportError)


def test_create_invalidation_transport_error() -> None:
    class TimingOutClient:
        def create_invalidation(self, **kwargs):
            raise ReadTimeoutError(endpoint_url="https://cloudfront.amazonaws.com")

    helper = CloudFrontHelper(client=TimingOutClient())

    with pytest.raises(CDNTransportError):
        helper.create_invalidation("E123", ["/a"], "ref")


def test_cloudfront_client_has_bounded_timeout_and_no_retries() -> None:
    helper = CloudFrontHelper(timeout=2.5)
    config = helper.client.meta.config
    assert config.connect_timeout == 2.5
    assert config.read_timeout == 2.5
    assert config.retries["total_max_attempts"] == 1


def test_s3_get_object(s3_client) -> None:
    helper = S3Helper(client=s3_client)
    body = b'{"invalidation_paths": {}}'

    with Stubber(s3_client) as stubber:
        stubber.add_response(
            "get_object",
            {"Body": StreamingBody(io.BytesIO(body), len(body))},
            {"Bucket": "settings", "Key": "settings.json"},
        )
        assert helper.get_object("settings", "settings.json") == body.decode("utf-8")


def test_s3_file_exists(s3_client) -> None:
    helper = S3Helper(client=s3_client)

    with Stubber(s3_client) as stubber:
        stubber.add_response("head_object", {}, {"Bucket": "settings", "Key": "settings.json"})
        stubber.add_client_error("head_object", service_error_code="404", http_status_code=404)
        assert helper.file_exists("settings", "settings.json") is True
        assert helper.file_exists("settings", "settings.json") is False


def test_s3_file_exists_access_denied(s3_client) -> None:
    helper = S3Helper(client=s3_client)

    with Stubber(s3_client) as stubber:
        stubber.add_client_error("head_object", service_error_code="403", http_status_code=403)
        with pytest.raises(S3Error):
            helper.file_exists("settings", "settings.json")
