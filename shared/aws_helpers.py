"""AWS service helpers for S3 and CloudFront."""

from typing import List, Optional

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from shared.errors import CDNInvalidationError, CDNTransportError, S3Error
from shared.logger import StructuredLogger


def _error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "Unknown")


class S3Helper:
    """S3 operations."""

    def __init__(self, region_name: str = "us-east-1", client=None):
        self.client = client or boto3.client("s3", region_name=region_name)

    def file_exists(self, bucket: str, key: str) -> bool:
        """Check if S3 object exists."""
        try:
            self.client.head_object(Bucket=bucket, Key=key)
            return True
        except ClientError as e:
            if _error_code(e) in ("404", "NoSuchKey", "NotFound"):
                return False
            raise S3Error(f"Error checking S3 object {bucket}/{key}: {str(e)}") from e
        except BotoCoreError as e:
            raise S3Error(f"Error checking S3 object {bucket}/{key}: {str(e)}") from e

    def get_object(self, bucket: str, key: str) -> str:
        """Get object content from S3."""
        try:
            response = self.client.get_object(Bucket=bucket, Key=key)
            return response["Body"].read().decode("utf-8")
        except (ClientError, BotoCoreError) as e:
            raise S3Error(f"Error getting object {bucket}/{key}: {str(e)}") from e


class CloudFrontHelper:
    """CloudFront operations."""

    def __init__(self, region_name: str = "us-east-1", timeout: float = 5.0, client=None):
        # Retries belong to whoever re-sends the content update, not to this call.
        boto_config = BotoConfig(
            connect_timeout=timeout,
            read_timeout=timeout,
            retries={"max_attempts": 0, "mode": "standard"},
        )
        self.client = client or boto3.client("cloudfront", region_name=region_name, config=boto_config)

    def create_invalidation(self, distribution_id: str, paths: List[str], caller_reference: str) -> Optional[str]:
        """
        Create a CloudFront invalidation batch.

        Args:
            distribution_id: CloudFront distribution ID (e.g. "E1ABCDEF123456")
            paths: Paths to invalidate, sent in the given order
            caller_reference: Idempotency key; CloudFront collapses batches that reuse it

        Returns:
            Invalidation ID
        """
        StructuredLogger.info(
            "Creating CloudFront invalidation",
            distribution_id=distribution_id,
            paths_count=len(paths),
            caller_reference=caller_reference,
        )

        try:
            response = self.client.create_invalidation(
                DistributionId=distribution_id,
                InvalidationBatch={
                    "Paths": {"Quantity": len(paths), "Items": list(paths)},
                    "CallerReference": caller_reference,
                },
            )
        except ClientError as e:
            raise CDNInvalidationError(f"Error invalidating CloudFront: {str(e)}", code=_error_code(e)) from e
        except BotoCoreError as e:
            raise CDNTransportError(f"Error reaching CloudFront: {str(e)}") from e

        invalidation_id = response["Invalidation"]["Id"]
        StructuredLogger.info(
            "CloudFront invalidation created", invalidation_id=invalidation_id, distribution_id=distribution_id
        )
        return invalidation_id
