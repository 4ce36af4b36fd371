"""Caller references for CloudFront invalidation batches."""

from datetime import datetime, timezone
from typing import Callable, Optional

from content_invalidator.models import ContentId

MINUTE_FORMAT = "%Y%m%d%H%M"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CallerReferenceGenerator:
    """
    Build the idempotency key sent with each invalidation batch.

    The key is the content id plus the current minute, so every update of the
    same item within one minute maps to the same batch and CloudFront
    collapses the duplicates.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self.clock = clock

    def token_for(self, item_id: ContentId, current_time: Optional[datetime] = None) -> str:
        current_time = current_time or self.clock()
        return f"{item_id}-{current_time.strftime(MINUTE_FORMAT)}"
