"""Test helpers shared across test modules."""

from __future__ import annotations

from datetime import datetime, timezone

from content_invalidator.models import ContentItem, TriggerSource, UpdateEvent

FIXED_NOW = datetime(2024, 5, 1, 10, 15, 37, tzinfo=timezone.utc)


class FakeCloudFront:
    """Records create_invalidation calls instead of talking to AWS."""

    def __init__(self, error: Exception | None = None, invalidation_id: str = "I2J0I21PCUYOIK"):
        self.error = error
        self.invalidation_id = invalidation_id
        self.calls: list[tuple[str, list[str], str]] = []

    def create_invalidation(self, distribution_id: str, paths: list[str], caller_reference: str) -> str:
        self.calls.append((distribution_id, list(paths), caller_reference))
        if self.error is not None:
            raise self.error
        return self.invalidation_id


def make_item(
    id: int | str = 7,
    slug: str = "launch",
    content_type: str = "post",
    status: str = "publish",
    is_autosave: bool = False,
    is_revision: bool = False,
) -> ContentItem:
    return ContentItem(
        id=id,
        slug=slug,
        content_type=content_type,
        status=status,
        is_autosave=is_autosave,
        is_revision=is_revision,
    )


def make_event(
    item: ContentItem | None = None,
    source: TriggerSource = TriggerSource.STANDARD_SAVE,
    **context: bool,
) -> UpdateEvent:
    return UpdateEvent(item=item or make_item(), source=source, **context)
