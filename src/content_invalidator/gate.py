"""Event gate - decides which update notifications warrant an invalidation."""

from shared.logger import StructuredLogger

from content_invalidator.models import TriggerSource, UpdateEvent


class EventGate:
    """
    Filter out update notifications that must not invalidate anything.

    A single logical edit can fire several notifications (classic save, partial
    REST write, REST completion, autosave ticks). Only published content is
    invalidated, and a standard save that fires inside a REST request is
    ignored until the REST layer has finished inserting the item.
    """

    def should_process(self, event: UpdateEvent) -> bool:
        reason = self.skip_reason(event)
        if reason:
            StructuredLogger.debug(
                "Skipping invalidation",
                reason=reason,
                content_id=event.item.id,
                content_type=event.item.content_type,
                source=event.source.value,
            )
            return False
        return True

    def skip_reason(self, event: UpdateEvent) -> str:
        """Return why the event is skipped, or an empty string to process it."""
        item = event.item

        if not item.is_published:
            return f"status:{item.status}"

        if event.doing_autosave or item.is_autosave or event.source == TriggerSource.AUTOSAVE:
            return "autosave"

        if item.is_revision or event.source == TriggerSource.REVISION:
            return "revision"

        # The REST completion notification for this request will follow.
        if event.source == TriggerSource.STANDARD_SAVE and event.rest_request and not event.rest_completed:
            return "rest_insert_pending"

        return ""
