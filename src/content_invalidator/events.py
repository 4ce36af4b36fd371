"""Content update notifications from the CMS."""

from typing import Any, Callable, Dict, Iterable, List, Mapping, Protocol

from shared.errors import EventFormatError
from shared.logger import StructuredLogger

from content_invalidator.models import ContentItem, TriggerSource, UpdateEvent

EventCallback = Callable[[UpdateEvent], Any]

# Built-in content types that never get a REST completion subscription.
BUILTIN_CONTENT_TYPES = frozenset(
    {
        "page",
        "attachment",
        "revision",
        "nav_menu_item",
        "wp_template",
        "wp_template_part",
    }
)


class EventSource(Protocol):
    def on_content_saved(self, callback: EventCallback) -> None:
        """Subscribe to every content save, including partial REST writes."""
        ...

    def on_rest_write_completed(self, content_type: str, callback: EventCallback) -> None:
        """Subscribe to REST insert completion for one content type."""
        ...


def rest_content_types(content_types: Iterable[str]) -> List[str]:
    """Content types to subscribe to REST completion for; ``post`` always comes first."""
    names = ["post"]
    for name in content_types:
        if name in BUILTIN_CONTENT_TYPES or name in names:
            continue
        names.append(name)
    return names


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


def parse_event(payload: Mapping[str, Any]) -> UpdateEvent:
    """
    Build an UpdateEvent from a webhook payload.

    Expected payload:
    {
        "trigger": "save" | "rest_insert" | "autosave" | "revision",
        "item": {"id": 7, "slug": "launch", "content_type": "post", "status": "publish",
                 "is_autosave": false, "is_revision": false},
        "context": {"doing_autosave": false, "rest_request": false, "rest_completed": false}
    }
    """
    if not isinstance(payload, Mapping):
        raise EventFormatError("Event payload must be a JSON object")

    try:
        source = TriggerSource(payload.get("trigger") or TriggerSource.STANDARD_SAVE.value)
    except ValueError as e:
        raise EventFormatError(f"Unknown trigger: {payload.get('trigger')!r}") from e

    raw_item = payload.get("item")
    if not isinstance(raw_item, Mapping):
        raise EventFormatError("Missing required field: item")

    missing = [name for name in ("id", "content_type") if raw_item.get(name) in (None, "")]
    if missing:
        raise EventFormatError(f"Missing required item fields: {', '.join(missing)}")

    item = ContentItem(
        id=raw_item["id"],
        content_type=str(raw_item["content_type"]),
        status=str(raw_item.get("status") or ""),
        slug=str(raw_item.get("slug") or ""),
        is_autosave=_flag(raw_item.get("is_autosave", False)),
        is_revision=_flag(raw_item.get("is_revision", False)),
    )

    context = payload.get("context") or {}
    if not isinstance(context, Mapping):
        raise EventFormatError("Field context must be an object")

    # A REST completion notification is by definition inside a finished REST write.
    rest_default = source == TriggerSource.REST_INSERT
    return UpdateEvent(
        item=item,
        source=source,
        doing_autosave=_flag(context.get("doing_autosave", False)),
        rest_request=_flag(context.get("rest_request", rest_default)),
        rest_completed=_flag(context.get("rest_completed", rest_default)),
    )


class WebhookEventSource:
    """Event source fed with CMS webhook payloads."""

    def __init__(self):
        self._saved: List[EventCallback] = []
        self._rest_completed: Dict[str, List[EventCallback]] = {}

    def on_content_saved(self, callback: EventCallback) -> None:
        self._saved.append(callback)

    def on_rest_write_completed(self, content_type: str, callback: EventCallback) -> None:
        self._rest_completed.setdefault(content_type, []).append(callback)

    def publish(self, payload: Mapping[str, Any]) -> UpdateEvent:
        """Parse a payload and notify the matching subscribers."""
        event = parse_event(payload)
        self.emit(event)
        return event

    def emit(self, event: UpdateEvent) -> None:
        if event.source == TriggerSource.REST_INSERT:
            callbacks = self._rest_completed.get(event.item.content_type, [])
            if not callbacks:
                StructuredLogger.debug(
                    "No REST completion subscribers",
                    content_type=event.item.content_type,
                    content_id=event.item.id,
                )
        else:
            callbacks = self._saved

        for callback in list(callbacks):
            try:
                callback(event)
            except Exception as e:
                StructuredLogger.error(
                    "Content update subscriber failed",
                    exception=e,
                    subscriber=getattr(callback, "__qualname__", repr(callback)),
                    content_id=event.item.id,
                    content_type=event.item.content_type,
                )
