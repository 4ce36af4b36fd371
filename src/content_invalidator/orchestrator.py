"""Invalidation orchestrator - one update notification in, at most one invalidation out."""

from typing import Iterable, Optional

from shared.logger import StructuredLogger

from content_invalidator.caller_reference import CallerReferenceGenerator
from content_invalidator.dispatcher import InvalidationDispatcher
from content_invalidator.events import EventSource
from content_invalidator.gate import EventGate
from content_invalidator.models import InvalidationOutcome, InvalidationRequest, UpdateEvent
from content_invalidator.paths import PathTemplateResolver
from content_invalidator.settings import SettingsLookup


class InvalidationOrchestrator:
    """Gate an update event, resolve its paths and dispatch the invalidation."""

    def __init__(
        self,
        settings: SettingsLookup,
        dispatcher: InvalidationDispatcher,
        gate: EventGate = None,
        resolver: PathTemplateResolver = None,
        references: CallerReferenceGenerator = None,
    ):
        self.settings = settings
        self.dispatcher = dispatcher
        self.gate = gate or EventGate()
        self.resolver = resolver or PathTemplateResolver()
        self.references = references or CallerReferenceGenerator()

    def subscribe(self, source: EventSource, content_types: Iterable[str]) -> None:
        """Handle standard saves, and REST completions for each content type."""
        source.on_content_saved(self.handle)
        for content_type in content_types:
            source.on_rest_write_completed(content_type, self.handle)

    def handle(self, event: UpdateEvent) -> Optional[InvalidationOutcome]:
        """
        Process one update notification.

        Never raises for invalidation problems; the content update that fired
        the notification must not be affected. Returns the dispatch outcome, or
        None when nothing was dispatched.
        """
        if not self.gate.should_process(event):
            return None

        item = event.item
        try:
            templates = self.settings.paths_for(item.content_type, item)
            paths = self.resolver.resolve_all(templates, item)
        except Exception as e:
            # Settings sources and path filters are outside this package's control.
            StructuredLogger.error(
                "Could not resolve invalidation paths",
                exception=e,
                content_id=item.id,
                content_type=item.content_type,
            )
            return None

        if not paths:
            StructuredLogger.debug("No invalidation paths configured", content_type=item.content_type)
            return None

        request = InvalidationRequest(
            paths=paths,
            caller_reference=self.references.token_for(item.id),
        )

        StructuredLogger.info(
            "Processing cache invalidation",
            content_id=item.id,
            content_type=item.content_type,
            source=event.source.value,
            paths_count=len(paths),
        )
        return self.dispatcher.dispatch(request)
