"""CloudFront cache invalidation for published content updates."""

from content_invalidator.caller_reference import CallerReferenceGenerator
from content_invalidator.dispatcher import InvalidationDispatcher
from content_invalidator.events import EventSource, WebhookEventSource, parse_event, rest_content_types
from content_invalidator.gate import EventGate
from content_invalidator.models import (
    ContentItem,
    ContentStatus,
    InvalidationOutcome,
    InvalidationRequest,
    OutcomeReason,
    TriggerSource,
    UpdateEvent,
)
from content_invalidator.orchestrator import InvalidationOrchestrator
from content_invalidator.paths import PathFilterRegistry, PathTemplateResolver, sanitize_paths, sanitize_settings
from content_invalidator.settings import S3Settings, SettingsLookup, SettingsSource, StaticSettings

__all__ = [
    "CallerReferenceGenerator",
    "ContentItem",
    "ContentStatus",
    "EventGate",
    "EventSource",
    "InvalidationDispatcher",
    "InvalidationOrchestrator",
    "InvalidationOutcome",
    "InvalidationRequest",
    "OutcomeReason",
    "PathFilterRegistry",
    "PathTemplateResolver",
    "S3Settings",
    "SettingsLookup",
    "SettingsSource",
    "StaticSettings",
    "TriggerSource",
    "UpdateEvent",
    "WebhookEventSource",
    "parse_event",
    "rest_content_types",
    "sanitize_paths",
    "sanitize_settings",
]
