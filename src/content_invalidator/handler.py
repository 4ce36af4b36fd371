"""Lambda handler for content update notifications."""

import json
from typing import Any, Dict

from shared.config import Config, DispatcherConfig
from shared.errors import EventFormatError
from shared.logger import StructuredLogger

from content_invalidator.dispatcher import InvalidationDispatcher
from content_invalidator.events import WebhookEventSource, rest_content_types
from content_invalidator.orchestrator import InvalidationOrchestrator
from content_invalidator.paths import PathFilterRegistry
from content_invalidator.settings import S3Settings, SettingsLookup, SettingsSource, StaticSettings

# Deployments register per content type path filters here at import time.
path_filters = PathFilterRegistry()


def _request_id(context: Any) -> str:
    return getattr(context, "aws_request_id", None) or getattr(context, "request_id", None) or "local"


def default_settings_source() -> SettingsSource:
    if Config.SETTINGS_S3_BUCKET:
        return S3Settings(Config.SETTINGS_S3_BUCKET, Config.SETTINGS_S3_KEY, region_name=Config.AWS_REGION)
    StructuredLogger.warning("SETTINGS_S3_BUCKET not set, no invalidation paths configured")
    return StaticSettings()


def build_event_source(
    settings_source: SettingsSource = None,
    config: DispatcherConfig = None,
    dispatcher: InvalidationDispatcher = None,
) -> WebhookEventSource:
    """Wire an orchestrator to a fresh webhook event source."""
    orchestrator = InvalidationOrchestrator(
        settings=SettingsLookup(settings_source or default_settings_source(), path_filters),
        dispatcher=dispatcher or InvalidationDispatcher(config or Config.dispatcher_config()),
    )
    source = WebhookEventSource()
    orchestrator.subscribe(source, rest_content_types(Config.content_types()))
    return source


def lambda_handler(event: Dict[str, Any], context: Any, source: WebhookEventSource = None) -> Dict[str, Any]:
    """
    Process content update notifications and invalidate CloudFront paths.

    Accepts a single webhook payload or an SQS batch whose message bodies are
    webhook payloads:
    {
        "trigger": "save",
        "item": {"id": 7, "slug": "launch", "content_type": "post", "status": "publish"},
        "context": {"doing_autosave": false, "rest_request": false, "rest_completed": false}
    }
    """
    request_id = _request_id(context)
    StructuredLogger.info("Content invalidator lambda invoked", request_id=request_id)

    if not isinstance(event, dict):
        StructuredLogger.error("Unsupported event type", event_type=type(event).__name__, request_id=request_id)
        return {
            "statusCode": 400,
            "body": json.dumps({"error": "Event must be a JSON object"}),
        }

    source = source or build_event_source()

    if "Records" in event:
        payloads = [record.get("body") if isinstance(record, dict) else record for record in event["Records"] or []]
    else:
        payloads = [event]

    processed = 0
    failed = 0
    for payload in payloads:
        try:
            if isinstance(payload, str):
                payload = json.loads(payload)
            update = source.publish(payload)
            processed += 1

            StructuredLogger.info(
                "Content update handled",
                content_id=update.item.id,
                content_type=update.item.content_type,
                request_id=request_id,
            )

        except json.JSONDecodeError as e:
            failed += 1
            StructuredLogger.error(
                "Invalid SQS message format",
                exception=e,
                request_id=request_id,
            )
        except EventFormatError as e:
            failed += 1
            StructuredLogger.error(
                "Invalid content update notification",
                exception=e,
                request_id=request_id,
            )
        except Exception as e:
            failed += 1
            StructuredLogger.error(
                "Error processing content update",
                exception=e,
                request_id=request_id,
            )

    return {
        "statusCode": 200,
        "body": json.dumps({"message": "Content updates processed", "processed": processed, "failed": failed}),
    }
