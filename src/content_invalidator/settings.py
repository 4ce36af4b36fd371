"""Invalidation path settings sources and lookup."""

import json
from typing import Any, Dict, List, Optional, Protocol

from shared.aws_helpers import S3Helper
from shared.errors import S3Error, SettingsError
from shared.logger import StructuredLogger

from content_invalidator.models import ContentItem
from content_invalidator.paths import PathFilterRegistry


class SettingsSource(Protocol):
    def path_settings(self, content_type: str) -> List[str]:
        """Ordered path templates configured for a content type."""
        ...


def _paths_from_document(document: Any, content_type: str) -> List[str]:
    if not isinstance(document, dict):
        return []
    invalidation_paths = document.get("invalidation_paths")
    if not isinstance(invalidation_paths, dict):
        return []
    paths = invalidation_paths.get(content_type)
    if not isinstance(paths, list):
        return []
    return [path for path in paths if isinstance(path, str) and path]


class StaticSettings:
    """Settings held in memory, in the stored ``{"invalidation_paths": {...}}`` shape."""

    def __init__(self, document: Optional[Dict[str, Any]] = None):
        self.document = document or {}

    @classmethod
    def from_paths(cls, paths_by_type: Dict[str, List[str]]) -> "StaticSettings":
        return cls({"invalidation_paths": paths_by_type})

    def path_settings(self, content_type: str) -> List[str]:
        return _paths_from_document(self.document, content_type)


class S3Settings:
    """
    Settings stored as a JSON document in S3.

    The document is fetched on every lookup; nothing is cached between
    invocations.
    """

    def __init__(self, bucket: str, key: str, s3: S3Helper = None, region_name: str = "us-east-1"):
        self.bucket = bucket
        self.key = key
        self.s3 = s3 or S3Helper(region_name)

    def load(self) -> Dict[str, Any]:
        try:
            if not self.s3.file_exists(self.bucket, self.key):
                StructuredLogger.warning("Invalidation settings not found", bucket=self.bucket, key=self.key)
                return {}
            body = self.s3.get_object(self.bucket, self.key)
        except S3Error as e:
            raise SettingsError(f"Could not read invalidation settings: {str(e)}") from e

        try:
            document = json.loads(body)
        except json.JSONDecodeError as e:
            raise SettingsError(f"Invalidation settings {self.bucket}/{self.key} are not valid JSON") from e

        if not isinstance(document, dict):
            raise SettingsError(f"Invalidation settings {self.bucket}/{self.key} must be a JSON object")
        return document

    def path_settings(self, content_type: str) -> List[str]:
        return _paths_from_document(self.load(), content_type)


class SettingsLookup:
    """Configured path templates for a content item, after path filters ran."""

    def __init__(self, source: SettingsSource, filters: PathFilterRegistry = None):
        self.source = source
        self.filters = filters or PathFilterRegistry()

    def paths_for(self, content_type: str, item: ContentItem) -> List[str]:
        paths = list(self.source.path_settings(content_type) or [])
        return self.filters.apply(content_type, paths, item)
