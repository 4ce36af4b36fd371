"""Configuration management."""

import os
from dataclasses import dataclass
from typing import List, Optional

NOT_DEFINED = "not defined"


@dataclass(frozen=True)
class DispatcherConfig:
    """Settings the invalidation dispatcher needs for a single call."""

    distribution_id: Optional[str] = None
    dry_run: bool = False
    timeout: float = 5.0
    region: str = "us-east-1"

    @property
    def distribution_label(self) -> str:
        return self.distribution_id or NOT_DEFINED


class Config:
    """Centralized configuration from environment variables."""

    # AWS Configuration
    AWS_REGION = os.environ.get("AWS_REGION", "us-east-1")

    # Invalidation path settings document
    SETTINGS_S3_BUCKET = os.environ.get("SETTINGS_S3_BUCKET")
    SETTINGS_S3_KEY = os.environ.get("SETTINGS_S3_KEY", "cf-invalidation/settings.json")

    @staticmethod
    def _flag(name: str, default: str = "False") -> bool:
        return os.environ.get(name, default).strip().lower() == "true"

    @classmethod
    def content_types(cls) -> List[str]:
        """Public content types that receive REST completion notifications."""
        raw = os.environ.get("CONTENT_TYPES", "post")
        return [name.strip() for name in raw.split(",") if name.strip()]

    @classmethod
    def dispatcher_config(cls) -> DispatcherConfig:
        """Read dispatch flags from the environment at call time."""
        timeout = os.environ.get("CF_INV_TIMEOUT", "5")
        try:
            timeout_seconds = float(timeout)
        except ValueError:
            timeout_seconds = 5.0
        if timeout_seconds <= 0:
            timeout_seconds = 5.0

        return DispatcherConfig(
            distribution_id=os.environ.get("CF_INV_DISTRIBUTION_ID", "").strip() or None,
            dry_run=cls._flag("CF_INV_DRY_RUN"),
            timeout=timeout_seconds,
            region=os.environ.get("AWS_REGION", cls.AWS_REGION),
        )
