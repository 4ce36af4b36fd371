"""Content items, update events and invalidation requests."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

ContentId = Union[int, str]


class ContentStatus(str, Enum):
    PUBLISH = "publish"
    FUTURE = "future"
    PRIVATE = "private"
    DRAFT = "draft"
    AUTO_DRAFT = "auto-draft"
    PENDING = "pending"
    INHERIT = "inherit"
    TRASH = "trash"


# Statuses whose content is not live yet; they never trigger invalidation.
UNPUBLISHED_STATUSES = frozenset(
    {
        ContentStatus.AUTO_DRAFT.value,
        ContentStatus.DRAFT.value,
        ContentStatus.INHERIT.value,
        ContentStatus.PENDING.value,
    }
)


class TriggerSource(str, Enum):
    """Channel an update notification arrived on."""

    STANDARD_SAVE = "save"
    REST_INSERT = "rest_insert"
    AUTOSAVE = "autosave"
    REVISION = "revision"


class OutcomeReason(str, Enum):
    PROVIDER_REJECTED = "provider-rejected"
    MISCONFIGURATION = "misconfiguration"
    TRANSPORT_ERROR = "transport-error"


@dataclass(frozen=True)
class ContentItem:
    """Snapshot of a content record as it was when the notification fired."""

    id: ContentId
    content_type: str
    status: str
    slug: str = ""
    is_autosave: bool = False
    is_revision: bool = False

    def __post_init__(self):
        if isinstance(self.status, ContentStatus):
            object.__setattr__(self, "status", self.status.value)
        if self.slug is None:
            object.__setattr__(self, "slug", "")

    @property
    def is_published(self) -> bool:
        return self.status not in UNPUBLISHED_STATUSES


@dataclass(frozen=True)
class UpdateEvent:
    """
    One inbound update notification.

    ``doing_autosave`` and ``rest_request`` describe the request the
    notification fired in; ``rest_completed`` is set once the REST layer has
    finished inserting the item for that request.
    """

    item: ContentItem
    source: TriggerSource = TriggerSource.STANDARD_SAVE
    doing_autosave: bool = False
    rest_request: bool = False
    rest_completed: bool = False


@dataclass(frozen=True)
class InvalidationRequest:
    paths: Tuple[str, ...]
    caller_reference: str
    distribution_id: Optional[str] = None

    def __post_init__(self):
        if not self.paths:
            raise ValueError("An invalidation request needs at least one path")
        # Accept any sequence, store an immutable copy.
        object.__setattr__(self, "paths", tuple(self.paths))


@dataclass(frozen=True)
class InvalidationOutcome:
    success: bool
    reason: Optional[OutcomeReason] = None
    message: str = ""
    dry_run: bool = False
    invalidation_id: Optional[str] = None
    paths: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def ok(cls, paths, invalidation_id: Optional[str] = None, dry_run: bool = False) -> "InvalidationOutcome":
        return cls(success=True, dry_run=dry_run, invalidation_id=invalidation_id, paths=tuple(paths))

    @classmethod
    def failed(cls, reason: OutcomeReason, message: str, paths=()) -> "InvalidationOutcome":
        return cls(success=False, reason=reason, message=message, paths=tuple(paths))
