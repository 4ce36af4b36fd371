"""Custom exceptions for content cache invalidation."""


class InvalidationError(Exception):
    """Base exception for invalidation errors."""

    pass


class S3Error(InvalidationError):
    """S3 operation errors."""

    pass


class CDNInvalidationError(InvalidationError):
    """CloudFront rejected the invalidation request."""

    def __init__(self, message: str, code: str = None):
        super().__init__(message)
        self.code = code


class CDNTransportError(CDNInvalidationError):
    """CloudFront could not be reached (connection errors, timeouts)."""

    pass


class SettingsError(InvalidationError):
    """Invalidation path settings could not be loaded."""

    pass


class EventFormatError(InvalidationError):
    """Content update notification could not be parsed."""

    pass
