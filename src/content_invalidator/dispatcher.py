"""Invalidation dispatcher - sends invalidation batches to CloudFront."""

from shared.aws_helpers import CloudFrontHelper
from shared.config import DispatcherConfig
from shared.errors import CDNInvalidationError, CDNTransportError
from shared.logger import StructuredLogger

from content_invalidator.models import InvalidationOutcome, InvalidationRequest, OutcomeReason


class InvalidationDispatcher:
    """Dispatch invalidation requests, or log them when running dry."""

    def __init__(self, config: DispatcherConfig, cloudfront: CloudFrontHelper = None):
        self.config = config
        self._cloudfront = cloudfront

    @property
    def cloudfront(self) -> CloudFrontHelper:
        # Dry runs never need a client.
        if self._cloudfront is None:
            self._cloudfront = CloudFrontHelper(region_name=self.config.region, timeout=self.config.timeout)
        return self._cloudfront

    def dispatch(self, request: InvalidationRequest) -> InvalidationOutcome:
        """
        Dispatch a single invalidation request.

        Args:
            request: Paths and caller reference; a distribution id on the
                request overrides the configured one

        Returns:
            The outcome. Provider and transport failures are reported here and
            never raised.
        """
        distribution_id = request.distribution_id or self.config.distribution_id
        paths = list(request.paths)

        if self.config.dry_run:
            StructuredLogger.info(
                "[CloudFront Invalidation Dry Run]",
                distribution_id=distribution_id or self.config.distribution_label,
                paths=paths,
                caller_reference=request.caller_reference,
            )
            return InvalidationOutcome.ok(paths, dry_run=True)

        if not distribution_id:
            message = "CloudFront Invalidation Error: Distribution ID not defined."
            StructuredLogger.error(message, caller_reference=request.caller_reference)
            return InvalidationOutcome.failed(OutcomeReason.MISCONFIGURATION, message, paths)

        try:
            invalidation_id = self.cloudfront.create_invalidation(
                distribution_id=distribution_id,
                paths=paths,
                caller_reference=request.caller_reference,
            )
        except CDNTransportError as e:
            return self._failed(OutcomeReason.TRANSPORT_ERROR, e, distribution_id, request)
        except CDNInvalidationError as e:
            return self._failed(OutcomeReason.PROVIDER_REJECTED, e, distribution_id, request)
        except Exception as e:
            return self._failed(OutcomeReason.TRANSPORT_ERROR, e, distribution_id, request)

        StructuredLogger.info(
            "Cache invalidation completed",
            distribution_id=distribution_id,
            invalidation_id=invalidation_id,
            paths=paths,
        )
        return InvalidationOutcome.ok(paths, invalidation_id=invalidation_id)

    def _failed(self, reason: OutcomeReason, error: Exception, distribution_id: str, request: InvalidationRequest):
        StructuredLogger.error(
            f"CloudFront Invalidation Error ({type(error).__name__}): {str(error)}",
            exception=error,
            reason=reason.value,
            code=getattr(error, "code", None),
            distribution_id=distribution_id,
            caller_reference=request.caller_reference,
        )
        return InvalidationOutcome.failed(reason, str(error), request.paths)
