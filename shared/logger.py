import json
import logging

logger = logging.getLogger("content_invalidator")
logger.setLevel(logging.INFO)


def _encode(log_data: dict) -> str:
    # Content ids and datetimes are not always JSON-native.
    return json.dumps(log_data, default=str)


class StructuredLogger:
    """Structured logging for CloudWatch JSON parsing."""

    @staticmethod
    def info(message: str, **kwargs) -> None:
        """Log info level with structured data."""
        log_data = {"level": "INFO", "message": message, **kwargs}
        logger.info(_encode(log_data))

    @staticmethod
    def error(message: str, exception: Exception = None, **kwargs) -> None:
        """Log error level with exception details."""
        log_data = {
            "level": "ERROR",
            "message": message,
            **kwargs,
        }
        if exception:
            log_data["exception"] = str(exception)
            log_data["exception_type"] = type(exception).__name__

        logger.error(_encode(log_data))

    @staticmethod
    def warning(message: str, **kwargs) -> None:
        """Log warning level with structured data."""
        log_data = {"level": "WARNING", "message": message, **kwargs}
        logger.warning(_encode(log_data))

    @staticmethod
    def debug(message: str, **kwargs) -> None:
        log_data = {"level": "DEBUG", "message": message, **kwargs}
        logger.debug(_encode(log_data))
